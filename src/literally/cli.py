from __future__ import annotations

import argparse
import shutil
from pathlib import Path
from typing import Iterable, Optional

from .compiler import OutputFormat, compile_document
from .config import load_config
from .errors import LiterallyError
from .render.html import load_template
from .retarget import apply_rules, compile_rules
from .versioning import VERSION
from .writer import DirectoryWriter


class CleanHelpFormatter(argparse.RawDescriptionHelpFormatter):
    def __init__(self, prog: str) -> None:
        width = shutil.get_terminal_size((120, 20)).columns
        super().__init__(prog, width=width, max_help_position=32)


def build_parser() -> argparse.ArgumentParser:
    formats = ", ".join(fmt.value for fmt in OutputFormat)
    epilog = (
        "Output formats:\n"
        f"  {formats}\n"
        "  (the older names html, node and blocks are accepted too)\n\n"
        "Examples:\n"
        "  literally examples/table.md --output dist/ --format inline-html\n"
        "  literally examples/table.md --output dist/ --format split-html --name table\n"
        "  literally examples/table.md --output gist/ --format block-bundle --drop-title\n"
        "  literally --config literally.config.json\n"
        "  python run.py examples/table.md --format node-module\n"
    )
    ap = argparse.ArgumentParser(
        prog="literally",
        description="Literate programming compiler: builds html, scripts and source maps from markdown code fences.",
        formatter_class=CleanHelpFormatter,
        epilog=epilog,
    )
    ap.add_argument("inputs", nargs="*", help="Markdown documents to compile (default: 'files' from the config).")
    ap.add_argument("-o", "--output", help="Directory to write compiled assets to (default: current directory).")
    ap.add_argument("-n", "--name", help="Asset name (default: input file stem).")
    ap.add_argument("-c", "--config", help="Path to a JSON config file (default: ./literally.config.json if present).")
    ap.add_argument("-f", "--format", help="Output format (default: inline-html).")
    ap.add_argument(
        "--drop-title",
        action="store_true",
        default=None,
        help="Omit the leading heading from the reconstructed markdown.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return ap


def _output_dir(root: Path, fmt: OutputFormat, name: str, many: bool) -> Path:
    # block bundles always use fixed file names, so several inputs need their own folders
    if fmt is OutputFormat.BLOCK_BUNDLE and many:
        return root / name
    return root


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    try:
        config = load_config(Path(args.config) if args.config else None)
        rules = compile_rules(config.retarget)
    except LiterallyError as exc:
        raise SystemExit(str(exc)) from exc

    files = list(args.inputs) or list(config.files)
    if not files:
        raise SystemExit("No input files!")
    try:
        fmt = OutputFormat.parse(args.format or config.format or OutputFormat.INLINE_HTML.value)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    drop_title = args.drop_title if args.drop_title is not None else config.drop_title
    output_root = Path(args.output or config.output or Path.cwd())
    template = load_template()

    for raw_path in files:
        path = Path(raw_path)
        name = args.name or config.name or path.stem
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SystemExit(f"Unable to read {path}: {exc}") from exc
        text = apply_rules(text, rules)
        try:
            assets = compile_document(text, fmt, name, template=template, drop_title=drop_title)
        except LiterallyError as exc:
            raise SystemExit(f"{path}: {exc}") from exc
        writer = DirectoryWriter(_output_dir(output_root, fmt, name, len(files) > 1))
        for written in writer.write_all(assets):
            print(f"Compiled {written}", flush=True)
    return 0
