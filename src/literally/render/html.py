from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import Optional

from jinja2 import Environment, StrictUndefined, Template

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
    <head>
        <meta name="viewport" content="width=device-width, initial-scale=1, maximum-scale=1, minimum-scale=1, user-scalable=no">
{%- if css | trim %}
        <style>
            {{ css | reindent(12) }}
        </style>
{%- endif %}
    </head>
    <body>
{%- if html | trim %}
        {{ html | reindent(8) }}
{%- endif %}
{%- if src %}
        <script src="{{ src | e }}"></script>
{%- elif javascript | trim %}
        <script>
            {{ javascript | reindent(12) }}
        </script>
{%- endif %}
    </body>
</html>
"""


@dataclass(frozen=True)
class RenderContext:
    html: str = ""
    css: str = ""
    javascript: str = ""
    src: Optional[str] = None


@dataclass(frozen=True)
class HtmlTemplate:
    """Compiled page template; build once with :func:`load_template` and share."""

    template: Template


def reindent(text: str, column: int) -> str:
    """Indent every line of ``text`` to ``column``, keeping relative indentation.

    The first line is returned without leading whitespace because the template
    slot already sits at ``column``. Blank lines stay empty.
    """
    body = textwrap.dedent(text or "").strip("\n")
    pad = " " * column
    lines = [pad + line if line.strip() else "" for line in body.split("\n")]
    return "\n".join(lines).lstrip()


def load_template(source: str = PAGE_TEMPLATE) -> HtmlTemplate:
    env = Environment(
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["reindent"] = reindent
    return HtmlTemplate(template=env.from_string(source))


def render_html(template: HtmlTemplate, context: RenderContext) -> str:
    return template.template.render(
        html=context.html,
        css=context.css,
        javascript=context.javascript,
        src=context.src,
    )
