from literally.extractor import Anchor, Language, collapse_paragraph, extract
from literally.parser import parse_document

TWO_SCRIPTS = """# Demo

```javascript
a();
```

```javascript
b();
```
"""


def _extract(text: str, **kwargs):
    return extract(parse_document(text), **kwargs)


def test_same_language_fences_join_with_one_blank_line() -> None:
    extraction = _extract(TWO_SCRIPTS)
    assert extraction.bucket(Language.JAVASCRIPT) == "a();\n\nb();"


def test_each_fence_gets_its_own_anchor() -> None:
    extraction = _extract(TWO_SCRIPTS)
    assert extraction.anchors == (Anchor(1, 4, 0), Anchor(3, 8, 0))
    lines = extraction.markdown.split("\n")
    assert lines[3] == "a();"
    assert lines[7] == "b();"


def test_reordering_fences_reorders_bucket() -> None:
    first = _extract("```css\na {}\n```\n\n```css\nb {}\n```\n")
    second = _extract("```css\nb {}\n```\n\n```css\na {}\n```\n")
    assert first.bucket(Language.CSS) == "a {}\n\nb {}"
    assert second.bucket(Language.CSS) == "b {}\n\na {}"


def test_languages_are_bucketed_separately() -> None:
    doc = "```html\n<p>hi</p>\n```\n\n```css\nbody{color:red}\n```\n\n```python\nprint(1)\n```\n"
    extraction = _extract(doc)
    assert extraction.bucket(Language.HTML) == "<p>hi</p>"
    assert extraction.bucket(Language.CSS) == "body{color:red}"
    assert extraction.bucket(Language.OTHER) == "print(1)"
    assert extraction.bucket(Language.JAVASCRIPT) == ""
    assert extraction.anchors == ()


def test_blank_line_in_script_advances_counters_without_anchor() -> None:
    extraction = _extract("```javascript\nconst x = 1;\n\nx();\n```\n")
    assert extraction.bucket(Language.JAVASCRIPT) == "const x = 1;\n\nx();"
    assert extraction.anchors == (Anchor(1, 2, 0), Anchor(3, 4, 0))


def test_blank_edges_of_a_fence_are_trimmed() -> None:
    extraction = _extract("```javascript\n\na();\n\n```\n\n```javascript\nb();\n```\n")
    assert extraction.bucket(Language.JAVASCRIPT) == "a();\n\nb();"
    assert extraction.anchors[0] == Anchor(1, 3, 0)
    assert extraction.anchors[1].generated_line == 3


def test_untagged_fence_is_kept_in_markdown_only() -> None:
    extraction = _extract("```\nsecret\n```\n")
    assert all(value == "" for value in extraction.buckets.values())
    assert extraction.markdown == "```\nsecret\n```\n"


def test_clean_mode_collapses_paragraph_lines_and_shifts_anchors() -> None:
    doc = "Some prose\nover two lines.\n\n```javascript\ngo();\n```\n"
    raw = _extract(doc)
    clean = _extract(doc, clean=True)
    assert raw.markdown.startswith("Some prose\nover two lines.\n")
    assert clean.markdown.startswith("Some prose over two lines.\n")
    assert raw.anchors == (Anchor(1, 5, 0),)
    assert clean.anchors == (Anchor(1, 4, 0),)


def test_nested_fence_anchor_points_inside_the_list() -> None:
    doc = "- step one\n\n  ```javascript\n  run();\n  ```\n"
    extraction = _extract(doc)
    assert extraction.bucket(Language.JAVASCRIPT) == "run();"
    assert extraction.anchors == (Anchor(1, 4, 2),)
    assert extraction.markdown.split("\n")[3] == "  run();"


def test_drop_title_removes_leading_heading() -> None:
    extraction = _extract(TWO_SCRIPTS, drop_title=True)
    assert extraction.markdown.startswith("```javascript\na();")
    assert extraction.anchors[0] == Anchor(1, 2, 0)


def test_reconstructed_markdown_reparses_to_same_fences() -> None:
    doc = "# T\n\n```css\np {}\n```\ntext\n\n```javascript\nx();\n```\n\n~~~html\n<b>\n~~~\n"
    extraction = _extract(doc, clean=True)
    original = [(n.language, n.text) for n in parse_document(doc) if n.kind.value == "code"]
    again = [(n.language, n.text) for n in parse_document(extraction.markdown) if n.kind.value == "code"]
    assert again == original


def test_empty_document_extracts_to_empty_strings() -> None:
    extraction = _extract("")
    assert extraction.markdown == ""
    assert extraction.bucket(Language.BLOCK) == ""


def test_language_from_tag() -> None:
    assert Language.from_tag("javascript") is Language.JAVASCRIPT
    assert Language.from_tag("handlebars") is Language.HANDLEBARS
    assert Language.from_tag("rust") is Language.OTHER
    assert Language.from_tag("") is None


def test_collapse_paragraph() -> None:
    assert collapse_paragraph("one\n  two\nthree") == "one two three"
