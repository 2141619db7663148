"""
Tests for the Google Docs structured-content normalizer.

Documents are built as plain dicts shaped like Docs API responses.
"""

from typing import Any

from python_doc_a11y.constants import PLACEHOLDER_ALT
from python_doc_a11y.normalizers import normalize_gdoc
from python_doc_a11y.tree import Element, Root, Text


def text_run(content: str, **style: Any) -> dict[str, Any]:
    run: dict[str, Any] = {"content": content}
    if style:
        run["textStyle"] = style
    return {"textRun": run}


def paragraph(*elements: dict[str, Any], style: dict[str, Any] | None = None) -> dict[str, Any]:
    para: dict[str, Any] = {"elements": list(elements)}
    if style is not None:
        para["paragraphStyle"] = style
    return {"paragraph": para}


def table(*rows: list[list[dict[str, Any]]]) -> dict[str, Any]:
    return {
        "table": {
            "tableRows": [
                {"tableCells": [{"content": cell} for cell in row]} for row in rows
            ]
        }
    }


def document(*content: dict[str, Any], **extra: Any) -> dict[str, Any]:
    return {"body": {"content": list(content)}, **extra}


class TestParagraphs:
    """Tests for paragraph and heading conversion."""

    def test_plain_paragraph(self) -> None:
        """Test that a paragraph becomes a p element."""
        root = normalize_gdoc(document(paragraph(text_run("Hello world\n"))))
        assert root == Root([Element("p", {}, [Text("Hello world\n")])])

    def test_heading_style(self) -> None:
        """Test that HEADING_N becomes hN and keeps its heading id."""
        root = normalize_gdoc(
            document(
                paragraph(
                    text_run("Intro\n"),
                    style={"namedStyleType": "HEADING_2", "headingId": "h.abc123"},
                )
            )
        )
        heading = root.children[0]
        assert isinstance(heading, Element)
        assert heading.tag_name == "h2"
        assert heading.get("id") == "h.abc123"

    def test_title_is_not_a_heading(self) -> None:
        """Test that TITLE and NORMAL_TEXT styles stay paragraphs."""
        root = normalize_gdoc(
            document(
                paragraph(text_run("Title\n"), style={"namedStyleType": "TITLE"}),
                paragraph(text_run("Body\n"), style={"namedStyleType": "NORMAL_TEXT"}),
            )
        )
        assert [child.tag_name for child in root.children] == ["p", "p"]  # type: ignore[union-attr]

    def test_paragraph_without_elements(self) -> None:
        """Test that a paragraph missing its elements list is empty."""
        root = normalize_gdoc(document({"paragraph": {}}))
        assert root == Root([Element("p")])


class TestTextRuns:
    """Tests for text run conversion."""

    def test_wrapping_order(self) -> None:
        """Test that bold is innermost and the link outermost."""
        root = normalize_gdoc(
            document(
                paragraph(
                    text_run(
                        "Tab",
                        bold=True,
                        italic=True,
                        underline=True,
                        link={"url": "#tab"},
                    )
                )
            )
        )
        expected = Element(
            "a",
            {"href": "#tab"},
            [Element("u", {}, [Element("em", {}, [Element("strong", {}, [Text("Tab")])])])],
        )
        assert root.children[0].children == (expected,)  # type: ignore[union-attr]

    def test_false_style_flags_do_not_wrap(self) -> None:
        """Test that explicit False style flags are ignored."""
        root = normalize_gdoc(document(paragraph(text_run("x", bold=False, italic=False))))
        assert root.children[0].children == (Text("x"),)  # type: ignore[union-attr]

    def test_newline_and_empty_runs_are_dropped(self) -> None:
        """Test that structural newlines and empty runs produce no node."""
        root = normalize_gdoc(
            document(paragraph(text_run("a"), text_run("\n"), text_run(""), text_run("b\n")))
        )
        assert root.children[0].children == (Text("a"), Text("b\n"))  # type: ignore[union-attr]

    def test_heading_link(self) -> None:
        """Test that links to headings become fragment hrefs."""
        root = normalize_gdoc(document(paragraph(text_run("Go", link={"headingId": "h.xyz"}))))
        link = root.children[0].children[0]  # type: ignore[union-attr]
        assert link.get("href") == "#h.xyz"

    def test_nested_heading_link(self) -> None:
        """Test tab-aware link targets nested under "heading"."""
        root = normalize_gdoc(
            document(paragraph(text_run("Go", link={"heading": {"id": "h.1", "tabId": "t.0"}})))
        )
        assert root.children[0].children[0].get("href") == "#h.1"  # type: ignore[union-attr]

    def test_unusable_link_is_ignored(self) -> None:
        """Test that a link with no target leaves the text unwrapped."""
        root = normalize_gdoc(document(paragraph(text_run("Go", link={}))))
        assert root.children[0].children == (Text("Go"),)  # type: ignore[union-attr]


class TestTables:
    """Tests for table conversion."""

    def test_table_structure(self) -> None:
        """Test that tables become table > tbody > tr > td with block content."""
        root = normalize_gdoc(
            document(table([[paragraph(text_run("Tabs\n"))], [paragraph(text_run("B\n"))]]))
        )
        expected = Element(
            "table",
            {},
            [
                Element(
                    "tbody",
                    {},
                    [
                        Element(
                            "tr",
                            {},
                            [
                                Element("td", {}, [Element("p", {}, [Text("Tabs\n")])]),
                                Element("td", {}, [Element("p", {}, [Text("B\n")])]),
                            ],
                        )
                    ],
                )
            ],
        )
        assert root == Root([expected])

    def test_nested_table(self) -> None:
        """Test that a table inside a cell is normalized recursively."""
        inner = table([[paragraph(text_run("inner\n"))]])
        root = normalize_gdoc(document(table([[inner]])))
        cell = root.children[0].children[0].children[0].children[0]  # type: ignore[union-attr]
        assert cell.children[0].tag_name == "table"


class TestInlineObjects:
    """Tests for image conversion."""

    def test_unresolved_object_is_placeholder(self) -> None:
        """Test that an object missing from inlineObjects degrades to a placeholder."""
        root = normalize_gdoc(
            document(paragraph({"inlineObjectElement": {"inlineObjectId": "kix.missing"}}))
        )
        image = root.children[0].children[0]  # type: ignore[union-attr]
        assert image == Element("img", {"src": "", "alt": PLACEHOLDER_ALT})

    def test_custom_placeholder(self) -> None:
        """Test that the placeholder alt text can be configured."""
        root = normalize_gdoc(
            document(paragraph({"inlineObjectElement": {}})), placeholder_alt="Unknown image"
        )
        image = root.children[0].children[0]  # type: ignore[union-attr]
        assert image.get("alt") == "Unknown image"

    def test_resolved_object_with_description(self) -> None:
        """Test that description and contentUri become alt and src."""
        doc = document(
            paragraph({"inlineObjectElement": {"inlineObjectId": "kix.1"}}),
            inlineObjects={
                "kix.1": {
                    "inlineObjectProperties": {
                        "embeddedObject": {
                            "description": "A bar chart",
                            "imageProperties": {"contentUri": "https://img/1"},
                        }
                    }
                }
            },
        )
        image = normalize_gdoc(doc).children[0].children[0]  # type: ignore[union-attr]
        assert image == Element("img", {"src": "https://img/1", "alt": "A bar chart"})

    def test_resolved_object_without_alt(self) -> None:
        """Test that an image with no description or title has no alt attribute."""
        doc = document(
            paragraph({"inlineObjectElement": {"inlineObjectId": "kix.1"}}),
            inlineObjects={
                "kix.1": {"inlineObjectProperties": {"embeddedObject": {"imageProperties": {}}}}
            },
        )
        image = normalize_gdoc(doc).children[0].children[0]  # type: ignore[union-attr]
        assert not image.has("alt")
        assert image.get("src") == ""

    def test_title_used_when_description_missing(self) -> None:
        """Test that the alt text title is a fallback for description."""
        doc = document(
            paragraph({"inlineObjectElement": {"inlineObjectId": "kix.1"}}),
            inlineObjects={
                "kix.1": {"inlineObjectProperties": {"embeddedObject": {"title": "Logo"}}}
            },
        )
        image = normalize_gdoc(doc).children[0].children[0]  # type: ignore[union-attr]
        assert image.get("alt") == "Logo"


class TestRobustness:
    """Tests for skipped constructs and degenerate documents."""

    def test_unknown_structural_elements_are_skipped(self) -> None:
        """Test that section breaks and tables of contents contribute nothing."""
        root = normalize_gdoc(
            document(
                {"sectionBreak": {"sectionStyle": {}}},
                paragraph(text_run("a")),
                {"tableOfContents": {"content": []}},
            )
        )
        assert len(root.children) == 1

    def test_unknown_paragraph_elements_are_skipped(self) -> None:
        """Test that horizontal rules and page breaks contribute nothing."""
        root = normalize_gdoc(
            document(paragraph({"horizontalRule": {}}, text_run("a"), {"pageBreak": {}}))
        )
        assert root.children[0].children == (Text("a"),)  # type: ignore[union-attr]

    def test_missing_body(self) -> None:
        """Test that a document without body content is an empty root."""
        assert normalize_gdoc({}) == Root()
        assert normalize_gdoc({"body": {}}) == Root()

    def test_null_blocks_are_skipped(self) -> None:
        """Test that null or non-object structural elements contribute nothing."""
        root = normalize_gdoc(
            document({"paragraph": None}, None, "stray", {"table": None}, paragraph(text_run("a")))
        )
        assert root == Root([Element("p", {}, [Text("a")])])

    def test_null_runs_are_skipped(self) -> None:
        """Test that null text runs and non-object elements contribute nothing."""
        root = normalize_gdoc(
            document(
                paragraph(
                    {"textRun": None},
                    None,
                    {"inlineObjectElement": None},
                    {"textRun": {"content": None}},
                    {"textRun": {"content": "kept", "textStyle": None}},
                )
            )
        )
        assert root.children[0].children == (Text("kept"),)  # type: ignore[union-attr]

    def test_malformed_containers(self) -> None:
        """Test that non-list content and non-object rows or cells are skipped."""
        doc = document(
            {"paragraph": {"elements": None, "paragraphStyle": None}},
            {"table": {"tableRows": [None, {"tableCells": [None, {"content": None}]}]}},
        )
        root = normalize_gdoc(doc)
        assert root.children[0] == Element("p")
        assert root.children[1] == Element(
            "table", {}, [Element("tbody", {}, [Element("tr", {}, [Element("td")])])]
        )

    def test_malformed_inline_objects(self) -> None:
        """Test that a non-object inline object entry becomes a placeholder."""
        doc = document(
            paragraph({"inlineObjectElement": {"inlineObjectId": "kix.1"}}),
            inlineObjects={"kix.1": None},
        )
        (image,) = normalize_gdoc(doc).children[0].children  # type: ignore[union-attr]
        assert image == Element("img", {"src": "", "alt": PLACEHOLDER_ALT})

    def test_deterministic(self) -> None:
        """Test that normalizing the same document twice gives equal trees."""
        doc = document(
            paragraph(text_run("Tabs\n"), style={"namedStyleType": "HEADING_1"}),
            table([[paragraph(text_run("x", bold=True, link={"url": "#x"}))]]),
        )
        assert normalize_gdoc(doc) == normalize_gdoc(doc)
