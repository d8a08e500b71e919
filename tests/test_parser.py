"""Tests for inline Markdown helpers, README extraction and tree building."""

import pytest

from readme_tree_mcp.models import TreeNode, count_nodes, tree_from_dicts
from readme_tree_mcp.parser.markdown import (
    DEFAULT_MARKDOWN,
    escape_markdown_text,
    generate_link_from_markdown_paragraph_and_url,
    generate_strong_paragraph_from_markdown_paragraph,
    remove_strong_from_markdown,
)
from readme_tree_mcp.parser.readme import extract_description, strip_front_matter
from readme_tree_mcp.parser.hierarchy import build_tree_from_paths


class TestEscapeMarkdownText:
    def test_plain_name_unchanged(self):
        assert escape_markdown_text("a.txt") == "a.txt"

    def test_emphasis_characters(self):
        assert escape_markdown_text("my_file.py") == "my\\_file.py"
        assert escape_markdown_text("*.md") == "\\*.md"

    def test_brackets(self):
        assert escape_markdown_text("[draft]") == "\\[draft\\]"

    def test_leading_bullet(self):
        assert escape_markdown_text("-notes") == "\\-notes"
        assert escape_markdown_text("a-b") == "a-b"


class TestGenerateLink:
    def test_basic(self):
        assert generate_link_from_markdown_paragraph_and_url("a.txt", "a.txt") == "[a.txt](a.txt)"

    def test_strong_label(self):
        assert generate_link_from_markdown_paragraph_and_url("**dir**", "dir") == "[**dir**](dir)"

    def test_brackets_in_label_escaped(self):
        assert generate_link_from_markdown_paragraph_and_url("a [b] c", "x") == "[a \\[b\\] c](x)"

    def test_already_escaped_brackets_kept(self):
        assert generate_link_from_markdown_paragraph_and_url("\\[b\\]", "x") == "[\\[b\\]](x)"

    def test_url_with_spaces(self):
        assert generate_link_from_markdown_paragraph_and_url("a", "my dir/a.md") == "[a](<my dir/a.md>)"

    def test_url_with_parentheses(self):
        assert generate_link_from_markdown_paragraph_and_url("a", "a (1).md") == "[a](<a (1).md>)"

    def test_url_with_angle_brackets(self):
        assert generate_link_from_markdown_paragraph_and_url("a", "a<b>.md") == "[a](<a\\<b\\>.md>)"

    def test_brackets_in_code_span_kept(self):
        assert generate_link_from_markdown_paragraph_and_url("`a[0]`", "x") == "[`a[0]`](x)"

    def test_escaped_backslash_before_bracket(self):
        # "\\" is an escaped backslash, so the bracket after it is still raw
        assert generate_link_from_markdown_paragraph_and_url("a\\\\[b", "x") == "[a\\\\\\[b](x)"

    @pytest.mark.parametrize("url, expected", [
        ("a#b.md", "a%23b.md"),
        ("100%.md", "100%25.md"),
        ("what?.md", "what%3F.md"),
        ("c#/notes.md", "c%23/notes.md"),
    ])
    def test_url_fragment_and_query_characters_encoded(self, url, expected):
        assert generate_link_from_markdown_paragraph_and_url("a", url) == f"[a]({expected})"

    def test_encoded_url_with_spaces(self):
        assert generate_link_from_markdown_paragraph_and_url("a", "my #1.md") == "[a](<my %231.md>)"


class TestRemoveStrong:
    def test_asterisks(self):
        assert remove_strong_from_markdown("**bold** text") == "bold text"

    def test_underscores(self):
        assert remove_strong_from_markdown("__bold__ text") == "bold text"

    def test_nested_strong_collapses(self):
        assert remove_strong_from_markdown("**a **b** c**") == "a b c"

    def test_italic_kept(self):
        assert remove_strong_from_markdown("*italic* and **bold**") == "*italic* and bold"
        assert remove_strong_from_markdown("***both***") == "*both*"

    def test_escaped_markers_kept(self):
        text = "\\*\\*not bold\\*\\*"
        assert remove_strong_from_markdown(text) == text

    def test_unpaired_marker_kept(self):
        assert remove_strong_from_markdown("2 ** 3") == "2 ** 3"

    def test_intraword_underscores_kept(self):
        assert remove_strong_from_markdown("snake__case__name") == "snake__case__name"

    def test_no_markup(self):
        assert remove_strong_from_markdown("plain") == "plain"

    def test_code_span_untouched(self):
        assert remove_strong_from_markdown("`**kwargs**` helpers") == "`**kwargs**` helpers"
        assert remove_strong_from_markdown("``a **b** c``") == "``a **b** c``"

    def test_strong_around_code_span(self):
        assert remove_strong_from_markdown("**`x`**") == "`x`"

    def test_unclosed_backtick_is_literal(self):
        assert remove_strong_from_markdown("`**a**") == "`a"

    def test_escaped_backslash_before_marker(self):
        assert remove_strong_from_markdown("\\\\**a**") == "\\\\a"


class TestGenerateStrong:
    def test_basic(self):
        assert generate_strong_paragraph_from_markdown_paragraph("dir") == "**dir**"

    def test_whitespace_outside_markers(self):
        assert generate_strong_paragraph_from_markdown_paragraph(" dir ") == " **dir** "

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty(self, text):
        assert generate_strong_paragraph_from_markdown_paragraph(text) == text

    def test_stray_marker_escaped(self):
        assert generate_strong_paragraph_from_markdown_paragraph("2 ** 3") == "**2 \\*\\* 3**"

    def test_marker_in_code_span_kept(self):
        assert generate_strong_paragraph_from_markdown_paragraph("`a**b`") == "**`a**b`**"

    def test_italic_inside(self):
        assert generate_strong_paragraph_from_markdown_paragraph("an *odd* dir") == "**an *odd* dir**"

    def test_default_ops_delegate(self):
        assert DEFAULT_MARKDOWN.generate_strong_paragraph_from_markdown_paragraph(
            DEFAULT_MARKDOWN.remove_strong_from_markdown("**x**")
        ) == "**x**"


class TestStripFrontMatter:
    def test_with_front_matter(self):
        content = "---\ntitle: My Doc\nauthor: Test\n---\n\n# Hello\n"
        stripped, meta = strip_front_matter(content)
        assert "# Hello" in stripped
        assert meta["title"] == "My Doc"
        assert "---" not in stripped

    def test_without_front_matter(self):
        content = "# Hello\n\nNo front matter here.\n"
        stripped, meta = strip_front_matter(content)
        assert stripped == content
        assert meta == {}

    def test_incomplete_front_matter(self):
        content = "---\ntitle: Broken\nNo closing delimiter\n# Hello\n"
        stripped, meta = strip_front_matter(content)
        assert stripped == content


class TestExtractDescription:
    def test_paragraph_after_heading(self):
        assert extract_description("# Docs\n\nAll the documentation.\n") == "All the documentation."

    def test_multiline_paragraph_joined(self):
        content = "# T\n\nline one\nline two\n\nsecond paragraph\n"
        assert extract_description(content) == "line one line two"

    def test_badges_skipped(self):
        content = "# T\n\n[![build](https://x/badge.svg)](https://x) ![cov](https://y.svg)\n\nReal text.\n"
        assert extract_description(content) == "Real text."

    def test_code_fence_skipped(self):
        content = "# T\n\n```bash\npip install x\n```\n\nAfter code.\n"
        assert extract_description(content) == "After code."

    def test_setext_heading_skipped(self):
        assert extract_description("Title\n=====\n\nBody text.\n") == "Body text."

    def test_html_comment_skipped(self):
        content = "<!--\nmulti-line\ncomment\n-->\n# T\n\nText.\n"
        assert extract_description(content) == "Text."

    def test_list_skipped(self):
        assert extract_description("# T\n\n- item\n- item\n\nPara.\n") == "Para."

    def test_front_matter_skipped(self):
        assert extract_description("---\ntitle: X\n---\nBody.\n") == "Body."

    def test_inline_markdown_kept(self):
        assert extract_description("# T\n\nUses `httpx` and **care**.\n") == "Uses `httpx` and **care**."

    def test_no_paragraph(self):
        assert extract_description("# Only a heading\n") is None
        assert extract_description("") is None


class TestBuildTreeFromPaths:
    def test_nesting_and_order(self):
        tree = build_tree_from_paths([
            ("README.md", False),
            ("docs", True),
            ("docs/guide.md", False),
            ("Zeta.md", False),
            ("alpha.md", False),
        ])
        assert [n.filename for n in tree] == ["docs", "alpha.md", "README.md", "Zeta.md"]
        assert tree[0].is_directory is True
        assert [c.filename for c in tree[0].children] == ["guide.md"]

    def test_missing_parents_created(self):
        tree = build_tree_from_paths([("src/pkg/mod.py", False)])
        assert tree[0].filename == "src"
        assert tree[0].is_directory is True
        assert tree[0].children[0].filename == "pkg"
        assert tree[0].children[0].children[0].filename == "mod.py"

    def test_parent_listed_after_child(self):
        tree = build_tree_from_paths([("docs/a.md", False), ("docs", True)])
        assert len(tree) == 1
        assert tree[0].children[0].filename == "a.md"

    def test_descriptions_and_titles(self):
        tree = build_tree_from_paths(
            [("docs", True), ("docs/my_notes.md", False)],
            descriptions={"docs": "All the docs", "docs/my_notes.md": ""},
        )
        assert tree[0].description_paragraph == "All the docs"
        assert tree[0].children[0].title_paragraph == "my\\_notes.md"
        assert tree[0].children[0].description_paragraph is None

    def test_empty(self):
        assert build_tree_from_paths([]) == []


class TestTreeFromDicts:
    def test_basic(self):
        tree = tree_from_dicts([
            {"filename": "dir", "is_directory": True, "description": "A dir", "children": [
                {"filename": "a_b.txt"},
            ]},
            {"filename": "x.md", "title": "*X*", "description": ""},
        ])
        assert tree[0] == TreeNode(
            filename="dir",
            is_directory=True,
            title_paragraph="dir",
            description_paragraph="A dir",
            children=(TreeNode("a_b.txt", False, "a\\_b.txt"),),
        )
        assert tree[1].title_paragraph == "*X*"
        assert tree[1].description_paragraph is None
        assert count_nodes(tree) == 3

    def test_directory_without_children(self):
        tree = tree_from_dicts([{"filename": "empty", "is_directory": True}])
        assert tree[0].children == ()

    def test_missing_filename(self):
        with pytest.raises(ValueError):
            tree_from_dicts([{"title": "no name"}])

    def test_non_object_entry(self):
        with pytest.raises(ValueError, match="must be an object"):
            tree_from_dicts(["README.md"])

    def test_children_must_be_a_list(self):
        with pytest.raises(ValueError, match="must be a list"):
            tree_from_dicts([{"filename": "dir", "is_directory": True, "children": "abc"}])

    @pytest.mark.parametrize("value", ["false", "true", 1, None])
    def test_is_directory_must_be_boolean(self, value):
        with pytest.raises(ValueError, match="is_directory"):
            tree_from_dicts([{"filename": "dir", "is_directory": value}])

    @pytest.mark.parametrize("key", ["filename", "title", "description"])
    def test_text_fields_must_be_strings(self, key):
        item = {"filename": "a.md", key: 42}
        with pytest.raises(ValueError, match=key):
            tree_from_dicts([item])

    def test_tree_must_be_a_list(self):
        with pytest.raises(ValueError):
            tree_from_dicts({"filename": "a.md"})
