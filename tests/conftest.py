"""Shared test fixtures for readme-tree-mcp tests."""

import pytest

from readme_tree_mcp.models import RenderEnvironment, RenderOptions, TreeNode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep READMETREE_* settings from the outer shell out of the tests."""
    for name in (
        "READMETREE_USE_TABS",
        "READMETREE_NUMBER_SPACES",
        "READMETREE_LINK_TO_README",
        "READMETREE_DESCRIPTION_ON_NEW_LINE",
        "READMETREE_END_OF_LINE",
        "READMETREE_LOCAL_ONLY",
        "GITHUB_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)


def file_node(name: str, description=None, title=None) -> TreeNode:
    return TreeNode(
        filename=name,
        is_directory=False,
        title_paragraph=title or name,
        description_paragraph=description,
    )


def dir_node(name: str, children=(), description=None, title=None) -> TreeNode:
    return TreeNode(
        filename=name,
        is_directory=True,
        title_paragraph=title or name,
        description_paragraph=description,
        children=tuple(children),
    )


def flatten_tree(nodes, depth=0):
    """Flatten a tree to (node, depth) pairs in render order."""
    result = []
    for node in nodes:
        result.append((node, depth))
        if node.is_directory:
            result.extend(flatten_tree(node.children, depth + 1))
    return result


@pytest.fixture
def environment():
    """Four-space indentation, inline descriptions, LF line endings."""
    return RenderEnvironment(end_of_line="\n", options=RenderOptions())


@pytest.fixture
def sample_tree():
    """Return a small project tree three levels deep."""
    return [
        dir_node("docs", [
            file_node("guide.md", description="How to get started"),
            dir_node("api", [file_node("endpoints.md")]),
        ], description="Documentation"),
        file_node("README.md"),
        file_node("setup.py", description="Packaging"),
    ]


@pytest.fixture
def sample_project_dir(tmp_path):
    """Create a temporary project directory with READMEs and ignored files."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "README.md").write_text("# Docs\n\nAll the documentation.\n")
    (docs / "guide.md").write_text("# Guide\n\nStart here.\n\n## More\n\nDetails.\n")
    (docs / "diagram.png").write_bytes(b"\x89PNG")

    src = tmp_path / "src"
    src.mkdir()
    (src / "main.py").write_text("print('hi')\n")

    (tmp_path / "README.md").write_text("# Project\n\nThe project.\n")
    (tmp_path / "setup.py").write_text("")

    # .gitignore
    (tmp_path / ".gitignore").write_text("build/\n*.log\n")
    (tmp_path / "debug.log").write_text("log\n")

    # Ignored directories and sensitive files
    build = tmp_path / "build"
    build.mkdir()
    (build / "output.md").write_text("# Build Output\n")
    node_modules = tmp_path / "node_modules"
    node_modules.mkdir()
    (node_modules / "pkg.js").write_text("")
    (tmp_path / ".env").write_text("SECRET_KEY=abc123\n")
    (tmp_path / "server.pem").write_text("key\n")

    return tmp_path
