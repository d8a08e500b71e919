"""Tree and render configuration types."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence


@dataclass(frozen=True)
class TreeNode:
    """A file or directory entry in the documented tree."""
    filename: str
    is_directory: bool
    title_paragraph: str
    description_paragraph: Optional[str] = None
    children: tuple["TreeNode", ...] = ()


@dataclass(frozen=True)
class RenderOptions:
    """Formatting switches for the Markdown list."""
    use_tabs: bool = False
    number_spaces: int = 4
    link_to_subdirectory_readme: bool = False
    subdirectory_description_on_new_line: bool = False


@dataclass(frozen=True)
class RenderEnvironment:
    """Line separator plus options, passed through every render call."""
    end_of_line: str = "\n"
    options: RenderOptions = field(default_factory=RenderOptions)


def _optional_str(item: dict[str, Any], key: str) -> Optional[str]:
    value = item.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Tree entry '{key}' must be a string, got: {value!r}")
    return value


def tree_from_dicts(items: Sequence[dict[str, Any]]) -> list[TreeNode]:
    """
    Build tree nodes from JSON-style dicts.

    Each dict takes ``filename`` (required), ``is_directory``, ``title``,
    ``description`` and ``children``. A missing title falls back to the
    escaped filename.

    Raises:
        ValueError: if an entry or one of its fields has the wrong type
    """
    from .parser.markdown import escape_markdown_text

    if not isinstance(items, (list, tuple)):
        raise ValueError(f"Tree must be a list of entries, got: {items!r}")

    nodes: list[TreeNode] = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f"Tree entry must be an object, got: {item!r}")

        filename = _optional_str(item, "filename")
        if not filename:
            raise ValueError(f"Tree entry is missing a filename: {item!r}")

        is_directory = item.get("is_directory", False)
        if not isinstance(is_directory, bool):
            raise ValueError(f"'is_directory' of {filename} must be true or false, got: {is_directory!r}")

        children: tuple[TreeNode, ...] = ()
        if is_directory:
            children = tuple(tree_from_dicts(item.get("children") or []))

        nodes.append(TreeNode(
            filename=filename,
            is_directory=is_directory,
            title_paragraph=_optional_str(item, "title") or escape_markdown_text(filename),
            description_paragraph=_optional_str(item, "description") or None,
            children=children,
        ))
    return nodes


def count_nodes(tree: Iterable[TreeNode]) -> int:
    """Count every node in the tree, depth-first."""
    total = 0
    for node in tree:
        total += 1
        if node.is_directory:
            total += count_nodes(node.children)
    return total
