"""Build a nested TreeNode hierarchy from flat slash-separated paths."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..models import TreeNode
from .markdown import escape_markdown_text


@dataclass
class _PendingNode:
    """Mutable stand-in used while children are still being collected."""
    name: str
    path: str
    is_directory: bool
    children: list["_PendingNode"] = field(default_factory=list)


def sort_key(name: str, is_directory: bool) -> tuple[int, str, str]:
    """Directories first, then case-insensitive by name."""
    return (0 if is_directory else 1, name.lower(), name)


def build_tree_from_paths(
    entries: Iterable[tuple[str, bool]],
    descriptions: Optional[dict[str, str]] = None,
) -> list[TreeNode]:
    """
    Build a tree from ``(path, is_directory)`` pairs.

    Intermediate directories missing from ``entries`` are created.
    ``descriptions`` maps a path to its description paragraph.

    Returns a list of root nodes.
    """
    descriptions = descriptions or {}
    nodes: dict[str, _PendingNode] = {}
    roots: list[_PendingNode] = []

    def ensure(path: str, is_directory: bool) -> _PendingNode:
        existing = nodes.get(path)
        if existing is not None:
            if is_directory:
                existing.is_directory = True
            return existing

        parent_path, _, name = path.rpartition('/')
        node = _PendingNode(name=name, path=path, is_directory=is_directory)
        nodes[path] = node
        if parent_path:
            ensure(parent_path, True).children.append(node)
        else:
            roots.append(node)
        return node

    for path, is_directory in entries:
        path = path.strip('/')
        if path:
            ensure(path, is_directory)

    def freeze(pending: list[_PendingNode]) -> list[TreeNode]:
        ordered = sorted(pending, key=lambda n: sort_key(n.name, n.is_directory))
        return [
            TreeNode(
                filename=node.name,
                is_directory=node.is_directory,
                title_paragraph=escape_markdown_text(node.name),
                description_paragraph=descriptions.get(node.path) or None,
                children=tuple(freeze(node.children)) if node.is_directory else (),
            )
            for node in ordered
        ]

    return freeze(roots)
