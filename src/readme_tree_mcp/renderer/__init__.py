"""Tree to Markdown rendering."""

from .node import format_node
from .tree import get_markdown_for_tree

__all__ = ["format_node", "get_markdown_for_tree"]
