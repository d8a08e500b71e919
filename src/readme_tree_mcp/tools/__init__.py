"""MCP tool implementations."""

from .render_tree import render_tree
from .render_local import render_local_tree
from .render_repo import render_repo_tree

__all__ = ["render_tree", "render_local_tree", "render_repo_tree"]
