"""Markdown parsing utilities."""

from .markdown import (
    generate_link_from_markdown_paragraph_and_url,
    remove_strong_from_markdown,
    generate_strong_paragraph_from_markdown_paragraph,
)
from .hierarchy import build_tree_from_paths

__all__ = [
    "generate_link_from_markdown_paragraph_and_url",
    "remove_strong_from_markdown",
    "generate_strong_paragraph_from_markdown_paragraph",
    "build_tree_from_paths",
]
