"""Render a whole file tree as a nested Markdown bulleted list."""

import logging
from typing import Sequence

from ..models import RenderEnvironment, TreeNode
from ..parser.markdown import DEFAULT_MARKDOWN, MarkdownTextOps
from .node import format_node, get_indentation_unit

logger = logging.getLogger(__name__)


def get_markdown_for_tree(
    tree: Sequence[TreeNode],
    environment: RenderEnvironment,
    markdown: MarkdownTextOps = DEFAULT_MARKDOWN,
) -> str:
    """
    Render the tree as Markdown.

    Each node becomes a bullet; a directory's children follow it, indented
    one unit deeper. Lines are joined with ``environment.end_of_line``.
    An empty tree renders as an empty string.
    """
    lines = get_markdown_lines_for_tree(tree, [], environment, markdown)
    logger.debug("Rendered %d top-level nodes into %d lines", len(tree), len(lines))
    return environment.end_of_line.join(lines)


def get_markdown_lines_for_tree(
    tree: Sequence[TreeNode],
    ancestor_path: Sequence[str],
    environment: RenderEnvironment,
    markdown: MarkdownTextOps = DEFAULT_MARKDOWN,
) -> list[str]:
    """Lines for ``tree``, unindented at this level."""
    lines: list[str] = []
    indentation_unit = get_indentation_unit(environment)

    for node in tree:
        node_markdown = format_node(node, ancestor_path, environment, markdown)
        # A description on its own line makes this more than one line
        lines.extend(node_markdown.split(environment.end_of_line))

        if node.is_directory:
            child_lines = get_markdown_lines_for_tree(
                node.children,
                [*ancestor_path, node.filename],
                environment,
                markdown,
            )
            lines.extend(indentation_unit + line for line in child_lines)

    return lines
