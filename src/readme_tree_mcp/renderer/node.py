"""Markdown for a single tree node: link label, link target and description."""

from typing import Sequence

from ..models import RenderEnvironment, TreeNode
from ..parser.markdown import DEFAULT_MARKDOWN, MarkdownTextOps


def get_indentation_unit(environment: RenderEnvironment) -> str:
    """One nesting level: a tab, or ``number_spaces`` spaces."""
    if environment.options.use_tabs:
        return "\t"
    return " " * environment.options.number_spaces


def get_link_label(node: TreeNode, markdown: MarkdownTextOps = DEFAULT_MARKDOWN) -> str:
    """Directory titles are shown strong; file titles are used as given."""
    if not node.is_directory:
        return node.title_paragraph

    # Nested strong renders badly in some viewers, so flatten it before wrapping
    title_no_strong = markdown.remove_strong_from_markdown(node.title_paragraph)
    return markdown.generate_strong_paragraph_from_markdown_paragraph(title_no_strong)


def get_link_target(
    node: TreeNode,
    ancestor_path: Sequence[str],
    environment: RenderEnvironment,
) -> str:
    """Relative path of the node, or of its README.md when configured."""
    link_target = "/".join([*ancestor_path, node.filename])

    if node.is_directory and environment.options.link_to_subdirectory_readme:
        link_target += "/README.md"

    return link_target


def get_description_separator(environment: RenderEnvironment) -> str:
    """Inline `` - `` or a hard line break followed by one indentation unit."""
    if environment.options.subdirectory_description_on_new_line:
        return "  " + environment.end_of_line + get_indentation_unit(environment)
    return " - "


def format_node(
    node: TreeNode,
    ancestor_path: Sequence[str],
    environment: RenderEnvironment,
    markdown: MarkdownTextOps = DEFAULT_MARKDOWN,
) -> str:
    """
    Build the bullet for one node.

    Args:
        node: The file or directory entry
        ancestor_path: Filenames from the tree root down to the node's parent
        environment: Line separator and formatting options
        markdown: Inline Markdown operations used for the link and emphasis

    Returns:
        One line, or two joined by ``environment.end_of_line`` when the
        description goes on its own line
    """
    link = markdown.generate_link_from_markdown_paragraph_and_url(
        get_link_label(node, markdown),
        get_link_target(node, ancestor_path, environment),
    )
    line = f"- {link}"

    if node.description_paragraph:
        return line + get_description_separator(environment) + node.description_paragraph
    return line
