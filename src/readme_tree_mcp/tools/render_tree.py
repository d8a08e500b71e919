"""Tool to render a caller-supplied tree as Markdown."""

from typing import Any, Optional, Sequence

from ..config import load_render_environment
from ..models import RenderEnvironment, TreeNode, count_nodes, tree_from_dicts
from ..renderer.tree import get_markdown_for_tree


def build_render_result(tree: Sequence[TreeNode], environment: RenderEnvironment) -> dict:
    """Render and wrap the output with node and line counts."""
    markdown = get_markdown_for_tree(tree, environment)
    return {
        "success": True,
        "markdown": markdown,
        "node_count": count_nodes(tree),
        "line_count": len(markdown.split(environment.end_of_line)) if markdown else 0,
    }


def render_tree(
    tree: list[dict[str, Any]],
    use_tabs: Optional[bool] = None,
    number_spaces: Optional[int] = None,
    link_to_subdirectory_readme: Optional[bool] = None,
    subdirectory_description_on_new_line: Optional[bool] = None,
    end_of_line: Optional[str] = None,
) -> dict:
    """
    Render a tree given as nested dicts.

    Args:
        tree: Entries with filename, is_directory, title, description, children
        use_tabs: Indent with tabs instead of spaces
        number_spaces: Spaces per indentation level
        link_to_subdirectory_readme: Link directories to their README.md
        subdirectory_description_on_new_line: Put descriptions on their own line
        end_of_line: "lf" or "crlf"

    Returns:
        Dict with the Markdown and counts, or an error
    """
    try:
        environment = load_render_environment(
            use_tabs=use_tabs,
            number_spaces=number_spaces,
            link_to_subdirectory_readme=link_to_subdirectory_readme,
            subdirectory_description_on_new_line=subdirectory_description_on_new_line,
            end_of_line=end_of_line,
        )
        nodes = tree_from_dicts(tree)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    return build_render_result(nodes, environment)
