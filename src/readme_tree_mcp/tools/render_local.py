"""Tool to render a local directory as a Markdown file tree."""

import logging
from pathlib import Path
from typing import Optional

from ..config import load_render_environment
from ..models import TreeNode
from ..parser.hierarchy import sort_key
from ..parser.markdown import escape_markdown_text
from ..parser.readme import README_NAMES, extract_description
from ..security import (
    is_sensitive_filename,
    load_ignore_spec,
    should_skip_dir,
    validate_path_traversal,
)
from .render_tree import build_render_result

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ('.md', '.markdown', '.mdx')


def _read_description(file_path: Path) -> Optional[str]:
    """First paragraph of a Markdown file, or None if unreadable."""
    try:
        content = file_path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        logger.warning("Could not read %s: %s", file_path, e)
        return None
    return extract_description(content)


def _find_readme(directory: Path) -> Optional[Path]:
    for name in README_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def discover_local_tree(
    base_path: str,
    max_depth: int = 5,
    include_hidden: bool = False,
    follow_symlinks: bool = False,
    extra_ignore_patterns: Optional[list[str]] = None,
    read_descriptions: bool = True,
) -> list[TreeNode]:
    """
    Crawl a local directory into tree nodes.

    Args:
        base_path: Root directory to start crawling from
        max_depth: Deepest directory level whose contents are listed
        include_hidden: Whether to include hidden entries (starting with .)
        follow_symlinks: Whether to follow symbolic links (default False for safety)
        extra_ignore_patterns: Additional gitignore-style patterns to exclude
        read_descriptions: Take descriptions from README.md files and Markdown files

    Returns:
        Root-level nodes, directories first, each level sorted by name
    """
    base = Path(base_path).resolve()
    if not base.exists():
        raise ValueError(f"Path does not exist: {base_path}")
    if not base.is_dir():
        raise ValueError(f"Path is not a directory: {base_path}")

    ignore_spec = load_ignore_spec(base, extra_ignore_patterns)

    def is_ignored(rel_path: str) -> bool:
        return bool(ignore_spec and ignore_spec.match_file(rel_path))

    def describe(item: Path, is_directory: bool) -> Optional[str]:
        if not read_descriptions:
            return None
        if is_directory:
            readme = _find_readme(item)
            return _read_description(readme) if readme else None
        if item.suffix.lower() in MARKDOWN_EXTENSIONS:
            return _read_description(item)
        return None

    def crawl_directory(current_path: Path, current_depth: int) -> list[TreeNode]:
        """Recursively collect the entries of one directory."""
        if current_depth > max_depth:
            logger.debug("Max depth reached, not listing: %s", current_path)
            return []

        try:
            items = list(current_path.iterdir())
        except OSError as e:
            logger.warning("Could not list %s: %s", current_path, e)
            return []

        entries: list[tuple[Path, bool]] = []
        for item in items:
            try:
                resolved = item.resolve()
                if item.is_symlink():
                    if not follow_symlinks:
                        logger.debug("Skipping symlink: %s", item)
                        continue
                    if not validate_path_traversal(resolved, base):
                        logger.warning("Symlink escapes base directory, skipping: %s -> %s", item, resolved)
                        continue

                if not include_hidden and item.name.startswith('.'):
                    continue

                rel_path = item.relative_to(base).as_posix()
                if item.is_dir():
                    if should_skip_dir(item.name) or is_ignored(rel_path + '/'):
                        logger.debug("Skipping directory: %s", rel_path)
                        continue
                    entries.append((item, True))
                elif item.is_file():
                    if is_sensitive_filename(rel_path):
                        logger.info("Skipping sensitive file: %s", rel_path)
                        continue
                    if is_ignored(rel_path):
                        logger.debug("Skipping ignored file: %s", rel_path)
                        continue
                    entries.append((item, False))
            except (OSError, RuntimeError) as e:
                logger.debug("Skipping unreadable entry %s: %s", item, e)

        entries.sort(key=lambda entry: sort_key(entry[0].name, entry[1]))

        nodes: list[TreeNode] = []
        for item, is_directory in entries:
            nodes.append(TreeNode(
                filename=item.name,
                is_directory=is_directory,
                title_paragraph=escape_markdown_text(item.name),
                description_paragraph=describe(item, is_directory),
                children=tuple(crawl_directory(item, current_depth + 1)) if is_directory else (),
            ))
        return nodes

    return crawl_directory(base, 0)


async def render_local_tree(
    path: str,
    use_tabs: Optional[bool] = None,
    number_spaces: Optional[int] = None,
    link_to_subdirectory_readme: Optional[bool] = None,
    subdirectory_description_on_new_line: Optional[bool] = None,
    end_of_line: Optional[str] = None,
    max_depth: int = 5,
    include_hidden: bool = False,
    follow_symlinks: bool = False,
    extra_ignore_patterns: Optional[list[str]] = None,
    read_descriptions: bool = True,
) -> dict:
    """
    Render a local directory as a Markdown file tree.

    Formatting arguments left as None fall back to READMETREE_* environment
    variables. Crawl arguments are passed to discover_local_tree.

    Returns:
        Dict with the Markdown and counts, or an error
    """
    base_path = Path(path).resolve()

    try:
        environment = load_render_environment(
            use_tabs=use_tabs,
            number_spaces=number_spaces,
            link_to_subdirectory_readme=link_to_subdirectory_readme,
            subdirectory_description_on_new_line=subdirectory_description_on_new_line,
            end_of_line=end_of_line,
        )
        tree = discover_local_tree(
            str(base_path),
            max_depth=max_depth,
            include_hidden=include_hidden,
            follow_symlinks=follow_symlinks,
            extra_ignore_patterns=extra_ignore_patterns,
            read_descriptions=read_descriptions,
        )
    except ValueError as e:
        return {
            "success": False,
            "error": str(e),
            "path": str(base_path),
        }

    result = build_render_result(tree, environment)
    result["path"] = str(base_path)
    return result
