"""Pull one-paragraph descriptions out of README and other Markdown files."""

import re
from typing import Optional

# Checked in order; the first match describes its directory
README_NAMES = ('README.md', 'readme.md', 'Readme.md')

_HEADING_PATTERN = re.compile(r'^(#{1,6})\s+(.+?)(?:\s+#+)?\s*$')
_SETEXT_UNDERLINE_PATTERN = re.compile(r'^(=+|-+)\s*$')
_FENCE_PATTERN = re.compile(r'^(```|~~~)')
_LIST_PATTERN = re.compile(r'^([-*+]|\d+[.)])\s+')
_IMAGE_ONLY_PATTERN = re.compile(r'^(\[?!\[[^\]]*\]\([^)]*\)(\]\([^)]*\))?\s*)+$')


def strip_front_matter(content: str) -> tuple[str, dict]:
    """
    Strip YAML front-matter from content.

    Returns:
        Tuple of (content without front-matter, extracted metadata dict)
    """
    metadata: dict = {}
    if not content.startswith('---'):
        return content, metadata

    end_match = re.search(r'\n---\s*\n', content[3:])
    if not end_match:
        return content, metadata

    front_matter = content[3:3 + end_match.start()]
    rest = content[3 + end_match.end():]

    title_match = re.search(r'^title:\s*["\']?(.+?)["\']?\s*$', front_matter, re.MULTILINE)
    if title_match:
        metadata['title'] = title_match.group(1).strip()

    return rest, metadata


def _is_paragraph_line(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return False
    if _HEADING_PATTERN.match(stripped) or _LIST_PATTERN.match(stripped):
        return False
    if stripped.startswith(('<', '|', '>')):
        return False
    if _IMAGE_ONLY_PATTERN.match(stripped):
        return False
    return True


def extract_description(content: str) -> Optional[str]:
    """
    Return the first plain paragraph of a Markdown document.

    Headings, HTML blocks, code fences, lists, tables, block quotes and
    badge/image-only lines are skipped. The paragraph's lines are joined
    with single spaces.
    """
    body, _ = strip_front_matter(content)
    lines = body.splitlines()

    paragraph: list[str] = []
    in_fence = False
    in_comment = False

    for line in lines:
        stripped = line.strip()

        if in_comment:
            if '-->' in stripped:
                in_comment = False
            continue
        if stripped.startswith('<!--'):
            in_comment = '-->' not in stripped
            if paragraph:
                break
            continue

        if _FENCE_PATTERN.match(stripped):
            if paragraph:
                break
            in_fence = not in_fence
            continue
        if in_fence:
            continue

        # Setext underline: the collected text was a heading, not a paragraph.
        # Without collected text it is a thematic break.
        if _SETEXT_UNDERLINE_PATTERN.match(stripped):
            paragraph = []
            continue

        if _is_paragraph_line(line):
            paragraph.append(stripped)
        elif paragraph:
            break

    if not paragraph:
        return None
    return ' '.join(paragraph)
