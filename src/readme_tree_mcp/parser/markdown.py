"""Inline Markdown helpers: links, strong emphasis and escaping."""

import re
from typing import Callable, Protocol


# Characters that change meaning when a raw name is dropped into Markdown
_ESCAPE_PATTERN = re.compile(r'([\\`*_\[\]<>#])')
_LEADING_BULLET_PATTERN = re.compile(r'^([-+])')

_BRACKET_PATTERN = re.compile(r'([\[\]])')
_ANGLE_URL_PATTERN = re.compile(r'[\s()<>]')

# Characters a relative link target must not carry raw; '%' goes first
_URL_ENCODINGS = (('%', '%25'), ('#', '%23'), ('?', '%3F'))

# **strong** and __strong__ (the latter only at word boundaries)
_STRONG_PATTERNS = [
    re.compile(r'\*\*(?=\S)(.+?)(?<=\S)\*\*', re.DOTALL),
    re.compile(r'(?<!\w)__(?=\S)(.+?)(?<=\S)__(?!\w)', re.DOTALL),
]
_STRAY_STRONG_PATTERN = re.compile(r'\*\*')
_SURROUNDING_SPACE_PATTERN = re.compile(r'^(\s*)(.*?)(\s*)$', re.DOTALL)

# Placeholder delimiters (Unicode private use area)
_TOKEN_OPEN = '\ue000'
_TOKEN_CLOSE = '\ue001'
_TOKEN_PATTERN = re.compile(f'{_TOKEN_OPEN}(\\d+){_TOKEN_CLOSE}')


def _find_closing_backticks(text: str, start: int, length: int) -> int:
    """Index of the next backtick run of exactly ``length``, or -1."""
    index = start
    while index < len(text):
        if text[index] != '`':
            index += 1
            continue
        run_end = index
        while run_end < len(text) and text[run_end] == '`':
            run_end += 1
        if run_end - index == length:
            return index
        index = run_end
    return -1


def _protect(text: str) -> tuple[str, list[str]]:
    """
    Swap code spans and backslash escapes for placeholder tokens.

    Whatever markup is left outside the tokens is unescaped and outside
    code, so rewrites can run on it with plain patterns.
    """
    pieces: list[str] = []
    saved: list[str] = []

    def keep(fragment: str) -> None:
        pieces.append(f"{_TOKEN_OPEN}{len(saved)}{_TOKEN_CLOSE}")
        saved.append(fragment)

    index = 0
    while index < len(text):
        char = text[index]
        if char == '\\' and index + 1 < len(text):
            keep(text[index:index + 2])
            index += 2
        elif char == '`':
            run_end = index
            while run_end < len(text) and text[run_end] == '`':
                run_end += 1
            length = run_end - index
            closing = _find_closing_backticks(text, run_end, length)
            if closing == -1:
                # Unmatched run: literal backticks
                pieces.append(text[index:run_end])
                index = run_end
            else:
                keep(text[index:closing + length])
                index = closing + length
        elif char in (_TOKEN_OPEN, _TOKEN_CLOSE):
            keep(char)
            index += 1
        else:
            pieces.append(char)
            index += 1

    return ''.join(pieces), saved


def _restore(text: str, saved: list[str]) -> str:
    return _TOKEN_PATTERN.sub(lambda match: saved[int(match.group(1))], text)


def _rewrite_outside_code(text: str, rewrite: Callable[[str], str]) -> str:
    """Apply ``rewrite`` to everything except code spans and escapes."""
    protected, saved = _protect(text)
    return _restore(rewrite(protected), saved)


def escape_markdown_text(text: str) -> str:
    """Escape a plain string (e.g. a file name) for use as Markdown text."""
    text = _ESCAPE_PATTERN.sub(r'\\\1', text)
    return _LEADING_BULLET_PATTERN.sub(r'\\\1', text)


def encode_link_target(url: str) -> str:
    """Percent-encode ``%``, ``#`` and ``?`` so a path is not read as query or fragment."""
    for char, encoded in _URL_ENCODINGS:
        url = url.replace(char, encoded)
    return url


def generate_link_from_markdown_paragraph_and_url(label: str, url: str) -> str:
    """
    Build an inline Markdown link.

    Brackets in the label that are not escaped or inside code spans get
    a backslash. ``%``, ``#`` and ``?`` in the URL are percent-encoded,
    and the URL is written in ``<...>`` form when it holds whitespace,
    parentheses or angle brackets.
    """
    safe_label = _rewrite_outside_code(label, lambda text: _BRACKET_PATTERN.sub(r'\\\1', text))

    url = encode_link_target(url)
    if _ANGLE_URL_PATTERN.search(url):
        escaped_url = url.replace('<', '\\<').replace('>', '\\>')
        destination = f"<{escaped_url}>"
    else:
        destination = url

    return f"[{safe_label}]({destination})"


def _strip_strong(text: str) -> str:
    previous = None
    while previous != text:
        previous = text
        for pattern in _STRONG_PATTERNS:
            text = pattern.sub(r'\1', text)
    return text


def remove_strong_from_markdown(text: str) -> str:
    """
    Remove paired strong markers, leaving the visible text as it was.

    Code spans and escaped markers are left untouched.
    """
    return _rewrite_outside_code(text, _strip_strong)


def generate_strong_paragraph_from_markdown_paragraph(text: str) -> str:
    """
    Wrap a paragraph in ``**`` markers.

    Surrounding whitespace stays outside the markers, and stray ``**``
    outside code spans is escaped so the result never nests strong.
    """
    match = _SURROUNDING_SPACE_PATTERN.match(text)
    leading, core, trailing = match.group(1), match.group(2), match.group(3)
    if not core:
        return text

    core = _rewrite_outside_code(core, lambda part: _STRAY_STRONG_PATTERN.sub(r'\\*\\*', part))
    return f"{leading}**{core}**{trailing}"


class MarkdownTextOps(Protocol):
    """The inline Markdown operations the renderer depends on."""

    def generate_link_from_markdown_paragraph_and_url(self, label: str, url: str) -> str:
        ...

    def remove_strong_from_markdown(self, text: str) -> str:
        ...

    def generate_strong_paragraph_from_markdown_paragraph(self, text: str) -> str:
        ...


class InlineMarkdown:
    """MarkdownTextOps backed by the module-level helpers."""

    def generate_link_from_markdown_paragraph_and_url(self, label: str, url: str) -> str:
        return generate_link_from_markdown_paragraph_and_url(label, url)

    def remove_strong_from_markdown(self, text: str) -> str:
        return remove_strong_from_markdown(text)

    def generate_strong_paragraph_from_markdown_paragraph(self, text: str) -> str:
        return generate_strong_paragraph_from_markdown_paragraph(text)


DEFAULT_MARKDOWN: MarkdownTextOps = InlineMarkdown()
