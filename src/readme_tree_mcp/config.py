"""Render settings read from environment variables, with per-call overrides."""

import os
from typing import Optional

from .models import RenderEnvironment, RenderOptions

END_OF_LINE_CHOICES = {
    'lf': '\n',
    'crlf': '\r\n',
}

_TRUTHY = ('true', '1', 'yes')
_FALSY = ('false', '0', 'no', '')


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be true or false, got: {raw}")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}") from None


def is_local_only() -> bool:
    """Whether GitHub access is disabled (READMETREE_LOCAL_ONLY)."""
    return os.environ.get('READMETREE_LOCAL_ONLY', '').lower() in _TRUTHY


def get_github_token(explicit: Optional[str] = None) -> Optional[str]:
    """An explicit token wins over GITHUB_TOKEN."""
    return explicit or os.environ.get('GITHUB_TOKEN') or None


def get_log_level() -> str:
    return os.environ.get('READMETREE_LOG_LEVEL', 'WARNING').upper()


def load_render_environment(
    use_tabs: Optional[bool] = None,
    number_spaces: Optional[int] = None,
    link_to_subdirectory_readme: Optional[bool] = None,
    subdirectory_description_on_new_line: Optional[bool] = None,
    end_of_line: Optional[str] = None,
) -> RenderEnvironment:
    """
    Resolve the render environment.

    Arguments that are not ``None`` override the READMETREE_* environment
    variables, which in turn override the defaults. ``end_of_line`` takes
    ``"lf"`` or ``"crlf"``.

    Raises:
        ValueError: on an unknown line ending or a non-positive indent width
    """
    if use_tabs is None:
        use_tabs = _env_bool('READMETREE_USE_TABS', False)
    if number_spaces is None:
        number_spaces = _env_int('READMETREE_NUMBER_SPACES', 4)
    if link_to_subdirectory_readme is None:
        link_to_subdirectory_readme = _env_bool('READMETREE_LINK_TO_README', False)
    if subdirectory_description_on_new_line is None:
        subdirectory_description_on_new_line = _env_bool('READMETREE_DESCRIPTION_ON_NEW_LINE', False)

    if isinstance(number_spaces, bool) or not isinstance(number_spaces, int) or number_spaces < 1:
        raise ValueError(f"number_spaces must be a positive integer, got: {number_spaces!r}")

    options = RenderOptions(
        use_tabs=use_tabs,
        number_spaces=number_spaces,
        link_to_subdirectory_readme=link_to_subdirectory_readme,
        subdirectory_description_on_new_line=subdirectory_description_on_new_line,
    )

    eol_name = (end_of_line or os.environ.get('READMETREE_END_OF_LINE') or 'lf').lower()
    if eol_name not in END_OF_LINE_CHOICES:
        raise ValueError(
            f"end_of_line must be one of {', '.join(sorted(END_OF_LINE_CHOICES))}, got: {eol_name}"
        )

    return RenderEnvironment(end_of_line=END_OF_LINE_CHOICES[eol_name], options=options)
