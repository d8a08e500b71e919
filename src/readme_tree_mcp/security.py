"""Crawl filtering: sensitive files, noise directories, ignore rules, path validation."""

import fnmatch
import logging
from pathlib import Path
from typing import Optional

import pathspec

logger = logging.getLogger(__name__)

# Directories that never belong in a documented tree
SKIP_DIRS = {
    '.git',
    'node_modules',
    '__pycache__',
    '.venv',
    'venv',
    'dist',
    'build',
    '.idea',
    '.vscode',
    '.pytest_cache',
    '.mypy_cache',
    '.tox',
    'htmlcov',
    '.next',
}

# Files that should never be listed
SKIP_FILES = {
    '.env',
    '.env.local',
    '.env.production',
    '.env.staging',
    '.env.development',
    'credentials.json',
    'secrets.yaml',
    'secrets.yml',
    'service-account.json',
    '.npmrc',
    '.pypirc',
    '.netrc',
}

# Glob patterns for sensitive files
SENSITIVE_PATTERNS = [
    '*.pem',
    '*.key',
    '*.p12',
    '*.pfx',
    '*.jks',
    '*.keystore',
    'id_rsa*',
    'id_ed25519*',
]


def is_sensitive_filename(filename: str) -> bool:
    """Check if a filename matches known sensitive file patterns."""
    basename = Path(filename).name
    if basename.lower() in {s.lower() for s in SKIP_FILES}:
        return True
    return any(fnmatch.fnmatch(basename, pattern) for pattern in SENSITIVE_PATTERNS)


def should_skip_dir(name: str) -> bool:
    return name in SKIP_DIRS


def load_ignore_spec(
    base_path: Path,
    extra_patterns: Optional[list[str]] = None,
) -> Optional[pathspec.GitIgnoreSpec]:
    """Combine ``.gitignore`` in ``base_path`` with extra gitignore-style patterns."""
    lines: list[str] = []
    gitignore_path = base_path / '.gitignore'
    if gitignore_path.is_file():
        try:
            lines.extend(gitignore_path.read_text(encoding='utf-8').splitlines())
        except OSError as e:
            logger.warning("Could not read %s: %s", gitignore_path, e)
    if extra_patterns:
        lines.extend(extra_patterns)
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def validate_path_traversal(resolved_path: Path, base_path: Path) -> bool:
    """Check that a resolved path is within the base directory (no traversal/symlink escape)."""
    try:
        resolved_path.relative_to(base_path)
        return True
    except ValueError:
        return False
