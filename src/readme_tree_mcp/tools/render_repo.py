"""Tool to render a GitHub repository's file tree as Markdown."""

import asyncio
import logging
import re
from typing import Optional
from urllib.parse import quote

import httpx

from ..config import get_github_token, is_local_only, load_render_environment
from ..parser.hierarchy import build_tree_from_paths
from ..parser.readme import README_NAMES, extract_description
from ..security import is_sensitive_filename, should_skip_dir
from .render_tree import build_render_result

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
USER_AGENT = "readme-tree-mcp"

# Max concurrent README requests
DEFAULT_CONCURRENCY = 8


def parse_github_url(url: str) -> tuple[str, str]:
    """Extract owner and repo name from GitHub URL."""
    patterns = [
        r"github\.com/([^/]+)/([^/]+)",  # https://github.com/owner/repo
        r"^([^/]+)/([^/]+)$",  # owner/repo
    ]

    for pattern in patterns:
        match = re.search(pattern, url.strip().rstrip('/'))
        if match:
            owner = match.group(1)
            repo = match.group(2)
            if repo.endswith('.git'):
                repo = repo[:-len('.git')]
            return owner, repo

    raise ValueError(f"Could not parse GitHub URL: {url}")


def _headers(accept: str, token: Optional[str]) -> dict[str, str]:
    headers = {
        "Accept": accept,
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


async def fetch_file_content(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    path: str,
    token: Optional[str] = None,
) -> str:
    """Fetch raw content of a file from GitHub."""
    url = f"{GITHUB_API}/repos/{owner}/{repo}/contents/{quote(path, safe='/')}"
    response = await client.get(url, headers=_headers("application/vnd.github.v3.raw", token))
    response.raise_for_status()
    return response.text


async def discover_repo_entries(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    token: Optional[str] = None,
) -> list[tuple[str, bool]]:
    """
    List every file and directory in the repository using the Git Trees API.

    Returns:
        ``(path, is_directory)`` pairs; empty when the repository is not found
    """
    url = f"{GITHUB_API}/repos/{owner}/{repo}/git/trees/HEAD?recursive=1"
    response = await client.get(url, headers=_headers("application/vnd.github.v3+json", token))
    if response.status_code == 404:
        return []
    response.raise_for_status()
    data = response.json()

    if data.get("truncated"):
        logger.warning("Git tree for %s/%s was truncated by GitHub", owner, repo)

    entries: list[tuple[str, bool]] = []
    for item in data.get("tree", []):
        path = item["path"]
        parts = path.split("/")
        if any(should_skip_dir(part) for part in parts[:-1]):
            continue

        if item["type"] == "tree":
            if should_skip_dir(parts[-1]):
                continue
            entries.append((path, True))
        elif item["type"] == "blob":
            if is_sensitive_filename(path):
                logger.info("Skipping sensitive file: %s", path)
                continue
            entries.append((path, False))

    return entries


async def _fetch_readme_descriptions(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    entries: list[tuple[str, bool]],
    token: Optional[str],
) -> dict[str, str]:
    """
    Describe each directory by the first paragraph of its README.

    READMEs are fetched concurrently, at most DEFAULT_CONCURRENCY at a time.
    """
    files = {path for path, is_directory in entries if not is_directory}
    readmes: dict[str, str] = {}
    for path, is_directory in entries:
        if not is_directory:
            continue
        for name in README_NAMES:
            candidate = f"{path}/{name}"
            if candidate in files:
                readmes[path] = candidate
                break

    semaphore = asyncio.Semaphore(DEFAULT_CONCURRENCY)
    descriptions: dict[str, str] = {}

    async def _describe_one(directory: str, path: str) -> None:
        async with semaphore:
            try:
                content = await fetch_file_content(client, owner, repo, path, token)
            except httpx.HTTPError as e:
                logger.warning("Could not fetch %s: %s", path, e)
                return
        description = extract_description(content)
        if description:
            descriptions[directory] = description

    await asyncio.gather(*[_describe_one(d, p) for d, p in readmes.items()])
    return descriptions


async def render_repo_tree(
    url: str,
    use_tabs: Optional[bool] = None,
    number_spaces: Optional[int] = None,
    link_to_subdirectory_readme: Optional[bool] = None,
    subdirectory_description_on_new_line: Optional[bool] = None,
    end_of_line: Optional[str] = None,
    fetch_descriptions: bool = False,
    github_token: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict:
    """
    Render a GitHub repository's file tree as Markdown.

    Args:
        url: GitHub repository URL or owner/repo string
        fetch_descriptions: Describe directories from their README (one request each)
        github_token: GitHub personal access token (for private repos)
        transport: Custom httpx transport

    Returns:
        Dict with the Markdown and counts, or an error
    """
    if is_local_only():
        return {
            "success": False,
            "error": "Remote access disabled in local-only mode. Set READMETREE_LOCAL_ONLY=false or unset to enable.",
        }

    try:
        owner, repo = parse_github_url(url)
        environment = load_render_environment(
            use_tabs=use_tabs,
            number_spaces=number_spaces,
            link_to_subdirectory_readme=link_to_subdirectory_readme,
            subdirectory_description_on_new_line=subdirectory_description_on_new_line,
            end_of_line=end_of_line,
        )
    except ValueError as e:
        return {"success": False, "error": str(e)}

    token = get_github_token(github_token)

    try:
        async with httpx.AsyncClient(transport=transport) as client:
            entries = await discover_repo_entries(client, owner, repo, token)
            descriptions: dict[str, str] = {}
            if entries and fetch_descriptions:
                descriptions = await _fetch_readme_descriptions(client, owner, repo, entries, token)
    except httpx.HTTPError as e:
        return {
            "success": False,
            "error": f"GitHub request failed: {e}",
            "repo": f"{owner}/{repo}",
        }

    if not entries:
        return {
            "success": False,
            "error": "Repository not found or empty",
            "repo": f"{owner}/{repo}",
        }

    tree = build_tree_from_paths(entries, descriptions)
    result = build_render_result(tree, environment)
    result["repo"] = f"{owner}/{repo}"
    return result
