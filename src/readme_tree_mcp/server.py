"""MCP Server that renders file trees as Markdown lists for READMEs."""

import asyncio
import json
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .config import get_log_level
from .tools.render_tree import render_tree as do_render_tree
from .tools.render_local import render_local_tree as do_render_local_tree
from .tools.render_repo import render_repo_tree as do_render_repo_tree


# Create MCP server
server = Server("readme-tree-mcp")

FORMAT_PROPERTIES = {
    "use_tabs": {
        "type": "boolean",
        "description": "Indent nested lists with tabs instead of spaces",
    },
    "number_spaces": {
        "type": "integer",
        "description": "Spaces per indentation level when not using tabs (default: 4)",
    },
    "link_to_subdirectory_readme": {
        "type": "boolean",
        "description": "Link directories to their README.md instead of the directory itself",
    },
    "subdirectory_description_on_new_line": {
        "type": "boolean",
        "description": "Put descriptions on their own line under the bullet instead of after ' - '",
    },
    "end_of_line": {
        "type": "string",
        "enum": ["lf", "crlf"],
        "description": "Line ending of the generated Markdown (default: lf)",
    },
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="render_tree",
            description="""Render a file tree you supply as a nested Markdown list.

Each entry becomes a bullet linking to its relative path. Directories are
shown in bold and their children are nested one level deeper. Titles and
descriptions may contain inline Markdown.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "tree": {
                        "type": "array",
                        "description": "Entries: {filename, is_directory, title?, description?, children?}",
                        "items": {"type": "object"},
                    },
                    **FORMAT_PROPERTIES,
                },
                "required": ["tree"],
            },
        ),
        Tool(
            name="render_local_tree",
            description="""Render a local directory as a nested Markdown list.

Features:
- Descriptions from each directory's README.md and from Markdown files
- Respects .gitignore rules
- Skips sensitive files (.env, credentials.json, *.pem, etc.)
- Symlink-safe (does not follow symlinks by default)""",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to local directory to render",
                    },
                    "max_depth": {
                        "type": "integer",
                        "description": "Maximum directory depth to crawl (default: 5)",
                        "default": 5,
                    },
                    "include_hidden": {
                        "type": "boolean",
                        "description": "Whether to include hidden entries (starting with .)",
                        "default": False,
                    },
                    "follow_symlinks": {
                        "type": "boolean",
                        "description": "Whether to follow symbolic links (default: false for safety)",
                        "default": False,
                    },
                    "extra_ignore_patterns": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Additional gitignore-style patterns to exclude",
                    },
                    "read_descriptions": {
                        "type": "boolean",
                        "description": "Read descriptions from README.md and Markdown files",
                        "default": True,
                    },
                    **FORMAT_PROPERTIES,
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="render_repo_tree",
            description="""Render a GitHub repository's file tree as a nested Markdown list.

Supports:
- Public repositories (no token needed)
- Private repositories (set GITHUB_TOKEN environment variable)
- Various URL formats: https://github.com/owner/repo, owner/repo
- Blocked in local-only mode (READMETREE_LOCAL_ONLY=true)""",
            inputSchema={
                "type": "object",
                "properties": {
                    "url": {
                        "type": "string",
                        "description": "GitHub repository URL or owner/repo string",
                    },
                    "fetch_descriptions": {
                        "type": "boolean",
                        "description": "Describe directories from their README (one request per README)",
                        "default": False,
                    },
                    **FORMAT_PROPERTIES,
                },
                "required": ["url"],
            },
        ),
    ]


def _format_arguments(arguments: dict[str, Any]) -> dict[str, Any]:
    return {key: arguments.get(key) for key in FORMAT_PROPERTIES}


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "render_tree":
            result = do_render_tree(
                tree=arguments["tree"],
                **_format_arguments(arguments),
            )
        elif name == "render_local_tree":
            result = await do_render_local_tree(
                path=arguments["path"],
                max_depth=arguments.get("max_depth", 5),
                include_hidden=arguments.get("include_hidden", False),
                follow_symlinks=arguments.get("follow_symlinks", False),
                extra_ignore_patterns=arguments.get("extra_ignore_patterns"),
                read_descriptions=arguments.get("read_descriptions", True),
                **_format_arguments(arguments),
            )
        elif name == "render_repo_tree":
            result = await do_render_repo_tree(
                url=arguments["url"],
                fetch_descriptions=arguments.get("fetch_descriptions", False),
                **_format_arguments(arguments),
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        error_result = {"error": str(e)}
        return [TextContent(type="text", text=json.dumps(error_result, indent=2))]


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    # stdout carries the MCP stream
    logging.basicConfig(
        stream=sys.stderr,
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
