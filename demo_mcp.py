import sys
sys.path.insert(0, 'src')
import asyncio
from readme_tree_mcp.tools.render_repo import render_repo_tree
from readme_tree_mcp.tools.render_local import render_local_tree

async def demo_github():
    print('=== GitHub Repository Tree ===')
    print('Rendering modelcontextprotocol/python-sdk...')
    result = await render_repo_tree('modelcontextprotocol/python-sdk', fetch_descriptions=True)
    print(f"Success: {result['success']}")
    print(f"Nodes: {result.get('node_count')}")
    print(result.get('markdown', result.get('error')))

async def demo_local():
    print('=== Local Directory Tree ===')
    print('Rendering current directory...')
    result = await render_local_tree('.', link_to_subdirectory_readme=True)
    print(f"Success: {result['success']}")
    print(f"Path: {result['path']}")
    print(f"Nodes: {result['node_count']}")
    print(result['markdown'])

async def demo():
    await demo_local()
    # Uncomment to render a GitHub repository (requires GITHUB_TOKEN for private repos)
    # await demo_github()

asyncio.run(demo())
