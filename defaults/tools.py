import logging
from typing import Any, Callable, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from defaults.schemas import *
from guides import Library

log = logging.getLogger("orderly-mcp")


def _run(tool: str, fn: Callable[..., str], *args: Any, **kwargs: Any) -> str:
    """Call a facade; unexpected failures come back as text instead of breaking the session."""
    try:
        return fn(*args, **kwargs)
    except Exception as e:
        log.exception("Tool %s failed", tool)
        return f"Error: {e}"


def register_default_tools(mcp: FastMCP, library: Optional[Library] = None) -> Library:
    """Register the Orderly documentation tools, backed by *library* (loaded from DATA_DIR if omitted)."""
    lib = library if library is not None else Library.from_data_dir()

    # Track default tools for list_tools() function
    if not hasattr(mcp, '_default_tools_registry'):
        mcp._default_tools_registry = []

    # ------------------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------------------

    @mcp.tool()
    def search_orderly_docs(args: SearchDocsArgs) -> str:
        """Search Orderly Network documentation for specific topics, concepts, or questions."""
        return _run("search_orderly_docs", lib.docs.search, args.query, limit=args.limit)

    mcp._default_tools_registry.append({
        "name": "search_orderly_docs",
        "description": "Search Orderly Network documentation for specific topics, concepts, or questions.",
        "category": "docs"
    })

    @mcp.tool()
    def get_sdk_pattern(args: GetSdkPatternArgs) -> str:
        """Get code examples and patterns for Orderly SDK v2 hooks and utilities."""
        return _run("get_sdk_pattern", lib.sdk_patterns.get_pattern, args.pattern, include_example=args.includeExample)

    mcp._default_tools_registry.append({
        "name": "get_sdk_pattern",
        "description": "Get code examples and patterns for Orderly SDK v2 hooks and utilities.",
        "category": "sdk"
    })

    @mcp.tool()
    def get_python_sdk_pattern(args: GetPythonSdkPatternArgs) -> str:
        """Get code examples for the Orderly Python SDK (agent-trading-sdk) for trading bots and AI agents."""
        return _run("get_python_sdk_pattern", lib.python_sdk.get_pattern, args.pattern, include_example=args.includeExample)

    mcp._default_tools_registry.append({
        "name": "get_python_sdk_pattern",
        "description": "Get code examples for the Orderly Python SDK (agent-trading-sdk) for trading bots and AI agents.",
        "category": "sdk"
    })

    @mcp.tool()
    def get_component_guide(args: GetComponentGuideArgs) -> str:
        """Get guidance on building React UI components using Orderly SDK."""
        return _run("get_component_guide", lib.components.get_guide, args.component, complexity=args.complexity)

    mcp._default_tools_registry.append({
        "name": "get_component_guide",
        "description": "Get guidance on building React UI components using Orderly SDK.",
        "category": "sdk"
    })

    @mcp.tool()
    def explain_workflow(args: ExplainWorkflowArgs) -> str:
        """Get a step-by-step explanation of a common Orderly development workflow."""
        return _run("explain_workflow", lib.workflows.explain, args.workflow)

    mcp._default_tools_registry.append({
        "name": "explain_workflow",
        "description": "Get a step-by-step explanation of a common Orderly development workflow.",
        "category": "docs"
    })

    @mcp.tool()
    def get_contract_addresses(args: GetContractAddressesArgs) -> str:
        """Get smart contract addresses for Orderly on a specific chain and network."""
        return _run(
            "get_contract_addresses", lib.contracts.get_contract,
            args.chain, contract_key=args.contractType, network=args.network,
        )

    mcp._default_tools_registry.append({
        "name": "get_contract_addresses",
        "description": "Get smart contract addresses for Orderly on a specific chain and network.",
        "category": "contracts"
    })

    @mcp.tool()
    def get_api_info(args: GetApiInfoArgs) -> str:
        """Get information about Orderly REST API endpoints, WebSocket streams or request authentication."""
        return _run(
            "get_api_info", lib.api.get_api_info,
            args.type, endpoint=args.endpoint, category=args.category,
        )

    mcp._default_tools_registry.append({
        "name": "get_api_info",
        "description": "Get information about Orderly REST API endpoints, WebSocket streams or request authentication.",
        "category": "api"
    })

    @mcp.tool()
    def get_indexer_api_info(args: GetIndexerApiInfoArgs) -> str:
        """Get information about the Orderly Indexer API: trading metrics, account events, volume statistics and rankings."""
        return _run("get_indexer_api_info", lib.indexer_api.lookup, endpoint=args.endpoint, category=args.category)

    mcp._default_tools_registry.append({
        "name": "get_indexer_api_info",
        "description": "Get information about the Orderly Indexer API: trading metrics, account events, volume statistics and rankings.",
        "category": "api"
    })

    @mcp.tool()
    def get_orderly_one_api_info(args: GetOrderlyOneApiInfoArgs) -> str:
        """Get information about the Orderly One API for DEX creation, graduation and management."""
        return _run("get_orderly_one_api_info", lib.orderly_one_api.lookup, endpoint=args.endpoint, category=args.category)

    mcp._default_tools_registry.append({
        "name": "get_orderly_one_api_info",
        "description": "Get information about the Orderly One API for DEX creation, graduation and management.",
        "category": "api"
    })

    @mcp.tool()
    def list_tools() -> Dict[str, List[Dict[str, str]]]:
        """List the available tools grouped by category."""
        grouped: Dict[str, List[Dict[str, str]]] = {}
        for tool in mcp._default_tools_registry:
            grouped.setdefault(tool["category"], []).append(
                {"name": tool["name"], "description": tool["description"]}
            )
        return grouped

    return lib
