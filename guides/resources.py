"""
Reader for the ``orderly://`` MCP resources.

Without a query a resource renders an overview page with search help. With
``?search=`` it runs a paginated search (``&page=`` and ``&limit=``, at most
10 per page) over that resource's corpus.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence, Tuple
from urllib.parse import parse_qs, urlsplit

from fuzzy_search import DEFAULT_LIMIT, IndexCache, SearchPage, WeightedField, build_index, clamp_limit
from guides.common import bullets, shorten
from guides.workflows import Workflows

if TYPE_CHECKING:
    from guides import Library

log = logging.getLogger("orderly-mcp")

MARKDOWN = "text/markdown"
JSON = "application/json"
PLAIN = "text/plain"

SEARCH_HELP_FOOTER = (
    "**Pagination:**\n"
    "- Use `?page=2` to see more results\n"
    "- Use `?limit=5` to change results per page (max 10)\n"
)


@dataclass(frozen=True)
class ResourceInfo:
    uri: str
    name: str
    description: str
    mime_type: str = MARKDOWN


@dataclass(frozen=True)
class ResourceContent:
    uri: str
    mime_type: str
    text: str


RESOURCES: Tuple[ResourceInfo, ...] = (
    ResourceInfo("orderly://overview", "Orderly Network Overview",
                 "High-level protocol architecture and key concepts"),
    ResourceInfo("orderly://sdk/hooks", "SDK Hooks Reference",
                 "Complete reference of all v2 SDK hooks"),
    ResourceInfo("orderly://sdk/components", "Component Building Guides",
                 "Guides for building UI components with Orderly SDK"),
    ResourceInfo("orderly://contracts", "Contract Addresses",
                 "Smart contract addresses across all supported chains", JSON),
    ResourceInfo("orderly://workflows", "Common Workflows",
                 "Step-by-step workflows for common development tasks"),
    ResourceInfo("orderly://api/rest", "REST API Reference",
                 "Complete REST API documentation"),
    ResourceInfo("orderly://api/websocket", "WebSocket API Reference",
                 "Real-time WebSocket streams documentation"),
    ResourceInfo("orderly://api/indexer", "Indexer API Reference",
                 "Indexer API for trading metrics, account events, volume statistics, and rankings"),
    ResourceInfo("orderly://sdk/python", "Python SDK Reference",
                 "Python SDK (agent-trading-sdk) for building trading bots and AI agents on Orderly"),
)


@dataclass(frozen=True)
class ResourceQuery:
    base: str
    search: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_LIMIT


def _positive_int(value: Optional[str], default: int) -> int:
    try:
        number = int(value) if value is not None else default
    except ValueError:
        return default
    return number if number > 0 else default


def parse_uri(uri: str) -> ResourceQuery:
    """Split ``orderly://x/y?search=..&page=..&limit=..`` into its parts."""
    parts = urlsplit(uri.strip())
    base = f"{parts.scheme}://{parts.netloc}{parts.path}".lower().rstrip("/")
    params = parse_qs(parts.query)

    def first(name: str) -> Optional[str]:
        values = params.get(name)
        return values[0] if values else None

    search = first("search")
    return ResourceQuery(
        base=base,
        search=search if search and search.strip() else None,
        page=_positive_int(first("page"), 1),
        limit=clamp_limit(_positive_int(first("limit"), DEFAULT_LIMIT)),
    )


def format_results(page: SearchPage, label: str, render: Callable[[Any], str], query: str, uri: str) -> str:
    text = f"# {label} Search Results\n\n"
    if not page.items:
        if page.total:
            return text + (
                f"Page {page.page} is past the end: \"{query}\" matched {page.total} "
                f"result{'' if page.total == 1 else 's'} on {page.total_pages} "
                f"page{'' if page.total_pages == 1 else 's'}. Use ?page=1 to start over."
            )
        return text + (
            f"No results found for \"{query}\".\n\n"
            f"Try a shorter or different query, or read {uri} without a search parameter to browse everything."
        )

    text += f"Found {page.total} result{'' if page.total == 1 else 's'} "
    text += f"(Page {page.page} of {page.total_pages})\n\n"
    for record in page.records:
        text += render(record) + "\n"
    if page.has_more:
        text += f"\n---\n\n*Use ?page={page.page + 1} to see more results*"
    return text


def _search_help(uri: str, examples: Sequence[str], supports: Sequence[str]) -> str:
    text = "## How to Search\n\n"
    text += "Add a `?search=` query parameter:\n\n```\n"
    text += "".join(f"{uri}?search={e}\n" for e in examples)
    text += "```\n\n"
    text += f"**Search supports:**\n{bullets(supports)}\n\n"
    return text + SEARCH_HELP_FOOTER


@dataclass(frozen=True)
class _Searchable:
    label: str
    fields: Tuple[WeightedField, ...]
    records: Callable[["Library"], Sequence[Any]]
    render: Callable[[Any], str]


# ---------------------------------------------------------------------------
# Per-resource search result rendering
# ---------------------------------------------------------------------------

def _hook_item(p) -> str:
    text = f"## {p.name}\n\n**Category:** {p.category}\n\n{p.description}\n\n"
    if p.usage:
        text += f"**Usage:** {p.usage}\n\n"
    return text + "---\n"

def _component_item(c) -> str:
    text = f"## {c.name}\n\n{c.description}\n\n"
    if c.keyHooks:
        text += f"**Key Hooks:** {', '.join(c.keyHooks)}\n\n"
    return text + "---\n"

def _workflow_item(w) -> str:
    return Workflows.summary(w) + "---\n"

def _rest_item(ep) -> str:
    text = f"### {ep.method} {ep.path}\n\n{ep.description}\n\n"
    if ep.auth:
        text += "🔒 Requires authentication\n\n"
    return text + "---\n"

def _stream_item(s) -> str:
    text = f"### {s.name}\n\n**Topic:** {s.topic}\n\n{s.description}\n\n"
    if s.auth:
        text += "🔒 Requires authentication\n\n"
    return text + "---\n"

def _indexer_item(ep) -> str:
    text = f"### {ep.method} {ep.path}\n\n**{ep.summary}**\n\n"
    if ep.description:
        text += f"{ep.description}\n\n"
    return text + "---\n"

def _python_item(p) -> str:
    text = f"### {p.name} ({p.category})\n\n{p.description}\n\n"
    if p.installation:
        text += f"**Install:** `{p.installation}`\n\n"
    text += f"**Usage:** {p.usage}\n\n"
    if p.example:
        text += f"**Example:**\n```python\n{p.example}\n```\n\n"
    if p.notes:
        text += f"**Notes:**\n{bullets(p.notes)}\n\n"
    if p.related:
        text += f"**Related:** {', '.join(p.related)}\n\n"
    return text + "---\n"


SEARCHABLE: Dict[str, _Searchable] = {
    "orderly://sdk/hooks": _Searchable(
        "SDK Hooks",
        (WeightedField("name", 0.4), WeightedField("description", 0.3),
         WeightedField("category", 0.2), WeightedField("usage", 0.1)),
        lambda lib: lib.sdk_patterns.corpus.flatten(),
        _hook_item,
    ),
    "orderly://sdk/components": _Searchable(
        "Component Guides",
        (WeightedField("name", 0.4), WeightedField("description", 0.3), WeightedField("keyHooks", 0.3)),
        lambda lib: lib.components.corpus.components,
        _component_item,
    ),
    "orderly://workflows": _Searchable(
        "Workflows",
        (WeightedField("name", 0.4), WeightedField("description", 0.3),
         WeightedField("steps.title", 0.2), WeightedField("steps.description", 0.1)),
        lambda lib: lib.workflows.corpus.workflows,
        _workflow_item,
    ),
    "orderly://api/rest": _Searchable(
        "REST API Endpoints",
        (WeightedField("summary", 0.3), WeightedField("path", 0.3),
         WeightedField("description", 0.3), WeightedField("method", 0.1)),
        lambda lib: lib.api.corpus.rest.endpoints,
        _rest_item,
    ),
    "orderly://api/websocket": _Searchable(
        "WebSocket Streams",
        (WeightedField("name", 0.4), WeightedField("topic", 0.3), WeightedField("description", 0.3)),
        lambda lib: lib.api.corpus.websocket.streams,
        _stream_item,
    ),
    "orderly://api/indexer": _Searchable(
        "Indexer API Endpoints",
        (WeightedField("summary", 0.3), WeightedField("path", 0.3),
         WeightedField("description", 0.3), WeightedField("operationId", 0.1)),
        lambda lib: lib.indexer_api.corpus.endpoints,
        _indexer_item,
    ),
    "orderly://sdk/python": _Searchable(
        "Python SDK Patterns",
        (WeightedField("name", 0.5), WeightedField("description", 0.3), WeightedField("category", 0.2)),
        lambda lib: lib.python_sdk.corpus.flatten(),
        _python_item,
    ),
}


class ResourceReader:
    def __init__(self, library: "Library"):
        self.library = library
        self._caches: Dict[str, IndexCache] = {
            uri: IndexCache(self._builder(spec), name=uri) for uri, spec in SEARCHABLE.items()
        }
        self._overviews: Dict[str, Callable[[], str]] = {
            "orderly://sdk/hooks": self._hooks_overview,
            "orderly://sdk/components": self._components_overview,
            "orderly://workflows": self._workflows_overview,
            "orderly://api/rest": self._rest_overview,
            "orderly://api/websocket": self._websocket_overview,
            "orderly://api/indexer": self._indexer_overview,
            "orderly://sdk/python": self._python_overview,
        }

    def _builder(self, spec: _Searchable):
        return lambda: build_index(spec.records(self.library), spec.fields)

    @staticmethod
    def list_resources() -> List[ResourceInfo]:
        return list(RESOURCES)

    def clear_cache(self) -> None:
        for cache in self._caches.values():
            cache.reset()

    def search(self, base: str, query: str, page: int = 1, limit: int = DEFAULT_LIMIT) -> SearchPage:
        return self._caches[base].get_or_build().search(query, page=page, limit=limit)

    # ------------------------------------------------------------------
    def read(self, uri: str) -> ResourceContent:
        q = parse_uri(uri)

        if q.base == "orderly://overview":
            if q.search:
                return ResourceContent(
                    uri, MARKDOWN,
                    "Search is not supported for overview. Access the full resource without search parameter.",
                )
            return ResourceContent(uri, MARKDOWN, self.library.overview())

        if q.base == "orderly://contracts":
            return ResourceContent(uri, JSON, json.dumps(self.library.contracts.all_contracts(), indent=2))

        spec = SEARCHABLE.get(q.base)
        if spec is None:
            return ResourceContent(uri, PLAIN, f"Resource not found: {uri}")

        if not q.search:
            return ResourceContent(uri, MARKDOWN, self._overviews[q.base]())

        log.debug("Resource search %s: %r page=%d limit=%d", q.base, q.search, q.page, q.limit)
        page = self.search(q.base, q.search, page=q.page, limit=q.limit)
        return ResourceContent(uri, MARKDOWN, format_results(page, spec.label, spec.render, q.search, q.base))

    # ------------------------------------------------------------------
    # Overview pages
    # ------------------------------------------------------------------
    def _hooks_overview(self) -> str:
        corpus = self.library.sdk_patterns.corpus
        total = corpus.stats.get("totalHooks", len(corpus.flatten()))
        text = "# SDK Hooks Reference\n\n"
        text += f"This resource contains {total} hooks organized into {len(corpus.categories)} categories.\n\n"
        text += "## Available Categories\n\n"
        for cat in corpus.categories[:10]:
            text += f"- **{cat.name}**: {len(cat.patterns)} hooks\n"
        if len(corpus.categories) > 10:
            text += f"- ... and {len(corpus.categories) - 10} more categories\n"
        text += "\n"
        return text + _search_help(
            "orderly://sdk/hooks",
            ("useOrderEntry", "position", "wallet%20connection"),
            ("Hook names (e.g., `useOrderEntry`)", "Partial matches (e.g., `order` matches `useOrderEntry`)",
             "Categories (e.g., `Trading`)", "Descriptions and usage patterns"),
        )

    def _components_overview(self) -> str:
        components = self.library.components.corpus.components
        text = "# Component Building Guides\n\n"
        text += f"This resource contains {len(components)} UI components with implementation examples.\n\n"
        text += "## Sample Components\n\n"
        for c in components[:15]:
            text += f"- **{c.name}**: {shorten(c.description, 80)}\n"
        if len(components) > 15:
            text += f"- ... and {len(components) - 15} more components\n"
        text += "\n"
        return text + _search_help(
            "orderly://sdk/components",
            ("Checkbox", "order%20entry", "button"),
            ("Component names (e.g., `OrderEntry`)", "Partial matches (e.g., `check` matches `Checkbox`)",
             "Related hooks (e.g., `useOrderEntry`)", "Descriptions"),
        )

    def _workflows_overview(self) -> str:
        workflows = self.library.workflows.corpus.workflows
        text = "# Common Workflows\n\n"
        text += f"Step-by-step guides for {len(workflows)} common Orderly development tasks.\n\n"
        text += "## Available Workflows\n\n"
        for w in workflows[:10]:
            text += f"### {w.name}\n{shorten(w.description)}\n*{len(w.steps)} steps*\n\n"
        if len(workflows) > 10:
            text += f"*... and {len(workflows) - 10} more workflows*\n\n"
        return text + _search_help(
            "orderly://workflows",
            ("wallet", "fee%20configuration", "API%20credentials"),
            ("Workflow names (e.g., `wallet connection`)", "Step titles and descriptions",
             "Keywords in descriptions"),
        )

    def _rest_overview(self) -> str:
        rest = self.library.api.corpus.rest
        text = "# REST API Reference\n\n"
        text += f"Complete REST API documentation with {len(rest.endpoints)} endpoints.\n\n"
        text += f"**Base URLs:**\n- Mainnet: {rest.baseUrl.mainnet}\n- Testnet: {rest.baseUrl.testnet}\n\n"
        text += "## Endpoint Categories\n\n"
        for tag, count in self.library.api.rest.categories().items():
            text += f"- **{tag}**: {count} endpoints\n"
        text += "\n## Sample Endpoints\n\n"
        for ep in rest.endpoints[:10]:
            text += f"- {ep.method} {ep.path}\n"
        if len(rest.endpoints) > 10:
            text += f"- ... and {len(rest.endpoints) - 10} more endpoints\n"
        text += "\n"
        return text + _search_help(
            "orderly://api/rest",
            ("order", "POST%20position", "balance"),
            ("HTTP methods (e.g., `GET`, `POST`)", "Endpoint paths (e.g., `/v1/order`)",
             "Descriptions and summaries"),
        )

    def _websocket_overview(self) -> str:
        ws = self.library.api.corpus.websocket
        text = "# WebSocket API Reference\n\n"
        text += f"Real-time WebSocket streams documentation with {len(ws.streams)} available streams.\n\n"
        text += f"**Base URLs:**\n- Mainnet: {ws.baseUrl.mainnet}\n- Testnet: {ws.baseUrl.testnet}\n\n"
        text += "## Available Streams\n\n"
        for s in ws.streams[:15]:
            text += f"- {'🔒 ' if s.auth else ''}**{s.name}** ({s.topic})\n"
        if len(ws.streams) > 15:
            text += f"- ... and {len(ws.streams) - 15} more streams\n"
        text += "\n"
        return text + _search_help(
            "orderly://api/websocket",
            ("orderbook", "position%20stream", "ticker"),
            ("Stream names (e.g., `orderbook`, `ticker`)", "Topics (e.g., `@orderbook`, `@position`)",
             "Descriptions"),
        )

    def _indexer_overview(self) -> str:
        data = self.library.indexer_api.corpus
        text = "# Indexer API Reference\n\n"
        if data.description:
            text += f"{data.description}\n\n"
        if data.version:
            text += f"**Version:** {data.version}\n\n"
        if data.baseUrl:
            text += "**Base URLs:**\n"
            text += "".join(f"- {env.capitalize()}: {url}\n" for env, url in data.baseUrl.items())
            text += "\n"
        text += "## Categories\n\n"
        for cat in data.categories:
            text += f"### {cat.name}\n\n{cat.description}\n\n"
            text += f"**{len(cat.endpoints)} endpoints:**\n"
            for ep in cat.endpoints[:5]:
                text += f"- {ep.method} {ep.path} - {ep.summary}\n"
            if len(cat.endpoints) > 5:
                text += f"- ... and {len(cat.endpoints) - 5} more\n"
            text += "\n"
        return text + _search_help(
            "orderly://api/indexer",
            ("daily_volume", "events", "ranking"),
            ("Endpoint paths (e.g., `/daily_volume`, `/events_v2`)",
             "Operation IDs (e.g., `daily_volume`)", "Summaries and descriptions"),
        )

    def _python_overview(self) -> str:
        corpus = self.library.python_sdk.corpus
        text = "# Orderly Python SDK (agent-trading-sdk)\n\n"
        text += "The easiest way for AI agents to trade crypto perpetuals on Orderly Network.\n\n"
        text += "## Installation\n```bash\npip install agent-trading-sdk\n```\n\n"
        text += "## Categories\n\n"
        for cat in corpus.categories:
            text += f"### {cat.name}\n"
            text += "".join(f"- **{p.name}**: {p.description}\n" for p in cat.patterns)
            text += "\n"
        return text + _search_help(
            "orderly://sdk/python",
            ("buy", "ai_agent", "positions"),
            ("Method names (e.g., `buy`)", "Categories", "Descriptions"),
        )
