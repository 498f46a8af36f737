"""
Reference for the main Orderly API: REST endpoints, WebSocket streams and
the authentication scheme.

Each of REST and WebSocket supports three modes: no arguments gives a
browsable overview, ``category`` lists every item in matching categories,
and ``endpoint`` runs a fuzzy find and renders the best quality match.
"""
from __future__ import annotations

from collections import OrderedDict
from typing import Dict, List, Optional

from corpus import ApiCorpus, RestEndpoint, WebSocketStream
from fuzzy_search import IndexCache, WeightedField
from guides.common import IndexedGuide, bullets

API_TYPES = ("rest", "websocket", "auth")
LOCK = " 🔒"


def _group_counts(names: List[str]) -> "OrderedDict[str, int]":
    counts: "OrderedDict[str, int]" = OrderedDict()
    for name in names:
        counts[name] = counts.get(name, 0) + 1
    return counts


class RestEndpoints(IndexedGuide[RestEndpoint]):
    fields = (
        WeightedField("path", 0.4),
        WeightedField("description", 0.3),
        WeightedField("summary", 0.2),
        WeightedField("operationId", 0.1),
    )

    def __init__(self, corpus: ApiCorpus, cache: Optional[IndexCache[RestEndpoint]] = None):
        self.corpus = corpus
        super().__init__(cache)

    def _records(self) -> List[RestEndpoint]:
        return self.corpus.rest.endpoints

    def _record_id(self, record: RestEndpoint) -> str:
        return record.path

    def categories(self) -> "OrderedDict[str, int]":
        return _group_counts([ep.category for ep in self.corpus.rest.endpoints])

    # ------------------------------------------------------------------
    def lookup(self, category: Optional[str] = None, endpoint: Optional[str] = None) -> str:
        if category and category.strip():
            return self._by_category(category)
        if not endpoint or not endpoint.strip():
            return self.overview()

        found = self.index.best(endpoint)
        if found is None:
            return (
                f'Endpoint "{endpoint}" not found. Use without endpoint parameter to see all '
                f"available endpoints. Categories: {', '.join(self.categories())}"
            )
        return self.render(found.record)

    def overview(self) -> str:
        rest = self.corpus.rest
        text = "# REST API Endpoints\n\n"
        text += f"**Mainnet:** {rest.baseUrl.mainnet}\n"
        text += f"**Testnet:** {rest.baseUrl.testnet}\n\n"
        text += f"**Authentication:** {rest.authentication.type}\n\n"

        text += "## Categories\n\n"
        text += bullets(f"**{name}**: {count} endpoints" for name, count in self.categories().items())
        text += "\n\n## Available Endpoints\n\n"
        for ep in rest.endpoints:
            text += self._line(ep)
        text += (
            '## How to Narrow Down\n\n'
            '- Pass `category` (e.g. "orders") to list one category in full\n'
            '- Pass `endpoint` (e.g. "/v1/order") to get one endpoint in detail\n'
        )
        return text

    def _by_category(self, category: str) -> str:
        wanted = category.strip().lower()
        hits = [ep for ep in self.corpus.rest.endpoints if wanted in ep.category.lower()]
        if not hits:
            return f'Category "{category}" not found. Available categories: {", ".join(self.categories())}'
        text = f'# REST API Endpoints: "{category}"\n\n'
        for ep in hits:
            text += self._line(ep)
        return text

    @staticmethod
    def _line(ep: RestEndpoint) -> str:
        text = f"- **{ep.method} {ep.path}**{LOCK if ep.auth else ''}\n"
        text += f"  {ep.description or ep.summary}\n"
        if ep.rateLimit:
            text += f"  Rate limit: {ep.rateLimit}\n"
        return text + "\n"

    @staticmethod
    def render(ep: RestEndpoint) -> str:
        text = f"# {ep.method} {ep.path}\n\n"
        if ep.summary:
            text += f"**Summary:** {ep.summary}\n\n"
        text += f"{ep.description}\n\n"
        text += f"**Authentication:** {'Required' + LOCK if ep.auth else 'Not required'}"
        if ep.rateLimit:
            text += f"\n**Rate Limit:** {ep.rateLimit}"
        text += "\n\n"

        if ep.parameters:
            text += "## Parameters\n\n"
            for param in ep.parameters:
                text += f"- **{param.name}** ({param.type}){' *required*' if param.required else ''}\n"
                text += f"  {param.description}\n\n"
        if ep.response:
            text += f"## Response\n\n```json\n{ep.response}\n```\n\n"
        if ep.example:
            text += f"## Example\n\n```typescript\n{ep.example}\n```"
        return text


class WebSocketStreams(IndexedGuide[WebSocketStream]):
    fields = (
        WeightedField("name", 0.5),
        WeightedField("topic", 0.3),
        WeightedField("description", 0.2),
    )

    def __init__(self, corpus: ApiCorpus, cache: Optional[IndexCache[WebSocketStream]] = None):
        self.corpus = corpus
        super().__init__(cache)

    def _records(self) -> List[WebSocketStream]:
        return self.corpus.websocket.streams

    def categories(self) -> "OrderedDict[str, int]":
        return _group_counts([s.group for s in self.corpus.websocket.streams])

    # ------------------------------------------------------------------
    def lookup(self, category: Optional[str] = None, endpoint: Optional[str] = None) -> str:
        if category and category.strip():
            return self._by_category(category)
        if not endpoint or not endpoint.strip():
            return self.overview()

        matches = self.index.match(endpoint)
        if not matches:
            return (
                f'Stream "{endpoint}" not found. Use without endpoint parameter to see all '
                f"available streams. Categories: {', '.join(self.categories())}"
            )
        # a topic is as good an identifier as the stream name
        topic_hit = next(
            (m for m in matches if m.record.topic.strip().lower() == endpoint.strip().lower()), None
        )
        found = topic_hit or self.index.find_exact(matches, endpoint) or matches[0]
        return self.render(found.record)

    def overview(self) -> str:
        ws = self.corpus.websocket
        text = "# WebSocket API Streams\n\n"
        text += f"**Mainnet:** {ws.baseUrl.mainnet}\n"
        text += f"**Testnet:** {ws.baseUrl.testnet}\n\n"
        text += "## Categories\n\n"
        text += bullets(f"**{name}**: {count} streams" for name, count in self.categories().items())
        text += "\n\n## Available Streams\n\n"
        for s in ws.streams:
            text += self._line(s)
        text += (
            "## How to Narrow Down\n\n"
            '- Pass `category` ("public" or "private") to list one group\n'
            '- Pass `endpoint` (e.g. "orderbook") to get one stream in detail\n'
        )
        return text

    def _by_category(self, category: str) -> str:
        wanted = category.strip().lower()
        hits = [s for s in self.corpus.websocket.streams if wanted in s.group.lower()]
        if not hits:
            return f'Category "{category}" not found. Available categories: {", ".join(self.categories())}'
        text = f'# WebSocket Streams: "{category}"\n\n'
        for s in hits:
            text += self._line(s)
        return text

    @staticmethod
    def _line(s: WebSocketStream) -> str:
        return f"- **{s.name}** ({s.topic}){LOCK if s.auth else ''}\n  {s.description}\n\n"

    @staticmethod
    def render(s: WebSocketStream) -> str:
        text = f"# {s.name}\n\n"
        text += f"**Topic:** {s.topic}\n\n"
        text += f"{s.description}\n\n"
        text += f"**Authentication:** {'Required' + LOCK if s.auth else 'Not required'}\n\n"
        if s.parameters:
            text += f"## Parameters\n\n{bullets(s.parameters)}\n\n"
        if s.messageFormat:
            text += f"## Message Format\n\n```json\n{s.messageFormat}\n```\n\n"
        if s.example:
            text += f"## Example\n\n```typescript\n{s.example}\n```"
        return text


class ApiReference:
    """Entry point for the ``get_api_info`` tool."""

    def __init__(self, corpus: ApiCorpus):
        self.corpus = corpus
        self.rest = RestEndpoints(corpus)
        self.websocket = WebSocketStreams(corpus)

    def clear_cache(self) -> None:
        self.rest.clear_cache()
        self.websocket.clear_cache()

    def get_api_info(
        self,
        api_type: str,
        endpoint: Optional[str] = None,
        category: Optional[str] = None,
    ) -> str:
        kind = (api_type or "").strip().lower()
        if kind not in API_TYPES:
            return f"Invalid API type: {api_type}. Must be 'rest', 'websocket', or 'auth'."
        if kind == "auth":
            return self.auth_info()
        if kind == "rest":
            return self.rest.lookup(category=category, endpoint=endpoint)
        return self.websocket.lookup(category=category, endpoint=endpoint)

    def auth_info(self) -> str:
        auth = self.corpus.auth
        text = f"# API Authentication\n\n{auth.description}\n\n"
        text += "## Steps\n\n"
        text += "\n".join(f"{i}. {step}" for i, step in enumerate(auth.steps, start=1))
        text += f"\n\n## Example\n\n```typescript\n{auth.example}\n```"
        return text

    def summary_counts(self) -> Dict[str, int]:
        return {
            "rest": len(self.corpus.rest.endpoints),
            "websocket": len(self.corpus.websocket.streams),
        }
