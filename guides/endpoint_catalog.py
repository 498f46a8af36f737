"""
Browsable catalogs for the OpenAPI-derived APIs: the read-only Indexer API
and the Orderly One (DEX builder) API.

Both share one corpus shape and one lookup; what differs is the prose around
the overview page, kept in a ``CatalogProfile`` per API.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from corpus import CatalogCategory, CatalogEndpoint, EndpointCatalogCorpus
from fuzzy_search import IndexCache, WeightedField
from guides.common import IndexedGuide, capitalize


@dataclass(frozen=True)
class CatalogProfile:
    title: str
    tool_name: str
    intro: str = ""
    category_examples: Tuple[str, ...] = ()
    endpoint_examples: Tuple[str, ...] = ()
    use_cases: str = ""
    tips: Tuple[str, ...] = field(default_factory=tuple)
    # how the detail page labels the endpoint's tags
    tags_label: str = "Tags"


INDEXER_PROFILE = CatalogProfile(
    title="Orderly Network Indexer API",
    tool_name="get_indexer_api_info",
    intro=(
        "## What is the Indexer API?\n\n"
        "The Indexer API provides **read-only access** to historical and aggregated trading data "
        "on Orderly Network. Unlike the main trading API, it is designed for:\n\n"
        "- **Analytics**: Query historical trading metrics, volume, and fees\n"
        "- **Account History**: Retrieve user trading events, settlements, liquidations\n"
        "- **Leaderboards**: Get rankings for positions, PnL, trading volume\n"
        "- **Dashboards**: Build trading statistics and performance tracking\n\n"
        "## Key Differences from Main API\n\n"
        "| Feature | Main API | Indexer API |\n"
        "|---------|----------|-------------|\n"
        "| Authentication | Required (Ed25519) | Not required |\n"
        "| Purpose | Trading operations | Data querying |\n"
        "| Data Type | Real-time | Historical/Aggregated |\n"
        "| Write Operations | Yes (orders, etc.) | No (read-only) |\n"
    ),
    category_examples=("trading_metrics", "events", "ranking"),
    endpoint_examples=("/daily_volume", "events_v2", "ranking/positions"),
    use_cases=(
        "**For Trading Dashboards:**\n"
        '- "/daily_volume" - Daily trading volume over time\n'
        '- "/daily_trading_fee" - Fee statistics\n\n'
        "**For User Account History:**\n"
        '- "/events_v2" - All account events with pagination\n\n'
        "**For Leaderboards/Rankings:**\n"
        '- "/ranking/positions" - Top positions by holding value\n'
        '- "/ranking/realized_pnl" - Top traders by realized PnL\n'
    ),
    tips=(
        "**No Authentication Required**: Unlike the trading API, you don't need API keys",
        "**Pagination**: The /events_v2 endpoint supports pagination via cursors",
        "**Time Ranges**: Most endpoints accept from_day/end_day or from_time/to_time parameters",
        '**Query Parameters**: GET endpoints use a "param" query parameter with JSON-encoded values',
    ),
)

ORDERLY_ONE_PROFILE = CatalogProfile(
    title="Orderly One API",
    tool_name="get_orderly_one_api_info",
    intro=(
        "## What is Orderly One?\n\n"
        "Orderly One is a platform that lets you create and manage your own perpetual "
        "decentralized exchange (DEX) using Orderly Network infrastructure. It provides DEX "
        "configuration, automated deployment to GitHub Pages, and a graduation system to earn "
        "fee revenue.\n"
    ),
    category_examples=("dex", "auth", "graduation", "theme"),
    endpoint_examples=("/dex", "verify-tx", "theme"),
    use_cases=(
        "**For DEX Creation:**\n"
        '- "/dex" - Create and manage your DEX\n'
        '- "/dex/{id}" - Get/update specific DEX\n\n'
        "**For Graduation:**\n"
        '- "/graduation/verify-tx" - Verify graduation payment transaction\n'
        '- "/graduation/fee-options" - Get graduation payment options\n\n'
        "**For Theme Customization:**\n"
        '- "/theme/modify" - AI-powered theme generation\n'
    ),
    tips=(
        "**Authentication First**: Always authenticate before making authenticated requests",
        "**Rate Limits**: Some endpoints (like theme generation) have rate limits",
        "**JWT Tokens**: Tokens expire, be prepared to re-authenticate",
        "**Graduation**: The graduation process requires on-chain transaction verification",
    ),
    tags_label="Category",
)


class EndpointCatalog(IndexedGuide[CatalogEndpoint]):
    fields = (
        WeightedField("path", 0.4),
        WeightedField("summary", 0.3),
        WeightedField("description", 0.2),
        WeightedField("operationId", 0.1),
    )

    def __init__(
        self,
        corpus: EndpointCatalogCorpus,
        profile: CatalogProfile,
        cache: Optional[IndexCache[CatalogEndpoint]] = None,
    ):
        self.corpus = corpus
        self.profile = profile
        super().__init__(cache)

    def _records(self) -> List[CatalogEndpoint]:
        return self.corpus.endpoints

    def _record_id(self, record: CatalogEndpoint) -> str:
        return record.path

    def category_names(self) -> List[str]:
        return [c.name for c in self.corpus.categories]

    def find_category(self, category: str) -> Optional[CatalogCategory]:
        wanted = category.strip().lower()
        for c in self.corpus.categories:
            if wanted in c.name.lower() or wanted in c.description.lower():
                return c
        return None

    # ------------------------------------------------------------------
    def lookup(self, endpoint: Optional[str] = None, category: Optional[str] = None) -> str:
        if category and category.strip():
            found = self.find_category(category)
            if found is None:
                return f'Category "{category}" not found. Available categories: {", ".join(self.category_names())}'
            return self.render_category(found)

        if not endpoint or not endpoint.strip():
            return self.overview()

        match = self.index.best(endpoint)
        if match is None:
            return (
                f'Endpoint "{endpoint}" not found. Use without endpoint parameter to see all '
                "available endpoints and categories."
            )
        return self.render(match.record)

    # ------------------------------------------------------------------
    def overview(self) -> str:
        p = self.profile
        data = self.corpus
        text = f"# {p.title}\n\n"
        if data.description:
            text += f"## Overview\n\n{data.description}\n\n"
        if p.intro:
            text += f"{p.intro}\n"

        if data.baseUrl:
            text += "## Base URLs\n\n"
            for env, url in data.baseUrl.items():
                text += f"- **{capitalize(env)}:** {url}\n"
            text += "\n"

        if data.authentication is not None:
            auth = data.authentication
            text += f"## Authentication\n\n{auth.description}\n\n"
            if auth.flow:
                text += "### Authentication Flow\n\n"
                for step in auth.flow:
                    text += f"**{step.step}. {step.title}**\n\n{step.description}\n\n"
                    if step.endpoint:
                        text += f"Endpoint: `{step.endpoint}`\n\n"
                    if step.example:
                        text += f"Example: `{step.example}`\n\n"
                    if step.header:
                        text += f"Header: `{step.header}`\n\n"
            if auth.example:
                text += f"### Complete Authentication Example\n\n```typescript\n{auth.example}\n```\n\n"

        text += "## How to Navigate This API\n\n"
        text += "### 1. Browse by Category\n\n"
        text += 'Use the "category" parameter to see all endpoints in a specific area:\n\n```\n'
        text += "".join(f'{p.tool_name} category="{c}"\n' for c in p.category_examples)
        text += "```\n\n"
        text += "### 2. Search by Endpoint\n\n"
        text += 'Use the "endpoint" parameter to find specific endpoints:\n\n```\n'
        text += "".join(f'{p.tool_name} endpoint="{e}"\n' for e in p.endpoint_examples)
        text += "```\n\n"
        if p.use_cases:
            text += f"### 3. Common Use Cases\n\n{p.use_cases}\n"

        text += "## Available Categories\n\n"
        for cat in data.categories:
            text += f"### {cat.name}\n\n{cat.description}\n\n"
            text += f"**{len(cat.endpoints)} Endpoints:**\n\n"
            for ep in cat.endpoints:
                text += f"- **{ep.method} {ep.path}** - {ep.summary}\n"
            text += "\n"

        if data.commonErrors:
            text += "## Common Errors\n\n"
            for err in data.commonErrors:
                text += f"- **{err.code}** - {err.message}: {err.description}\n"

        if p.tips:
            text += f"\n## Tips for Using the {p.title}\n\n"
            text += "\n".join(f"{i}. {tip}" for i, tip in enumerate(p.tips, start=1)) + "\n"
        return text

    @staticmethod
    def render_category(cat: CatalogCategory) -> str:
        text = f"# {cat.name}\n\n{cat.description}\n\n## Endpoints\n\n"
        for ep in cat.endpoints:
            text += f"### {ep.method} {ep.path}\n\n**Summary:** {ep.summary}\n\n"
            if ep.description:
                text += f"{ep.description}\n\n"
            if ep.parameters:
                text += "**Parameters:**\n\n"
                for param in ep.parameters:
                    required = " *required*" if param.required else ""
                    text += f"- **{param.name}** ({param.location}, {param.type}){required}\n"
                    if param.description:
                        text += f"  {param.description}\n"
                    text += "\n"
            if ep.example:
                text += f"**Example:**\n\n```typescript\n{ep.example}\n```\n\n"
            text += "---\n\n"
        return text

    def render(self, ep: CatalogEndpoint) -> str:
        text = f"# {ep.method} {ep.path}\n\n**Summary:** {ep.summary}\n\n"
        if ep.description:
            text += f"{ep.description}\n\n"
        if ep.operationId:
            text += f"**Operation ID:** `{ep.operationId}`\n\n"
        if ep.tags:
            tags = ep.tags[0] if self.profile.tags_label == "Category" else ", ".join(ep.tags)
            text += f"**{self.profile.tags_label}:** {tags}\n\n"

        if ep.parameters:
            text += "## Parameters\n\n"
            for param in ep.parameters:
                text += f"### {param.name}\n\n"
                text += f"- **Location:** {param.location}\n"
                text += f"- **Type:** {param.type}\n"
                text += f"- **Required:** {'Yes' if param.required else 'No'}\n"
                if param.description:
                    text += f"- **Description:** {param.description}\n"
                if param.example is not None:
                    text += f"- **Example:** `{json.dumps(param.example)}`\n"
                text += "\n"

        body = ep.requestBody
        if body is not None:
            text += "## Request Body\n\n"
            if body.description:
                text += f"{body.description}\n\n"
            text += f"**Content Type:** {body.contentType}\n"
            text += f"**Required:** {'Yes' if body.required else 'No'}\n\n"
            text += f"**Schema:**\n\n```json\n{body.body_schema}\n```\n\n"

        if ep.responses:
            text += "## Responses\n\n"
            for resp in ep.responses:
                text += f"### {resp.code}\n\n{resp.description}\n\n"
                if resp.body_schema:
                    text += f"**Schema:**\n\n```json\n{resp.body_schema}\n```\n\n"

        if ep.example:
            text += f"## Example\n\n```typescript\n{ep.example}\n```"
        return text
