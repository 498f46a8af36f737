"""Free-text search over the Orderly documentation chunks."""
from __future__ import annotations

from typing import List, Optional

from corpus import DocChunk, DocumentationCorpus
from fuzzy_search import IndexCache, WeightedField, clamp_limit
from guides.common import IndexedGuide

DEFAULT_RESULTS = 5


class DocsSearch(IndexedGuide[DocChunk]):
    fields = (
        WeightedField("title", 0.4),
        WeightedField("content", 0.3),
        WeightedField("keywords", 0.2),
        WeightedField("category", 0.1),
    )
    partial = True

    def __init__(self, corpus: DocumentationCorpus, cache: Optional[IndexCache[DocChunk]] = None):
        self.corpus = corpus
        super().__init__(cache)

    def _records(self) -> List[DocChunk]:
        return self.corpus.chunks

    def _record_id(self, record: DocChunk) -> str:
        return record.id

    # ------------------------------------------------------------------
    def search(self, query: str, limit: int = DEFAULT_RESULTS) -> str:
        """Return the most relevant documentation sections for *query* as markdown."""
        if not query or not query.strip():
            return "Please provide a search query."

        page = self.index.search(query, page=1, limit=clamp_limit(limit))
        if not page.items:
            return self._no_results(query)

        count = len(page.items)
        text = f'# Search Results for "{query}"\n\n'
        text += f"Found {count} relevant section{'' if count == 1 else 's'}"
        if page.total > count:
            text += f" (showing the top {count} of {page.total})"
        text += ":\n\n"

        for i, m in enumerate(page.items, start=1):
            chunk = m.record
            text += f"## {i}. {chunk.title}\n\n"
            text += f"**Category:** {chunk.category} | **Relevance:** {m.relevance}%\n\n"
            text += f"{chunk.content}\n\n"
            if chunk.keywords:
                text += f"*Keywords: {', '.join(chunk.keywords)}*\n\n"
            text += "---\n\n"

        lowered = query.lower()
        has_sdk = any(m.record.category == "SDK" for m in page.items)
        if not has_sdk and ("hook" in lowered or "use" in lowered):
            text += '\n**Tip:** For specific SDK hook examples, try the "get_sdk_pattern" tool with the hook name.\n'
        return text

    def _no_results(self, query: str) -> str:
        categories = ", ".join(self.corpus.categories()) or "none"
        return (
            f'No results found for "{query}".\n\n'
            "Try searching for:\n"
            '- SDK hooks (e.g., "useOrderEntry", "usePositionStream")\n'
            '- Protocol concepts (e.g., "vault", "leverage", "funding rate")\n'
            f"- Available categories: {categories}\n\n"
            "Or use specific tools like:\n"
            '- "get_sdk_pattern" for hook examples\n'
            '- "explain_workflow" for step-by-step guides'
        )
