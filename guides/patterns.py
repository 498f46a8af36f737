"""
Lookup of SDK usage patterns: the React hooks SDK and the Python trading SDK.

Both corpora share one record shape and the same resolution policy: an exact
name (or a single quality match) is rendered in full, several competing
matches produce a candidate list, and no match lists what is available.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from corpus import Pattern, PatternCorpus
from fuzzy_search import IndexCache, Match, WeightedField
from guides.common import IndexedGuide, bullets, disambiguation

SEE_ALSO_LIMIT = 3


def _describe(p: Pattern) -> Tuple[str, str, str]:
    return p.name, p.category, p.description


class PatternGuide(IndexedGuide[Pattern]):
    fields = (
        WeightedField("name", 0.5),
        WeightedField("description", 0.3),
        WeightedField("category", 0.2),
    )
    kind = "patterns"

    def __init__(self, corpus: PatternCorpus, cache: Optional[IndexCache[Pattern]] = None):
        self.corpus = corpus
        super().__init__(cache)

    def _records(self) -> List[Pattern]:
        return self.corpus.flatten()

    # ------------------------------------------------------------------
    def get_pattern(self, pattern: str, include_example: bool = True) -> str:
        if not pattern or not pattern.strip():
            return "Please provide a pattern name to search for."

        chosen, matches = self.resolve(pattern)
        if not matches:
            return self._not_found(pattern)
        if chosen is None:
            return disambiguation(
                self.kind, pattern, matches, _describe,
                "Please specify a specific pattern name.",
            )
        others = [m for m in matches if m is not chosen]
        return self._render(chosen.record, include_example, others)

    def available(self) -> List[str]:
        return [f"{p.name} ({p.category})" for p in self.corpus.flatten()]

    def _not_found(self, pattern: str) -> str:
        available = "\n".join(self.available())
        return f'No SDK pattern found for "{pattern}".\n\nAvailable patterns:\n{available}'

    def _render(self, p: Pattern, include_example: bool, others: Sequence[Match[Pattern]]) -> str:
        raise NotImplementedError


class SdkPatterns(PatternGuide):
    """React SDK hooks and utilities."""

    kind = "patterns"

    def _render(self, p: Pattern, include_example: bool, others: Sequence[Match[Pattern]]) -> str:
        text = f"# {p.name}\n\n**Category:** {p.category}\n\n{p.description}\n\n"
        if p.installation:
            text += f"## Installation\n\n{p.installation}\n\n"
        text += f"## Usage\n\n{p.usage}\n\n"
        if include_example and p.example:
            text += f"## Example\n\n{p.example}\n\n"
        if p.notes:
            text += f"## Important Notes\n\n{bullets(p.notes)}\n\n"
        if p.related:
            text += f"## Related Patterns\n\n{bullets(p.related)}\n"
        return text


class PythonSdkPatterns(PatternGuide):
    """Python SDK (agent-trading-sdk) for trading bots and AI agents."""

    kind = "Python SDK patterns"

    def _not_found(self, pattern: str) -> str:
        available = "\n".join(f"- {p.name} ({p.category}): {p.description}" for p in self.corpus.flatten())
        return (
            f'No Python SDK pattern found for "{pattern}".\n\n'
            f"Available patterns:\n{available}\n\n"
            "Install: pip install agent-trading-sdk\n"
            "Docs: github.com/arthur-orderly/agent-trading-sdk"
        )

    def _render(self, p: Pattern, include_example: bool, others: Sequence[Match[Pattern]]) -> str:
        text = f"# Python SDK: {p.name}\n"
        text += f"Category: {p.category}\n\n"
        text += f"{p.description}\n\n"
        if p.installation:
            text += f"## Installation\n```bash\n{p.installation}\n```\n\n"
        text += f"## Usage\n{p.usage}\n\n"
        if include_example and p.example:
            text += f"## Example\n```python\n{p.example}\n```\n\n"
        if p.notes:
            text += f"## Notes\n{bullets(p.notes)}\n\n"
        if p.related:
            text += f"## Related\n{bullets(p.related)}\n"
        if others:
            see_also = bullets(f"{m.record.name}: {m.record.description}" for m in others[:SEE_ALSO_LIMIT])
            text += f"\n## See Also\n{see_also}\n"
        return text
