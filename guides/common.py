"""Shared plumbing for the per-domain retrieval facades."""
from __future__ import annotations

from typing import Callable, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from fuzzy_search import FuzzyIndex, IndexCache, Match, WeightedField, build_index

T = TypeVar("T")

# How many candidates a disambiguation list shows
CANDIDATE_LIMIT = 5


class IndexedGuide(Generic[T]):
    """
    Base for facades backed by a fuzzy index.

    Subclasses provide ``fields`` and ``_records()``. The index is built on the
    first query and kept until ``clear_cache()``. Pass a ``cache`` to share or
    substitute the holder (tests use a fresh instance per case).
    """

    fields: Sequence[WeightedField] = ()
    # free-text search: a record may hold only some of the query words
    partial: bool = False

    def __init__(self, cache: Optional[IndexCache[T]] = None):
        self._cache: IndexCache[T] = cache or IndexCache(self._build_index, name=type(self).__name__)

    def _records(self) -> List[T]:
        raise NotImplementedError

    def _record_id(self, record: T) -> str:
        return getattr(record, "name", "")

    def _build_index(self) -> FuzzyIndex[T]:
        return build_index(self._records(), self.fields, key=self._record_id, partial=self.partial)

    @property
    def index(self) -> FuzzyIndex[T]:
        return self._cache.get_or_build()

    def clear_cache(self) -> None:
        self._cache.reset()

    def resolve(self, query: str) -> Tuple[Optional[Match[T]], List[Match[T]]]:
        """
        Pick one record for a "name a specific thing" query.

        Returns ``(chosen, matches)``. ``chosen`` is the exact-id match if there
        is one, else the only match; it is None when there are no matches or
        when several compete and the caller has to disambiguate.
        """
        matches = self.index.match(query)
        if not matches:
            return None, matches
        exact = self.index.find_exact(matches, query)
        if exact is not None:
            return exact, matches
        if len(matches) == 1:
            return matches[0], matches
        return None, matches


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def bullets(items: Iterable[str], prefix: str = "- ") -> str:
    return "\n".join(f"{prefix}{i}" for i in items)

def shorten(text: str, limit: int = 100) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."

def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]

def candidate_list(
    matches: Sequence[Match[T]],
    describe: Callable[[T], Tuple[str, str, str]],
    limit: int = CANDIDATE_LIMIT,
) -> str:
    """One line per candidate: name, category, relevance and a short description."""
    lines = []
    for m in matches[:limit]:
        name, category, description = describe(m.record)
        label = f"**{name}**"
        if category:
            label += f" ({category})"
        lines.append(f"- {label} - {m.relevance}% match: {shorten(description)}")
    return "\n".join(lines)

def disambiguation(
    kind: str,
    query: str,
    matches: Sequence[Match[T]],
    describe: Callable[[T], Tuple[str, str, str]],
    hint: str,
) -> str:
    return (
        f'Multiple {kind} found for "{query}":\n\n'
        f"{candidate_list(matches, describe)}\n\n"
        f"{hint}"
    )
