"""
Fuzzy retrieval engine shared by every Orderly documentation corpus.
Indexes records over weighted fields once, then answers ranked,
quality-filtered and paginated queries that tolerate typos and partial words.
"""
from __future__ import annotations

import logging
import math
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from rapidfuzz import fuzz, process

log = logging.getLogger("orderly-mcp")

T = TypeVar("T")

DEFAULT_LIMIT = 10
MAX_LIMIT = 10

# Candidates whose distance is above this are dropped (similarity below 60%).
QUALITY_THRESHOLD = 0.4

# rapidfuzz scores are 0-100; token edits below this count as no match at all.
TOKEN_CUTOFF = 75.0
MIN_SUBSTRING_LEN = 3

# Lowest-weighted field keeps 80% of its similarity.
FIELD_PENALTY = 0.2
COVERAGE_BONUS = 0.25

# Partial queries: a record matching only some of the query words keeps this
# share of its matched-word quality, plus the rest in proportion to the words matched.
PARTIAL_FLOOR = 0.6


# ---------------------------------------------------------------------------
# Tokenizing
# ---------------------------------------------------------------------------

_WORD_RE = re.compile(r"[a-z0-9]+")

_STOPWORDS = frozenset({
    "a", "an", "the", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "shall", "can", "need", "must",
    "i", "me", "my", "we", "our", "you", "your", "he", "she", "it",
    "they", "them", "their", "its", "this", "that", "these", "those",
    "what", "which", "who", "whom", "how", "when", "where", "why",
    "in", "on", "at", "to", "for", "of", "with", "by", "from", "as",
    "into", "about", "between", "through", "during", "before", "after",
    "and", "but", "or", "nor", "not", "so", "if", "then", "than",
    "all", "each", "every", "both", "few", "more", "most", "some", "any",
    "no", "only", "same", "such", "too", "very", "just",
})

def _tokenize(text: str) -> List[str]:
    return _WORD_RE.findall(text.lower())

def _tokenize_query(text: str) -> List[str]:
    """Tokenize a search query, removing stopwords."""
    tokens = _WORD_RE.findall(text.lower())
    filtered = [t for t in tokens if t not in _STOPWORDS]
    # If everything was a stopword, fall back to the original tokens long enough to mean something
    return filtered if filtered else [t for t in tokens if len(t) >= MIN_SUBSTRING_LEN]

def normalize_id(value: Optional[str]) -> str:
    """Compact form used for exact-id comparison ("wallet-connection" == "Wallet Connection")."""
    return "".join(_tokenize(value or ""))


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WeightedField:
    """A searchable field. ``path`` may step through lists, e.g. ``steps.title``."""
    path: str
    weight: float

    def values(self, record: Any) -> List[str]:
        found: List[Any] = [record]
        for part in self.path.split("."):
            step: List[Any] = []
            for item in found:
                if isinstance(item, dict):
                    value = item.get(part)
                else:
                    value = getattr(item, part, None)
                if value is None:
                    continue
                if isinstance(value, (list, tuple)):
                    step.extend(v for v in value if v is not None)
                else:
                    step.append(value)
            found = step
        return [v if isinstance(v, str) else str(v) for v in found]


@dataclass(frozen=True)
class _Text:
    compact: str
    tokens: Tuple[str, ...]
    token_set: frozenset

    @classmethod
    def of(cls, value: str) -> "_Text":
        tokens = _tokenize(value)
        unique = tuple(dict.fromkeys(tokens))
        return cls(compact="".join(tokens), tokens=unique, token_set=frozenset(unique))


def _token_similarity(qt: str, text: _Text) -> float:
    if qt in text.token_set:
        return 1.0
    best = 0.0
    if len(qt) >= MIN_SUBSTRING_LEN:
        for tok in text.tokens:
            if qt in tok:
                best = max(best, 0.8 + 0.2 * len(qt) / len(tok))
    hit = process.extractOne(qt, text.tokens, scorer=fuzz.ratio, score_cutoff=TOKEN_CUTOFF)
    if hit is not None:
        best = max(best, hit[1] / 100.0)
    return best


def _text_similarity(q_compact: str, q_tokens: Sequence[str], text: _Text) -> float:
    if not text.compact:
        return 0.0
    if q_compact == text.compact:
        return 1.0
    best = 0.0
    if len(q_compact) >= MIN_SUBSTRING_LEN and q_compact in text.compact:
        best = 0.8 + 0.2 * len(q_compact) / len(text.compact)
    best = max(best, fuzz.ratio(q_compact, text.compact, score_cutoff=TOKEN_CUTOFF) / 100.0)
    if q_tokens:
        per_token = sum(_token_similarity(qt, text) for qt in q_tokens) / len(q_tokens)
        best = max(best, per_token)
    return best


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Match(Generic[T]):
    record: T
    score: float      # distance: 0 is an exact match, lower is better
    position: int     # index in the corpus, used as the tie-breaker

    @property
    def relevance(self) -> int:
        """Similarity as a whole percentage."""
        return round((1.0 - self.score) * 100)


@dataclass(frozen=True)
class SearchPage(Generic[T]):
    items: List[Match[T]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0
    has_more: bool = False

    @property
    def records(self) -> List[T]:
        return [m.record for m in self.items]


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(int(limit), MAX_LIMIT))


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------

class FuzzyIndex(Generic[T]):
    """Immutable index over one corpus. Rebuilding means creating a new one."""

    def __init__(
        self,
        records: Sequence[T],
        fields: Sequence[WeightedField],
        key: Optional[Callable[[T], str]] = None,
        partial: bool = False,
    ):
        self.records: Tuple[T, ...] = tuple(records)
        self.fields: Tuple[WeightedField, ...] = tuple(fields)

        max_weight = max((f.weight for f in self.fields), default=0.0) or 1.0
        total_weight = sum(f.weight for f in self.fields) or 1.0
        self._factors = [1.0 - FIELD_PENALTY * (1.0 - f.weight / max_weight) for f in self.fields]
        self._shares = [f.weight / total_weight for f in self.fields]

        # per record, per field: the prepared texts of every value
        self._rows: List[List[List[_Text]]] = [
            [[_Text.of(v) for v in f.values(rec)] for f in self.fields]
            for rec in self.records
        ]
        self._ids: List[str] = [normalize_id(key(rec)) if key else "" for rec in self.records]
        # free-text indexes accept records holding only some of the query words
        self.partial = partial

    def __len__(self) -> int:
        return len(self.records)

    # ------------------------------------------------------------------
    def _distance(self, row: List[List[_Text]], q_compact: str, q_tokens: Sequence[str]) -> float:
        best = 0.0
        coverage = 0.0
        for i, texts in enumerate(row):
            sim = max((_text_similarity(q_compact, q_tokens, t) for t in texts), default=0.0)
            if not sim:
                continue
            best = max(best, sim * self._factors[i])
            coverage += sim * self._shares[i]
        if self.partial and len(q_tokens) > 1:
            best = max(best, self._spread(row, q_tokens))
        similarity = best + COVERAGE_BONUS * (1.0 - best) * coverage
        return round(1.0 - similarity, 4)

    def _spread(self, row: List[List[_Text]], q_tokens: Sequence[str]) -> float:
        """Score each query word by its best field, wherever it occurs in the record."""
        scores = []
        for qt in q_tokens:
            scores.append(max(
                (_token_similarity(qt, t) * self._factors[i] for i, texts in enumerate(row) for t in texts),
                default=0.0,
            ))
        matched = [s for s in scores if s]
        if not matched:
            return 0.0
        quality = sum(matched) / len(matched)
        return quality * (PARTIAL_FLOOR + (1.0 - PARTIAL_FLOOR) * len(matched) / len(q_tokens))

    def match(self, query: str) -> List[Match[T]]:
        """
        Every quality match for *query*, best first.

        Ties keep corpus order. An empty or whitespace-only query matches nothing.
        """
        all_tokens = _tokenize(query or "")
        if not all_tokens:
            return []
        q_compact = "".join(all_tokens)
        q_tokens = _tokenize_query(query)

        matches: List[Match[T]] = []
        for pos, row in enumerate(self._rows):
            distance = self._distance(row, q_compact, q_tokens)
            if distance <= QUALITY_THRESHOLD:
                matches.append(Match(record=self.records[pos], score=distance, position=pos))
        matches.sort(key=lambda m: m.score)
        return matches

    def search(self, query: str, page: int = 1, limit: Optional[int] = DEFAULT_LIMIT) -> SearchPage[T]:
        if not query or not query.strip():
            return SearchPage()

        limit = clamp_limit(limit)
        page = max(1, int(page or 1))
        matches = self.match(query)
        total = len(matches)
        total_pages = math.ceil(total / limit)
        start = (page - 1) * limit
        return SearchPage(
            items=matches[start:start + limit],
            total=total,
            page=page,
            total_pages=total_pages,
            has_more=page < total_pages,
        )

    # ------------------------------------------------------------------
    def get(self, record_id: str) -> Optional[T]:
        """Exact lookup by normalized id; the first record wins on duplicates."""
        wanted = normalize_id(record_id)
        if not wanted:
            return None
        for pos, rid in enumerate(self._ids):
            if rid == wanted:
                return self.records[pos]
        return None

    def find_exact(self, matches: Sequence[Match[T]], query: str) -> Optional[Match[T]]:
        """The quality match whose id equals the query, if any."""
        wanted = normalize_id(query)
        if not wanted:
            return None
        for m in matches:
            if self._ids[m.position] == wanted:
                return m
        return None

    def best(self, query: str) -> Optional[Match[T]]:
        """Single best quality match, preferring an exact id over a better fuzzy score."""
        matches = self.match(query)
        if not matches:
            return None
        return self.find_exact(matches, query) or matches[0]


def build_index(
    records: Sequence[T],
    fields: Sequence[WeightedField],
    key: Optional[Callable[[T], str]] = None,
    partial: bool = False,
) -> FuzzyIndex[T]:
    return FuzzyIndex(records, fields, key=key, partial=partial)


# ---------------------------------------------------------------------------
# Lazily built, shared index
# ---------------------------------------------------------------------------

class IndexCache(Generic[T]):
    """Builds an index on first use and keeps it until reset()."""

    def __init__(self, builder: Callable[[], FuzzyIndex[T]], name: str = "index"):
        self._builder = builder
        self._name = name
        self._index: Optional[FuzzyIndex[T]] = None
        self._lock = threading.Lock()

    @property
    def is_built(self) -> bool:
        return self._index is not None

    def get_or_build(self) -> FuzzyIndex[T]:
        index = self._index
        if index is None:
            with self._lock:
                if self._index is None:
                    self._index = self._builder()
                    log.info("Built %s index (%d records)", self._name, len(self._index))
                index = self._index
        return index

    def reset(self) -> None:
        with self._lock:
            self._index = None
        log.debug("Cleared %s index", self._name)
