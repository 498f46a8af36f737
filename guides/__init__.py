"""
Per-domain retrieval facades and the ``Library`` that holds one of each.

Every corpus is read and validated when the library is created, so a broken
deployment fails at startup. Fuzzy indexes are built on first use.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from corpus import (
    ApiCorpus,
    ComponentCorpus,
    ContractRegistry,
    DocumentationCorpus,
    EndpointCatalogCorpus,
    PatternCorpus,
    WorkflowCorpus,
)
from orderly_data import DATA_DIR, OVERVIEW_FILE, load_corpus, read_text

from guides.api_info import ApiReference
from guides.common import IndexedGuide
from guides.components import ComponentGuides
from guides.contracts import Contracts
from guides.docs import DocsSearch
from guides.endpoint_catalog import INDEXER_PROFILE, ORDERLY_ONE_PROFILE, EndpointCatalog
from guides.patterns import PythonSdkPatterns, SdkPatterns
from guides.resources import ResourceReader
from guides.workflows import Workflows

log = logging.getLogger("orderly-mcp")


@dataclass
class Library:
    docs: DocsSearch
    sdk_patterns: SdkPatterns
    python_sdk: PythonSdkPatterns
    workflows: Workflows
    components: ComponentGuides
    api: ApiReference
    indexer_api: EndpointCatalog
    orderly_one_api: EndpointCatalog
    contracts: Contracts
    data_dir: Path
    resources: ResourceReader = field(init=False)

    def __post_init__(self) -> None:
        self.resources = ResourceReader(self)

    @classmethod
    def from_data_dir(cls, data_dir: Optional[Path] = None) -> "Library":
        root = Path(data_dir) if data_dir is not None else DATA_DIR
        return cls(
            docs=DocsSearch(load_corpus("docs", DocumentationCorpus, root)),
            sdk_patterns=SdkPatterns(load_corpus("sdk_patterns", PatternCorpus, root)),
            python_sdk=PythonSdkPatterns(load_corpus("python_sdk", PatternCorpus, root)),
            workflows=Workflows(load_corpus("workflows", WorkflowCorpus, root)),
            components=ComponentGuides(load_corpus("components", ComponentCorpus, root)),
            api=ApiReference(load_corpus("api", ApiCorpus, root)),
            indexer_api=EndpointCatalog(
                load_corpus("indexer_api", EndpointCatalogCorpus, root), INDEXER_PROFILE
            ),
            orderly_one_api=EndpointCatalog(
                load_corpus("orderly_one_api", EndpointCatalogCorpus, root), ORDERLY_ONE_PROFILE
            ),
            contracts=Contracts(load_corpus("contracts", ContractRegistry, root)),
            data_dir=root,
        )

    def guides(self) -> List[IndexedGuide]:
        return [
            self.docs,
            self.sdk_patterns,
            self.python_sdk,
            self.workflows,
            self.components,
            self.api.rest,
            self.api.websocket,
            self.indexer_api,
            self.orderly_one_api,
        ]

    def preload(self) -> "Library":
        """Build every index now instead of on the first query."""
        for guide in self.guides():
            _ = guide.index
        log.info("Preloaded %d indexes from %s", len(self.guides()), self.data_dir)
        return self

    def clear_caches(self) -> None:
        for guide in self.guides():
            guide.clear_cache()
        self.resources.clear_cache()

    def overview(self) -> str:
        return read_text(OVERVIEW_FILE, self.data_dir)


__all__ = ["Library"]
