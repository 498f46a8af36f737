"""
Record models for the static Orderly corpora.

Each JSON file is validated once at load time; facades only ever see these
models, never raw parsed JSON. Optional fields default to empty values so
that a record missing a searchable field is still indexed.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, RootModel, model_validator
from typing_extensions import Annotated


def _drop_empty(value: Any) -> Any:
    # Generated corpora sometimes carry nulls or blanks inside string lists
    if value is None:
        return []
    if isinstance(value, list):
        return [v for v in value if v is not None and v != ""]
    return value


StrList = Annotated[List[str], BeforeValidator(_drop_empty)]


def _param_lines(value: Any) -> Any:
    # stream parameters come either as plain lines or as {name, type, required, description}
    if not isinstance(value, list):
        return _drop_empty(value)
    lines = []
    for item in value:
        if isinstance(item, dict):
            line = f"{item.get('name', '')} ({item.get('type') or 'any'}"
            line += ", required)" if item.get("required") else ")"
            if item.get("description"):
                line += f": {item['description']}"
            lines.append(line)
        elif item:
            lines.append(item)
    return lines


ParamLines = Annotated[List[str], BeforeValidator(_param_lines)]


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# -----------------------------------------------------------------------------
# Documentation chunks
# -----------------------------------------------------------------------------

class DocChunk(_Record):
    id: str
    title: str = ""
    content: str = ""
    category: str = ""
    keywords: StrList = Field(default_factory=list)

class DocumentationCorpus(_Record):
    chunks: List[DocChunk] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def categories(self) -> List[str]:
        return list(dict.fromkeys(c.category for c in self.chunks if c.category))


# -----------------------------------------------------------------------------
# SDK patterns (React hooks and Python SDK share one shape)
# -----------------------------------------------------------------------------

class Pattern(_Record):
    name: str
    description: str = ""
    category: str = ""
    installation: Optional[str] = None
    usage: str = ""
    example: Optional[str] = None
    notes: StrList = Field(default_factory=list)
    related: StrList = Field(default_factory=list)

class PatternCategory(_Record):
    name: str
    patterns: List[Pattern] = Field(default_factory=list)

class PatternCorpus(_Record):
    categories: List[PatternCategory] = Field(default_factory=list)
    stats: Dict[str, Any] = Field(default_factory=dict)

    def flatten(self) -> List[Pattern]:
        """All patterns, each stamped with the name of its category."""
        return [
            p.model_copy(update={"category": cat.name})
            for cat in self.categories
            for p in cat.patterns
        ]


# -----------------------------------------------------------------------------
# Workflows
# -----------------------------------------------------------------------------

class WorkflowStep(_Record):
    title: str = ""
    description: str = ""
    code: Optional[str] = None
    important: StrList = Field(default_factory=list)

class Workflow(_Record):
    name: str
    description: str = ""
    prerequisites: StrList = Field(default_factory=list)
    steps: List[WorkflowStep] = Field(default_factory=list)
    commonIssues: StrList = Field(default_factory=list)
    relatedWorkflows: StrList = Field(default_factory=list)

class WorkflowCorpus(_Record):
    workflows: List[Workflow] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Component guides
# -----------------------------------------------------------------------------

class ComponentVariant(_Record):
    complexity: str = "standard"
    description: str = ""
    code: str = ""
    additionalImports: StrList = Field(default_factory=list)
    tips: StrList = Field(default_factory=list)

class ComponentGuide(_Record):
    name: str
    description: str = ""
    requiredPackages: StrList = Field(default_factory=list)
    keyHooks: StrList = Field(default_factory=list)
    variants: List[ComponentVariant] = Field(default_factory=list)
    stylingNotes: Optional[str] = None
    commonMistakes: StrList = Field(default_factory=list)
    relatedComponents: StrList = Field(default_factory=list)

    def variant(self, complexity: str) -> Optional[ComponentVariant]:
        """Requested complexity, else the standard variant, else the first one."""
        wanted = (complexity or "").strip().lower()
        for v in self.variants:
            if v.complexity.lower() == wanted:
                return v
        for v in self.variants:
            if v.complexity.lower() == "standard":
                return v
        return self.variants[0] if self.variants else None

class ComponentCorpus(_Record):
    components: List[ComponentGuide] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Main REST / WebSocket API
# -----------------------------------------------------------------------------

class BaseUrl(_Record):
    mainnet: str = ""
    testnet: str = ""

class ApiParameter(_Record):
    name: str
    type: str = ""
    required: bool = False
    description: str = ""

class RestEndpoint(_Record):
    path: str
    method: str = "GET"
    summary: str = ""
    description: str = ""
    operationId: str = ""
    tags: StrList = Field(default_factory=list)
    auth: bool = False
    rateLimit: Optional[str] = None
    parameters: List[ApiParameter] = Field(default_factory=list)
    response: Optional[str] = None
    example: Optional[str] = None

    @property
    def category(self) -> str:
        return self.tags[0] if self.tags else "general"

class RestAuthentication(_Record):
    type: str = ""
    description: str = ""

class RestApi(_Record):
    baseUrl: BaseUrl = Field(default_factory=BaseUrl)
    authentication: RestAuthentication = Field(default_factory=RestAuthentication)
    endpoints: List[RestEndpoint] = Field(default_factory=list)

class WebSocketStream(_Record):
    name: str
    topic: str = ""
    description: str = ""
    auth: bool = False
    category: Optional[str] = None
    parameters: ParamLines = Field(default_factory=list)
    messageFormat: Optional[str] = None
    example: Optional[str] = None

    @property
    def group(self) -> str:
        if self.category:
            return self.category
        return "private" if self.auth else "public"

class WebSocketApi(_Record):
    baseUrl: BaseUrl = Field(default_factory=BaseUrl)
    streams: List[WebSocketStream] = Field(default_factory=list)

class AuthGuide(_Record):
    description: str = ""
    steps: StrList = Field(default_factory=list)
    example: str = ""

class ApiCorpus(_Record):
    rest: RestApi = Field(default_factory=RestApi)
    websocket: WebSocketApi = Field(default_factory=WebSocketApi)
    auth: AuthGuide = Field(default_factory=AuthGuide)


# -----------------------------------------------------------------------------
# OpenAPI-derived catalogs (Indexer API, Orderly One API)
# -----------------------------------------------------------------------------

class CatalogParameter(_Record):
    name: str
    location: str = Field("", alias="in")
    type: str = ""
    required: bool = False
    description: str = ""
    example: Any = None

class CatalogRequestBody(_Record):
    description: str = ""
    contentType: str = "application/json"
    body_schema: str = Field("", alias="schema")
    required: bool = False

class CatalogResponse(_Record):
    code: Union[int, str]
    description: str = ""
    body_schema: Optional[str] = Field(None, alias="schema")

class CatalogEndpoint(_Record):
    path: str
    method: str = "GET"
    summary: str = ""
    description: str = ""
    operationId: str = ""
    tags: StrList = Field(default_factory=list)
    parameters: List[CatalogParameter] = Field(default_factory=list)
    requestBody: Optional[CatalogRequestBody] = None
    responses: List[CatalogResponse] = Field(default_factory=list)
    example: Optional[str] = None

class CatalogCategory(_Record):
    name: str
    description: str = ""
    endpoints: List[CatalogEndpoint] = Field(default_factory=list)

class CommonError(_Record):
    code: Union[int, str]
    message: str = ""
    description: str = ""

class AuthFlowStep(_Record):
    step: int
    title: str = ""
    description: str = ""
    endpoint: Optional[str] = None
    example: Optional[str] = None
    header: Optional[str] = None

class CatalogAuthentication(_Record):
    type: str = ""
    description: str = ""
    flow: List[AuthFlowStep] = Field(default_factory=list)
    example: str = ""

class EndpointCatalogCorpus(_Record):
    version: str = ""
    title: str = ""
    description: str = ""
    baseUrl: Dict[str, str] = Field(default_factory=dict)
    authentication: Optional[CatalogAuthentication] = None
    categories: List[CatalogCategory] = Field(default_factory=list)
    endpoints: List[CatalogEndpoint] = Field(default_factory=list)
    commonErrors: List[CommonError] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Contract addresses
# -----------------------------------------------------------------------------

class ContractInfo(_Record):
    mainnet: Optional[str] = None
    testnet: Optional[str] = None
    description: Optional[str] = None

    def address(self, network: str) -> Optional[str]:
        return self.mainnet if network == "mainnet" else self.testnet

class ChainContracts(_Record):
    chainId: Optional[int] = None
    testnetChainId: Optional[int] = None
    contracts: Dict[str, ContractInfo] = Field(default_factory=dict)

    def chain_id(self, network: str) -> Optional[int]:
        return self.chainId if network == "mainnet" else self.testnetChainId

class ContractRegistry(RootModel[Dict[str, ChainContracts]]):
    """chain name -> contract name -> addresses; exact-key lookup only."""

    @model_validator(mode="before")
    @classmethod
    def _drop_metadata(cls, data: Any) -> Any:
        # generated files carry a "_metadata" entry next to the chains
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if not str(k).startswith("_")}
        return data

    def chains(self) -> List[str]:
        return list(self.root.keys())
