from typing import Optional
from pydantic import BaseModel, Field


# ------------------------------------------------------------------------------
# Schemas
# ------------------------------------------------------------------------------

class SearchDocsArgs(BaseModel):
    query: str = Field(..., description="Search query about Orderly Network (e.g. 'how does the vault work', 'trading fees')")
    limit: int = Field(5, ge=1, le=10, description="Maximum number of results to return")

class GetSdkPatternArgs(BaseModel):
    pattern: str = Field(..., description="Pattern or hook name (e.g. 'useOrderEntry', 'usePositionStream', 'wallet-connection')")
    includeExample: bool = Field(True, description="Include full code example")

class GetContractAddressesArgs(BaseModel):
    chain: str = Field(..., description="Chain name (e.g. 'arbitrum', 'optimism', 'base', 'ethereum')")
    contractType: str = Field("all", description="Contract type (e.g. 'Vault', 'USDC') or 'all' for all contracts")
    network: str = Field("mainnet", description="Network type ('mainnet' or 'testnet')")

class ExplainWorkflowArgs(BaseModel):
    workflow: str = Field(..., description="Workflow name (e.g. 'connect wallet', 'place first order', 'withdraw funds')")

class GetApiInfoArgs(BaseModel):
    type: str = Field(..., description="API type ('rest', 'websocket', or 'auth')")
    endpoint: Optional[str] = Field(None, description="Specific endpoint or stream name (e.g. '/v1/order', 'orderbook')")
    category: Optional[str] = Field(None, description="List every endpoint or stream in a category (e.g. 'orders', 'private')")

class GetIndexerApiInfoArgs(BaseModel):
    endpoint: Optional[str] = Field(None, description="Endpoint path or name (e.g. '/events_v2', 'daily_volume', 'ranking/positions')")
    category: Optional[str] = Field(None, description="Category filter (e.g. 'trading_metrics', 'events', 'ranking')")

class GetComponentGuideArgs(BaseModel):
    component: str = Field(..., description="Component type (e.g. 'order-entry', 'orderbook', 'positions')")
    complexity: str = Field("standard", description="Guide complexity ('minimal', 'standard', 'advanced')")

class GetOrderlyOneApiInfoArgs(BaseModel):
    endpoint: Optional[str] = Field(None, description="Endpoint path or name (e.g. '/dex', 'verify-tx', '/theme/modify')")
    category: Optional[str] = Field(None, description="Category filter (e.g. 'auth', 'dex', 'graduation', 'theme')")

class GetPythonSdkPatternArgs(BaseModel):
    pattern: str = Field(..., description="Pattern or method name (e.g. 'buy', 'positions', 'ai_agent')")
    includeExample: bool = Field(True, description="Include full code example")
