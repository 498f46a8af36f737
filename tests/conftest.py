"""
Shared pytest fixtures for orderly-mcp tests
"""
import json

import pytest
from mcp.server.fastmcp import FastMCP


OVERVIEW_MD = "# Orderly Network Overview\n\nOmnichain orderbook infrastructure.\n"

DOCS = {
    "chunks": [
        {
            "id": "vault",
            "title": "Vault and Deposits",
            "content": "User funds are held in Vault contracts on each chain.",
            "category": "Protocol",
            "keywords": ["vault", "deposit"],
        },
        {
            "id": "orderbook",
            "title": "Orderbook Streams",
            "content": "Subscribe to the orderbook topic for depth updates.",
            "category": "API",
            "keywords": ["orderbook", "depth"],
        },
        {
            "id": "order-entry",
            "title": "Placing Orders with useOrderEntry",
            "content": "The useOrderEntry hook manages order form state.",
            "category": "SDK",
            "keywords": ["useOrderEntry", "hook"],
        },
    ],
    "metadata": {"totalChunks": 3},
}

SDK_PATTERNS = {
    "categories": [
        {
            "name": "Trading",
            "patterns": [
                {
                    "name": "useOrderEntry",
                    "description": "Manage order form state and submission",
                    "installation": "npm install @orderly.network/hooks",
                    "usage": "const { submit } = useOrderEntry(symbol);",
                    "example": "const { submit } = useOrderEntry('PERP_ETH_USDC');",
                    "notes": ["Prices are strings", None, ""],
                    "related": ["useOrderStream"],
                },
                {
                    "name": "useOrderStream",
                    "description": "Subscribe to the account's orders",
                    "usage": "const [rows] = useOrderStream({ symbol });",
                },
            ],
        },
        {
            "name": "Positions",
            "patterns": [
                {
                    "name": "usePositionStream",
                    "description": "Stream open positions with live PnL",
                    "usage": "const [{ rows }] = usePositionStream(symbol);",
                },
            ],
        },
        {
            "name": "Account",
            "patterns": [
                {
                    "name": "useWalletConnector",
                    "description": "Connect and disconnect the user's wallet",
                    "usage": "const { connect } = useWalletConnector();",
                },
            ],
        },
    ],
    "stats": {"totalHooks": 4, "totalCategories": 3},
}

PYTHON_SDK = {
    "categories": [
        {
            "name": "Trading",
            "patterns": [
                {
                    "name": "buy",
                    "description": "Open a long position sized in USD",
                    "installation": "pip install agent-trading-sdk",
                    "usage": "client.buy(\"ETH\", usd=100)",
                    "example": "client.buy(\"ETH\", usd=100)",
                    "related": ["sell"],
                },
                {
                    "name": "sell",
                    "description": "Open a short position sized in USD",
                    "usage": "client.sell(\"ETH\", usd=100)",
                },
            ],
        },
        {
            "name": "Account",
            "patterns": [
                {
                    "name": "positions",
                    "description": "List open positions with unrealized PnL",
                    "usage": "client.positions()",
                },
            ],
        },
    ],
}

WORKFLOWS = {
    "workflows": [
        {
            "name": "Connect Wallet",
            "description": "Connect a user's wallet and create the account.",
            "prerequisites": ["React app"],
            "steps": [
                {"title": "Wrap the app in providers", "description": "Add the config provider."},
                {"title": "Call connect", "description": "Open the wallet modal.", "code": "await connect();"},
                {"title": "Create the account", "description": "Sign the registration.", "important": ["One account per broker"]},
                {"title": "Register a key", "description": "Sign the key registration."},
            ],
            "commonIssues": ["Wrong network"],
            "relatedWorkflows": ["Place First Order"],
        },
        {
            "name": "Withdraw Funds",
            "description": "Move USDC from the account back to a chain.",
            "steps": [
                {"title": "Check the balance", "description": "Read the free collateral."},
                {"title": "Request the withdrawal", "description": "Sign the request."},
            ],
        },
        {
            "name": "Place First Order",
            "description": "Submit a limit order with the order form hook.",
            "steps": [
                {"title": "Set up the form", "description": "Call the hook."},
            ],
        },
    ],
}

COMPONENTS = {
    "components": [
        {
            "name": "OrderEntry",
            "description": "Order form with side, price and quantity inputs.",
            "requiredPackages": ["@orderly.network/hooks"],
            "keyHooks": ["useOrderEntry"],
            "variants": [
                {"complexity": "minimal", "description": "Market orders only.", "code": "<MinimalOrderEntry />"},
                {
                    "complexity": "standard",
                    "description": "Limit and market orders.",
                    "code": "<StandardOrderEntry />",
                    "additionalImports": ["import { OrderSide } from '@orderly.network/types';"],
                    "tips": ["Disable the button while submitting"],
                },
            ],
            "stylingNotes": "Green for buy, red for sell.",
            "commonMistakes": ["Passing numbers to setValue"],
            "relatedComponents": ["Orderbook"],
        },
        {
            "name": "Orderbook",
            "description": "Live depth with asks and bids.",
            "keyHooks": ["useOrderbookStream"],
            "variants": [
                {"complexity": "standard", "description": "Two price ladders.", "code": "<Orderbook />"},
            ],
        },
    ],
}

API = {
    "auth": {
        "description": "Requests are signed with an ed25519 Orderly key.",
        "steps": ["Generate a key pair", "Sign timestamp + method + path + body"],
        "example": "sign(message)",
    },
    "rest": {
        "baseUrl": {"mainnet": "https://api.orderly.org", "testnet": "https://testnet-api.orderly.org"},
        "authentication": {"type": "Ed25519 signature", "description": "Signed headers"},
        "endpoints": [
            {
                "path": "/v1/order",
                "method": "POST",
                "summary": "Create order",
                "description": "Place a new limit or market order.",
                "operationId": "create_order",
                "tags": ["orders"],
                "auth": True,
                "rateLimit": "10 requests per 1 second",
                "parameters": [
                    {"name": "symbol", "type": "string", "required": True, "description": "Trading pair"},
                ],
                "response": "{\"success\": true}",
            },
            {
                "path": "/v1/positions",
                "method": "GET",
                "summary": "Get positions",
                "description": "Current positions with unsettled PnL.",
                "operationId": "get_positions",
                "tags": ["positions"],
                "auth": True,
            },
            {
                "path": "/v1/public/info",
                "method": "GET",
                "summary": "Available symbols",
                "description": "Trading rules for every symbol.",
                "operationId": "get_symbols",
                "tags": ["public"],
                "auth": False,
            },
        ],
    },
    "websocket": {
        "baseUrl": {"mainnet": "wss://ws.orderly.org/ws/stream", "testnet": "wss://testnet-ws.orderly.org/ws/stream"},
        "streams": [
            {
                "name": "Orderbook",
                "topic": "orderbook",
                "description": "Real-time depth snapshots.",
                "auth": False,
                "parameters": [
                    {"name": "symbol", "type": "string", "required": True, "description": "Trading pair"},
                ],
            },
            {
                "name": "Position Push",
                "topic": "position",
                "description": "Private updates when positions change.",
                "auth": True,
                "parameters": ["symbol (string): optional filter"],
            },
        ],
    },
}

INDEXER_API = {
    "version": "0.1.0",
    "description": "Read-only trading history.",
    "baseUrl": {"mainnet": "https://indexer.example", "testnet": "https://dev-indexer.example"},
    "categories": [
        {
            "name": "trading_metrics",
            "description": "Daily volume and fees",
            "endpoints": [
                {"path": "/daily_volume", "method": "GET", "summary": "Daily trading volume",
                 "operationId": "daily_volume", "tags": ["trading_metrics"],
                 "parameters": [{"name": "param", "in": "query", "type": "string", "required": True,
                                 "description": "JSON range"}]},
            ],
        },
        {
            "name": "events",
            "description": "Account events with pagination",
            "endpoints": [
                {"path": "/events_v2", "method": "GET", "summary": "List account events",
                 "operationId": "list_events", "tags": ["events"]},
            ],
        },
    ],
    "endpoints": [
        {
            "path": "/daily_volume",
            "method": "GET",
            "summary": "Daily trading volume",
            "description": "Volume per day.",
            "operationId": "daily_volume",
            "tags": ["trading_metrics"],
            "parameters": [
                {"name": "param", "in": "query", "type": "string", "required": True,
                 "description": "JSON range", "example": {"from_day": "2024-01-01"}},
            ],
            "responses": [{"code": 200, "description": "Volume series", "schema": "{\"data\": []}"}],
        },
        {
            "path": "/events_v2",
            "method": "GET",
            "summary": "List account events",
            "description": "Trades, settlements and liquidations.",
            "operationId": "list_events",
            "tags": ["events"],
        },
    ],
    "commonErrors": [{"code": 400, "message": "Bad Request", "description": "Invalid parameters"}],
}

ORDERLY_ONE_API = {
    "version": "1.0.0",
    "title": "Orderly One API",
    "description": "Create and manage your own perpetual DEX.",
    "baseUrl": {"production": "https://api.dex.example", "development": "http://localhost:3001"},
    "authentication": {
        "type": "JWT",
        "description": "Wallet signature authentication.",
        "flow": [
            {"step": 1, "title": "Request Nonce", "description": "POST /auth/nonce", "endpoint": "/auth/nonce"},
            {"step": 2, "title": "Use Token", "description": "Send the JWT", "header": "Authorization: Bearer <token>"},
        ],
        "example": "const token = await login();",
    },
    "categories": [
        {
            "name": "dex",
            "description": "Create and update your DEX",
            "endpoints": [
                {"path": "/dex", "method": "POST", "summary": "Create DEX", "operationId": "create_dex", "tags": ["dex"]},
            ],
        },
    ],
    "endpoints": [
        {
            "path": "/dex",
            "method": "POST",
            "summary": "Create DEX",
            "description": "Creates a DEX configuration.",
            "operationId": "create_dex",
            "tags": ["dex"],
            "requestBody": {"description": "DEX config", "contentType": "multipart/form-data",
                            "schema": "{\"brokerName\": \"string\"}", "required": True},
            "responses": [{"code": "201", "description": "Created", "schema": None}],
        },
    ],
    "commonErrors": [{"code": 401, "message": "Unauthorized", "description": "Missing JWT"}],
}

CONTRACTS = {
    "arbitrum": {
        "chainId": 42161,
        "testnetChainId": 421614,
        "contracts": {
            "Vault": {
                "mainnet": "0x816f722424B49Cf1275cc86DA9840Fbd5a6167e9",
                "description": "Orderly Vault contract for deposits and withdrawals",
            },
            "USDC": {
                "mainnet": "0xaf88d065e77c8cC2239327C5EDb3A432268e5831",
                "testnet": "0x75faf114eafb1BDbe2F0316DF893fd58CE46AA4d",
                "description": "USDC token contract",
            },
        },
    },
    "ethereum": {
        "chainId": 1,
        "testnetChainId": 11155111,
        "contracts": {
            "USDC": {
                "mainnet": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
                "testnet": "0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238",
            },
        },
    },
    "_metadata": {"totalChains": 2},
}

CORPORA = {
    "documentation.json": DOCS,
    "sdk-patterns.json": SDK_PATTERNS,
    "python-sdk-patterns.json": PYTHON_SDK,
    "workflows.json": WORKFLOWS,
    "component-guides.json": COMPONENTS,
    "api.json": API,
    "indexer-api.json": INDEXER_API,
    "orderly-one-api.json": ORDERLY_ONE_API,
    "contracts.json": CONTRACTS,
}


@pytest.fixture
def data_dir(tmp_path):
    """Write the sample corpora and overview page into a temp data directory"""
    for name, payload in CORPORA.items():
        (tmp_path / name).write_text(json.dumps(payload), encoding="utf-8")
    (tmp_path / "resources").mkdir()
    (tmp_path / "resources" / "overview.md").write_text(OVERVIEW_MD, encoding="utf-8")
    return tmp_path


@pytest.fixture
def library(data_dir):
    """A fresh Library over the sample corpora (indexes are not shared between tests)"""
    from guides import Library
    return Library.from_data_dir(data_dir)


@pytest.fixture
def mcp_server():
    """Create a fresh FastMCP server instance for testing"""
    return FastMCP("test-orderly")


@pytest.fixture
def mcp_server_with_tools(mcp_server, library):
    """Create a FastMCP server with default tools and resources registered"""
    from defaults.tools import register_default_tools
    from defaults.resources import register_default_resources
    register_default_tools(mcp_server, library)
    register_default_resources(mcp_server, library)
    return mcp_server
