from __future__ import annotations
import sys, logging

from mcp.server.fastmcp import FastMCP

import orderly_data as od
from guides import Library
from defaults.tools import register_default_tools
from defaults.resources import register_default_resources

# Log to STDERR only (stdio transport cannot receive stdout noise)
logging.basicConfig(stream=sys.stderr, level=getattr(logging, od.LOG_LEVEL, logging.INFO))
log = logging.getLogger("orderly-mcp")

TRANSPORTS = ("stdio", "streamable-http")


def build_server(library: Library | None = None) -> FastMCP:
    """Create the FastMCP server with every tool and resource registered."""
    lib = library if library is not None else Library.from_data_dir().preload()
    mcp = FastMCP("orderly", host=od.HOST, port=od.PORT)
    register_default_tools(mcp, lib)
    register_default_resources(mcp, lib)
    log.info("Orderly MCP server ready (%d tools, data from %s)", len(mcp._default_tools_registry), lib.data_dir)
    return mcp


def main() -> None:
    transport = od.TRANSPORT
    if transport not in TRANSPORTS:
        raise SystemExit(f"Unsupported ORDERLY_MCP_TRANSPORT {transport!r}; expected one of {', '.join(TRANSPORTS)}")
    try:
        mcp = build_server()
    except od.CorpusError as e:
        log.error("Cannot start: %s", e)
        raise SystemExit(1) from e
    log.info("Starting Orderly MCP server over %s", transport)
    mcp.run(transport=transport)


if __name__ == "__main__":
    main()
