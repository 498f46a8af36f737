from mcp.server.fastmcp import FastMCP

from guides import Library
from guides.resources import PLAIN, ResourceInfo


def register_default_resources(mcp: FastMCP, library: Library) -> None:
    """
    Register every orderly:// resource twice: the bare URI (overview page) and
    a template that captures a trailing query string (``?search=..&page=..``).

    Catch-all templates go last so any other orderly:// URI gets the reader's
    "Resource not found" answer instead of a protocol error.
    """
    reader = library.resources

    def _bind(info: ResourceInfo):
        @mcp.resource(info.uri, name=info.name, description=info.description, mime_type=info.mime_type)
        def read_resource() -> str:
            return reader.read(info.uri).text

        @mcp.resource(info.uri + "{query}", name=f"{info.name} (search)",
                      description=f"{info.description}. Append ?search=<text>&page=<n>&limit=<n>",
                      mime_type=info.mime_type)
        def search_resource(query: str) -> str:
            return reader.read(info.uri + query).text

    for info in reader.list_resources():
        _bind(info)

    @mcp.resource("orderly://{path}", name="Unknown resource",
                  description="Any other orderly:// URI", mime_type=PLAIN)
    def unknown_resource(path: str) -> str:
        return reader.read(f"orderly://{path}").text

    @mcp.resource("orderly://{section}/{name}", name="Unknown section resource",
                  description="Any other orderly://<section>/<name> URI", mime_type=PLAIN)
    def unknown_section_resource(section: str, name: str) -> str:
        return reader.read(f"orderly://{section}/{name}").text
