"""MCP helpers – static tool manifest and the hosted-server config URL.

Pure functions: no network, no credentials.
"""

from __future__ import annotations

from urllib.parse import urlencode

from exa_cli.domain.entities import McpTool
from exa_cli.domain.errors import MissingField

MCP_BASE = "https://mcp.exa.ai/mcp"

TOOL_MANIFEST: tuple[McpTool, ...] = (
    McpTool("web_search_exa", "Real-time web search with content extraction"),
    McpTool("web_search_advanced_exa", "Web search with domain, date and category filters"),
    McpTool("get_code_context_exa", "Code snippets and docs from GitHub, Stack Overflow and API references"),
    McpTool("deep_search_exa", "Query expansion with summarized results across sources"),
    McpTool("crawling_exa", "Fetch the full content of a known URL"),
    McpTool("company_research_exa", "Research a company from its website and news coverage"),
    McpTool("people_search_exa", "Find people and professional profiles"),
    McpTool("deep_researcher_start", "Start an asynchronous deep research task"),
    McpTool("deep_researcher_check", "Check status and fetch the report of a research task"),
)


def tool_manifest() -> tuple[McpTool, ...]:
    return TOOL_MANIFEST


def build_url(tools: str | None = None) -> str:
    """Return the MCP server URL, optionally restricted to a set of tools.

    ``None`` → bare URL, ``"all"`` → every manifest tool, otherwise a
    comma-separated list (entries trimmed, blanks dropped).
    """
    if tools is None:
        return MCP_BASE

    if tools.strip() == "all":
        names = [t.name for t in TOOL_MANIFEST]
    else:
        names = [n.strip() for n in tools.split(",") if n.strip()]
        if not names:
            raise MissingField("tools")

    return f"{MCP_BASE}?{urlencode({'tools': ','.join(names)}, safe=',')}"
