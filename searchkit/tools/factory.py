"""Tool registry factory."""

from searchkit.config.schema import Config
from searchkit.tools.registry import ToolRegistry
from searchkit.tools.web import ExtractMultipleWebpagesTool, ExtractWebpageTool, GoogleSearchTool
from searchkit.tools.webpage.fetch import FetchClient, HttpFetchClient


def build_tool_registry(
    config: Config | None = None,
    *,
    fetcher: FetchClient | None = None,
) -> ToolRegistry:
    """Build the registry with the search and webpage tools.

    ``fetcher`` replaces the HTTP fetch client for both webpage tools, e.g.
    with a FixtureFetchClient in tests.
    """
    config = config or Config()
    webpage_config = config.tools.webpage
    fetcher = fetcher or HttpFetchClient(
        user_agent=webpage_config.user_agent,
        timeout=webpage_config.timeout,
    )

    registry = ToolRegistry()
    registry.register(GoogleSearchTool(search_config=config.tools.search))
    registry.register(ExtractWebpageTool(webpage_config=webpage_config, fetcher=fetcher))
    registry.register(ExtractMultipleWebpagesTool(webpage_config=webpage_config, fetcher=fetcher))
    return registry
