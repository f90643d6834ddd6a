"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_SEARCH_BASE_URL = "https://www.googleapis.com/customsearch/v1"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Base(BaseModel):
    """Base model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchToolConfig(Base):
    """Google Custom Search configuration."""

    api_key: str = ""
    search_engine_id: str = ""
    base_url: str = DEFAULT_SEARCH_BASE_URL
    timeout: float = 10.0
    default_num_results: int = Field(default=5, ge=1, le=10)


class WebpageToolConfig(Base):
    """Webpage fetch/extraction configuration."""

    timeout: float = 15.0
    max_batch_urls: int = Field(default=5, ge=1)
    user_agent: str = DEFAULT_USER_AGENT
    preview_chars: int = Field(default=500, ge=0)


class ToolsConfig(Base):
    """Tools configuration."""

    search: SearchToolConfig = Field(default_factory=SearchToolConfig)
    webpage: WebpageToolConfig = Field(default_factory=WebpageToolConfig)


class Config(Base):
    """Root configuration for searchkit."""

    tools: ToolsConfig = Field(default_factory=ToolsConfig)
