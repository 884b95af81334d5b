# =============================================================================
# core/config.py  —  Environment-driven settings
# =============================================================================
#
# Every knob the adapter has is read from the environment or a .env file
# through pydantic-settings.  The result is a frozen Settings object that is
# passed explicitly to whatever needs it; tests build their own.
#
# THE ONE REQUIRED VALUE:
#   INKEEP_API_KEY.  Without it the server still starts and still lists its
#   tools, but every tool call returns an empty result.
# =============================================================================

from typing import Mapping, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://api.inkeep.com/v1"
DEFAULT_ANALYTICS_BASE_URL = "https://api.analytics.inkeep.com"


class Settings(BaseSettings):
    """Runtime configuration for the MCP adapter."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    api_key: Optional[str] = Field(default=None, validation_alias="INKEEP_API_KEY")
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, validation_alias="INKEEP_API_BASE_URL")

    # --- Product identity (drives tool names and descriptions) ---
    product_slug: str = Field(default="inkeep", validation_alias="INKEEP_PRODUCT_SLUG")
    product_name: str = Field(default="Inkeep", validation_alias="INKEEP_PRODUCT_NAME")

    # --- Upstream models ---
    qa_model: str = Field(default="inkeep-qa-expert", validation_alias="INKEEP_QA_MODEL")
    rag_model: str = Field(default="inkeep-rag", validation_alias="INKEEP_RAG_MODEL")

    # --- Analytics sink ---
    analytics_base_url: str = Field(
        default=DEFAULT_ANALYTICS_BASE_URL, validation_alias="INKEEP_ANALYTICS_BASE_URL"
    )
    analytics_enabled: bool = Field(default=True, validation_alias="INKEEP_ANALYTICS_ENABLED")

    # --- MCP transport ---
    transport: str = Field(default="stdio", validation_alias="MCP_TRANSPORT")  # "stdio" or "http"
    host: str = Field(default="127.0.0.1", validation_alias="MCP_HOST")
    port: int = Field(default=8000, validation_alias="MCP_PORT")
    path: str = Field(default="/mcp", validation_alias="MCP_PATH")
    max_duration: int = Field(default=300, validation_alias="MCP_MAX_DURATION")  # seconds
    verbose_logs: bool = Field(default=True, validation_alias="MCP_VERBOSE_LOGS")

    # --- Example assistant ---
    agent_model: str = Field(default="openrouter/openai/gpt-4o", validation_alias="AGENT_MODEL")

    @field_validator("transport")
    @classmethod
    def _lower_transport(cls, value: str) -> str:
        return value.lower()

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    @property
    def qa_tool_name(self) -> str:
        return f"ask-question-about-{self.product_slug}"

    @property
    def rag_tool_name(self) -> str:
        return f"search-{self.product_slug}-docs"


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the process environment, or from ``env`` alone.

    Raises:
        pydantic.ValidationError: If a value has the wrong type
            (e.g. a non-integer MCP_PORT).
    """
    if env is None:
        return Settings()
    # model_validate skips the env/.env sources, so only ``env`` is read
    values = {key: value for key, value in env.items() if value != ""}
    return Settings.model_validate(values)
