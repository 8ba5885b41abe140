"""Configuration management for td-client.

Settings come from constructor arguments, `TD_CLIENT_*` environment variables,
or a `.env` file in the working directory, in that order of precedence.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from td_client import __version__


class TDClientConfig(BaseSettings):
    """Connection and logging settings for the API client."""

    model_config = SettingsConfigDict(
        env_prefix="TD_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = Field(default="", description="API key sent with every request")
    endpoint: str = Field(default="api.treasuredata.com", description="API host name")
    use_ssl: bool = Field(default=True, description="Use https for API requests")
    user_agent: str = Field(
        default=f"td-client-python/{__version__}", description="User-Agent header value"
    )

    # Default httpx timeout is 5 seconds which is too short for imports and tails
    connect_timeout: float = Field(default=10.0, gt=0)
    read_timeout: float = Field(default=60.0, gt=0)
    write_timeout: float = Field(default=60.0, gt=0)
    pool_timeout: float = Field(default=30.0, gt=0)

    log_level: str = Field(default="INFO", description="Log level used by setup_logging")

    @property
    def base_url(self) -> str:
        """Base URL for all API requests."""
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.endpoint}"


@lru_cache(maxsize=1)
def get_config() -> TDClientConfig:
    """Return the process-wide configuration, loading it on first use."""
    return TDClientConfig()
