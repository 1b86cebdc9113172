"""Package configuration."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Package settings."""

    # Buffering
    default_wait_ms: int = 200
    max_text_length: int = 4000

    # HTTP (None disables the client-side timeout)
    http_timeout: Optional[float] = None

    class Config:
        env_prefix = "MATTERMOST_STREAM_"


settings = Settings()
