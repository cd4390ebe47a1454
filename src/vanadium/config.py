"""
Client configuration for vanadium.

Defaults live on ClientConfig as class constants. Any setting can be
overridden per instance or through a VANADIUM_* environment variable;
pydantic-settings reads and validates the environment.
"""

from typing import Any, ClassVar

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__


class ClientConfig(BaseSettings):
    """
    Immutable settings shared by the fetch and load operations.

    Attributes:
        user_agent: Value of the User-Agent request header
        max_redirects: Maximum length of a redirect chain
        read_chunk_size: Bytes requested from the transport per read
        default_url: Locator loaded when the CLI gets no argument
    """

    model_config = SettingsConfigDict(
        env_prefix="VANADIUM_",
        env_ignore_empty=True,
        frozen=True,
    )

    DEFAULT_USER_AGENT: ClassVar[str] = f"vanadium/{__version__}"
    DEFAULT_MAX_REDIRECTS: ClassVar[int] = 10
    DEFAULT_READ_CHUNK_SIZE: ClassVar[int] = 65536  # 64KB chunks
    DEFAULT_URL: ClassVar[str] = "file://README.md"

    user_agent: str = DEFAULT_USER_AGENT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE
    default_url: str = DEFAULT_URL

    @field_validator("max_redirects")
    @classmethod
    def validate_max_redirects(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_redirects must not be negative")
        return v

    @field_validator("read_chunk_size")
    @classmethod
    def validate_read_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("read_chunk_size must be positive")
        return v

    def with_overrides(self, **changes: Any) -> "ClientConfig":
        """
        Return a validated copy with every non-None keyword applied.

        Raises:
            pydantic.ValidationError: If an override is invalid
        """
        settings = self.model_dump()
        settings.update({k: v for k, v in changes.items() if v is not None})
        return type(self)(**settings)
