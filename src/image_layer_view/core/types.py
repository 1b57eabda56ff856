"""Configuration types for the analysis client."""

import os
from dataclasses import dataclass

DEFAULT_URL = "http://localhost:7001"
DEFAULT_TIMEOUT = 10


@dataclass(frozen=True)
class ClientConfig:
    """Analysis backend configuration."""

    url: str
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", self.url.rstrip("/"))

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Read LAYER_VIEW_URL and LAYER_VIEW_TIMEOUT from the environment."""
        return cls(
            url=os.getenv("LAYER_VIEW_URL", DEFAULT_URL),
            timeout=int(os.getenv("LAYER_VIEW_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )
