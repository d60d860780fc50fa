"""
Runtime settings for the host-integration layer.
Values come from explicit arguments first, then environment variables, then defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_DEFAULT_JSON_PATH = "SSE_MERGE_DEFAULT_JSON_PATH"
ENV_CONFIG_DIR = "SSE_MERGE_CONFIG_DIR"
ENV_HTTP_DEBUG = "SSE_MERGE_HTTP_DEBUG"
ENV_HTTP_TIMEOUT = "SSE_MERGE_HTTP_TIMEOUT"

DEFAULT_JSON_PATH = "$.response.candidates[0].content.parts[0].text"
DEFAULT_CONFIG_DIR = Path("~/.config/sse-merge")
DEFAULT_TIMEOUT_S = 120.0
PREFERENCES_FILENAME = "preferences.json"

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Configuration container for the CLI and its collaborators.
    Holds the fallback JSONPath, where preferences live and HTTP options.
    """

    default_json_path: str = DEFAULT_JSON_PATH
    config_dir: Path = DEFAULT_CONFIG_DIR
    http_debug: bool = False
    timeout_s: float = DEFAULT_TIMEOUT_S

    @property
    def preferences_path(self) -> Path:
        return self.config_dir.expanduser() / PREFERENCES_FILENAME

    @staticmethod
    def from_env(
        *,
        default_json_path: str | None = None,
        config_dir: str | Path | None = None,
    ) -> Settings:
        """
        Build Settings from explicit values or environment variables.

        Args:
            default_json_path: Overrides SSE_MERGE_DEFAULT_JSON_PATH.
            config_dir: Overrides SSE_MERGE_CONFIG_DIR.

        Returns:
            An initialized Settings instance.

        Raises:
            ValueError: If SSE_MERGE_HTTP_TIMEOUT is not a positive number.
        """
        path = default_json_path or os.getenv(ENV_DEFAULT_JSON_PATH) or DEFAULT_JSON_PATH
        directory = config_dir or os.getenv(ENV_CONFIG_DIR) or DEFAULT_CONFIG_DIR

        raw_timeout = os.getenv(ENV_HTTP_TIMEOUT)
        timeout_s = DEFAULT_TIMEOUT_S
        if raw_timeout:
            try:
                timeout_s = float(raw_timeout)
            except ValueError:
                timeout_s = -1.0
            if timeout_s <= 0:
                raise ValueError(
                    f"Invalid {ENV_HTTP_TIMEOUT}={raw_timeout!r}. Define a positive number of seconds"
                )

        return Settings(
            default_json_path=path,
            config_dir=Path(directory),
            http_debug=env_flag(ENV_HTTP_DEBUG),
            timeout_s=timeout_s,
        )
