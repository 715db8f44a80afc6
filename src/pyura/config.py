"""Client configuration for pyura."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from yarl import URL

from pyura._constants import DEFAULT_INSTANT_PATH, DEFAULT_STREAM_PATH, USER_AGENT
from pyura.exceptions import UraConfigError

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def _env_float(value: str | None, name: str) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise UraConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class UraConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL including scheme, without trailing slash
        (e.g. ``"http://ivu.aseag.de"``).
    instant_path : str
        Path of the one-shot instant endpoint.
    stream_path : str
        Path of the long-lived stream endpoint.
    connect_timeout : float or None
        Seconds allowed to establish the connection. ``None`` waits
        indefinitely.
    read_timeout : float or None
        Seconds allowed between two reads on the socket. ``None`` waits
        indefinitely, which is what most stream consumers want.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str
    instant_path: str = DEFAULT_INSTANT_PATH
    stream_path: str = DEFAULT_STREAM_PATH
    connect_timeout: float | None = None
    read_timeout: float | None = None
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        try:
            url = URL(self.base_url)
        except (TypeError, ValueError) as exc:
            raise UraConfigError(f"Invalid base URL {self.base_url!r}: {exc}") from exc
        if url.scheme not in _ALLOWED_SCHEMES or not url.host:
            raise UraConfigError(f"Base URL must be an absolute http(s) URL, got {self.base_url!r}")
        for name in ("connect_timeout", "read_timeout"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise UraConfigError(f"{name} must be positive, got {value}")

    @property
    def instant_url(self) -> URL:
        """Absolute URL of the instant endpoint."""
        return URL(f"{self.base_url.rstrip('/')}{self.instant_path}")

    @property
    def stream_url(self) -> URL:
        """Absolute URL of the stream endpoint."""
        return URL(f"{self.base_url.rstrip('/')}{self.stream_path}")

    @classmethod
    def from_env(cls, **overrides: Any) -> UraConfig:
        """Create configuration from environment variables.

        Reads ``URA_BASE_URL`` and the optional ``URA_INSTANT_PATH``,
        ``URA_STREAM_PATH``, ``URA_USER_AGENT``, ``URA_CONNECT_TIMEOUT``
        and ``URA_READ_TIMEOUT``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "URA_BASE_URL": "base_url",
            "URA_INSTANT_PATH": "instant_path",
            "URA_STREAM_PATH": "stream_path",
            "URA_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # timeouts are numeric, handle separately
        if "connect_timeout" not in overrides:
            config_kwargs["connect_timeout"] = _env_float(env.get("URA_CONNECT_TIMEOUT"), "URA_CONNECT_TIMEOUT")
        if "read_timeout" not in overrides:
            config_kwargs["read_timeout"] = _env_float(env.get("URA_READ_TIMEOUT"), "URA_READ_TIMEOUT")

        config_kwargs.update(overrides)

        if "base_url" not in config_kwargs:
            raise UraConfigError("URA_BASE_URL is not set and no base_url was given")

        return cls(**config_kwargs)
