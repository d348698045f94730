from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from .suffix_list import DEFAULT_USER_AGENT, PUBLIC_SUFFIX_LIST_URL

ENV_PREFIX = "HOSTNAME_VALIDATOR_"


def _positive_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


@dataclass(frozen=True)
class ValidatorSettings:
    suffix_list_url: str = PUBLIC_SUFFIX_LIST_URL
    timeout_s: float = 30.0
    refresh_interval_s: float = 24 * 60 * 60
    user_agent: str | None = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ValidatorSettings":
        """Defaults overridden by HOSTNAME_VALIDATOR_* environment variables."""
        env = os.environ if environ is None else environ
        settings = cls()
        url = env.get(ENV_PREFIX + "SUFFIX_LIST_URL", "").strip()
        if url:
            settings = replace(settings, suffix_list_url=url)
        for field in ("timeout_s", "refresh_interval_s"):
            name = ENV_PREFIX + field.upper()
            raw = env.get(name, "").strip()
            if raw:
                settings = replace(settings, **{field: _positive_float(name, raw)})
        ua = env.get(ENV_PREFIX + "USER_AGENT")
        if ua is not None:
            settings = replace(settings, user_agent=ua.strip() or None)
        return settings
