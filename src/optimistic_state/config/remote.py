"""Remote confirmation endpoint configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, cast

from .env import optional_float_env, require_env_var
from .errors import InvalidConfigurationValueError
from .http_resilience import RateLimit, ResilienceConfig

type ConfirmMethod = Literal["POST", "PUT", "PATCH"]

DEFAULT_CONFIRM_METHOD: ConfirmMethod = "PUT"
DEFAULT_TIMEOUT_SECONDS = 10.0
_ALLOWED_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True, slots=True)
class RemoteConfig:
    """Where and how speculative states are confirmed."""

    endpoint: str
    method: ConfirmMethod
    resilience: ResilienceConfig


def get_remote_config(*, resilience: ResilienceConfig | None = None) -> RemoteConfig:
    endpoint = require_env_var("OPTIMISTIC_STATE_ENDPOINT").strip()
    method = (os.getenv("OPTIMISTIC_STATE_METHOD") or DEFAULT_CONFIRM_METHOD).strip().upper()
    if method not in _ALLOWED_METHODS:
        allowed = ", ".join(sorted(_ALLOWED_METHODS))
        raise InvalidConfigurationValueError(
            "OPTIMISTIC_STATE_METHOD", method, f"one of {allowed}"
        )
    timeout = optional_float_env("OPTIMISTIC_STATE_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)
    return RemoteConfig(
        endpoint=endpoint,
        method=cast(ConfirmMethod, method),
        resilience=resilience
        or ResilienceConfig(
            name="remote-confirmation",
            timeout_seconds=timeout,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        ),
    )
