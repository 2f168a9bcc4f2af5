"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_float_env, require_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationValueError,
    MissingConfigurationError,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .remote import DEFAULT_CONFIRM_METHOD, RemoteConfig, get_remote_config

__all__ = [
    "DEFAULT_CONFIRM_METHOD",
    "ConfigurationError",
    "InvalidConfigurationValueError",
    "MissingConfigurationError",
    "RateLimit",
    "RemoteConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "get_remote_config",
    "optional_float_env",
    "require_env_var",
    "require_env_vars",
]
