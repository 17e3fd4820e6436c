"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from kube_applier.models.policy import ApplyPolicy

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


@dataclass
class Settings:
    default_namespace: str = field(default_factory=lambda: os.environ.get("KAPPLY_NAMESPACE", ""))
    allow_create: bool = field(default_factory=lambda: _env_flag("KAPPLY_ALLOW_CREATE", True))
    update_via_delete_and_create: bool = field(
        default_factory=lambda: _env_flag("KAPPLY_UPDATE_VIA_DELETE_AND_CREATE", False),
    )
    throw_on_error: bool = field(default_factory=lambda: _env_flag("KAPPLY_THROW_ON_ERROR", False))
    request_timeout: int = field(default_factory=lambda: _env_int("KAPPLY_REQUEST_TIMEOUT", 30))
    default_output: str = field(default_factory=lambda: os.environ.get("KAPPLY_DEFAULT_OUTPUT", "table"))

    def default_policy(self) -> ApplyPolicy:
        """Build the initial apply policy from these settings."""
        return ApplyPolicy(
            allow_create=self.allow_create,
            update_via_delete_and_create=self.update_via_delete_and_create,
            throw_on_error=self.throw_on_error,
            namespace=self.default_namespace,
        )


# Global singleton
settings = Settings()
