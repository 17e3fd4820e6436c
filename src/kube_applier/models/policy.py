"""Apply policy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ApplyPolicy:
    allow_create: bool = True
    update_via_delete_and_create: bool = False
    throw_on_error: bool = False
    namespace: str = ""
