"""Data models for kube-applier."""

from __future__ import annotations

import enum


class ResourceKind(enum.Enum):
    POD = "Pod"
    REPLICATION_CONTROLLER = "ReplicationController"
    SERVICE = "Service"
    BUILD_CONFIG = "BuildConfig"
    DEPLOYMENT_CONFIG = "DeploymentConfig"
    IMAGE_REPOSITORY = "ImageStream"

    @classmethod
    def from_kind(cls, kind: str | None) -> ResourceKind | None:
        if not kind:
            return None
        if kind == "ImageRepository":
            return cls.IMAGE_REPOSITORY
        for member in cls:
            if member.value == kind:
                return member
        return None


class ApplyAction(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    RECREATED = "recreated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"
    IGNORED = "ignored"
    TEMPLATE = "template"


class ErrorAction(enum.Enum):
    CONTINUE = "continue"
    ABORT = "abort"
