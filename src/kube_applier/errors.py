"""Exception taxonomy for kube-applier."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kube_applier.models.outcome import ApplyReport


class KubeApplierError(Exception):
    """Base class for all kube-applier errors."""


class UnknownFileTypeError(KubeApplierError):
    """The input file extension is neither YAML nor JSON."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unknown file type {extension!r}")


class ManifestParseError(KubeApplierError):
    """A document could not be parsed into a manifest."""


class UnknownEntityError(KubeApplierError):
    """An object handed to the router is not a supported resource."""

    def __init__(self, entity: object):
        self.entity = entity
        super().__init__(f"Unknown entity type {entity!r}")


class ApplyError(KubeApplierError):
    """A cluster mutation failed and the policy asked to abort the apply.

    ``report`` holds the results recorded before the abort.
    """

    def __init__(self, message: str, report: ApplyReport | None = None):
        self.report = report
        super().__init__(message)
