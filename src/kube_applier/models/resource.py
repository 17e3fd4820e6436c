"""Typed resource value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from kube_applier.errors import ManifestParseError, UnknownEntityError
from kube_applier.models import ResourceKind


@dataclass(frozen=True)
class Resource:
    """A single named manifest of a supported kind.

    ``raw`` is the complete manifest as parsed. It is compared against the
    live object and sent to the cluster unchanged.
    """

    kind: ResourceKind
    name: str
    namespace: str = ""
    api_version: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def label(self) -> str:
        ns = self.namespace or "-"
        return f"{self.kind.value} {ns}/{self.name}"

    @classmethod
    def from_dict(cls, doc: Any) -> Resource:
        if not isinstance(doc, dict):
            raise ManifestParseError(f"Expected a mapping, got {type(doc).__name__}")
        kind = ResourceKind.from_kind(doc.get("kind"))
        if kind is None:
            raise UnknownEntityError(doc.get("kind"))
        metadata = doc.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ManifestParseError(f"metadata of {doc.get('kind')} is not a mapping")
        name = metadata.get("name")
        if not name or not isinstance(name, str):
            raise ManifestParseError(f"{doc.get('kind')} has no metadata.name")
        return cls(
            kind=kind,
            name=name,
            namespace=metadata.get("namespace") or "",
            api_version=doc.get("apiVersion", ""),
            raw=doc,
        )


@dataclass(frozen=True)
class ResourceBundle:
    """An ordered collection of already-typed resources."""

    resources: tuple[Resource, ...] = ()

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)
