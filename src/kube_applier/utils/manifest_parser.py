"""Load JSON and YAML manifests into resources or generic documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Union

import yaml

from kube_applier.errors import ManifestParseError, UnknownFileTypeError
from kube_applier.models import ResourceKind
from kube_applier.models.resource import Resource

JsonSource = Union[str, bytes, bytearray, Path, IO[str], IO[bytes]]

YAML_EXTENSIONS = {"yaml", "yml"}
JSON_EXTENSIONS = {"json"}


def parse_document(doc: Any) -> Resource | dict[str, Any]:
    """Type a parsed document.

    Documents of a supported kind become a :class:`Resource`; anything else
    that is a mapping (lists, templates, unknown kinds) is returned as is.
    """
    if not isinstance(doc, dict):
        raise ManifestParseError(f"Expected a JSON object, got {type(doc).__name__}")
    if ResourceKind.from_kind(doc.get("kind")) is None:
        return doc
    return Resource.from_dict(doc)


def load_json(source: JsonSource) -> Resource | dict[str, Any]:
    """Parse JSON from text, bytes, a stream or a file path."""
    if isinstance(source, Path):
        text: str | bytes | bytearray = source.read_bytes()
    elif isinstance(source, (str, bytes, bytearray)):
        text = source
    else:
        text = source.read()
    try:
        doc = json.loads(text)
    except ValueError as e:
        raise ManifestParseError(f"Invalid JSON: {e}") from e
    return parse_document(doc)


def yaml_to_json(text: str | bytes | IO[str]) -> str:
    """Transcode a YAML stream to JSON.

    Several documents in one stream are wrapped in a ``List`` document.
    """
    try:
        docs = [d for d in yaml.safe_load_all(text) if d is not None]
    except yaml.YAMLError as e:
        raise ManifestParseError(f"Invalid YAML: {e}") from e
    if not docs:
        raise ManifestParseError("YAML input contains no documents")
    payload = docs[0] if len(docs) == 1 else {"apiVersion": "v1", "kind": "List", "items": docs}
    # YAML timestamps and dates have no JSON form
    return json.dumps(payload, default=str)


def load_yaml(source: str | bytes | Path | IO[str]) -> Resource | dict[str, Any]:
    if isinstance(source, Path):
        with source.open("r", encoding="utf-8") as fh:
            return load_json(yaml_to_json(fh))
    return load_json(yaml_to_json(source))


def file_extension(path: Path) -> str:
    return path.suffix.lstrip(".").lower()


def load_file(path: str | Path) -> Resource | dict[str, Any]:
    """Load a manifest file, choosing the format by its extension."""
    path = Path(path)
    ext = file_extension(path)
    if ext in YAML_EXTENSIONS:
        return load_yaml(path)
    if ext in JSON_EXTENSIONS:
        return load_json(path)
    raise UnknownFileTypeError(ext)
