"""Canonical hashing helpers for graph manifests and fingerprints."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from pipeforge.models.graph import PipelineGraph


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact.

    - sorted keys
    - no whitespace separators (",", ":")
    - ensure_ascii=True
    - UTF-8 encoding
    """
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def graph_fingerprint(graph: PipelineGraph) -> str:
    """Content-address a pipeline graph.

    Returns "sha256:<hex>".  Two builds from the same configuration and
    context always share a fingerprint.
    """
    return f"sha256:{sha256_hex(canonical_json_bytes(graph.model_dump(mode='json')))}"
