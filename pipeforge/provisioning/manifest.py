"""Manifest provisioner — writes a pipeline graph to a canonical JSON file.

Layout: {output_dir}/{project_name}.pipeline.json

The manifest carries the graph itself, its fingerprint, and each execution
identity rendered as IAM policy and trust documents.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pipeforge.core.hasher import canonical_json_bytes, graph_fingerprint
from pipeforge.models.graph import PipelineGraph

logger = logging.getLogger(__name__)

MANIFEST_SCHEMA_VERSION = "1"


def render_manifest(graph: PipelineGraph) -> dict[str, Any]:
    """Return the manifest document for ``graph``."""
    return {
        "schema_version": MANIFEST_SCHEMA_VERSION,
        "fingerprint": graph_fingerprint(graph),
        "pipeline": graph.model_dump(mode="json"),
        "policies": {
            identity.name: {
                "assume_role_policy": identity.trust_policy_document(),
                "policy": identity.policy_document(),
            }
            for identity in graph.identities
        },
    }


class ManifestProvisioner:
    """Writes pipeline manifests to a local directory.

    Parameters
    ----------
    output_dir:
        Directory for manifest files.  Defaults to ``.pipeforge/out``.
    """

    def __init__(self, output_dir: Path | str | None = None) -> None:
        self._base = Path(output_dir) if output_dir else Path(".pipeforge/out")

    @property
    def output_dir(self) -> Path:
        return self._base

    def manifest_path(self, graph: PipelineGraph) -> Path:
        return self._base / f"{graph.project_name}.pipeline.json"

    def provision(self, graph: PipelineGraph) -> str:
        """Write the manifest for ``graph`` and return its path."""
        self._base.mkdir(parents=True, exist_ok=True)
        target = self.manifest_path(graph)
        target.write_bytes(canonical_json_bytes(render_manifest(graph)))
        logger.info("Wrote pipeline manifest for %s to %s", graph.project_name, target)
        return str(target)

    def read_manifest(self, path: Path | str) -> dict[str, Any]:
        """Read and parse a manifest written by :meth:`provision`."""
        return json.loads(Path(path).read_bytes())
