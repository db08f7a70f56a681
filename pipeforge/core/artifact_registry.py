"""Artifact registry — tracks named artifacts and who produces and consumes them.

The registry is keyed by artifact name.  Producer-before-consumer ordering is
guaranteed by stage order, so consumption is recorded for traceability only;
:func:`pipeforge.core.topology.verify_artifact_flow` checks the finished graph.
"""

from __future__ import annotations

import logging

from pipeforge.core.errors import DuplicateArtifactError
from pipeforge.models.artifacts import Artifact, ArtifactRef

logger = logging.getLogger(__name__)


class ArtifactRegistry:
    """Mutable, build-time registry of pipeline artifacts.

    Insertion order is preserved so that :meth:`snapshot` is deterministic.
    """

    def __init__(self) -> None:
        self._producers: dict[str, str | None] = {}
        self._consumers: dict[str, list[str]] = {}

    def declare(self, name: str) -> ArtifactRef:
        """Register a new artifact and return a reference to it.

        Raises
        ------
        DuplicateArtifactError
            If an artifact with this name was already declared.
        """
        if name in self._producers:
            raise DuplicateArtifactError(name)
        self._producers[name] = None
        self._consumers[name] = []
        logger.debug("Declared artifact %s", name)
        return ArtifactRef(name=name)

    def record_production(self, artifact: ArtifactRef, action_name: str) -> None:
        """Record ``action_name`` as the producer of ``artifact``.

        An artifact has exactly one producer; a second producer means two
        actions share an output name.
        """
        self._require(artifact.name)
        current = self._producers[artifact.name]
        if current is not None and current != action_name:
            raise DuplicateArtifactError(artifact.name)
        self._producers[artifact.name] = action_name

    def record_consumption(self, artifact: ArtifactRef, action_name: str) -> None:
        """Append ``action_name`` to the artifact's consumer list."""
        self._require(artifact.name)
        self._consumers[artifact.name].append(action_name)
        logger.debug("Artifact %s consumed by %s", artifact.name, action_name)

    # ------------------------------------------------------------------
    # Query methods
    # ------------------------------------------------------------------

    def get(self, name: str) -> Artifact:
        self._require(name)
        return Artifact(
            name=name,
            producer=self._producers[name],
            consumers=tuple(self._consumers[name]),
        )

    @property
    def names(self) -> list[str]:
        return list(self._producers)

    def snapshot(self) -> tuple[Artifact, ...]:
        """Return frozen records for every artifact, in declaration order."""
        return tuple(self.get(name) for name in self._producers)

    def __contains__(self, name: object) -> bool:
        return name in self._producers

    def __len__(self) -> int:
        return len(self._producers)

    def _require(self, name: str) -> None:
        if name not in self._producers:
            raise KeyError(f"Artifact {name!r} has not been declared")
