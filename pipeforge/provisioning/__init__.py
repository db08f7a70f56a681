"""Provisioning collaborators — consumers of finished pipeline graphs.

Pipeforge only declares topology; turning a graph into live infrastructure
is the job of a :class:`Provisioner`.  The bundled
:class:`ManifestProvisioner` writes a deterministic JSON manifest for an
external deployment tool to pick up.
"""

from pipeforge.provisioning.base import Provisioner
from pipeforge.provisioning.manifest import ManifestProvisioner, render_manifest

__all__ = ["Provisioner", "ManifestProvisioner", "render_manifest"]
