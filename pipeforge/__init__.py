"""Pipeforge: delivery-pipeline topology and permission synthesis.

Given a declarative project description, builds a four-stage delivery
pipeline (Source -> CI -> ModelPipeline -> Deploy) as an immutable graph of
stages, actions and artifacts, and synthesizes least-privilege execution
identities for the stages that need elevated access.
"""

__version__ = "0.1.0"
__description__ = "Delivery-pipeline topology and least-privilege policy synthesis"

from pipeforge.core.graph_builder import PipelineBuilder, build_pipeline
from pipeforge.models.config import DeploymentContext, PipelineConfig
from pipeforge.models.graph import PipelineGraph

__all__ = [
    "PipelineBuilder",
    "build_pipeline",
    "PipelineConfig",
    "DeploymentContext",
    "PipelineGraph",
    "__version__",
]
