"""Terminal rendering for pipeline graphs."""

from pipeforge.render.console import GraphRenderer

__all__ = ["GraphRenderer"]
