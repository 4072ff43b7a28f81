"""Application entry point.

The :class:`GitGraph` facade holds a repository registry and forwards
version-control and layout calls to the active repository.
"""

from gitgraph.api.facade import GitGraph

__all__ = ["GitGraph"]
