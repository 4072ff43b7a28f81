"""Error taxonomy for repository and registry operations.

Every error here is recoverable.  An operation that raises one of them has
left the repository or registry exactly as it found it.
"""

from __future__ import annotations


class GitGraphError(Exception):
    """Base class for all gitgraph errors."""


class NotFoundError(GitGraphError, LookupError):
    """Raised when a branch, commit, or repository id is unknown."""


class InvalidStateError(GitGraphError):
    """Raised when an operation needs a branch tip that does not exist yet."""


class InvariantViolationError(GitGraphError):
    """Raised when an operation would break a structural invariant.

    Examples: creating a branch name that already exists, deleting the last
    remaining repository, adding a commit whose parent is unknown.
    """
