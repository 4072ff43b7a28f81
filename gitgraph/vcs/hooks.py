"""Change notification — synchronous listener registry.

Repositories and the registry each own a :class:`ListenerSet`.  A successful
mutation calls :meth:`ListenerSet.notify` once, after the mutation has been
applied, so a listener can always read the new state.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


@dataclass(frozen=True)
class ListenerHandle:
    """A single registration.  The same callback may be registered twice."""

    token: int
    callback: Listener


class ListenerSet:
    """Ordered collection of zero-argument callbacks.

    Subscribing and unsubscribing are safe at any time, including from
    inside a callback: :meth:`notify` iterates over a copy taken before the
    first call, and skips handles removed during the broadcast.
    """

    def __init__(self) -> None:
        self._handles: list[ListenerHandle] = []
        self._tokens = itertools.count()

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register *callback* and return a function that unregisters it.

        The returned function is idempotent.
        """
        handle = ListenerHandle(next(self._tokens), callback)
        self._handles.append(handle)

        def unsubscribe() -> None:
            self.remove(handle)

        return unsubscribe

    def remove(self, handle: ListenerHandle) -> bool:
        """Remove a registration.  Returns *True* if it was present."""
        try:
            self._handles.remove(handle)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._handles.clear()

    def __len__(self) -> int:
        return len(self._handles)

    def notify(self) -> list[Exception]:
        """Invoke every registered callback in registration order.

        A failing callback is logged and does not stop the broadcast or
        propagate to the caller; the mutation that triggered it stands.
        Returns the exceptions raised, in call order.
        """
        errors: list[Exception] = []
        for handle in list(self._handles):
            if handle not in self._handles:
                continue
            try:
                handle.callback()
            except Exception as exc:
                logger.warning(
                    "Change listener %r failed: %s", handle.callback, exc, exc_info=True,
                )
                errors.append(exc)
        return errors
