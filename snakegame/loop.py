from __future__ import annotations

from typing import Optional


class TickScheduler:
    """Single pending-tick slot driven by the host's frame loop.

    The host calls :meth:`poll` once per frame. At most one tick is ever
    armed; :meth:`arm` cancels whatever was pending before setting the new
    deadline, so rapid pause/resume cannot start a second tick chain. The
    deadline is measured from the moment the tick ran, so a slow frame
    delays the next tick instead of queueing extra ones.
    """

    def __init__(self) -> None:
        self._due: Optional[int] = None

    @property
    def armed(self) -> bool:
        return self._due is not None

    @property
    def due(self) -> Optional[int]:
        return self._due

    def arm(self, now_ms: int, delay_ms: int) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        self.cancel()
        self._due = now_ms + delay_ms

    def cancel(self) -> None:
        self._due = None

    def poll(self, now_ms: int) -> bool:
        """Consume the pending tick if its deadline has passed."""
        if self._due is None or now_ms < self._due:
            return False
        self._due = None
        return True
