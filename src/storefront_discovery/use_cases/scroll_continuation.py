from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_LEAD_DISTANCE = 200.0


class ScrollContinuation:
    """
    Edge-triggered "load more" signal driven by a sentinel at the end of the list.

    A signal is emitted only on the transition from not intersecting to
    intersecting. Repeated observations while the sentinel stays in view
    emit nothing. The consumer still decides whether a signal is acted on.
    """

    def __init__(
        self,
        on_load_more: Callable[[], object],
        lead_distance: float = DEFAULT_LEAD_DISTANCE,
    ) -> None:
        """
        Args:
            on_load_more: Called once per entering transition
            lead_distance: Pre-fetch margin; the sentinel counts as visible
                this far below the viewport's bottom edge
        """
        if lead_distance < 0:
            raise ValueError("lead_distance must be >= 0")
        self._on_load_more = on_load_more
        self.lead_distance = lead_distance
        self._intersecting = False
        self._attached = True
        self.signals_emitted = 0

    @property
    def intersecting(self) -> bool:
        return self._intersecting

    def observe(self, is_intersecting: bool) -> bool:
        """
        Record one intersection observation.

        Returns:
            True if a load-more signal was emitted
        """
        entered = is_intersecting and not self._intersecting
        self._intersecting = is_intersecting

        if not entered or not self._attached:
            return False

        self.signals_emitted += 1
        self._on_load_more()
        return True

    def observe_geometry(self, sentinel_top: float, viewport_bottom: float) -> bool:
        """Observe using layout positions measured from the top of the document."""
        return self.observe(sentinel_top <= viewport_bottom + self.lead_distance)

    def rearm(self) -> None:
        """Forget the last observation so a still-visible sentinel fires again."""
        self._intersecting = False

    def attach(self) -> None:
        self._attached = True

    def detach(self) -> None:
        self._attached = False
