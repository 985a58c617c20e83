"""Pooled connectivity lines, mirrored from the engine output every tick."""

import logging
from dataclasses import dataclass
from typing import Sequence

from subnetmaze.models import Point
from subnetmaze.reachability import LinePair

_LOGGER = logging.getLogger(__name__)

LINE_WIDTH = 0.05


@dataclass
class LineSlot:
    """a reusable line segment, endpoints are only meaningful while enabled"""

    name: str
    width: float = LINE_WIDTH
    enabled: bool = False
    start: Point | None = None
    end: Point | None = None
    target: int | None = None

    def disable(self):
        self.enabled = False
        self.start = None
        self.end = None
        self.target = None


class LinePresenter:
    """keeps a pool of line slots in sync with the connectivity pairs.

    Slot i always shows pair i. The pool grows when more pairs than ever
    before are presented and never shrinks.
    """

    def __init__(self):
        self.pool: list[LineSlot] = []

    def __len__(self) -> int:
        return len(self.pool)

    def clear(self):
        for slot in self.pool:
            if slot.enabled:
                slot.disable()

    def _slot(self, index: int) -> LineSlot:
        while index >= len(self.pool):
            self.pool.append(LineSlot(name=f"Line_{len(self.pool)}"))
            _LOGGER.debug("line pool grown to %d", len(self.pool))
        return self.pool[index]

    def draw(self, index: int, pair: LinePair):
        slot = self._slot(index)
        slot.enabled = True
        slot.start = pair.start
        slot.end = pair.end
        slot.target = pair.target

    def present(self, pairs: Sequence[LinePair]):
        """show exactly the given pairs, in order"""
        self.clear()
        for index, pair in enumerate(pairs):
            self.draw(index, pair)

    @property
    def active(self) -> list[LineSlot]:
        return [slot for slot in self.pool if slot.enabled]
