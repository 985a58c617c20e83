"""Shared simulation state, passed explicitly to every component."""

from dataclasses import dataclass

from subnetmaze.lines import LinePresenter
from subnetmaze.models import Node, Point
from subnetmaze.reachability import ReachabilityEngine
from subnetmaze.store import NodeStore


@dataclass
class SimulationContext:
    """the state of one session.

    Each field has exactly one writer:
        prefix_len      MaskControl
        current, player Navigator
        store, lines    the simulation, from ReachabilityEngine output
    """

    store: NodeStore
    engine: ReachabilityEngine
    lines: LinePresenter
    current: Node
    player: Point
    prefix_len: int = 24
