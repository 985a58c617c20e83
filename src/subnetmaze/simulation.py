"""
SubnetMaze Simulation - Session Setup and the Per-Tick Loop

PURPOSE:
    Wires generator, node store, reachability engine, line presenter, mask
    control and navigator around one SimulationContext and runs the tick:

        1. advance the navigator (may complete a transit)
        2. recompute reachability for the current node and mask
        3. publish the classification to the node store
        4. mirror the connectivity pairs into the line pool

    Mask changes and completed moves resynchronize immediately as well, so
    the visible state never lags a control input.

WHO READS ME:
    - main.py: builds a Simulation from the configuration and plays steps
    - render.py: HudStatus

WHO I READ:
    - config.py, context.py, generator.py, lines.py, navigator.py,
      reachability.py, store.py, addressing.py
"""

import logging
from dataclasses import dataclass

from subnetmaze.addressing import clamp_prefix, mask_text
from subnetmaze.config import Config
from subnetmaze.context import SimulationContext
from subnetmaze.generator import Topology, TopologyGenerator
from subnetmaze.lines import LinePresenter
from subnetmaze.models import Node, NodeState
from subnetmaze.navigator import MoveResult, Navigator, Ray
from subnetmaze.reachability import ReachabilityEngine, ReachabilitySnapshot
from subnetmaze.store import NodeStore

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HudStatus:
    """what the heads-up display shows"""

    local_ip: str
    prefix_len: int
    subnet_mask: str
    reachable: int
    moving: bool


class MaskControl:
    """the only writer of the prefix length"""

    def __init__(self, context: SimulationContext):
        self.context = context

    @property
    def prefix_len(self) -> int:
        return self.context.prefix_len

    def set(self, prefix_len: int) -> int:
        value = clamp_prefix(prefix_len)
        if value != self.context.prefix_len:
            _LOGGER.info("mask /%d -> /%d", self.context.prefix_len, value)
        self.context.prefix_len = value
        return value

    def adjust(self, delta: int) -> int:
        return self.set(self.context.prefix_len + delta)

    def widen(self) -> int:
        """one bit less, more nodes share the subnet"""
        return self.adjust(-1)

    def narrow(self) -> int:
        """one bit more, fewer nodes share the subnet"""
        return self.adjust(+1)


class Simulation:
    """one play session on a generated topology"""

    def __init__(self, cfg: Config | None = None, topology: Topology | None = None):
        self.config = cfg or Config()
        if topology is None:
            topology = TopologyGenerator(self.config.generation_parameters()).generate()
        store = NodeStore(topology)
        self.context = SimulationContext(
            store=store,
            engine=ReachabilityEngine(),
            lines=LinePresenter(),
            current=store.root,
            player=store.root.position,
            prefix_len=clamp_prefix(self.config.mask_bits),
        )
        self.mask = MaskControl(self.context)
        self.navigator = Navigator(
            self.context,
            speed=self.config.move_speed,
            epsilon=self.config.arrival_epsilon,
            hover_height=self.config.hover_height,
        )
        self.navigator.place(store.root)
        self.ticks = 0
        self.sync()

    @property
    def store(self) -> NodeStore:
        return self.context.store

    @property
    def lines(self) -> LinePresenter:
        return self.context.lines

    @property
    def current(self) -> Node:
        return self.context.current

    @property
    def prefix_len(self) -> int:
        return self.context.prefix_len

    @property
    def snapshot(self) -> ReachabilitySnapshot:
        snapshot = self.store.snapshot
        assert snapshot is not None
        return snapshot

    def sync(self) -> ReachabilitySnapshot:
        """recompute reachability and push it to the store and the lines"""
        ctx = self.context
        snapshot = ctx.engine.compute(
            ctx.current, ctx.prefix_len, ctx.store.nodes, origin=ctx.player
        )
        ctx.store.publish(snapshot)
        ctx.lines.present(snapshot.pairs)
        return snapshot

    def tick(self, dt: float) -> ReachabilitySnapshot:
        self.ticks += 1
        self.navigator.advance(dt)
        return self.sync()

    def adjust_mask(self, delta: int) -> int:
        value = self.mask.adjust(delta)
        self.sync()
        return value

    def set_mask(self, prefix_len: int) -> int:
        value = self.mask.set(prefix_len)
        self.sync()
        return value

    def request_move(self, target: Node | None) -> MoveResult:
        return self.navigator.request_move(target)

    def click(self, ray: Ray) -> MoveResult:
        return self.navigator.click(ray)

    def goto(self, address: str) -> MoveResult:
        """request a move to the node with the given address"""
        node = self.store.by_address(address)
        if node is None:
            _LOGGER.warning("no node with address %s", address)
        return self.request_move(node)

    def run_until_idle(self, dt: float, max_ticks: int = 10_000) -> int:
        """tick until the current transit completes, returns ticks used"""
        used = 0
        while self.navigator.moving and used < max_ticks:
            self.tick(dt)
            used += 1
        return used

    def state_of(self, node: Node) -> NodeState:
        return self.store.state_of(node)

    def status(self) -> HudStatus:
        return HudStatus(
            local_ip=self.current.address,
            prefix_len=self.prefix_len,
            subnet_mask=mask_text(self.prefix_len),
            reachable=len(self.snapshot.pairs),
            moving=self.navigator.moving,
        )

