"""
SubnetMaze Navigator - Pick-to-Move and Interpolated Transit

PURPOSE:
    Turns a pointer ray into a node, lets the player move only to nodes the
    reachability engine currently classifies as REACHABLE, and advances the
    player towards the target once per tick.

WHO READS ME:
    - simulation.py: creates the navigator, calls advance() every tick

WHO I READ:
    - context.py: SimulationContext (current node, player position, mask)
    - models.py: Node, NodeState, Point
    - reachability.py: ReachabilityEngine.classify() via the context

TRANSIT:
    request_move() returns at once. Every advance(dt) moves the player by
    lerp(player, target, dt * speed). When the player is closer than epsilon
    it is snapped onto the target and the current node switches to the target
    in the same step, so a tick never sees a half finished move: during transit
    the engine still classifies relative to the node the move started from.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from subnetmaze.context import SimulationContext
from subnetmaze.models import UP, Node, NodeState, Point

_LOGGER = logging.getLogger(__name__)


class MoveResult(Enum):
    """outcome of a move request, only ACCEPTED moves the player"""

    ACCEPTED = "accepted"
    UNREACHABLE = "unreachable"
    SAME_NODE = "same node"
    NO_TARGET = "no target"
    IN_TRANSIT = "in transit"

    @property
    def accepted(self) -> bool:
        return self is MoveResult.ACCEPTED


@dataclass(frozen=True)
class Ray:
    """a pointer ray, direction does not need to be normalized"""

    origin: Point
    direction: Point


class HitTester(Protocol):
    def hit(self, ray: Ray, nodes: Iterable[Node]) -> Node | None: ...


class SphereHitTester:
    """nodes are spheres with radius 0.5 * scale, the closest hit wins"""

    def __init__(self, radius: float = 0.5):
        self.radius = radius

    def distance(self, ray: Ray, node: Node) -> float | None:
        """distance along the ray to the sphere of node, None for a miss"""
        length = ray.direction.length()
        if length == 0.0:
            return None
        direction = ray.direction * (1.0 / length)
        offset = ray.origin - node.position
        radius = self.radius * node.scale
        b = offset.dot(direction)
        c = offset.dot(offset) - radius * radius
        disc = b * b - c
        if disc < 0.0:
            return None
        root = disc**0.5
        near = -b - root
        if near >= 0.0:
            return near
        far = -b + root
        # the origin is inside the sphere
        return 0.0 if far >= 0.0 else None

    def hit(self, ray: Ray, nodes: Iterable[Node]) -> Node | None:
        best: Node | None = None
        best_dist = float("inf")
        for node in nodes:
            dist = self.distance(ray, node)
            if dist is not None and dist < best_dist:
                best, best_dist = node, dist
        return best


class Navigator:
    """moves the player between reachable nodes"""

    def __init__(
        self,
        context: SimulationContext,
        speed: float = 5.0,
        epsilon: float = 0.05,
        hover_height: float = 1.5,
        hit_tester: HitTester | None = None,
    ):
        self.context = context
        self.speed = speed
        self.epsilon = epsilon
        self.hover_height = hover_height
        self.hit_tester = hit_tester or SphereHitTester()
        self.target: Node | None = None

    @property
    def moving(self) -> bool:
        return self.target is not None

    def hover_point(self, node: Node) -> Point:
        """where the player stands on a node"""
        return node.position + UP * self.hover_height

    def place(self, node: Node):
        """put the player onto node without a transit, used at setup"""
        self.target = None
        self.context.current = node
        self.context.player = self.hover_point(node)

    def pick(self, ray: Ray) -> Node | None:
        return self.hit_tester.hit(ray, self.context.store)

    def request_move(self, target: Node | None) -> MoveResult:
        """start a transit to target if it is reachable right now"""
        ctx = self.context
        if target is None:
            return MoveResult.NO_TARGET
        if self.moving:
            _LOGGER.debug("move to %s ignored, still in transit", target.address)
            return MoveResult.IN_TRANSIT
        state = ctx.engine.classify(ctx.current, target, ctx.prefix_len)
        if state is NodeState.CURRENT:
            return MoveResult.SAME_NODE
        if state is not NodeState.REACHABLE:
            _LOGGER.info(
                "%s is not reachable from %s/%d",
                target.address,
                ctx.current.address,
                ctx.prefix_len,
            )
            return MoveResult.UNREACHABLE
        self.target = target
        _LOGGER.info("moving %s -> %s", ctx.current.address, target.address)
        return MoveResult.ACCEPTED

    def click(self, ray: Ray) -> MoveResult:
        return self.request_move(self.pick(ray))

    def advance(self, dt: float) -> bool:
        """move the player one tick further, True when the transit completed"""
        if self.target is None:
            return False
        ctx = self.context
        goal = self.hover_point(self.target)
        ctx.player = ctx.player.lerp(goal, dt * self.speed)
        if ctx.player.distance(goal) >= self.epsilon:
            return False
        ctx.player = goal
        ctx.current = self.target
        self.target = None
        _LOGGER.info("arrived at %s", ctx.current.address)
        return True
