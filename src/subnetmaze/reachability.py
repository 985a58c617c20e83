"""
SubnetMaze Reachability Engine - Per-Tick Node Classification

PURPOSE:
    Decides, for every node, whether it is the current location, reachable
    from it under the current subnet mask, or unreachable, and lists the
    connectivity lines the renderer has to draw. This is the only place in the
    package where reachability is decided; the navigator asks the engine too.

WHO READS ME:
    - simulation.py: compute() once per tick and after every state change
    - navigator.py: classify() to authorize moves
    - store.py: ReachabilitySnapshot

WHO I READ:
    - addressing.py: mask_for()
    - models.py: Node, NodeState, Point

ALGORITHM:
    1. compute the mask word for the prefix length
    2. walk the nodes in creation order
       - the current node is CURRENT, even though it trivially matches itself
       - a node whose masked address equals the current node's is REACHABLE
         and gets the next line index, starting at 0
       - everything else is UNREACHABLE
    3. return an immutable snapshot of states and lines

    Every call rescans all nodes; the trees are small (at most
    branching_factor ** max_depth leaves) and nothing is cached between
    ticks.
"""

from dataclasses import dataclass
from typing import Iterable

from subnetmaze.addressing import clamp_prefix, mask_for
from subnetmaze.models import Node, NodeState, Point


@dataclass(frozen=True)
class LinePair:
    """one connectivity line, drawn from the origin to a reachable node"""

    start: Point
    end: Point
    target: int


@dataclass(frozen=True)
class ReachabilitySnapshot:
    """engine output of one tick"""

    current: int
    prefix_len: int
    states: tuple[NodeState, ...]
    pairs: tuple[LinePair, ...]

    def state_of(self, node: Node) -> NodeState:
        return self.states[node.index]

    def count(self, state: NodeState) -> int:
        return sum(1 for value in self.states if value is state)

    @property
    def reachable(self) -> list[int]:
        """indices of the reachable nodes in creation order"""
        return [pair.target for pair in self.pairs]


class ReachabilityEngine:
    """classifies nodes relative to the current location"""

    @staticmethod
    def classify(current: Node, node: Node, prefix_len: int) -> NodeState:
        """classification of a single node"""
        if node.index == current.index:
            return NodeState.CURRENT
        mask = mask_for(clamp_prefix(prefix_len))
        if (current.ip & mask) == (node.ip & mask):
            return NodeState.REACHABLE
        return NodeState.UNREACHABLE

    def compute(
        self,
        current: Node,
        prefix_len: int,
        nodes: Iterable[Node],
        origin: Point | None = None,
    ) -> ReachabilitySnapshot:
        """classify all nodes, origin is where the lines start.

        origin defaults to the position of the current node; the simulation
        passes the player position so lines follow the player while moving.
        """
        prefix_len = clamp_prefix(prefix_len)
        mask = mask_for(prefix_len)
        start = current.position if origin is None else origin
        current_net = current.ip & mask

        states: list[NodeState] = []
        pairs: list[LinePair] = []
        for node in nodes:
            if node.index == current.index:
                states.append(NodeState.CURRENT)
            elif (node.ip & mask) == current_net:
                states.append(NodeState.REACHABLE)
                pairs.append(LinePair(start=start, end=node.position, target=node.index))
            else:
                states.append(NodeState.UNREACHABLE)

        return ReachabilitySnapshot(
            current=current.index,
            prefix_len=prefix_len,
            states=tuple(states),
            pairs=tuple(pairs),
        )
