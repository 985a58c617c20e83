"""Node store: owns the generated nodes and their published classification."""

import logging
from typing import Iterator

from subnetmaze.generator import Topology
from subnetmaze.models import Node, NodeState
from subnetmaze.reachability import ReachabilitySnapshot

_LOGGER = logging.getLogger(__name__)


class NodeStore:
    """All nodes of a session, addressed by their arena index.

    Address and position of a node never change. The classification is
    replaced as a whole with every published ReachabilitySnapshot and is
    read-only for everybody else.
    """

    def __init__(self, topology: Topology):
        self.topology = topology
        self._states: tuple[NodeState, ...] = tuple(
            NodeState.UNREACHABLE for _ in topology
        )
        self._published: ReachabilitySnapshot | None = None

    def __len__(self) -> int:
        return len(self.topology)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.topology)

    def __getitem__(self, index: int) -> Node:
        return self.topology[index]

    @property
    def root(self) -> Node:
        return self.topology.root

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self.topology.nodes

    @property
    def snapshot(self) -> ReachabilitySnapshot | None:
        """the snapshot published last, None before the first tick"""
        return self._published

    def state_of(self, node: Node) -> NodeState:
        return self._states[node.index]

    def states(self) -> dict[Node, NodeState]:
        return dict(zip(self.topology, self._states))

    def by_address(self, address: str) -> Node | None:
        return self.topology.find(address.strip())

    def publish(self, snapshot: ReachabilitySnapshot):
        """replace the classification with the engine's latest output"""
        if len(snapshot.states) != len(self.topology):
            raise ValueError(
                f"snapshot covers {len(snapshot.states)} nodes, store has {len(self.topology)}"
            )
        if snapshot != self._published:
            _LOGGER.debug(
                "classification changed: current %s, %d reachable",
                self.topology[snapshot.current].address,
                len(snapshot.pairs),
            )
        self._states = snapshot.states
        self._published = snapshot
