"""
SubnetMaze Tree Generator - Deterministic Hierarchical Topology Construction

PURPOSE:
    Builds the tree of addressed nodes the puzzle is played on. Every node at
    depth d spawns branching_factor children at depth d + 1, fanned out around
    the parent's incoming direction. A child inherits the parent's address and
    replaces the octet at its own depth with its 1-based branch number, so the
    address prefix of a node encodes its path from the root:

        10.0.0.1                root, depth 0
        10.2.0.1                second child of the root, depth 1
        10.2.3.1                third child of 10.2.0.1, depth 2

WHO READS ME:
    - config.py: GenerationParameters
    - store.py: wraps the generated Topology
    - simulation.py: generates the topology at setup

WHO I READ:
    - addressing.py: encode_or_zero(), split_octets(), join_octets()
    - models.py: Node, Point, DegenerateTopologyParameters

DEPENDENCIES:
    - networkx: Topology.to_graph() exports the tree as a DiGraph
    - math: rotation of the growth direction about the vertical axis
    - logging: parameter clamping and degenerate trees

KEY EXPORTS:
    - GenerationParameters: max_depth, branching_factor, level_distance,
      spread_angle, root_address
    - Topology: arena of nodes indexed by creation order
    - TopologyGenerator: generate() builds a Topology

ORDER:
    Nodes are created depth first, pre-order: a child's whole subtree is
    created before its next sibling. Node.index is the creation order and is
    the order the reachability engine walks the nodes in.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator

import networkx as nx

from subnetmaze.addressing import decode, encode_or_zero, join_octets, split_octets
from subnetmaze.models import (
    FORWARD,
    ORIGIN,
    DegenerateTopologyParameters,
    Node,
    Point,
)

_LOGGER = logging.getLogger(__name__)

# octet 0 is never replaced, one level per remaining octet
MAX_TREE_DEPTH = 3
MAX_BRANCHING = 255
MIN_SCALE = 0.2


@dataclass(frozen=True)
class GenerationParameters:
    """parameters of the tree generator"""

    max_depth: int = 2
    branching_factor: int = 3
    level_distance: float = 12.0
    spread_angle: float = 120.0
    root_address: str = "10.0.0.1"


def node_scale(depth: int) -> float:
    return max(1.2 - depth * 0.2, MIN_SCALE)


def rotate_about_vertical(direction: Point, degrees: float) -> Point:
    """rotate direction about the y axis, positive angles turn forward to the right"""
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    return Point(
        direction.x * cos + direction.z * sin,
        direction.y,
        -direction.x * sin + direction.z * cos,
    )


def branch_angle(index: int, branching_factor: int, spread_angle: float) -> float:
    """angle of child index relative to the incoming direction"""
    step = spread_angle / max(1, branching_factor - 1)
    return (index - (branching_factor - 1) / 2) * step


class Topology:
    """the generated tree, nodes are stored in an arena indexed by Node.index"""

    def __init__(self, nodes: list[Node]):
        if not nodes or not nodes[0].is_root:
            raise ValueError("a topology needs a root as its first node")
        self._nodes = tuple(nodes)
        self._children: dict[int, list[int]] = {node.index: [] for node in nodes}
        for node in nodes:
            if node.parent is not None:
                self._children[node.parent].append(node.index)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    @property
    def root(self) -> Node:
        return self._nodes[0]

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def depth(self) -> int:
        return max(node.depth for node in self._nodes)

    def parent_of(self, node: Node) -> Node | None:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def children_of(self, node: Node) -> list[Node]:
        return [self._nodes[idx] for idx in self._children[node.index]]

    def find(self, address: str) -> Node | None:
        """the first node, in creation order, carrying the given address"""
        for node in self._nodes:
            if node.address == address:
                return node
        return None

    def to_graph(self) -> nx.DiGraph:
        """export the tree as a directed graph with parent -> child edges"""
        graph = nx.DiGraph()
        for node in self._nodes:
            graph.add_node(
                node.index,
                address=node.address,
                depth=node.depth,
                pos=node.position,
            )
        graph.add_edges_from(
            (node.parent, node.index) for node in self._nodes if node.parent is not None
        )
        return graph


class TopologyGenerator:
    """deterministically grows a tree of addressed nodes"""

    def __init__(self, params: GenerationParameters | None = None):
        self.params = params or GenerationParameters()
        self._nodes: list[Node] = []

    @staticmethod
    def check_parameters(params: GenerationParameters):
        """raise DegenerateTopologyParameters if no tree can grow"""
        if params.branching_factor <= 0:
            raise DegenerateTopologyParameters(
                f"branching factor {params.branching_factor} must be positive"
            )
        if params.max_depth < 0:
            raise DegenerateTopologyParameters(
                f"max depth {params.max_depth} must not be negative"
            )

    def _effective_limits(self) -> tuple[int, int]:
        depth = self.params.max_depth
        branching = self.params.branching_factor
        if depth > MAX_TREE_DEPTH:
            _LOGGER.warning(
                "max depth %d exceeds the address octets, using %d",
                depth,
                MAX_TREE_DEPTH,
            )
            depth = MAX_TREE_DEPTH
        if branching > MAX_BRANCHING:
            _LOGGER.warning(
                "branching factor %d exceeds an octet, using %d",
                branching,
                MAX_BRANCHING,
            )
            branching = MAX_BRANCHING
        return depth, branching

    def generate(self) -> Topology:
        """build the topology, always returns at least the root"""
        self._nodes = []
        root = self._spawn(ORIGIN, self.params.root_address, 0, None)
        try:
            self.check_parameters(self.params)
        except DegenerateTopologyParameters as exc:
            _LOGGER.warning("%s, generating the root only", exc)
            return Topology(self._nodes)

        max_depth, branching = self._effective_limits()
        self._grow(root, FORWARD, max_depth, branching)
        _LOGGER.info(
            "generated %d nodes, depth %d, branching factor %d",
            len(self._nodes),
            max_depth,
            branching,
        )
        return Topology(self._nodes)

    def _grow(self, parent: Node, direction: Point, max_depth: int, branching: int):
        depth = parent.depth + 1
        if depth > max_depth:
            return
        for i in range(branching):
            angle = branch_angle(i, branching, self.params.spread_angle)
            branch_dir = rotate_about_vertical(direction, angle)
            position = parent.position + branch_dir * self.params.level_distance

            octets = split_octets(parent.address)
            octets[depth] = i + 1
            child = self._spawn(position, join_octets(octets), depth, parent.index)
            self._grow(child, branch_dir, max_depth, branching)

    def _spawn(self, position: Point, address: str, depth: int, parent: int | None) -> Node:
        ip = encode_or_zero(address)
        node = Node(
            index=len(self._nodes),
            # keep the text in sync with ip when the fallback applied
            address=decode(ip),
            ip=ip,
            position=position,
            depth=depth,
            parent=parent,
            scale=node_scale(depth),
        )
        self._nodes.append(node)
        _LOGGER.debug("node %d: %s depth %d", node.index, node.address, depth)
        return node
