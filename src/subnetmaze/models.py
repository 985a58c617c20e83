"""
SubnetMaze Data Models - Core Data Structures for the Subnet Puzzle

PURPOSE:
    Defines the data models shared by the generator, the reachability engine,
    the navigator and the renderer: positions, nodes, node classifications and
    the error hierarchy.

WHO READS ME:
    - addressing.py: InvalidAddressFormat
    - generator.py: Node, Point, DegenerateTopologyParameters
    - reachability.py: Node, NodeState, Point
    - store.py, navigator.py, simulation.py, render.py, main.py

WHO I READ:
    - None (leaf module, no internal dependencies)

DEPENDENCIES:
    - dataclasses: @dataclass decorator
    - enum: NodeState classification
    - math: vector length

KEY EXPORTS:
    - SubnetMazeError: Base exception class for all subnetmaze errors
    - InvalidAddressFormat: malformed dotted-decimal address text
    - DegenerateTopologyParameters: generator parameters that cannot grow a tree
    - Point: 3D coordinate (x, y, z), y is the vertical axis
    - Node: an addressed node of the generated tree
    - NodeState: CURRENT / REACHABLE / UNREACHABLE

DATA MODELS:

    Point:
        - x, y, z: float
        - immutable, supports +, -, scalar *, length(), lerp()

    Node:
        - index: int (stable arena id, creation order)
        - address: str (dotted decimal)
        - ip: int (uint32 form of address)
        - position: Point
        - depth: int (0 for the root)
        - parent: int | None (arena index of the parent, None for the root)
        - scale: float (hitbox scale, shrinks with depth)
"""

import math
from dataclasses import dataclass
from enum import Enum


class SubnetMazeError(Exception):
    """Base class for all errors raised by subnetmaze"""


class InvalidAddressFormat(SubnetMazeError, ValueError):
    """address text is not four dot separated decimal octets"""


class DegenerateTopologyParameters(SubnetMazeError):
    """generator parameters describe a tree which cannot grow past the root"""


@dataclass(frozen=True)
class Point:
    """a point in a three dimensional carthesian coordinate system"""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def distance(self, other: "Point") -> float:
        return (self - other).length()

    def lerp(self, target: "Point", t: float) -> "Point":
        """linear interpolation towards target, t is clamped to [0, 1]"""
        t = min(max(t, 0.0), 1.0)
        return self + (target - self) * t


ORIGIN = Point()
FORWARD = Point(0.0, 0.0, 1.0)
UP = Point(0.0, 1.0, 0.0)


class NodeState(Enum):
    """visual classification of a node relative to the current location"""

    CURRENT = "current"
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class Node:
    """a node of the generated tree, immutable once created"""

    index: int
    address: str
    ip: int
    position: Point
    depth: int
    parent: int | None = None
    scale: float = 1.0

    @property
    def is_root(self) -> bool:
        return self.parent is None
