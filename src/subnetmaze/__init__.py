"""
SubnetMaze - a subnet mask puzzle on a generated tree of addressed nodes

Package Structure:
    - main.py: CLI entry point and argument parsing
    - config.py: Configuration management
    - models.py: Data models (points, nodes, classifications, errors)
    - addressing.py: IPv4 address codec and CIDR mask arithmetic
    - generator.py: Deterministic tree generator with hierarchical addresses
    - store.py: Node store with the published classification
    - reachability.py: Per-tick reachability engine
    - lines.py: Pooled connectivity line presenter
    - navigator.py: Pick-to-move and interpolated transit
    - context.py: Shared simulation state
    - simulation.py: Session setup and the tick loop
    - render.py: HUD, node table and SVG snapshots
    - colorlog.py: Colored log output formatter
    - templates/: Jinja2 templates for HUD and SVG output

Entry Points:
    - subnetmaze: CLI command (calls main.main())
    - python -m subnetmaze: Direct module execution

Public API Exports:
    - Config: Configuration class
    - Simulation: one play session
    - TopologyGenerator: tree generator
    - ReachabilityEngine: node classification
    - main(): CLI entry point
    - __version__: Package version from metadata
    - __description__: Package description from metadata
"""

import importlib.metadata as importlib_metadata

from .config import Config
from .generator import TopologyGenerator
from .reachability import ReachabilityEngine
from .simulation import Simulation
from .main import main

_metadata = importlib_metadata.metadata("subnetmaze")
__version__ = _metadata["Version"]
__description__ = _metadata["Summary"]


__all__ = ["Config", "Simulation", "TopologyGenerator", "ReachabilityEngine", "main"]
