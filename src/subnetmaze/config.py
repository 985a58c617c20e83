"""
File Chain (see DESIGN.md):
- Called by: main.py, simulation.py
- Purpose: Configuration loading and defaults management

SubnetMaze Configuration - Configuration Loading and Defaults Management

PURPOSE:
    Manages configuration loading from TOML files and provides the defaults
    for tree generation, the initial subnet mask and player movement.

WHO READS ME:
    - main.py: Loads configuration via Config.load() during bootstrap
    - simulation.py: Builds the generator, mask state and navigator from it

WHO I READ:
    - generator.py: GenerationParameters

DEPENDENCIES:
    - serde: TOML serialization/deserialization (@deserialize, @serialize)
    - serde.toml: from_toml(), to_toml()
    - dataclasses: @dataclass decorator
    - logging: Configuration loading status messages

CONFIG PARAMETERS:
    - max_depth: depth of the deepest nodes below the root (default: 2)
    - branching_factor: children per node (default: 3)
    - level_distance: distance between parent and child (default: 12.0)
    - spread_angle: fan-out angle of the children in degrees (default: 120.0)
    - root_address: seed address of the root node (default: 10.0.0.1)
    - mask_bits: initial CIDR prefix length (default: 24)
    - move_speed: interpolation speed of the player (default: 5.0)
    - arrival_epsilon: distance at which a move completes (default: 0.05)
    - hover_height: player height above a node (default: 1.5)

FILE FORMAT:
    config.toml example:
    ```toml
    max_depth = 2
    branching_factor = 3
    level_distance = 12.0
    spread_angle = 120.0
    root_address = "10.0.0.1"
    mask_bits = 24
    move_speed = 5.0
    arrival_epsilon = 0.05
    hover_height = 1.5
    ```
"""

import logging
from dataclasses import dataclass

from serde import deserialize, serialize, SerdeError
from serde.toml import from_toml, to_toml

from subnetmaze.generator import GenerationParameters

_LOGGER = logging.getLogger(__name__)


@deserialize
@serialize
@dataclass
class Config:
    """subnet maze configuration"""

    max_depth: int = 2
    branching_factor: int = 3
    level_distance: float = 12.0
    spread_angle: float = 120.0
    root_address: str = "10.0.0.1"
    mask_bits: int = 24
    move_speed: float = 5.0
    arrival_epsilon: float = 0.05
    hover_height: float = 1.5

    @classmethod
    def load(cls, filename: str) -> "Config":
        """load the configuration from the given file"""
        try:
            with open(filename, encoding="utf-8") as handle:
                cfg = from_toml(cls, handle.read())
            _LOGGER.info("Configuration loaded from file %s", filename)
        except (FileNotFoundError, TypeError, ValueError, SerdeError) as exc:
            if not isinstance(exc, FileNotFoundError):
                _LOGGER.error(exc)
            cfg = cls()
            _LOGGER.warning("using configuration defaults")
        return cfg

    def save(self, filename: str):
        """save the configuration to the given file"""
        with open(filename, "w+", encoding="utf-8") as handle:
            handle.write(to_toml(self))

    def generation_parameters(self) -> GenerationParameters:
        """the subset of the configuration the tree generator needs"""
        return GenerationParameters(
            max_depth=self.max_depth,
            branching_factor=self.branching_factor,
            level_distance=self.level_distance,
            spread_angle=self.spread_angle,
            root_address=self.root_address,
        )
