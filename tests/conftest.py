"""
SubnetMaze Test Fixtures
"""

import pytest

from subnetmaze.config import Config
from subnetmaze.generator import GenerationParameters, Topology, TopologyGenerator
from subnetmaze.simulation import Simulation


@pytest.fixture
def small_params() -> GenerationParameters:
    """Root 10.0.0.1, two levels, two children per node."""
    return GenerationParameters(
        max_depth=2,
        branching_factor=2,
        level_distance=12.0,
        spread_angle=120.0,
        root_address="10.0.0.1",
    )


@pytest.fixture
def small_topology(small_params) -> Topology:
    """Seven nodes: 10.0.0.1, 10.1.0.1, 10.1.1.1, 10.1.2.1, 10.2.0.1, 10.2.1.1, 10.2.2.1."""
    return TopologyGenerator(small_params).generate()


@pytest.fixture
def small_config() -> Config:
    return Config(max_depth=2, branching_factor=2, mask_bits=24)


@pytest.fixture
def sim(small_config) -> Simulation:
    """A fresh session on the small topology, player on the root, mask /24."""
    return Simulation(small_config)
