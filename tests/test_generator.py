"""
SubnetMaze Tree Generator Tests
"""

import logging
import math

import networkx as nx
import pytest

from subnetmaze.addressing import encode, split_octets
from subnetmaze.generator import (
    GenerationParameters,
    TopologyGenerator,
    branch_angle,
    rotate_about_vertical,
)
from subnetmaze.models import FORWARD, DegenerateTopologyParameters, Point


class TestSmallTree:
    """Tests against the hand checked depth 2, branching 2 tree."""

    def test_addresses_in_creation_order(self, small_topology):
        """Depth first, pre-order."""
        assert [node.address for node in small_topology] == [
            "10.0.0.1",
            "10.1.0.1",
            "10.1.1.1",
            "10.1.2.1",
            "10.2.0.1",
            "10.2.1.1",
            "10.2.2.1",
        ]

    def test_indices_and_depths(self, small_topology):
        assert [node.index for node in small_topology] == list(range(7))
        assert [node.depth for node in small_topology] == [0, 1, 2, 2, 1, 2, 2]
        assert [node.parent for node in small_topology] == [None, 0, 1, 1, 0, 4, 4]

    def test_single_root_at_origin(self, small_topology):
        roots = [node for node in small_topology if node.is_root]
        assert roots == [small_topology.root]
        assert small_topology.root.position == Point(0.0, 0.0, 0.0)
        assert small_topology.root.depth == 0

    def test_ip_matches_address(self, small_topology):
        for node in small_topology:
            assert node.ip == encode(node.address)

    def test_children_positions(self, small_topology):
        """Two children fan out at -60 and +60 degrees around forward."""
        first, second = small_topology.children_of(small_topology.root)
        assert first.position.x == pytest.approx(-12.0 * math.sin(math.radians(60)))
        assert first.position.z == pytest.approx(6.0)
        assert second.position.x == pytest.approx(12.0 * math.sin(math.radians(60)))
        assert second.position.z == pytest.approx(6.0)
        for child in (first, second):
            assert child.position.distance(small_topology.root.position) == pytest.approx(12.0)

    def test_scale_shrinks_with_depth(self, small_topology):
        assert [node.scale for node in small_topology][:3] == pytest.approx([1.2, 1.0, 0.8])

    def test_find(self, small_topology):
        assert small_topology.find("10.2.1.1").index == 5
        assert small_topology.find("10.9.9.9") is None


class TestInvariants:
    """Structural properties which hold for any parameters."""

    @pytest.mark.parametrize("depth,branching", [(0, 3), (1, 4), (2, 3), (3, 2), (3, 3)])
    def test_address_differs_from_parent_only_at_own_depth(self, depth, branching):
        topology = TopologyGenerator(
            GenerationParameters(max_depth=depth, branching_factor=branching)
        ).generate()
        for node in topology:
            parent = topology.parent_of(node)
            if parent is None:
                continue
            branch = topology.children_of(parent).index(node)
            mine, theirs = split_octets(node.address), split_octets(parent.address)
            for octet in range(4):
                if octet == node.depth:
                    assert mine[octet] == branch + 1
                else:
                    assert mine[octet] == theirs[octet]

    @pytest.mark.parametrize("depth,branching", [(0, 3), (1, 4), (2, 3), (3, 2)])
    def test_node_count(self, depth, branching):
        topology = TopologyGenerator(
            GenerationParameters(max_depth=depth, branching_factor=branching)
        ).generate()
        assert len(topology) == sum(branching**level for level in range(depth + 1))
        assert topology.depth == depth

    def test_deterministic(self, small_params):
        """Same parameters, same nodes, down to the float positions."""
        first = TopologyGenerator(small_params).generate()
        second = TopologyGenerator(small_params).generate()
        assert first.nodes == second.nodes

    def test_generator_reuse_starts_over(self, small_params):
        generator = TopologyGenerator(small_params)
        assert generator.generate().nodes == generator.generate().nodes

    def test_graph_export_is_a_tree(self, small_topology):
        graph = small_topology.to_graph()
        assert nx.is_arborescence(graph)
        assert graph.number_of_nodes() == len(small_topology)
        assert graph.nodes[4]["address"] == "10.2.0.1"
        assert sorted(graph.successors(0)) == [1, 4]


class TestDegenerateParameters:
    """Parameters which cannot grow a tree produce the root only."""

    @pytest.mark.parametrize("depth,branching", [(2, 0), (2, -1), (-1, 3)])
    def test_root_only(self, depth, branching, caplog):
        params = GenerationParameters(max_depth=depth, branching_factor=branching)
        with caplog.at_level(logging.WARNING, logger="subnetmaze.generator"):
            topology = TopologyGenerator(params).generate()
        assert len(topology) == 1
        assert topology.root.address == "10.0.0.1"
        assert "root only" in caplog.text

    def test_check_parameters_raises(self):
        with pytest.raises(DegenerateTopologyParameters):
            TopologyGenerator.check_parameters(GenerationParameters(branching_factor=0))

    def test_depth_clamped_to_address_octets(self, caplog):
        params = GenerationParameters(max_depth=5, branching_factor=2)
        with caplog.at_level(logging.WARNING, logger="subnetmaze.generator"):
            topology = TopologyGenerator(params).generate()
        assert topology.depth == 3
        assert len(topology) == 15
        assert "max depth 5" in caplog.text

    def test_malformed_root_address_falls_back_to_zero(self):
        params = GenerationParameters(max_depth=1, branching_factor=2, root_address="bogus")
        topology = TopologyGenerator(params).generate()
        assert [node.address for node in topology] == ["0.0.0.0", "0.1.0.0", "0.2.0.0"]


class TestGeometry:
    """Tests for the fan-out helpers."""

    def test_rotation_turns_forward_right(self):
        turned = rotate_about_vertical(FORWARD, 90.0)
        assert turned.x == pytest.approx(1.0)
        assert turned.z == pytest.approx(0.0, abs=1e-12)

    def test_branch_angles_are_symmetric(self):
        assert [branch_angle(i, 3, 120.0) for i in range(3)] == [-60.0, 0.0, 60.0]

    def test_single_branch_goes_straight(self):
        assert branch_angle(0, 1, 120.0) == 0.0
