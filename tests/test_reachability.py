"""
SubnetMaze Reachability Engine Tests
"""

import pytest

from subnetmaze.models import NodeState, Point
from subnetmaze.reachability import ReachabilityEngine


@pytest.fixture
def engine() -> ReachabilityEngine:
    return ReachabilityEngine()


class TestClassification:
    """Tests for the per node classification."""

    @pytest.mark.parametrize("prefix", [0, 8, 15, 16, 20, 24, 32])
    def test_partition_with_one_current(self, engine, small_topology, prefix):
        """Every node gets exactly one state and only one node is CURRENT."""
        for current in small_topology:
            snapshot = engine.compute(current, prefix, small_topology.nodes)
            assert len(snapshot.states) == len(small_topology)
            assert snapshot.count(NodeState.CURRENT) == 1
            assert snapshot.state_of(current) is NodeState.CURRENT
            assert sum(snapshot.count(state) for state in NodeState) == len(small_topology)

    def test_root_at_slash_24_reaches_nothing(self, engine, small_topology):
        """Children differ from the root in octet 1, /24 compares octets 0-2."""
        snapshot = engine.compute(small_topology.root, 24, small_topology.nodes)
        assert snapshot.count(NodeState.REACHABLE) == 0
        assert snapshot.pairs == ()

    def test_root_at_slash_8_reaches_everything(self, engine, small_topology):
        snapshot = engine.compute(small_topology.root, 8, small_topology.nodes)
        assert snapshot.count(NodeState.REACHABLE) == 6
        assert snapshot.reachable == [1, 2, 3, 4, 5, 6]

    def test_slash_16_reaches_own_subtree(self, engine, small_topology):
        current = small_topology.find("10.1.0.1")
        snapshot = engine.compute(current, 16, small_topology.nodes)
        assert [small_topology[idx].address for idx in snapshot.reachable] == [
            "10.1.1.1",
            "10.1.2.1",
        ]
        assert snapshot.state_of(small_topology.root) is NodeState.UNREACHABLE

    def test_slash_0_reaches_everything_but_current(self, engine, small_topology):
        current = small_topology[5]
        snapshot = engine.compute(current, 0, small_topology.nodes)
        assert snapshot.count(NodeState.REACHABLE) == len(small_topology) - 1

    def test_prefix_is_clamped(self, engine, small_topology):
        snapshot = engine.compute(small_topology.root, 99, small_topology.nodes)
        assert snapshot.prefix_len == 32
        assert snapshot.count(NodeState.REACHABLE) == 0

    def test_classify_single_node(self, engine, small_topology):
        root, child = small_topology[0], small_topology[1]
        assert engine.classify(root, root, 8) is NodeState.CURRENT
        assert engine.classify(root, child, 8) is NodeState.REACHABLE
        assert engine.classify(root, child, 24) is NodeState.UNREACHABLE


class TestConnectivityPairs:
    """Tests for the ordered line list."""

    def test_pairs_follow_creation_order(self, engine, small_topology):
        current = small_topology[4]
        snapshot = engine.compute(current, 8, small_topology.nodes)
        assert snapshot.reachable == sorted(snapshot.reachable)
        assert len(snapshot.pairs) == snapshot.count(NodeState.REACHABLE)

    def test_pairs_start_at_current_position_by_default(self, engine, small_topology):
        current = small_topology[1]
        snapshot = engine.compute(current, 8, small_topology.nodes)
        for pair in snapshot.pairs:
            assert pair.start == current.position
            assert pair.end == small_topology[pair.target].position

    def test_pairs_start_at_origin_when_given(self, engine, small_topology):
        origin = Point(1.0, 1.5, 2.0)
        snapshot = engine.compute(small_topology.root, 8, small_topology.nodes, origin=origin)
        assert {pair.start for pair in snapshot.pairs} == {origin}

    def test_identical_inputs_identical_output(self, engine, small_topology):
        nodes_before = small_topology.nodes
        first = engine.compute(small_topology[2], 12, small_topology.nodes)
        second = engine.compute(small_topology[2], 12, small_topology.nodes)
        assert first == second
        assert small_topology.nodes == nodes_before
