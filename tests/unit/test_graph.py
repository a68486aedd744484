"""Unit tests for the IsingGraph model and canonical edges."""

import pytest
import torch
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../src'))

from frustration.core.graph import EdgeKey, IsingGraph, vertex_sort_key


class TestEdgeKey:
    """Tests for canonical edge keys."""

    def test_of_is_direction_independent(self):
        assert EdgeKey.of("a", "b") == EdgeKey.of("b", "a")
        assert hash(EdgeKey.of("a", "b")) == hash(EdgeKey.of("b", "a"))

    def test_numeric_identifiers_sort_numerically(self):
        """'10' sorts after '9' even though it is smaller as a string."""
        ek = EdgeKey.of("10", "9")
        assert (ek.u, ek.v) == ("9", "10")

    def test_numbers_before_names(self):
        assert vertex_sort_key("100") < vertex_sort_key("a")

    def test_self_loop_rejected(self):
        with pytest.raises(ValueError):
            EdgeKey.of("x", "x")

    def test_non_canonical_constructor_rejected(self):
        with pytest.raises(ValueError):
            EdgeKey("2", "1")

    def test_other_endpoint(self):
        ek = EdgeKey.of("1", "2")
        assert ek.other("1") == "2"
        assert ek.other("2") == "1"
        with pytest.raises(KeyError):
            ek.other("3")

    def test_str(self):
        assert str(EdgeKey.of("b", "a")) == "a b"


class TestIsingGraph:
    """Tests for IsingGraph construction."""

    def test_missing_endpoints_get_zero_weight(self):
        graph = IsingGraph(vertices={"0": 1.5}, edges={EdgeKey.of("0", "1"): -1.0})

        assert graph.vertices["0"] == 1.5
        assert graph.vertices["1"] == 0.0
        assert graph.num_vertices == 2

    def test_mappings_are_read_only(self):
        graph = IsingGraph.from_weights([(0, 1, 1.0)])

        with pytest.raises(TypeError):
            graph.vertices["0"] = 2.0
        with pytest.raises(TypeError):
            graph.edges[EdgeKey.of("0", "1")] = 2.0

    def test_from_weights_accumulates_and_folds_self_loops(self):
        graph = IsingGraph.from_weights(
            [(0, 1, 1.0), (1, 0, 0.5), (2, 2, -3.0)],
            fields={0: 0.25},
        )

        assert graph.coupler("0", "1") == 1.5
        assert graph.coupler("1", "0") == 1.5
        assert graph.external_field("2") == -3.0
        assert graph.external_field("0") == 0.25
        assert graph.num_edges == 1

    def test_missing_coupler_reads_zero(self):
        graph = IsingGraph.from_weights([(0, 1, 1.0)])
        assert graph.coupler("0", "5") == 0.0
        assert graph.external_field("5") == 0.0

    def test_sorted_views(self):
        graph = IsingGraph.from_weights([(10, 2, 1.0), (2, 1, 1.0)])

        assert graph.vertex_ids == ["1", "2", "10"]
        assert graph.edge_keys == [EdgeKey.of("1", "2"), EdgeKey.of("2", "10")]

    def test_incidence_matrix(self):
        graph = IsingGraph.from_weights([(0, 1, 1.0), (1, 2, 1.0)])
        B = graph.get_incidence_matrix()

        assert B.shape == (3, 2)
        assert torch.equal(B.sum(dim=0), torch.tensor([2.0, 2.0]))
        assert torch.equal(B.sum(dim=1), torch.tensor([1.0, 2.0, 1.0]))
