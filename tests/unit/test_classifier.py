"""Unit tests for antiferromagnetic edges and frustrated cycles."""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../src'))

from frustration.core.classifier import (
    antiferromagnetic_mask,
    count_antiferromagnetic,
    is_antiferromagnetic,
    is_frustrated,
)
from frustration.core.graph import IsingGraph


class TestIsAntiferromagnetic:
    """Tests for the per-edge rule."""

    @pytest.mark.parametrize("coupler, fu, fv, expected", [
        # Coupler dominates
        (1.0, 0.0, 0.0, True),
        (-1.0, 0.0, 0.0, False),
        (0.0, 0.0, 0.0, False),
        # Equal magnitude still lets the coupler decide
        (1.0, -1.0, 1.0, True),
        (-1.0, 1.0, -1.0, False),
        # One field weaker than the coupler
        (-1.0, 5.0, -0.5, False),
        # Fields dominate
        (-1.0, 2.0, -2.0, True),
        (-1.0, -2.0, 3.0, True),
        (1.0, 2.0, 2.0, False),
        (1.0, -2.0, -2.0, False),
        # Zero coupler with strong same-sign fields
        (0.0, 0.5, 0.5, False),
        (0.0, 0.5, -0.5, True),
    ])
    def test_rule(self, coupler, fu, fv, expected):
        assert is_antiferromagnetic(coupler, fu, fv) is expected

    def test_mask_matches_scalar_rule(self):
        rng = np.random.default_rng(0)
        couplers = rng.integers(-3, 4, size=200).astype(float)
        fu = rng.integers(-4, 5, size=200).astype(float)
        fv = rng.integers(-4, 5, size=200).astype(float)

        mask = antiferromagnetic_mask(couplers, fu, fv)
        expected = [is_antiferromagnetic(c, a, b) for c, a, b in zip(couplers, fu, fv)]
        assert mask.tolist() == expected


class TestIsFrustrated:
    """Tests for the per-cycle predicate."""

    def test_one_antiferromagnetic_edge(self):
        graph = IsingGraph.from_weights([(0, 1, -1), (1, 2, -1), (0, 2, 1)])

        assert count_antiferromagnetic(graph, ("0", "1", "2")) == 1
        assert is_frustrated(graph, ("0", "1", "2"))

    def test_all_ferromagnetic(self):
        graph = IsingGraph.from_weights([(0, 1, -1), (1, 2, -1), (0, 2, -1)])

        assert count_antiferromagnetic(graph, ("0", "1", "2")) == 0
        assert not is_frustrated(graph, ("0", "1", "2"))

    def test_two_antiferromagnetic_edges(self):
        graph = IsingGraph.from_weights([(0, 1, 1), (1, 2, 1), (0, 2, -1)])

        assert not is_frustrated(graph, ("0", "1", "2"))

    def test_fields_override_couplers(self):
        """Strong opposite fields on 0 and 1 make the (0, 1) edge antiferromagnetic."""
        graph = IsingGraph.from_weights(
            [(0, 1, -1), (1, 2, -1), (0, 2, -1)],
            fields={0: 3.0, 1: -3.0},
        )

        assert count_antiferromagnetic(graph, ("0", "1", "2")) == 1
        assert is_frustrated(graph, ("0", "1", "2"))

    @pytest.mark.parametrize("path", [
        ("0", "1", "2", "3"),
        ("1", "3", "0", "2"),
    ])
    def test_direction_independent(self, path):
        graph = IsingGraph.from_weights(
            [(0, 1, 1), (1, 2, -1), (2, 3, 1), (3, 0, 1), (1, 3, -0.5), (0, 2, 2)],
            fields={0: 1.5, 2: -4.0, 3: 0.2},
        )

        assert is_frustrated(graph, path) == is_frustrated(graph, tuple(reversed(path)))
        assert count_antiferromagnetic(graph, path) == count_antiferromagnetic(graph, tuple(reversed(path)))
