#!/usr/bin/env python3
"""
Tests unitaires pour les paramètres de distribution (7 statistiques).

Usage:
    pytest tests/unit/test_distribution.py -v
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Ajouter le chemin du projet
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from histofeatures.stats.distribution import (
    coefficient_disorder,
    defined_values,
    distribution_parameters,
    entropy_disorder,
)


class TestDefinedValues:

    def test_drops_undefined(self):
        values = [1.0, None, float("nan"), float("inf"), -float("inf"), 2.0]
        np.testing.assert_array_equal(defined_values(values), [1.0, 2.0])

    def test_empty(self):
        assert defined_values([]).size == 0


class TestDistributionParameters:
    """Tests du résumé à 7 valeurs."""

    def test_seven_values(self):
        assert len(distribution_parameters([1.0, 2.0, 3.0])) == 7

    def test_known_population(self):
        mean, stdev, median, iqr, skew, kurt, disorder = distribution_parameters(
            [1.0, 2.0, 3.0, 4.0, 5.0]
        )
        assert mean == pytest.approx(3.0)
        assert stdev == pytest.approx(np.sqrt(2.5))
        assert median == pytest.approx(3.0)
        assert iqr == pytest.approx(2.0)
        assert skew == pytest.approx(0.0, abs=1e-12)
        # Pearson kurtosis: m4 / m2^2 = 6.8 / 4
        assert kurt == pytest.approx(1.7)
        # Five values in five distinct bins out of ten
        assert disorder == pytest.approx(np.log(5) / np.log(10))

    def test_undefined_entries_excluded(self):
        clean = distribution_parameters([1.0, 2.0, 3.0, 4.0, 5.0])
        dirty = distribution_parameters([1.0, None, 2.0, float("nan"), 3.0, 4.0, float("inf"), 5.0])
        assert dirty == pytest.approx(clean)

    def test_empty_population(self):
        result = distribution_parameters([])
        assert len(result) == 7
        assert all(np.isnan(v) for v in result)

    def test_all_undefined(self):
        assert all(np.isnan(v) for v in distribution_parameters([None, float("nan")]))

    def test_single_value(self):
        mean, stdev, median, iqr, skew, kurt, disorder = distribution_parameters([4.0])
        assert mean == 4.0
        assert np.isnan(stdev)
        assert median == 4.0
        assert iqr == 0.0
        assert np.isnan(skew)
        assert np.isnan(kurt)
        assert disorder == pytest.approx(0.0)

    def test_constant_population(self):
        mean, stdev, median, iqr, skew, kurt, disorder = distribution_parameters([2.0, 2.0, 2.0])
        assert mean == 2.0
        assert stdev == 0.0
        assert iqr == 0.0
        assert np.isnan(skew)
        assert np.isnan(kurt)
        assert disorder == pytest.approx(0.0)

    def test_right_skewed(self):
        _, _, _, _, skew, _, _ = distribution_parameters([1.0, 1.0, 1.0, 1.0, 10.0])
        assert skew > 0

    def test_coefficient_disorder_option(self):
        result = distribution_parameters([1.0, 2.0, 3.0, 4.0, 5.0], disorder="coefficient")
        assert result[6] == pytest.approx(1 - 1 / (1 + np.sqrt(2.5) / 3))

    def test_unknown_disorder_raises(self):
        with pytest.raises(ValueError, match="Unknown disorder"):
            distribution_parameters([1.0], disorder="variance")


class TestDisorderMeasures:

    def test_entropy_bounds(self):
        values = np.random.default_rng(0).normal(size=500)
        assert 0.0 <= entropy_disorder(values) <= 1.0

    def test_entropy_uniform_is_max(self):
        # One value per bin
        values = np.arange(10, dtype=np.float64)
        assert entropy_disorder(values, bins=10) == pytest.approx(1.0)

    def test_coefficient_constant_is_zero(self):
        assert coefficient_disorder(np.array([3.0, 3.0, 3.0])) == 0.0

    def test_coefficient_undefined(self):
        assert np.isnan(coefficient_disorder(np.array([1.0])))
        assert np.isnan(coefficient_disorder(np.array([-1.0, 1.0])))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
