#!/usr/bin/env python3
"""
Tests unitaires pour la texture: banc de Gabor et co-occurrence (Haralick).

Usage:
    pytest tests/unit/test_texture.py -v
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Ajouter le chemin du projet
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from histofeatures.config import FilterBankConfig, HaralickConfig
from histofeatures.texture.gabor import (
    compute_gabor_features,
    gabor_magnitude,
    gabor_sigma,
    make_gabor_kernel,
)
from histofeatures.texture.haralick import haralick_features, quantize_gray


@pytest.fixture
def small_bank():
    """Banc réduit pour des tests rapides."""
    return FilterBankConfig(wavelengths=(4, 8), orientations=(0, 45, 90))


@pytest.fixture
def vertical_stripes():
    """Intensité sinusoïdale le long de x, période 8 pixels."""
    x = np.arange(64)
    row = 128 + 100 * np.cos(2 * np.pi * x / 8)
    return np.tile(row, (64, 1))


# =============================================================================
# GABOR
# =============================================================================

class TestGaborKernel:
    """Tests des paramètres du noyau."""

    def test_sigma_one_octave(self):
        expected = 8 / np.pi * np.sqrt(np.log(2) / 2) * 3
        assert gabor_sigma(8, 1.0) == pytest.approx(expected)

    def test_sigma_scales_with_wavelength(self):
        assert gabor_sigma(16, 1.0) == pytest.approx(2 * gabor_sigma(8, 1.0))

    def test_kernel_is_complex(self):
        kernel = make_gabor_kernel(8, 0, 1.0, 0.5)
        assert np.iscomplexobj(kernel)
        assert kernel.ndim == 2

    def test_orientation_selectivity(self, vertical_stripes):
        along_x = gabor_magnitude(vertical_stripes, make_gabor_kernel(8, 0, 1.0, 0.5))
        along_y = gabor_magnitude(vertical_stripes, make_gabor_kernel(8, 90, 1.0, 0.5))
        assert along_x.mean() > 2 * along_y.mean()

    def test_magnitude_same_size(self, vertical_stripes):
        magnitude = gabor_magnitude(vertical_stripes, make_gabor_kernel(4, 36, 1.0, 0.5))
        assert magnitude.shape == vertical_stripes.shape
        assert np.all(magnitude >= 0)


class TestGaborBank:
    """Tests des réductions par échelle."""

    def test_shapes(self, small_bank, vertical_stripes):
        stats = compute_gabor_features(vertical_stripes, small_bank)
        assert stats.wavelengths == (4, 8)
        for arr in (stats.avg_avg, stats.std_avg, stats.avg_std, stats.std_std):
            assert arr.shape == (2,)
        assert stats.as_vector().shape == (8,)

    def test_vector_order(self, small_bank, vertical_stripes):
        stats = compute_gabor_features(vertical_stripes, small_bank)
        vector = stats.as_vector()
        np.testing.assert_array_equal(vector[0:2], stats.avg_avg)
        np.testing.assert_array_equal(vector[2:4], stats.std_avg)
        np.testing.assert_array_equal(vector[4:6], stats.avg_std)
        np.testing.assert_array_equal(vector[6:8], stats.std_std)

    def test_directional_texture_varies_over_orientations(self, small_bank, vertical_stripes):
        stats = compute_gabor_features(vertical_stripes, small_bank)
        # Wavelength 8 matches the stripes
        assert stats.avg_std[1] > 0

    def test_constant_image_has_flat_response(self, small_bank):
        gray = np.full((32, 32), 100.0)
        stats = compute_gabor_features(gray, small_bank)
        assert np.all(stats.std_avg <= 1e-6 * (1 + stats.avg_avg))

    def test_single_orientation_std_is_zero(self, vertical_stripes):
        config = FilterBankConfig(wavelengths=(8,), orientations=(0,))
        stats = compute_gabor_features(vertical_stripes, config)
        assert stats.avg_std[0] == 0.0
        assert stats.std_std[0] == 0.0

    def test_parallel_matches_sequential(self, vertical_stripes):
        sequential = compute_gabor_features(
            vertical_stripes, FilterBankConfig(wavelengths=(4, 8), orientations=(0, 90))
        )
        parallel = compute_gabor_features(
            vertical_stripes, FilterBankConfig(wavelengths=(4, 8), orientations=(0, 90), n_workers=3)
        )
        np.testing.assert_allclose(parallel.as_vector(), sequential.as_vector())

    def test_rejects_color_image(self, small_bank):
        with pytest.raises(ValueError):
            compute_gabor_features(np.zeros((8, 8, 3)), small_bank)


# =============================================================================
# HARALICK
# =============================================================================

class TestQuantizeGray:

    def test_constant_image_level_zero(self):
        assert np.all(quantize_gray(np.full((4, 4), 77.0), 8) == 0)

    def test_full_range(self):
        gray = np.array([[0.0, 255.0], [127.5, 31.0]])
        q = quantize_gray(gray, 8)
        assert q[0, 0] == 0
        assert q[0, 1] == 7
        assert q[1, 0] == 4
        assert q.dtype == np.uint8


class TestHaralickFeatures:
    """Tests des descripteurs de co-occurrence."""

    def test_six_values(self):
        image = np.random.default_rng(0).integers(0, 255, (32, 32, 3)).astype(np.uint8)
        assert haralick_features(image).shape == (6,)

    def test_constant_image(self):
        asm, idm, contrast, correlation, entropy, sum_avg = haralick_features(
            np.full((16, 16, 3), 90, dtype=np.uint8)
        )
        assert asm == pytest.approx(1.0)
        assert idm == pytest.approx(1.0)
        assert contrast == pytest.approx(0.0)
        assert entropy == pytest.approx(0.0)
        # Single level 1 paired with itself
        assert sum_avg == pytest.approx(2.0)

    def test_checkerboard_contrast(self):
        board = (np.indices((8, 8)).sum(axis=0) % 2 * 255).astype(np.uint8)
        image = np.repeat(board[:, :, np.newaxis], 3, axis=2)
        asm, idm, contrast, correlation, entropy, sum_avg = haralick_features(image)
        # Horizontal/vertical neighbors differ by 7 levels, diagonal ones by 0
        assert contrast == pytest.approx((49 + 0 + 49 + 0) / 4)
        assert 0 < asm < 1
        assert entropy > 0

    def test_gray_input_accepted(self):
        gray = np.random.default_rng(1).integers(0, 255, (16, 16)).astype(np.uint8)
        rgb = np.repeat(gray[:, :, np.newaxis], 3, axis=2)
        np.testing.assert_allclose(haralick_features(gray), haralick_features(rgb))

    def test_custom_levels(self):
        image = np.random.default_rng(2).integers(0, 255, (16, 16)).astype(np.uint8)
        features = haralick_features(image, HaralickConfig(levels=4, angles=(0.0,)))
        assert features.shape == (6,)
        # Sum average lies between 2 and 2 * levels
        assert 2.0 <= features[5] <= 8.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
