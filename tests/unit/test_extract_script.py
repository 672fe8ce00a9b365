#!/usr/bin/env python3
"""
Tests unitaires pour le script scripts/extract_histopath_features.py.

Usage:
    pytest tests/unit/test_extract_script.py -v
"""

import json

import cv2
import numpy as np
import pytest
import sys
from pathlib import Path

# Ajouter le chemin du projet et des scripts
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))

import extract_histopath_features as cli

from histofeatures import feature_labels

NUCLEUS_RGB = (180, 90, 120)
CENTERS = [(16, 16), (16, 48), (46, 32)]     # (y, x)


@pytest.fixture
def tile_files(tmp_path):
    """Masque binaire PNG (3 noyaux) + image BGR sur disque."""
    mask = np.zeros((64, 64), dtype=np.uint8)
    for cy, cx in CENTERS:
        cv2.circle(mask, (cx, cy), 5, 255, -1)

    image_rgb = np.full((64, 64, 3), 235, dtype=np.uint8)
    image_rgb[mask > 0] = NUCLEUS_RGB

    mask_path = tmp_path / "mask.png"
    image_path = tmp_path / "tile.png"
    cv2.imwrite(str(mask_path), mask)
    cv2.imwrite(str(image_path), cv2.cvtColor(image_rgb, cv2.COLOR_RGB2BGR))
    return mask_path, image_path


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["extract_histopath_features.py", *map(str, args)])
    return cli.main()


class TestLoaders:
    """Tests du chargement des entrées."""

    def test_binary_mask_split_into_components(self, tile_files):
        labels = cli.load_label_map(tile_files[0])
        assert labels.dtype == np.int32
        assert labels.max() == len(CENTERS)
        assert set(np.unique(labels)) == {0, 1, 2, 3}

    def test_npy_label_map_kept(self, tmp_path):
        labels = np.zeros((20, 20), dtype=np.int32)
        labels[2:6, 2:6] = 4
        labels[10:14, 10:14] = 7
        labels[15:19, 2:6] = 9
        path = tmp_path / "labels.npy"
        np.save(path, labels)
        np.testing.assert_array_equal(cli.load_label_map(path), labels)

    def test_image_converted_to_rgb(self, tile_files):
        image = cli.load_image(tile_files[1])
        assert image.shape == (64, 64, 3)
        assert tuple(image[CENTERS[0]]) == NUCLEUS_RGB

    def test_missing_image_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            cli.load_image(tmp_path / "absent.png")


class TestMain:
    """Tests de bout en bout du script."""

    def test_writes_labeled_json(self, monkeypatch, tile_files, tmp_path):
        out = tmp_path / "results" / "features.json"
        assert run_cli(monkeypatch, "--labels", tile_files[0], "--image", tile_files[1],
                       "--out", out) == 0

        with open(out) as f:
            payload = json.load(f)

        assert list(payload) == list(feature_labels())
        assert len(payload) == 171
        # BGR on disk, RGB in the features
        assert payload["RegionRedAvg_Avg"] == pytest.approx(NUCLEUS_RGB[0])
        assert payload["RegionBlueAvg_Avg"] == pytest.approx(NUCLEUS_RGB[2])

    def test_nan_written_as_null(self, monkeypatch, tile_files, tmp_path):
        out = tmp_path / "features.json"
        run_cli(monkeypatch, "--labels", tile_files[0], "--image", tile_files[1], "--out", out)

        text = out.read_text()
        assert "NaN" not in text
        payload = json.loads(text)
        # Three nuclei: every Voronoi cell is unbounded
        assert payload["Crowdedness_Avg"] is None
        assert payload["Area_Avg"] is not None

    def test_prints_to_stdout(self, monkeypatch, capsys, tile_files):
        assert run_cli(monkeypatch, "--labels", tile_files[0], "--image", tile_files[1],
                       "--disorder", "coefficient") == 0
        payload = json.loads(capsys.readouterr().out)
        assert len(payload) == 171

    def test_no_regions_returns_error_code(self, monkeypatch, tmp_path):
        mask = np.zeros((32, 32), dtype=np.uint8)
        mask[4:6, 4:6] = 255
        mask_path = tmp_path / "tiny.png"
        image_path = tmp_path / "tile.png"
        cv2.imwrite(str(mask_path), mask)
        cv2.imwrite(str(image_path), np.zeros((32, 32, 3), dtype=np.uint8))

        assert run_cli(monkeypatch, "--labels", mask_path, "--image", image_path) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
