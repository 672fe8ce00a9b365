"""
Statistiques de couleur et d'intensité de chaque région retenue.

Pour chaque région: moyenne et écart-type des trois canaux sur les pixels
de la région, et de la valeur de gris par pixel (R + G + B) / 3. Les
échantillons NaN sont ignorés; une région sans échantillon utilisable
reçoit None.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..preprocessing.image import to_three_channels
from ..preprocessing.regions import RegionSet


@dataclass(frozen=True)
class ColorStatistics:
    """Résumé couleur/intensité d'une région."""
    mean: Tuple[Optional[float], Optional[float], Optional[float]]
    std: Tuple[Optional[float], Optional[float], Optional[float]]
    gray_mean: Optional[float]
    gray_std: Optional[float]


def _mean_std(values: np.ndarray) -> Tuple[Optional[float], Optional[float]]:
    """Moyenne et écart-type d'échantillon (ddof=1) hors NaN; un seul échantillon a un écart-type 0."""
    values = values[~np.isnan(values)]
    if values.size == 0:
        return None, None
    if values.size == 1:
        return float(values[0]), 0.0
    return float(values.mean()), float(values.std(ddof=1))


def region_color_statistics(pixels: np.ndarray) -> ColorStatistics:
    """
    Résume les échantillons (N, 3) d'une région.

    Args:
        pixels: Tableau float (N, 3), N peut valoir 0

    Returns:
        ColorStatistics
    """
    channel_stats = [_mean_std(pixels[:, c]) for c in range(3)]
    gray = (pixels[:, 0] + pixels[:, 1] + pixels[:, 2]) / 3
    gray_mean, gray_std = _mean_std(gray)

    return ColorStatistics(
        mean=tuple(s[0] for s in channel_stats),
        std=tuple(s[1] for s in channel_stats),
        gray_mean=gray_mean,
        gray_std=gray_std,
    )


def extract_color_statistics(regions: RegionSet, image: np.ndarray) -> List[ColorStatistics]:
    """
    Statistiques couleur/intensité de chaque région, dans l'ordre de region_ids.

    Args:
        regions: Partition en régions de même (H, W) que l'image
        image: Image (H, W) ou (H, W, C); hors 3 canaux, le canal 1 remplit
               les trois emplacements

    Returns:
        Un ColorStatistics par région
    """
    rgb = to_three_channels(image).reshape(-1, 3)

    # Regroupe les indices de pixels par label en un seul tri (pas K masques)
    flat = regions.labels.ravel()
    order = np.argsort(flat, kind="stable")
    sorted_labels = flat[order]

    results = []
    for region_id in regions.region_ids:
        start = np.searchsorted(sorted_labels, region_id, side="left")
        end = np.searchsorted(sorted_labels, region_id, side="right")
        pixels = rgb[order[start:end]]
        results.append(region_color_statistics(pixels))

    return results
