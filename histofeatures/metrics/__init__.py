"""
Mesures par région: forme (morphométrie) et couleur/intensité.
"""

from .morphometry import (
    NucleusShape,
    compute_compactness,
    compute_eccentricity,
    extract_morphometry,
    normalize_orientation,
    raw_orientation_degrees,
)
from .color import (
    ColorStatistics,
    extract_color_statistics,
    region_color_statistics,
)

__all__ = [
    'NucleusShape',
    'compute_compactness',
    'compute_eccentricity',
    'extract_morphometry',
    'normalize_orientation',
    'raw_orientation_degrees',
    'ColorStatistics',
    'extract_color_statistics',
    'region_color_statistics',
]
