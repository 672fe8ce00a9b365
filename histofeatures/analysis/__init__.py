"""
Organisation spatiale des noyaux (Voronoï / Delaunay) et cohérence des orientations.
"""

from .alignedness import calculate_alignedness, elongation_weight
from .spatial_analysis import (
    SpatialTopology,
    build_spatial_topology,
    compute_crowdedness,
    delaunay_edges,
    neighbors_from_edges,
    normalize_distances,
)

__all__ = [
    'calculate_alignedness',
    'elongation_weight',
    'SpatialTopology',
    'build_spatial_topology',
    'compute_crowdedness',
    'delaunay_edges',
    'neighbors_from_edges',
    'normalize_distances',
]
