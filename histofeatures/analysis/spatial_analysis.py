"""
Topologie spatiale des noyaux: densité Voronoï, voisinages Delaunay.

- Crowdedness[i]  = aire[i] / aire de la cellule Voronoï du centroïde i.
                    Indéfinie pour les cellules non bornées (bord) et quand
                    la tessellation a moins de 3 sommets finis.
- Voisins         = régions partageant une arête de la triangulation de
                    Delaunay.
- Alignedness[i]  = calculate_alignedness() sur ces voisins; indéfinie pour
                    les noeuds isolés.
- Distances       = longueur euclidienne de chaque arête, brute et
                    normalisée par le grand axe moyen / le diamètre
                    équivalent moyen de la population.

Les nuages dégénérés (moins de 3 centroïdes, tous alignés) font échouer
Qhull; toutes les valeurs dérivées sont alors indéfinies, sans abandon.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial import ConvexHull, Delaunay, QhullError, Voronoi

from ..metrics.morphometry import NucleusShape
from .alignedness import calculate_alignedness

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpatialTopology:
    """Quantités dérivées de la tessellation pour K régions."""
    crowdedness: Tuple[Optional[float], ...]               # longueur K
    alignedness: Tuple[Optional[float], ...]               # longueur K
    neighbors: Tuple[Tuple[int, ...], ...]                 # positions (base 0)
    edges: np.ndarray                                      # (E, 2), u < v
    edge_distances: Tuple[float, ...]                      # longueur E
    norm_distances_major_axis: Tuple[Optional[float], ...]
    norm_distances_equiv_diameter: Tuple[Optional[float], ...]


# =============================================================================
# DENSITÉ VORONOÏ
# =============================================================================

def compute_crowdedness(points: np.ndarray, areas: Sequence[float]) -> List[Optional[float]]:
    """
    Aire de la région divisée par l'aire de sa cellule Voronoï.

    Args:
        points: Coordonnées (K, 2) des centroïdes
        areas: Aires des régions (pixels), longueur K

    Returns:
        Liste de longueur K, None si la cellule est non bornée ou dégénérée
    """
    k = len(points)
    try:
        vor = Voronoi(points)
    except (QhullError, ValueError) as e:
        logger.warning(f"Voronoi tessellation failed for {k} centroid(s): {e}")
        return [None] * k

    if len(vor.vertices) < 3:
        return [None] * k

    crowdedness: List[Optional[float]] = []
    for i in range(k):
        region = vor.regions[vor.point_region[i]]

        # -1 désigne le sommet à l'infini
        if len(region) < 3 or -1 in region:
            crowdedness.append(None)
            continue

        try:
            cell_area = ConvexHull(vor.vertices[region]).volume  # volume 2D = aire
        except QhullError:
            crowdedness.append(None)
            continue

        crowdedness.append(float(areas[i] / cell_area) if cell_area > 0 else None)

    return crowdedness


# =============================================================================
# VOISINAGE DELAUNAY
# =============================================================================

def delaunay_edges(points: np.ndarray) -> np.ndarray:
    """
    Arêtes uniques de la triangulation de Delaunay, triées lexicographiquement.

    Args:
        points: Coordonnées (K, 2) des centroïdes

    Returns:
        Tableau int (E, 2) de paires de positions (u, v) avec u < v; vide
        si aucune triangulation n'existe
    """
    try:
        tri = Delaunay(points)
    except (QhullError, ValueError) as e:
        logger.warning(f"Delaunay triangulation failed for {len(points)} centroid(s): {e}")
        return np.zeros((0, 2), dtype=np.int64)

    pairs = np.concatenate([
        tri.simplices[:, [0, 1]],
        tri.simplices[:, [1, 2]],
        tri.simplices[:, [0, 2]],
    ])
    pairs = np.sort(pairs, axis=1)
    return np.unique(pairs, axis=0).astype(np.int64)


def neighbors_from_edges(edges: np.ndarray, k: int) -> Tuple[Tuple[int, ...], ...]:
    """Listes d'adjacence (positions triées) de K noeuds à partir des arêtes."""
    adjacency = [set() for _ in range(k)]
    for u, v in edges:
        adjacency[u].add(int(v))
        adjacency[v].add(int(u))
    return tuple(tuple(sorted(a)) for a in adjacency)


# =============================================================================
# DISTANCES DES ARÊTES
# =============================================================================

def _mean_defined(values: Sequence[Optional[float]]) -> Optional[float]:
    defined = [v for v in values if v is not None and np.isfinite(v)]
    if not defined:
        return None
    return float(np.mean(defined))


def normalize_distances(
    distances: Sequence[float],
    reference: Sequence[Optional[float]],
) -> Tuple[Optional[float], ...]:
    """
    Divise chaque distance par la moyenne des valeurs de référence définies.

    Renvoie uniquement des None si cette moyenne est indéfinie ou nulle.
    """
    scale = _mean_defined(reference)
    if scale is None or scale == 0:
        return tuple(None for _ in distances)
    return tuple(float(d / scale) for d in distances)


# =============================================================================
# POINT D'ENTRÉE PRINCIPAL
# =============================================================================

def build_spatial_topology(shapes: Sequence[NucleusShape]) -> SpatialTopology:
    """
    Construit Voronoï/Delaunay sur les centroïdes des régions et en dérive
    densité, alignement et distances des arêtes.

    Args:
        shapes: Morphométrie des K régions retenues

    Returns:
        SpatialTopology
    """
    k = len(shapes)

    # (y, x) -> (x, y) pour scipy
    points = np.array([(s.centroid[1], s.centroid[0]) for s in shapes], dtype=np.float64)
    points = points.reshape(k, 2)

    logger.debug("Computing Voronoi crowdedness...")
    crowdedness = compute_crowdedness(points, [s.area for s in shapes])

    logger.debug("Building Delaunay neighborhood...")
    edges = delaunay_edges(points)
    neighbors = neighbors_from_edges(edges, k)

    alignedness: List[Optional[float]] = []
    for i, shape in enumerate(shapes):
        if not neighbors[i]:
            alignedness.append(None)
            continue
        alignedness.append(calculate_alignedness(
            (shape.eccentricity, shape.orientation),
            [(shapes[j].eccentricity, shapes[j].orientation) for j in neighbors[i]],
        ))

    if len(edges):
        deltas = points[edges[:, 0]] - points[edges[:, 1]]
        distances = tuple(float(d) for d in np.hypot(deltas[:, 0], deltas[:, 1]))
    else:
        distances = ()

    n_unbounded = sum(1 for c in crowdedness if c is None)
    logger.debug(
        f"Topology: {k} nodes, {len(edges)} edges, "
        f"{n_unbounded} cell(s) without finite area"
    )

    return SpatialTopology(
        crowdedness=tuple(crowdedness),
        alignedness=tuple(alignedness),
        neighbors=neighbors,
        edges=edges,
        edge_distances=distances,
        norm_distances_major_axis=normalize_distances(
            distances, [s.major_axis_length for s in shapes]
        ),
        norm_distances_equiv_diameter=normalize_distances(
            distances, [s.equivalent_diameter for s in shapes]
        ),
    )
