"""
Cohérence locale d'orientation ("alignedness") d'un noyau et de ses voisins.

Chaque participant est un couple (excentricité, orientation). L'orientation
est un angle d'axe dans [0, pi), l'accord se mesure donc avec cos(2 * delta):
+1 pour des axes parallèles, -1 pour des axes perpendiculaires. Un noyau rond
n'a pas de direction: chaque participant est pondéré par son allongement

    w(e) = e / (1 + e)        (0 pour un cercle, -> 1 pour une aiguille)

et le score vaut

    w(e_t) * sum_j w(e_j) cos(2 (theta_t - theta_j)) / sum_j w(e_j)

borné dans [-1, 1]; plus il est élevé, plus l'orientation locale est cohérente.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

Participant = Tuple[Optional[float], float]   # (excentricité, orientation)


def _is_defined(value: Optional[float]) -> bool:
    return value is not None and np.isfinite(value)


def elongation_weight(eccentricity: float) -> float:
    """e / (1 + e); l'excentricité est >= 0 par construction."""
    return float(eccentricity / (1.0 + eccentricity))


def calculate_alignedness(
    target: Participant,
    neighbors: Sequence[Participant],
) -> Optional[float]:
    """
    Mesure l'accord entre l'allongement d'un noyau et celui de ses voisins.

    Args:
        target: (excentricité, orientation) du noyau évalué
        neighbors: (excentricité, orientation) de ses voisins géométriques

    Returns:
        Score dans [-1, 1], ou None si l'excentricité de la cible est
        indéfinie ou si aucun voisin n'a d'excentricité définie
    """
    target_ecc, target_theta = target
    if not _is_defined(target_ecc):
        return None

    usable = [(e, theta) for e, theta in neighbors if _is_defined(e)]
    if not usable:
        return None

    ecc = np.array([e for e, _ in usable], dtype=np.float64)
    theta = np.array([t for _, t in usable], dtype=np.float64)

    weights = ecc / (1.0 + ecc)
    total = weights.sum()
    if total <= 0:
        # Tous les voisins sont parfaitement ronds: aucun signal directionnel
        return 0.0

    agreement = np.sum(weights * np.cos(2.0 * (target_theta - theta))) / total
    return float(elongation_weight(target_ecc) * agreement)
