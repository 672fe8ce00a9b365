"""
Résumé de distribution d'une population par région.

Chaque quantité mesurée (aire, densité, moyenne du rouge...) est réduite à
sept scalaires, toujours dans cet ordre:

    mean, stdev, median, IQR, skewness, kurtosis, disorder

Les entrées indéfinies (None, NaN, +/-inf) sont retirées avant tout calcul.
Une population vide donne sept NaN.

Mesures de désordre (interchangeables, voir FeatureConfig.disorder):
- "entropy"     : entropie de Shannon d'un histogramme de la population
                  divisée par log(bins), dans [0, 1]; 0 si toutes les
                  valeurs sont égales
- "coefficient" : 1 - 1 / (1 + stdev / mean), le désordre Voronoï/Delaunay
                  de Doyle et al. 2008
"""

from typing import Optional, Sequence, Tuple

import numpy as np
from scipy import stats

from ..constants import DEFAULT_DISORDER, DEFAULT_DISORDER_BINS, N_STATISTICS

DistributionSummary = Tuple[float, float, float, float, float, float, float]


def defined_values(values: Sequence[Optional[float]]) -> np.ndarray:
    """Retire les None et les valeurs non finies; renvoie un tableau float64."""
    kept = [v for v in values if v is not None]
    array = np.asarray(kept, dtype=np.float64).ravel()
    return array[np.isfinite(array)]


# =============================================================================
# MESURES DE DÉSORDRE
# =============================================================================

def entropy_disorder(values: np.ndarray, bins: int = DEFAULT_DISORDER_BINS) -> float:
    """Entropie de Shannon normalisée d'un histogramme à `bins` classes, dans [0, 1]."""
    if values.size == 0:
        return np.nan
    hist, _ = np.histogram(values, bins=bins)
    return float(stats.entropy(hist / hist.sum()) / np.log(bins))


def coefficient_disorder(values: np.ndarray) -> float:
    """1 - 1 / (1 + stdev / mean); NaN pour une moyenne nulle ou moins de 2 valeurs."""
    if values.size < 2:
        return np.nan
    mean = values.mean()
    if mean == 0:
        return np.nan
    return float(1.0 - 1.0 / (1.0 + values.std(ddof=1) / mean))


DISORDER_FUNCTIONS = {
    "entropy": entropy_disorder,
    "coefficient": lambda values, bins=None: coefficient_disorder(values),
}


# =============================================================================
# RÉSUMÉ
# =============================================================================

def distribution_parameters(
    values: Sequence[Optional[float]],
    disorder: str = DEFAULT_DISORDER,
    bins: int = DEFAULT_DISORDER_BINS,
) -> DistributionSummary:
    """
    Réduit une population à (mean, stdev, median, IQR, skewness, kurtosis, disorder).

    Args:
        values: Population, entrées indéfinies acceptées
        disorder: "entropy" ou "coefficient"
        bins: Classes de l'histogramme du désordre entropique

    Returns:
        Tuple de 7 floats (NaN si une statistique est indéfinie)

    Notes:
        - stdev est l'écart-type d'échantillon (ddof=1), NaN pour une valeur
        - skewness et kurtosis sont les estimateurs de moments biaisés; la
          kurtosis est celle de Pearson (3.0 pour une loi normale), pas l'excès
        - skewness/kurtosis valent NaN si la population n'a aucune dispersion
    """
    if disorder not in DISORDER_FUNCTIONS:
        raise ValueError(
            f"Unknown disorder measure '{disorder}'. "
            f"Choices: {list(DISORDER_FUNCTIONS)}"
        )

    x = defined_values(values)
    n = x.size
    if n == 0:
        return tuple([np.nan] * N_STATISTICS)

    mean = float(x.mean())
    stdev = float(x.std(ddof=1)) if n > 1 else np.nan
    median = float(np.median(x))
    q75, q25 = np.percentile(x, [75, 25])
    iqr = float(q75 - q25)

    if n > 1 and np.ptp(x) > 0:
        skewness = float(stats.skew(x))
        kurtosis = float(stats.kurtosis(x, fisher=False))
    else:
        skewness = kurtosis = np.nan

    disorder_value = DISORDER_FUNCTIONS[disorder](x, bins)

    return (mean, stdev, median, iqr, skewness, kurtosis, disorder_value)
