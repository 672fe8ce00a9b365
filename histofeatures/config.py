"""
Objets de configuration immuables du pipeline de features.

Les valeurs par défaut viennent de constants.py; une instance peut être
passée à compute_histopath_features() pour changer les paramètres du banc
de filtres ou de la texture.
"""

from dataclasses import dataclass, field
from typing import Tuple

from .constants import (
    DEFAULT_DISORDER,
    DEFAULT_DISORDER_BINS,
    DISORDER_METHODS,
    GABOR_ASPECT_RATIO,
    GABOR_BANDWIDTH,
    GABOR_GROUPS,
    GABOR_ORIENTATIONS,
    GABOR_WAVELENGTHS,
    HARALICK_ANGLES,
    HARALICK_DISTANCES,
    HARALICK_LEVELS,
    HARALICK_NAMES,
    MIN_REGION_AREA,
    N_DISTRIBUTION_BLOCKS,
    N_STATISTICS,
)


@dataclass(frozen=True)
class FilterBankConfig:
    """Banc de Gabor: chaque longueur d'onde croisée avec chaque orientation."""
    wavelengths: Tuple[float, ...] = GABOR_WAVELENGTHS     # pixels/cycle
    orientations: Tuple[float, ...] = GABOR_ORIENTATIONS   # degrés
    bandwidth: float = GABOR_BANDWIDTH                     # octaves
    aspect_ratio: float = GABOR_ASPECT_RATIO
    n_workers: int = 1                                     # 1 = séquentiel

    def __post_init__(self):
        # Les listes passées par l'appelant sont figées en tuples
        object.__setattr__(self, "wavelengths", tuple(self.wavelengths))
        object.__setattr__(self, "orientations", tuple(self.orientations))

        if not self.wavelengths or not self.orientations:
            raise ValueError("Filter bank needs at least one wavelength and one orientation")
        if any(w <= 0 for w in self.wavelengths):
            raise ValueError(f"Wavelengths must be positive, got {self.wavelengths}")
        if self.bandwidth <= 0 or self.aspect_ratio <= 0:
            raise ValueError("bandwidth and aspect_ratio must be positive")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")

    @property
    def n_filters(self) -> int:
        return len(self.wavelengths) * len(self.orientations)


@dataclass(frozen=True)
class HaralickConfig:
    """Paramètres de la matrice de co-occurrence."""
    levels: int = HARALICK_LEVELS
    distances: Tuple[int, ...] = HARALICK_DISTANCES
    angles: Tuple[float, ...] = HARALICK_ANGLES            # radians
    symmetric: bool = True

    def __post_init__(self):
        object.__setattr__(self, "distances", tuple(self.distances))
        object.__setattr__(self, "angles", tuple(self.angles))

        if self.levels < 2:
            raise ValueError(f"levels must be >= 2, got {self.levels}")
        if not self.distances or not self.angles:
            raise ValueError("Co-occurrence needs at least one distance and one angle")


@dataclass(frozen=True)
class FeatureConfig:
    """Configuration de haut niveau d'une extraction de features."""
    min_region_area: int = MIN_REGION_AREA
    filter_bank: FilterBankConfig = field(default_factory=FilterBankConfig)
    haralick: HaralickConfig = field(default_factory=HaralickConfig)
    disorder: str = DEFAULT_DISORDER
    disorder_bins: int = DEFAULT_DISORDER_BINS

    def __post_init__(self):
        if self.min_region_area < 1:
            raise ValueError(f"min_region_area must be >= 1, got {self.min_region_area}")
        if self.disorder not in DISORDER_METHODS:
            raise ValueError(
                f"Unknown disorder measure '{self.disorder}'. "
                f"Choices: {list(DISORDER_METHODS)}"
            )
        if self.disorder_bins < 2:
            raise ValueError(f"disorder_bins must be >= 2, got {self.disorder_bins}")

    @property
    def vector_length(self) -> int:
        """Longueur du vecteur produit avec cette configuration (171 par défaut)."""
        return (
            N_DISTRIBUTION_BLOCKS * N_STATISTICS
            + len(GABOR_GROUPS) * len(self.filter_bank.wavelengths)
            + len(HARALICK_NAMES)
        )
