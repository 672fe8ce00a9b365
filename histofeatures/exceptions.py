"""
Taxonomie des erreurs du pipeline de features.

Seuls les échecs structurels lèvent une exception. Les dégénérescences
numériques par région (cellule Voronoï non bornée, noeud isolé, petit axe
nul, région sans pixel) sont représentées par None dans RegionMeasurement
et ne lèvent jamais.
"""


class HistoFeaturesError(Exception):
    """Classe de base des échecs d'extraction de features."""


class SizeMismatchError(HistoFeaturesError, ValueError):
    """Les dimensions du RegionSet ne correspondent pas au (H, W) de l'image."""

    def __init__(self, region_size, image_size):
        self.region_size = tuple(region_size)
        self.image_size = tuple(image_size)
        super().__init__(
            f"Input image size {self.image_size} must match total size "
            f"of regions {self.region_size}"
        )


class NoRegionsError(HistoFeaturesError, ValueError):
    """Toutes les régions candidates sont sous le seuil de surface minimale."""

    def __init__(self, n_candidates: int, min_area: int):
        self.n_candidates = n_candidates
        self.min_area = min_area
        super().__init__(
            f"No regions to extract features from: {n_candidates} candidate(s), "
            f"none with area >= {min_area} pixels"
        )
