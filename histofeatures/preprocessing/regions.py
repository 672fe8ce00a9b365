"""
Ensembles de régions et filtre de surface minimale.

Un RegionSet est une partition étiquetée de la taille de l'image: chaque
pixel porte 0 (fond) ou l'id d'exactement une région nucléaire candidate.
Il provient d'une segmentation amont (watershed, HoVer-Net, CellPose...)
qui ne fait pas partie de ce package.
"""

import logging
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from ..constants import MIN_REGION_AREA
from ..exceptions import NoRegionsError

logger = logging.getLogger(__name__)


class RegionSet:
    """
    Partition étiquetée d'une grille (H, W) en régions candidates.

    Attributes:
        labels: Tableau int (H, W), 0 = fond, >0 = id de région
        region_ids: Ids candidats dans l'ordre (peut inclure des ids sans pixel)
        source_ids: Id de chaque région dans la segmentation d'origine
    """

    def __init__(
        self,
        labels: np.ndarray,
        region_ids: Optional[Sequence[int]] = None,
        source_ids: Optional[Sequence[int]] = None,
    ):
        labels = np.asarray(labels)
        if labels.ndim != 2:
            raise ValueError(f"Label map must be 2D (H, W), got shape {labels.shape}")
        if labels.dtype == bool:
            labels = labels.astype(np.int32)
        if not np.issubdtype(labels.dtype, np.integer):
            raise ValueError(f"Label map must hold integer ids, got dtype {labels.dtype}")
        if labels.size and labels.min() < 0:
            raise ValueError("Label ids must be non-negative")

        self.labels = labels
        if region_ids is None:
            present = np.unique(labels)
            region_ids = present[present > 0]
        self.region_ids: Tuple[int, ...] = tuple(int(r) for r in region_ids)

        if source_ids is None:
            source_ids = self.region_ids
        self.source_ids: Tuple[int, ...] = tuple(int(s) for s in source_ids)
        if len(self.source_ids) != len(self.region_ids):
            raise ValueError("source_ids must pair 1:1 with region_ids")

    # -------------------------------------------------------------------------
    # Constructeurs
    # -------------------------------------------------------------------------

    @classmethod
    def from_label_image(cls, labels: np.ndarray) -> "RegionSet":
        """Les régions sont les valeurs de label positives, par ordre croissant."""
        return cls(labels)

    @classmethod
    def from_pixel_lists(
        cls,
        image_size: Tuple[int, int],
        pixel_lists: Sequence[Sequence[int]],
    ) -> "RegionSet":
        """
        Construit à partir d'une description type composantes connexes.

        Args:
            image_size: (H, W) de l'image de référence
            pixel_lists: Une séquence d'indices de pixels plats (row-major)
                par région; la région i reçoit l'id i + 1. Listes vides acceptées.

        Returns:
            RegionSet d'ids 1..len(pixel_lists)

        Raises:
            ValueError: Si un indice sort de l'image ou si deux régions se chevauchent
        """
        h, w = int(image_size[0]), int(image_size[1])
        labels = np.zeros(h * w, dtype=np.int32)

        for i, pixels in enumerate(pixel_lists, start=1):
            idx = np.asarray(pixels, dtype=np.int64).ravel()
            if idx.size == 0:
                continue
            if idx.min() < 0 or idx.max() >= h * w:
                raise ValueError(f"Region {i}: pixel index out of bounds for image size {(h, w)}")
            if np.any(labels[idx] != 0):
                raise ValueError(f"Region {i} overlaps a previous region")
            labels[idx] = i

        return cls(labels.reshape(h, w), region_ids=range(1, len(pixel_lists) + 1))

    # -------------------------------------------------------------------------
    # Accesseurs
    # -------------------------------------------------------------------------

    @property
    def image_size(self) -> Tuple[int, int]:
        return self.labels.shape[0], self.labels.shape[1]

    def __len__(self) -> int:
        return len(self.region_ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self.region_ids)

    def __repr__(self) -> str:
        return f"RegionSet(image_size={self.image_size}, n_regions={len(self)})"

    def areas(self) -> np.ndarray:
        """Nombre de pixels de chaque région, dans l'ordre de region_ids."""
        if not self.region_ids:
            return np.zeros(0, dtype=np.int64)
        counts = np.bincount(
            self.labels.ravel(),
            minlength=max(self.region_ids) + 1,
        )
        return counts[list(self.region_ids)]

    def coords(self, region_id: int) -> np.ndarray:
        """Tableau (N, 2) des coordonnées (ligne, colonne) d'une région."""
        return np.argwhere(self.labels == region_id)


# =============================================================================
# FILTRE DE RÉGIONS
# =============================================================================

def filter_regions(regions: RegionSet, min_area: int = MIN_REGION_AREA) -> RegionSet:
    """
    Élimine les régions sous la surface minimale en pixels.

    Les régions retenues gardent leur ordre d'origine et sont renumérotées
    1..K; source_ids conserve le lien avec les ids d'entrée. Filtrer un
    ensemble déjà filtré avec le même seuil renvoie un ensemble identique.

    Args:
        regions: Régions candidates
        min_area: Nombre minimal de pixels (inclus)

    Returns:
        RegionSet d'ids 1..K

    Raises:
        NoRegionsError: Si aucune région n'atteint min_area
    """
    areas = regions.areas()
    keep = [i for i, area in enumerate(areas) if area >= min_area]

    if not keep:
        raise NoRegionsError(len(regions), min_area)

    # Table de correspondance: ancien id -> nouvel id (0 = éliminé / fond)
    lut = np.zeros(
        max(int(regions.labels.max()), max(regions.region_ids)) + 1, dtype=np.int32
    )
    for new_id, i in enumerate(keep, start=1):
        lut[regions.region_ids[i]] = new_id

    filtered = RegionSet(
        lut[regions.labels],
        region_ids=range(1, len(keep) + 1),
        source_ids=[regions.source_ids[i] for i in keep],
    )

    logger.debug(
        f"Region filter: kept {len(keep)}/{len(regions)} regions (min_area={min_area})"
    )
    return filtered
