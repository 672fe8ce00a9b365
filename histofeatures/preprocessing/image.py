"""
Gestion des canaux image pour l'extraction de features.

Deux règles distinctes:
- Statistiques couleur par région: une image 3 canaux est lue comme
  (R, G, B); tout autre nombre de canaux réplique le canal 1 dans les trois
  emplacements (un canal unique donne trois statistiques identiques).
- Projection en gris de l'image entière (Gabor, co-occurrence): moyenne non
  pondérée des trois premiers canaux dès que C >= 3; réplication du canal 1
  seulement si C < 3.
"""

from typing import Tuple

import numpy as np

from ..exceptions import SizeMismatchError


def image_size(image: np.ndarray) -> Tuple[int, int]:
    """(H, W) d'une image 2D ou 3D."""
    if image.ndim not in (2, 3):
        raise ValueError(f"Image must be (H, W) or (H, W, C), got shape {image.shape}")
    return image.shape[0], image.shape[1]


def check_size_compatibility(region_size: Tuple[int, int], image: np.ndarray) -> None:
    """
    Vérifie que la partition en régions et l'image ont le même (H, W).

    Raises:
        SizeMismatchError: Si les tailles diffèrent
    """
    img_size = image_size(image)
    if tuple(region_size) != img_size:
        raise SizeMismatchError(region_size, img_size)


def to_three_channels(image: np.ndarray) -> np.ndarray:
    """
    Convertit une image en float64 (H, W, 3) pour les statistiques couleur.

    Args:
        image: Tableau (H, W) ou (H, W, C), dtype numérique quelconque

    Returns:
        Tableau float64 (H, W, 3)
    """
    image_size(image)
    image = np.asarray(image, dtype=np.float64)

    if image.ndim == 2:
        image = image[:, :, np.newaxis]

    if image.shape[2] == 3:
        return image

    return np.repeat(image[:, :, :1], 3, axis=2)


def grayscale_projection(image: np.ndarray) -> np.ndarray:
    """
    Projection en gris (R + G + B) / 3 de l'image entière, (H, W) float64.

    Les canaux au-delà du troisième (alpha...) sont ignorés; une image à
    moins de 3 canaux est projetée sur son canal 1.
    """
    image_size(image)
    image = np.asarray(image, dtype=np.float64)

    if image.ndim == 3 and image.shape[2] >= 3:
        return (image[:, :, 0] + image[:, :, 1] + image[:, :, 2]) / 3

    rgb = to_three_channels(image)
    return (rgb[:, :, 0] + rgb[:, :, 1] + rgb[:, :, 2]) / 3
