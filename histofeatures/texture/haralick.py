"""
Descripteurs de texture par co-occurrence des niveaux de gris (Haralick)
d'une image entière.

Six descripteurs, chacun moyenné sur tous les décalages (distance, angle)
configurés, dans cet ordre:

1. Second moment angulaire   sum P(i,j)^2
2. Moment diff. inverse      sum P(i,j) / (1 + (i-j)^2)
3. Contraste                 sum P(i,j) (i-j)^2
4. Corrélation               sum P(i,j) (i-mu_i)(j-mu_j) / (s_i s_j)
5. Entropie                  -sum P(i,j) log2 P(i,j)
6. Moyenne des sommes        sum_k k p_{x+y}(k), niveaux de gris comptés depuis 1

Référence:
- Haralick RM, Shanmugam K, Dinstein I. "Textural Features for Image
  Classification." IEEE Trans. Systems, Man, and Cybernetics, 1973.
"""

from typing import Optional

import numpy as np
from skimage.feature import graycomatrix, graycoprops

from ..config import HaralickConfig
from ..preprocessing.image import grayscale_projection


def quantize_gray(gray: np.ndarray, levels: int) -> np.ndarray:
    """
    Projette linéairement les gris sur 0..levels-1 selon la plage propre de
    l'image.

    Une image constante est entièrement au niveau 0.
    """
    gray = np.asarray(gray, dtype=np.float64)
    lo, hi = float(np.nanmin(gray)), float(np.nanmax(gray))
    if hi <= lo:
        return np.zeros(gray.shape, dtype=np.uint8)

    scaled = np.floor((gray - lo) / (hi - lo) * levels)
    scaled = np.nan_to_num(scaled, nan=0.0)
    return np.clip(scaled, 0, levels - 1).astype(np.uint8)


def haralick_features(image: np.ndarray, config: Optional[HaralickConfig] = None) -> np.ndarray:
    """
    Calcule les six descripteurs de co-occurrence d'une image.

    Args:
        image: Image (H, W) ou (H, W, C); projetée en gris (R + G + B) / 3
        config: Paramètres de co-occurrence (défaut: 8 niveaux, distance 1,
                0/45/90/135 degrés, symétrique)

    Returns:
        np.ndarray de forme (6,), dans l'ordre de constants.HARALICK_NAMES
    """
    if config is None:
        config = HaralickConfig()

    levels = config.levels
    quantized = quantize_gray(grayscale_projection(image), levels)

    glcm = graycomatrix(
        quantized,
        distances=list(config.distances),
        angles=list(config.angles),
        levels=levels,
        symmetric=config.symmetric,
        normed=True,
    )

    asm = graycoprops(glcm, 'ASM').mean()
    idm = graycoprops(glcm, 'homogeneity').mean()
    contrast = graycoprops(glcm, 'contrast').mean()
    correlation = graycoprops(glcm, 'correlation').mean()

    # Vue (L, L, n_offsets), une matrice normalisée par décalage
    p = glcm.reshape(levels, levels, -1).astype(np.float64)

    with np.errstate(divide='ignore', invalid='ignore'):
        log_p = np.where(p > 0, np.log2(p), 0.0)
    entropy = float(np.mean(-np.sum(p * log_p, axis=(0, 1))))

    i, j = np.meshgrid(np.arange(1, levels + 1), np.arange(1, levels + 1), indexing='ij')
    sum_average = float(np.mean(np.sum(p * (i + j)[:, :, np.newaxis], axis=(0, 1))))

    return np.array(
        [asm, idm, contrast, correlation, entropy, sum_average],
        dtype=np.float64,
    )
