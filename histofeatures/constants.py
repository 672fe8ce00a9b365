"""
Constantes globales pour l'extraction de features histopathologiques.

Ce fichier est la SOURCE UNIQUE DE VÉRITÉ pour les seuils fixes, les
paramètres du banc de filtres et la disposition du vecteur de features.

Principe: une constante définie ICI est utilisée PARTOUT, jamais redéfinie.
Modifier une valeur ci-dessous change le contrat du vecteur de features sur
lequel les classifieurs de grade en aval ont été entraînés.
"""

import numpy as np

# =============================================================================
# FILTRE DE RÉGIONS
# =============================================================================

# Régions plus petites (pixels) = bruit de segmentation
MIN_REGION_AREA = 9

# =============================================================================
# BANC DE FILTRES DE GABOR
# =============================================================================

# Longueurs d'onde en pixels/cycle
GABOR_WAVELENGTHS = (4, 8, 12, 16, 20, 24, 28, 32)

# Orientations en degrés
GABOR_ORIENTATIONS = (0, 18, 36, 54, 72, 90, 108, 126, 144, 162)

# Largeur de bande fréquentielle (octaves) et rapport d'aspect de l'enveloppe
GABOR_BANDWIDTH = 1.0
GABOR_ASPECT_RATIO = 0.5

# =============================================================================
# CO-OCCURRENCE (HARALICK)
# =============================================================================

HARALICK_LEVELS = 8
HARALICK_DISTANCES = (1,)
HARALICK_ANGLES = (0.0, np.pi / 4, np.pi / 2, 3 * np.pi / 4)

HARALICK_NAMES = (
    "AngSecMoment",
    "InvDiffMoment",
    "Contrast",
    "Correlation",
    "Entropy",
    "SumAvg",
)

# =============================================================================
# RÉSUMÉ DE DISTRIBUTION
# =============================================================================

STATISTIC_NAMES = ("Avg", "Stdev", "Median", "IQR", "Skewness", "Kurtosis", "Disorder")
N_STATISTICS = len(STATISTIC_NAMES)

DISORDER_METHODS = ("entropy", "coefficient")
DEFAULT_DISORDER = "entropy"
DEFAULT_DISORDER_BINS = 10

# =============================================================================
# DISPOSITION DU VECTEUR DE FEATURES
# =============================================================================

# L'ordre fait partie du contrat de sortie
DISTRIBUTION_BLOCKS = (
    "Area",
    "MajorAxis",
    "EquivDiam",
    "Eccentricity",
    "Solidity",
    "Compactness",
    "Crowdedness",
    "Alignedness",
    "DelaunayDist",
    "NormDDMajorAxis",
    "NormDDEquivDiam",
    "RegionRedAvg",
    "RegionGreenAvg",
    "RegionBlueAvg",
    "RegionRedStdev",
    "RegionGreenStdev",
    "RegionBlueStdev",
    "RegionGrayAvg",
    "RegionGrayStdev",
)
N_DISTRIBUTION_BLOCKS = len(DISTRIBUTION_BLOCKS)

# Groupes de scalaires du banc de filtres: (préfixe, suffixe du label)
GABOR_GROUPS = (
    ("GaborAvg", "Avg"),
    ("GaborStd", "Avg"),
    ("GaborAvg", "Std"),
    ("GaborStd", "Std"),
)

# 19 x 7 + 4 x 8 + 6
FEATURE_VECTOR_LENGTH = (
    N_DISTRIBUTION_BLOCKS * N_STATISTICS
    + len(GABOR_GROUPS) * len(GABOR_WAVELENGTHS)
    + len(HARALICK_NAMES)
)
