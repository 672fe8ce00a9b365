"""
histofeatures: vecteurs de features nucléaires pour le grading histopathologique
================================================================================

Transforme une segmentation de noyaux étiquetée et sa tuile H&E en un
vecteur de features étiqueté de longueur fixe (171 entrées par défaut):

- Morphométrie        : aire, axes, diamètre équivalent, excentricité,
                        solidité, compacité
- Topologie spatiale  : densité Voronoï, alignement Delaunay et
                        distances inter-noyaux
- Couleur             : moyenne / écart-type RGB et gris par région
- Texture             : banc de filtres de Gabor (8 échelles x 10
                        orientations) et descripteurs de co-occurrence
                        (Haralick)

Segmentation, chargement d'image et classification: hors périmètre.

Références:
-----------
1. Doyle S, et al. "Automated grading of breast cancer histopathology using
   spectral clustering with textural and architectural image features." ISBI 2008.
2. Haralick RM, et al. "Textural Features for Image Classification." IEEE SMC, 1973.
"""

from .config import FeatureConfig, FilterBankConfig, HaralickConfig
from .constants import FEATURE_VECTOR_LENGTH, MIN_REGION_AREA
from .exceptions import HistoFeaturesError, NoRegionsError, SizeMismatchError
from .measurements import RegionMeasurement
from .pipeline import (
    FeatureVector,
    compute_histopath_features,
    extract_region_measurements,
    feature_labels,
)
from .preprocessing.regions import RegionSet, filter_regions

__all__ = [
    'FeatureConfig',
    'FilterBankConfig',
    'HaralickConfig',
    'FEATURE_VECTOR_LENGTH',
    'MIN_REGION_AREA',
    'HistoFeaturesError',
    'NoRegionsError',
    'SizeMismatchError',
    'RegionMeasurement',
    'FeatureVector',
    'compute_histopath_features',
    'extract_region_measurements',
    'feature_labels',
    'RegionSet',
    'filter_regions',
]
