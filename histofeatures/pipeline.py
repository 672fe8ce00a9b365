"""
Pipeline de features nucléaires histopathologiques.

(régions, image) -> vecteur de 171 features étiquetées pour le grading:

    Filtre de régions (aire >= 9)
      -> morphométrie, topologie Voronoï/Delaunay, statistiques couleur
      -> 19 résumés de distribution x 7 statistiques     (133 valeurs)
    + banc de Gabor, 4 réductions x 8 longueurs d'onde   (32 valeurs)
    + descripteurs de co-occurrence                       (6 valeurs)

L'ordre des labels est fixe et indépendant de l'entrée; les modèles en aval
indexent les features par position.

Usage:
    >>> from histofeatures import RegionSet, compute_histopath_features
    >>> regions = RegionSet.from_label_image(instance_map)
    >>> values, labels = compute_histopath_features(regions, image_rgb)
    >>> len(values), labels[0]
    (171, 'Area_Avg')
"""

import logging
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from .analysis.spatial_analysis import SpatialTopology, build_spatial_topology
from .config import FeatureConfig
from .constants import (
    DISTRIBUTION_BLOCKS,
    GABOR_GROUPS,
    HARALICK_NAMES,
    STATISTIC_NAMES,
)
from .measurements import RegionMeasurement, column
from .metrics.color import extract_color_statistics
from .metrics.morphometry import extract_morphometry
from .preprocessing.image import check_size_compatibility, grayscale_projection
from .preprocessing.regions import RegionSet, filter_regions
from .stats.distribution import distribution_parameters
from .texture.gabor import compute_gabor_features
from .texture.haralick import haralick_features

logger = logging.getLogger(__name__)


class FeatureVector(NamedTuple):
    """Valeurs et labels de features appariés par indice."""
    values: np.ndarray
    labels: Tuple[str, ...]

    def as_dict(self) -> Dict[str, float]:
        return {label: float(v) for label, v in zip(self.labels, self.values)}


# =============================================================================
# LABELS
# =============================================================================

def feature_labels(config: Optional[FeatureConfig] = None) -> Tuple[str, ...]:
    """
    Labels ordonnés des features, sans aucun calcul.

    <Quantité>_<Statistique> pour les blocs de distribution,
    <Filtre><Échelle>_<Stat> pour le banc de filtres, Haralick_<Nom> pour
    les descripteurs de co-occurrence.
    """
    if config is None:
        config = FeatureConfig()

    labels: List[str] = [
        f"{block}_{stat}" for block in DISTRIBUTION_BLOCKS for stat in STATISTIC_NAMES
    ]
    labels += [
        f"{prefix}{wavelength:g}_{suffix}"
        for prefix, suffix in GABOR_GROUPS
        for wavelength in config.filter_bank.wavelengths
    ]
    labels += [f"Haralick_{name}" for name in HARALICK_NAMES]
    return tuple(labels)


# =============================================================================
# MESURES PAR RÉGION
# =============================================================================

def extract_region_measurements(
    regions: RegionSet,
    image: np.ndarray,
    config: Optional[FeatureConfig] = None,
) -> Tuple[Tuple[RegionMeasurement, ...], SpatialTopology]:
    """
    Filtre les régions puis mesure forme, topologie et couleur des survivantes.

    Args:
        regions: Régions candidates, même (H, W) que l'image
        image: Image (H, W) ou (H, W, C)

    Returns:
        (mesures dans l'ordre des index 1..K, topologie spatiale)

    Raises:
        SizeMismatchError: Si les tailles des régions et de l'image diffèrent
        NoRegionsError: Si aucune région n'atteint la surface minimale
    """
    if config is None:
        config = FeatureConfig()

    image = np.asarray(image)
    check_size_compatibility(regions.image_size, image)

    logger.debug("Filtering regions...")
    retained = filter_regions(regions, config.min_region_area)

    logger.debug("Computing morphometry...")
    shapes = extract_morphometry(retained)

    logger.debug("Building spatial topology...")
    topology = build_spatial_topology(shapes)

    logger.debug("Computing color statistics...")
    colors = extract_color_statistics(retained, image)

    measurements = tuple(
        RegionMeasurement.from_parts(
            shape,
            topology.crowdedness[i],
            topology.alignedness[i],
            colors[i],
        )
        for i, shape in enumerate(shapes)
    )
    return measurements, topology


def distribution_populations(
    measurements: Sequence[RegionMeasurement],
    topology: SpatialTopology,
) -> List[Sequence[Optional[float]]]:
    """Les 19 populations résumées, dans l'ordre de DISTRIBUTION_BLOCKS."""
    populations = {
        "Area": column(measurements, "area"),
        "MajorAxis": column(measurements, "major_axis_length"),
        "EquivDiam": column(measurements, "equivalent_diameter"),
        "Eccentricity": column(measurements, "eccentricity"),
        "Solidity": column(measurements, "solidity"),
        "Compactness": column(measurements, "compactness"),
        "Crowdedness": column(measurements, "crowdedness"),
        "Alignedness": column(measurements, "alignedness"),
        "DelaunayDist": topology.edge_distances,
        "NormDDMajorAxis": topology.norm_distances_major_axis,
        "NormDDEquivDiam": topology.norm_distances_equiv_diameter,
        "RegionRedAvg": column(measurements, "color_mean[0]"),
        "RegionGreenAvg": column(measurements, "color_mean[1]"),
        "RegionBlueAvg": column(measurements, "color_mean[2]"),
        "RegionRedStdev": column(measurements, "color_std[0]"),
        "RegionGreenStdev": column(measurements, "color_std[1]"),
        "RegionBlueStdev": column(measurements, "color_std[2]"),
        "RegionGrayAvg": column(measurements, "gray_mean"),
        "RegionGrayStdev": column(measurements, "gray_std"),
    }
    return [populations[block] for block in DISTRIBUTION_BLOCKS]


# =============================================================================
# POINT D'ENTRÉE PRINCIPAL
# =============================================================================

def compute_histopath_features(
    regions: Union[RegionSet, np.ndarray],
    image: np.ndarray,
    config: Optional[FeatureConfig] = None,
) -> FeatureVector:
    """
    Calcule le vecteur de features étiqueté d'une tuile histopathologique.

    Args:
        regions: RegionSet, ou carte de labels entière (H, W)
        image: Image RGB (H, W, 3); avec un autre nombre de canaux, le
               canal 1 est répliqué dans les trois emplacements couleur et
               la projection en gris utilise les trois premiers canaux
               s'il y en a au moins trois
        config: Configuration du pipeline (le défaut reproduit les 171 entrées)

    Returns:
        FeatureVector(values, labels), tous deux de longueur config.vector_length

    Raises:
        SizeMismatchError: Si les tailles des régions et de l'image diffèrent
        NoRegionsError: Si toutes les régions sont sous min_region_area
    """
    if config is None:
        config = FeatureConfig()
    if not isinstance(regions, RegionSet):
        regions = RegionSet.from_label_image(regions)
    image = np.asarray(image)

    measurements, topology = extract_region_measurements(regions, image, config)

    summaries = [
        distribution_parameters(population, config.disorder, config.disorder_bins)
        for population in distribution_populations(measurements, topology)
    ]

    logger.debug("Applying Gabor filter bank...")
    gabor = compute_gabor_features(grayscale_projection(image), config.filter_bank)

    logger.debug("Computing co-occurrence descriptors...")
    glcm = haralick_features(image, config.haralick)

    values = np.concatenate([
        np.asarray(summaries, dtype=np.float64).ravel(),
        gabor.as_vector(),
        glcm,
    ])
    labels = feature_labels(config)

    if len(values) != len(labels):
        raise RuntimeError(
            f"Feature/label length mismatch: {len(values)} values, {len(labels)} labels"
        )

    logger.info(
        f"Histopath features: {len(measurements)}/{len(regions)} regions retained, "
        f"{len(values)} features"
    )
    return FeatureVector(values=values, labels=labels)
