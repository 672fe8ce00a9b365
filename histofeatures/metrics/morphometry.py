"""
Morphométrie nucléaire des régions retenues.

Les propriétés de forme viennent de scikit-image regionprops (ellipse de
mêmes moments d'ordre 2, enveloppe convexe, périmètre du contour). Trois
quantités en sont dérivées:

- eccentricity : (grand - petit) / petit axe, un aplatissement linéaire et
                 non l'excentricité de la conique, combinable linéairement
                 avec l'orientation dans le score d'alignement
- orientation  : angle du grand axe en radians ramené dans [0, pi); un
                 noyau a un axe, pas une direction
- compactness  : 4 pi aire / périmètre^2 (1.0 = cercle parfait)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from skimage.measure import regionprops

from ..preprocessing.regions import RegionSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NucleusShape:
    """Descripteurs de forme d'une région retenue."""
    index: int                       # Id séquentiel 1..K
    source_id: int                   # Id dans la segmentation d'origine
    centroid: Tuple[float, float]    # (y, x)
    area: float                      # Pixels
    major_axis_length: float
    minor_axis_length: float
    equivalent_diameter: float       # Diamètre du cercle de même aire
    eccentricity: Optional[float]    # None si petit axe nul
    raw_orientation: float           # Degrés depuis l'horizontale, (-90, 90]
    orientation: float               # Radians, [0, pi)
    perimeter: float
    solidity: float                  # Aire / aire de l'enveloppe convexe
    compactness: Optional[float]     # None si périmètre nul


# =============================================================================
# QUANTITÉS DÉRIVÉES
# =============================================================================

def compute_eccentricity(major_axis_length: float, minor_axis_length: float) -> Optional[float]:
    """(grand - petit) / petit axe, indéfini pour un petit axe nul."""
    if not minor_axis_length > 0:
        return None
    return float((major_axis_length - minor_axis_length) / minor_axis_length)


def raw_orientation_degrees(phi: float) -> float:
    """
    Convertit une orientation regionprops en degrés depuis l'horizontale.

    regionprops mesure l'angle entre l'axe des lignes et le grand axe dans
    [-pi/2, pi/2]. L'angle renvoyé est mesuré dans le sens trigonométrique
    depuis l'axe x de l'image affichée, dans (-90, 90].

    Args:
        phi: Orientation regionprops (radians)

    Returns:
        Orientation en degrés
    """
    degrees = np.degrees(phi) - 90.0
    if degrees <= -90.0:
        degrees += 180.0
    return float(degrees)


def normalize_orientation(raw_degrees: float) -> float:
    """
    Ramène une orientation en degrés à un angle d'axe dans [0, pi).

    Les angles négatifs reçoivent +pi; les angles positifs ou nuls sont
    seulement convertis en radians.
    """
    theta = raw_degrees * (np.pi / 180.0)
    if theta < 0:
        theta += np.pi
        # -1e-17 degrés arrondirait sinon exactement à pi
        if theta >= np.pi:
            theta = 0.0
    return float(theta)


def compute_compactness(area: float, perimeter: float) -> Optional[float]:
    """4 pi aire / périmètre^2, indéfini pour un périmètre nul."""
    if not perimeter > 0:
        return None
    return float(4 * np.pi * area / (perimeter ** 2))


# =============================================================================
# EXTRACTION
# =============================================================================

def extract_morphometry(regions: RegionSet) -> List[NucleusShape]:
    """
    Calcule les descripteurs de forme de chaque région d'un RegionSet filtré.

    Args:
        regions: Sortie de filter_regions() (ids 1..K, toutes non vides)

    Returns:
        Un NucleusShape par région, dans l'ordre des ids
    """
    position = {region_id: i for i, region_id in enumerate(regions.region_ids)}
    shapes = []

    for props in regionprops(regions.labels):
        if props.label not in position:
            continue
        i = position[props.label]

        major = float(props.axis_major_length)
        minor = float(props.axis_minor_length)
        area = float(props.area)
        perimeter = float(props.perimeter)
        raw = raw_orientation_degrees(props.orientation)

        shapes.append(NucleusShape(
            index=i + 1,
            source_id=regions.source_ids[i],
            centroid=(float(props.centroid[0]), float(props.centroid[1])),
            area=area,
            major_axis_length=major,
            minor_axis_length=minor,
            equivalent_diameter=float(props.equivalent_diameter_area),
            eccentricity=compute_eccentricity(major, minor),
            raw_orientation=raw,
            orientation=normalize_orientation(raw),
            perimeter=perimeter,
            solidity=float(props.solidity),
            compactness=compute_compactness(area, perimeter),
        ))

    n_degenerate = sum(1 for s in shapes if s.eccentricity is None)
    if n_degenerate:
        logger.debug(f"{n_degenerate} region(s) with zero minor axis: eccentricity undefined")

    shapes.sort(key=lambda s: s.index)
    return shapes
