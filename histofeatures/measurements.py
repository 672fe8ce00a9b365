"""
Enregistrements de mesures par région.

Un RegionMeasurement par région retenue, assemblé une seule fois à partir
des résultats de morphométrie, de topologie spatiale et de couleur, jamais
modifié ensuite. Les valeurs indéfinies valent None (pas NaN); chaque
agrégat les filtre.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .metrics.color import ColorStatistics
from .metrics.morphometry import NucleusShape


@dataclass(frozen=True)
class RegionMeasurement:
    """Toutes les quantités dérivées d'une région nucléaire retenue."""
    index: int                          # Id séquentiel 1..K après filtrage
    source_id: int                      # Id dans le RegionSet d'entrée
    centroid: Tuple[float, float]       # (y, x)
    area: float
    major_axis_length: float
    minor_axis_length: float
    equivalent_diameter: float
    eccentricity: Optional[float]       # (grand - petit) / petit axe
    orientation: float                  # radians dans [0, pi)
    perimeter: float
    solidity: float
    compactness: Optional[float]        # 4 pi aire / périmètre^2
    crowdedness: Optional[float]        # aire / aire de la cellule Voronoï
    alignedness: Optional[float]
    color_mean: Tuple[Optional[float], Optional[float], Optional[float]]
    color_std: Tuple[Optional[float], Optional[float], Optional[float]]
    gray_mean: Optional[float]
    gray_std: Optional[float]

    @classmethod
    def from_parts(
        cls,
        shape: NucleusShape,
        crowdedness: Optional[float],
        alignedness: Optional[float],
        color: ColorStatistics,
    ) -> "RegionMeasurement":
        return cls(
            index=shape.index,
            source_id=shape.source_id,
            centroid=shape.centroid,
            area=shape.area,
            major_axis_length=shape.major_axis_length,
            minor_axis_length=shape.minor_axis_length,
            equivalent_diameter=shape.equivalent_diameter,
            eccentricity=shape.eccentricity,
            orientation=shape.orientation,
            perimeter=shape.perimeter,
            solidity=shape.solidity,
            compactness=shape.compactness,
            crowdedness=crowdedness,
            alignedness=alignedness,
            color_mean=color.mean,
            color_std=color.std,
            gray_mean=color.gray_mean,
            gray_std=color.gray_std,
        )


def column(measurements: Sequence[RegionMeasurement], name: str) -> List[Optional[float]]:
    """
    Projette un champ sur toutes les régions.

    Les champs couleur (tuples) sont adressés avec un suffixe de canal,
    p.ex. "color_mean[0]" pour le premier canal.

    Args:
        measurements: Enregistrements ordonnés des régions
        name: Nom du champ, avec un suffixe "[canal]" optionnel

    Returns:
        Liste de longueur K (None si indéfini)
    """
    if name.endswith("]"):
        field_name, channel = name[:-1].split("[")
        channel = int(channel)
        return [getattr(m, field_name)[channel] for m in measurements]
    return [getattr(m, name) for m in measurements]
