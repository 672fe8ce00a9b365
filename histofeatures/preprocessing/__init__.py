"""
Préparation des entrées: partitions en régions, filtre de surface minimale, gestion des canaux.
"""

from .regions import RegionSet, filter_regions
from .image import (
    check_size_compatibility,
    grayscale_projection,
    image_size,
    to_three_channels,
)

__all__ = [
    'RegionSet',
    'filter_regions',
    'check_size_compatibility',
    'grayscale_projection',
    'image_size',
    'to_three_channels',
]
