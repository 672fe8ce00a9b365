"""
Descripteurs de texture de l'image entière: banc de Gabor et matrice de co-occurrence.
"""

from .gabor import (
    GaborBankStatistics,
    compute_gabor_features,
    gabor_magnitude,
    gabor_sigma,
    make_gabor_kernel,
)
from .haralick import haralick_features, quantize_gray

__all__ = [
    'GaborBankStatistics',
    'compute_gabor_features',
    'gabor_magnitude',
    'gabor_sigma',
    'make_gabor_kernel',
    'haralick_features',
    'quantize_gray',
]
