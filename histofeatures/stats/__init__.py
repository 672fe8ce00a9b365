"""
Statistiques de population.
"""

from .distribution import (
    DISORDER_FUNCTIONS,
    coefficient_disorder,
    defined_values,
    distribution_parameters,
    entropy_disorder,
)

__all__ = [
    'DISORDER_FUNCTIONS',
    'coefficient_disorder',
    'defined_values',
    'distribution_parameters',
    'entropy_disorder',
]
