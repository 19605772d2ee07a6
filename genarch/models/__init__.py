"""
Model fitting on simulated genotype/phenotype data
"""

from .elastic_net import fit_elastic_net
from .glm import build_design_matrix, fit_logistic_glm, glm_coefficient_table

__all__ = [
    'fit_elastic_net',
    'build_design_matrix',
    'fit_logistic_glm',
    'glm_coefficient_table',
]
