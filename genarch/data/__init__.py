"""
Reading real genotype data and saving simulated datasets
"""

from .load_genotype_vcf import load_genotype_vcf, parse_region
from .io_utils import save_simulation, load_simulation

__all__ = ['load_genotype_vcf', 'parse_region', 'save_simulation', 'load_simulation']
