"""
Genotype, linkage disequilibrium and phenotype simulators
"""

from .genotypes import draw_maf, simulate_genotypes, genotypes_to_frame
from .ld import add_simple_ld, replace_with_ld, add_simple_ld_block, expand_ld_blocks
from .phenotype import (
    genetic_score,
    liability_threshold,
    simulate_liability,
    simulate_y,
    simulate_interaction_phenotype,
)

__all__ = [
    'draw_maf',
    'simulate_genotypes',
    'genotypes_to_frame',
    'add_simple_ld',
    'replace_with_ld',
    'add_simple_ld_block',
    'expand_ld_blocks',
    'genetic_score',
    'liability_threshold',
    'simulate_liability',
    'simulate_y',
    'simulate_interaction_phenotype',
]
