"""
genarch: simulating genotypes and disease phenotypes under different
genetic architectures

Additive main effects, multiplicative SNP x SNP interactions and linkage
disequilibrium, combined through a liability-threshold model.
"""

__version__ = "0.1.0"
__author__ = "genarch Development Team"

from .simulation.genotypes import draw_maf, simulate_genotypes
from .simulation.ld import add_simple_ld, replace_with_ld, add_simple_ld_block, expand_ld_blocks
from .simulation.phenotype import (
    genetic_score,
    liability_threshold,
    simulate_liability,
    simulate_y,
    simulate_interaction_phenotype,
)
from .models.elastic_net import fit_elastic_net
from .models.glm import fit_logistic_glm
from .data.load_genotype_vcf import load_genotype_vcf
from .pipelines.simulation import SimulationPipeline, create_config, run_replicates
from .utils.errors import SimulationError, InvalidParameter, NonPositiveVariance, NoCausalVariants

__all__ = [
    'draw_maf',
    'simulate_genotypes',
    'add_simple_ld',
    'replace_with_ld',
    'add_simple_ld_block',
    'expand_ld_blocks',
    'genetic_score',
    'liability_threshold',
    'simulate_liability',
    'simulate_y',
    'simulate_interaction_phenotype',
    'fit_elastic_net',
    'fit_logistic_glm',
    'load_genotype_vcf',
    'SimulationPipeline',
    'create_config',
    'run_replicates',
    'SimulationError',
    'InvalidParameter',
    'NonPositiveVariance',
    'NoCausalVariants',
]
