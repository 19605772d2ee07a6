import argparse
from typing import Any, Dict, List, Optional, Tuple

from ..pipelines.simulation import PHENOTYPE_MODELS, create_config


def parse_float_list(text: Optional[str]) -> Optional[List[float]]:
    """Parse "0.01,0.01,0" into [0.01, 0.01, 0.0]"""
    if text is None or not text.strip():
        return None
    return [float(x) for x in text.split(',') if x.strip()]


def parse_pairs(text: Optional[str]) -> Optional[List[Tuple[int, int]]]:
    """Parse 1-based pairs "1:2,3:4" into 0-based [(0, 1), (2, 3)]"""
    if text is None or not text.strip():
        return None
    pairs = []
    for token in text.split(','):
        token = token.strip()
        if not token:
            continue
        try:
            a, b = (int(x) for x in token.split(':'))
        except ValueError:
            raise argparse.ArgumentTypeError(f"Interaction pair must look like 'a:b', got {token!r}")
        if a < 1 or b < 1:
            raise argparse.ArgumentTypeError(f"Interaction pairs are 1-based, got {token!r}")
        pairs.append((a - 1, b - 1))
    return pairs


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments for the simulation script"""
    parser = argparse.ArgumentParser(
        description="Simulate genotypes and liability-threshold phenotypes",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Genotypes
    parser.add_argument("--n-obs", "-n", type=int, default=10000,
                       help="Number of observations")
    parser.add_argument("--n-snps", "-p", type=int, default=10,
                       help="Number of variants")
    parser.add_argument("--maf-min", type=float, default=0.35,
                       help="Lower bound of the uniform MAF draw")
    parser.add_argument("--maf-max", type=float, default=0.5,
                       help="Upper bound of the uniform MAF draw")
    parser.add_argument("--seed", type=int, default=42,
                       help="Random seed")

    # Linkage disequilibrium
    parser.add_argument("--ld", action='store_true',
                       help="Replace a subset of variants with LD variants")
    parser.add_argument("--ld-keep", type=float, default=0.5,
                       help="Proportion of variants left untouched by LD replacement")
    parser.add_argument("--ld-min", type=float, default=0.2,
                       help="Lower bound of the per-variant r² draw")
    parser.add_argument("--ld-max", type=float, default=0.8,
                       help="Upper bound of the per-variant r² draw")
    parser.add_argument("--ld-block-size", type=int, default=0,
                       help="Derived variants added per source variant (0 disables blocks)")

    # Phenotype
    parser.add_argument("--model", choices=list(PHENOTYPE_MODELS), default='liability',
                       help="Genetic architecture used to derive the phenotype")
    parser.add_argument("--p-causal", type=float, default=0.1,
                       help="Proportion of causal variants (liability model)")
    parser.add_argument("--heritability", type=float, default=0.5,
                       help="Liability-scale heritability")
    parser.add_argument("--prevalence", "-k", type=float, default=0.2,
                       help="Population prevalence")
    parser.add_argument("--main-effects", type=parse_float_list, default=None,
                       help="Comma-separated main effects, one per variant (interaction model)")
    parser.add_argument("--interaction-effects", type=parse_float_list, default=None,
                       help="Comma-separated interaction effects (interaction model)")
    parser.add_argument("--interaction-pairs", type=parse_pairs, default=None,
                       help="1-based variant pairs, e.g. '1:2,3:4' (interaction model)")
    parser.add_argument("--noise-sd", type=float, default=0.01,
                       help="Fixed noise SD for the interaction model")
    parser.add_argument("--use-heritability-noise", action='store_true',
                       help="Calibrate interaction-model noise from --heritability instead of --noise-sd")

    # Model fit
    parser.add_argument("--fit", action='store_true',
                       help="Fit the elastic-net logistic regression")
    parser.add_argument("--l1-ratios", type=parse_float_list, default="0.5",
                       help="Comma-separated elastic-net mixing values")
    parser.add_argument("--cv", type=int, default=5,
                       help="Cross-validation folds")

    # Output
    parser.add_argument("--output-prefix", "-o", default=None,
                       help="Write CSV/JSON outputs with this prefix")
    parser.add_argument("--replicates", type=int, default=1,
                       help="Number of independent replicates")
    parser.add_argument("--quiet", action='store_true',
                       help="Suppress progress messages")

    return parser.parse_args(argv)


def config_from_args(args) -> Dict[str, Any]:
    """Build a pipeline config dict from parsed arguments"""
    overrides = {
        'n_obs': args.n_obs,
        'n_snps': args.n_snps,
        'maf_range': (args.maf_min, args.maf_max),
        'seed': args.seed,
        'ld': {
            'enabled': args.ld,
            'keep_proportion': args.ld_keep,
            'ld_range': (args.ld_min, args.ld_max),
            'block_size': args.ld_block_size,
        },
        'phenotype': {
            'model': args.model,
            'p_causal': args.p_causal,
            'heritability': args.heritability,
            'prevalence': args.prevalence,
            'main_effects': args.main_effects,
            'interaction_effects': args.interaction_effects,
            'interaction_pairs': args.interaction_pairs,
            'noise_sd': None if args.use_heritability_noise else args.noise_sd,
        },
        'model_fit': {
            'enabled': args.fit,
            'l1_ratios': tuple(args.l1_ratios or [0.5]),
            'cv': args.cv,
        },
        'output_prefix': args.output_prefix,
    }
    return create_config(overrides)
