"""
Simulation Pipeline Module

Runs one end-to-end simulation: draw genotypes, optionally induce LD,
derive a phenotype under the configured genetic architecture, optionally
fit the elastic-net harness, and save the outputs.
"""

import copy
import time
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..data.io_utils import save_simulation
from ..models.elastic_net import fit_elastic_net
from ..simulation.genotypes import simulate_genotypes
from ..simulation.ld import expand_ld_blocks, replace_with_ld
from ..simulation.phenotype import simulate_interaction_phenotype, simulate_liability
from ..utils.data_types import SimulationResult
from ..utils.errors import InvalidParameter

PHENOTYPE_MODELS = ('liability', 'interaction')

DEFAULT_CONFIG: Dict[str, Any] = {
    'n_obs': 10000,
    'n_snps': 10,
    'maf_range': (0.35, 0.5),
    'seed': 42,
    'ld': {
        'enabled': False,
        'keep_proportion': 0.5,
        'ld_range': (0.2, 0.8),
        'block_size': 0,
        'block_ld_range': (0.1, 0.9),
    },
    'phenotype': {
        'model': 'liability',
        'p_causal': 0.1,
        'heritability': 0.5,
        'prevalence': 0.2,
        'main_effects': None,
        'interaction_effects': None,
        'interaction_pairs': None,
        'noise_sd': 0.01,
    },
    'model_fit': {
        'enabled': False,
        'test_size': 0.2,
        'l1_ratios': (0.5,),
        'Cs': 10,
        'cv': 5,
        'max_iter': 1000,
    },
    'output_prefix': None,
}


def _deep_update(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in updates.items():
        if key not in base:
            raise InvalidParameter(f"Unknown configuration key: {key}")
        if isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def create_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return a copy of ``DEFAULT_CONFIG`` with nested ``overrides`` applied

    Example:
        >>> config = create_config({'n_obs': 500, 'phenotype': {'prevalence': 0.1}})
        >>> config['phenotype']['p_causal']
        0.1
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if overrides:
        _deep_update(config, copy.deepcopy(overrides))
    model = config['phenotype']['model']
    if model not in PHENOTYPE_MODELS:
        raise InvalidParameter(f"phenotype.model must be one of {PHENOTYPE_MODELS}, got {model!r}")
    return config


class SimulationPipeline:
    """
    High-level pipeline for one genotype/phenotype simulation.

    Typical workflow:
        1. Initialize with a config dict (see ``create_config``)
        2. Generate genotypes
        3. Optionally replace columns with LD variants and expand LD blocks
        4. Simulate the phenotype (additive liability or interaction model)
        5. Optionally fit the elastic-net harness
        6. Save outputs when ``output_prefix`` is set

    ``run()`` performs all steps in order. Every random draw comes from one
    generator seeded with ``config['seed']``, so a config reproduces its
    dataset exactly.

    Example:
        >>> pipeline = SimulationPipeline({'n_obs': 2000, 'n_snps': 50})
        >>> result = pipeline.run()
        >>> result.summary()['case_proportion']
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, verbose: bool = True):
        self.config = create_config(config)
        self.verbose = verbose
        self.rng = np.random.default_rng(self.config['seed'])

        self.genotypes: Optional[np.ndarray] = None
        self.maf: Optional[np.ndarray] = None
        self.ld_columns: list = []
        self.liability = None
        self.model_fit = None

    def log(self, message: str):
        """Internal logger"""
        if self.verbose:
            print(message)

    def log_step(self, step_name: str, start_time: Optional[float] = None):
        """Log a pipeline step with optional timing"""
        if start_time is not None:
            elapsed = time.time() - start_time
            self.log(f"{step_name} completed in {elapsed:.2f} seconds")
        else:
            self.log(f"{step_name}...")

    def generate_genotypes(self) -> np.ndarray:
        cfg = self.config
        start = time.time()
        self.log_step(f"Simulating {cfg['n_obs']} x {cfg['n_snps']} genotypes")
        self.genotypes, self.maf = simulate_genotypes(
            cfg['n_obs'], cfg['n_snps'], tuple(cfg['maf_range']),
            rng=self.rng, return_maf=True,
        )
        self.ld_columns = []
        self.log_step("Genotype simulation", start)
        return self.genotypes

    def apply_ld(self) -> np.ndarray:
        """Replace columns with LD variants, then expand LD blocks if requested"""
        self._require_genotypes()
        ld_cfg = self.config['ld']
        if not ld_cfg['enabled']:
            return self.genotypes

        start = time.time()
        self.log_step("Inducing linkage disequilibrium")
        self.genotypes, replaced, r2_values = replace_with_ld(
            self.genotypes, ld_cfg['keep_proportion'], tuple(ld_cfg['ld_range']),
            rng=self.rng, return_indices=True,
        )
        self.ld_columns = replaced.tolist()
        if replaced.size:
            self.log(f"   Replaced {replaced.size} columns (mean target r² = {r2_values.mean():.2f})")

        block_size = int(ld_cfg.get('block_size') or 0)
        if block_size > 0:
            expanded, sources = expand_ld_blocks(
                self.genotypes, block_size, tuple(ld_cfg['block_ld_range']),
                include_source=True, rng=self.rng,
            )
            is_source = np.r_[True, sources[1:] != sources[:-1]]
            derived = ~is_source | np.isin(sources, replaced)
            self.ld_columns = np.flatnonzero(derived).tolist()
            self.maf = self.maf[sources]
            self.genotypes = expanded
            self.log(f"   Expanded into blocks of {block_size + 1}: {expanded.shape[1]} variants")

        self.log_step("LD simulation", start)
        return self.genotypes

    def simulate_phenotype(self):
        self._require_genotypes()
        phe = self.config['phenotype']
        start = time.time()
        self.log_step(f"Simulating phenotype ({phe['model']} model)")

        if phe['model'] == 'liability':
            self.liability = simulate_liability(
                self.genotypes, phe['p_causal'], phe['heritability'], phe['prevalence'],
                rng=self.rng,
            )
        else:
            heritability = phe['heritability'] if phe.get('noise_sd') is None else None
            self.liability = simulate_interaction_phenotype(
                self.genotypes,
                main_effects=phe['main_effects'],
                interaction_effects=phe['interaction_effects'],
                interaction_pairs=phe['interaction_pairs'],
                prevalence=phe['prevalence'],
                noise_sd=phe.get('noise_sd'),
                heritability=heritability,
                rng=self.rng,
            )

        self.log(f"   Causal variants: {self.liability.n_causal}; "
                 f"proportion of cases: {self.liability.case_proportion:.3f}")
        self.log_step("Phenotype simulation", start)
        return self.liability

    def fit_model(self):
        if self.liability is None:
            raise ValueError("Phenotype not simulated. Call simulate_phenotype() first.")
        fit_cfg = self.config['model_fit']
        if not fit_cfg['enabled']:
            return None
        start = time.time()
        self.log_step("Fitting elastic-net logistic regression")
        self.model_fit = fit_elastic_net(
            self.genotypes, self.liability.phenotype,
            causal_mask=self.liability.causal_mask,
            test_size=fit_cfg['test_size'],
            l1_ratios=tuple(fit_cfg['l1_ratios']),
            Cs=fit_cfg['Cs'],
            cv=fit_cfg['cv'],
            max_iter=fit_cfg['max_iter'],
            rng=self.rng,
            verbose=self.verbose,
        )
        self.log_step("Model fit", start)
        return self.model_fit

    def result(self) -> SimulationResult:
        if self.liability is None:
            raise ValueError("Phenotype not simulated. Call simulate_phenotype() first.")
        return SimulationResult(
            genotypes=self.genotypes,
            phenotype=self.liability.phenotype,
            causal_mask=self.liability.causal_mask,
            maf=self.maf,
            liability=self.liability,
            model_fit=self.model_fit,
            ld_columns=self.ld_columns,
            config=self.config,
        )

    def save(self, output_prefix) -> Dict[str, Path]:
        paths = save_simulation(self.result(), output_prefix)
        self.log(f"Results written with prefix {output_prefix}")
        return paths

    def run(self) -> SimulationResult:
        """Run every configured step and return the result"""
        total = time.time()
        self.generate_genotypes()
        self.apply_ld()
        self.simulate_phenotype()
        self.fit_model()
        if self.config['output_prefix']:
            self.save(self.config['output_prefix'])
        self.log_step("Simulation", total)
        return self.result()

    def _require_genotypes(self):
        if self.genotypes is None:
            raise ValueError("Genotypes not simulated. Call generate_genotypes() first.")


def run_replicates(config: Optional[Dict[str, Any]] = None,
                   n_replicates: int = 10,
                   verbose: bool = True) -> pd.DataFrame:
    """Repeat a simulation with independent seeds derived from ``config['seed']``

    Returns:
        DataFrame with one row of ``SimulationResult.summary()`` per replicate
    """
    base = create_config(config)
    if n_replicates <= 0:
        raise InvalidParameter(f"n_replicates must be positive, got {n_replicates}")
    seeds = np.random.SeedSequence(base['seed']).generate_state(n_replicates)

    rows = []
    for i in tqdm(range(n_replicates), desc="Replicates", disable=not verbose):
        cfg = copy.deepcopy(base)
        cfg['seed'] = int(seeds[i])
        cfg['output_prefix'] = None
        summary = SimulationPipeline(cfg, verbose=False).run().summary()
        summary['replicate'] = i
        summary['seed'] = cfg['seed']
        rows.append(summary)

    df = pd.DataFrame(rows)
    return df[['replicate', 'seed'] + [c for c in df.columns if c not in ('replicate', 'seed')]]
