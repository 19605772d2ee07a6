"""
File I/O utilities for simulated datasets
"""

import json
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, Union

from ..simulation.genotypes import genotypes_to_frame
from ..utils.data_types import SimulationResult


def save_simulation(result: SimulationResult, output_prefix: Union[str, Path]) -> Dict[str, Path]:
    """Write a simulated dataset to CSV files

    Files written:
        {prefix}.genotypes.csv  - ID column plus X1..Xp dosages
        {prefix}.phenotype.csv  - ID, phenotype
        {prefix}.variants.csv   - SNP, causal flag, MAF (when known), LD-replaced flag
        {prefix}.summary.json   - headline numbers and the config used

    Returns:
        Mapping of file role to path
    """
    output_prefix = Path(output_prefix)
    output_prefix.parent.mkdir(parents=True, exist_ok=True)

    ids = [f"ind{i + 1}" for i in range(result.n_obs)]
    geno_df = genotypes_to_frame(result.genotypes)
    geno_df.insert(0, 'ID', ids)

    phe_df = pd.DataFrame({'ID': ids, 'phenotype': result.phenotype.astype(int)})

    variants = pd.DataFrame({
        'SNP': [f"X{j + 1}" for j in range(result.n_snps)],
        'causal': result.causal_mask.astype(bool),
        'ld_replaced': np.isin(np.arange(result.n_snps), result.ld_columns),
    })
    if result.maf is not None and len(result.maf) == result.n_snps:
        variants['maf'] = result.maf

    paths = {
        'genotypes': Path(f"{output_prefix}.genotypes.csv"),
        'phenotype': Path(f"{output_prefix}.phenotype.csv"),
        'variants': Path(f"{output_prefix}.variants.csv"),
        'summary': Path(f"{output_prefix}.summary.json"),
    }
    geno_df.to_csv(paths['genotypes'], index=False)
    phe_df.to_csv(paths['phenotype'], index=False)
    variants.to_csv(paths['variants'], index=False)

    summary = {
        'summary': {k: _to_builtin(v) for k, v in result.summary().items()},
        'config': {k: _to_builtin(v) for k, v in result.config.items()},
    }
    with open(paths['summary'], 'w') as fh:
        json.dump(summary, fh, indent=2)

    return paths


def load_simulation(output_prefix: Union[str, Path]) -> SimulationResult:
    """Load a dataset written by :func:`save_simulation`"""
    output_prefix = Path(output_prefix)
    geno_path = Path(f"{output_prefix}.genotypes.csv")
    phe_path = Path(f"{output_prefix}.phenotype.csv")
    var_path = Path(f"{output_prefix}.variants.csv")

    for path in (geno_path, phe_path, var_path):
        if not path.exists():
            raise FileNotFoundError(f"Simulation file not found: {path}")

    geno_df = pd.read_csv(geno_path)
    phe_df = pd.read_csv(phe_path)
    variants = pd.read_csv(var_path)

    if not geno_df['ID'].equals(phe_df['ID']):
        raise ValueError("Genotype and phenotype files list different individuals")

    genotypes = geno_df.drop(columns=['ID']).to_numpy(dtype=np.int8)
    maf = variants['maf'].to_numpy() if 'maf' in variants.columns else None
    ld_columns = np.flatnonzero(variants['ld_replaced'].to_numpy(dtype=bool)).tolist()

    config = {}
    summary_path = Path(f"{output_prefix}.summary.json")
    if summary_path.exists():
        with open(summary_path) as fh:
            config = json.load(fh).get('config', {})

    return SimulationResult(
        genotypes=genotypes,
        phenotype=phe_df['phenotype'].to_numpy(dtype=np.int8),
        causal_mask=variants['causal'].to_numpy(dtype=bool),
        maf=maf,
        ld_columns=ld_columns,
        config=config,
    )


def _to_builtin(value):
    """Convert numpy scalars/arrays and tuples into JSON-friendly values"""
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (list, tuple)):
        return [_to_builtin(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_builtin(v) for k, v in value.items()}
    return value
