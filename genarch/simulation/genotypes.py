"""
Genotype simulation under Hardy-Weinberg equilibrium

Each variant gets a minor allele frequency drawn from Uniform(lo, hi) and
every observation's dosage at that variant is an independent
Binomial(2, maf) draw.
"""

from typing import Tuple, Union

import numpy as np
import pandas as pd

from ..utils.validation import RandomState, as_rng, check_matrix, check_positive_int, check_range

DEFAULT_MAF_RANGE = (0.35, 0.5)


def draw_maf(n_snps: int,
             maf_range: Tuple[float, float] = DEFAULT_MAF_RANGE,
             rng: RandomState = None) -> np.ndarray:
    """Draw one minor allele frequency per variant

    Args:
        n_snps: Number of variants
        maf_range: (low, high) bounds of the uniform distribution, inside (0, 1)
        rng: Seed or ``numpy.random.Generator``

    Returns:
        Array of length ``n_snps``
    """
    n_snps = check_positive_int(n_snps, "n_snps")
    lo, hi = check_range(maf_range, "maf_range")
    return as_rng(rng).uniform(lo, hi, size=n_snps)


def simulate_genotypes(n_obs: int,
                       n_snps: int,
                       maf_range: Tuple[float, float] = DEFAULT_MAF_RANGE,
                       rng: RandomState = None,
                       return_maf: bool = False) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """Simulate an independent-SNP dosage matrix

    Args:
        n_obs: Number of observations (rows)
        n_snps: Number of variants (columns)
        maf_range: (low, high) bounds for the per-variant MAF draw
        rng: Seed or ``numpy.random.Generator``
        return_maf: Also return the MAF vector used for each column

    Returns:
        int8 matrix (n_obs × n_snps) with values in {0, 1, 2}, or
        ``(genotypes, maf)`` when ``return_maf`` is set

    Raises:
        InvalidParameter: non-positive counts or a malformed MAF range
    """
    n_obs = check_positive_int(n_obs, "n_obs")
    n_snps = check_positive_int(n_snps, "n_snps")
    rng = as_rng(rng)

    maf = draw_maf(n_snps, maf_range, rng)
    # Broadcasting maf over rows draws column j from Binomial(2, maf[j])
    genotypes = rng.binomial(2, maf, size=(n_obs, n_snps)).astype(np.int8)

    if return_maf:
        return genotypes, maf
    return genotypes


def genotypes_to_frame(genotypes: np.ndarray, prefix: str = "X") -> pd.DataFrame:
    """Wrap a dosage matrix in a DataFrame with columns X1..Xp"""
    genotypes = check_matrix(genotypes)
    columns = [f"{prefix}{j + 1}" for j in range(genotypes.shape[1])]
    return pd.DataFrame(genotypes, columns=columns)
