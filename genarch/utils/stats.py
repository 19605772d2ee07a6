"""
Statistical helpers for checking simulated genotypes and phenotypes
"""

import numpy as np
from typing import Optional, Tuple

from .errors import InvalidParameter


def calculate_maf_from_genotypes(
    genotypes: np.ndarray,
    *,
    missing_value: int = -9,
    max_dosage: float = 2.0,
) -> np.ndarray:
    """Calculate minor allele frequencies from a dosage matrix (vectorized)

    Args:
        genotypes: Genotype matrix (individuals × markers)
        missing_value: Value representing missing data
        max_dosage: Maximum genotype dosage used when converting genotype means
            into allele frequencies (default 2.0 for diploids)

    Returns:
        Array of minor allele frequencies for each marker
    """
    genotypes = np.asarray(genotypes)
    if genotypes.ndim == 1:
        genotypes = genotypes[:, None]

    # isnan only works on floats
    valid_mask = genotypes != missing_value
    if np.issubdtype(genotypes.dtype, np.floating):
        valid_mask = valid_mask & (~np.isnan(genotypes))

    masked_geno = np.ma.array(genotypes, mask=~valid_mask)
    allele_freq = masked_geno.mean(axis=0).filled(0.0) / max(max_dosage, 1e-12)

    maf = np.minimum(allele_freq, 1.0 - allele_freq)

    return np.asarray(maf)


def is_constant(values: np.ndarray, axis: Optional[int] = None, rtol: float = 1e-12):
    """True where values do not vary beyond floating-point rounding

    The spread (max - min) is compared with ``rtol`` times the magnitude of
    the values, so a vector of one repeated number counts as
    constant even when its computed variance is a tiny positive number.
    Empty input is constant.
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        if axis is None:
            return np.bool_(True)
        return np.ones(np.delete(values.shape, axis), dtype=bool)
    spread = np.ptp(values, axis=axis)
    scale = np.maximum(1.0, np.max(np.abs(values), axis=axis))
    return ~np.isfinite(spread) | (spread <= rtol * scale)


def standardize(values: np.ndarray, ddof: int = 1) -> np.ndarray:
    """Center to zero mean and scale to unit standard deviation

    Uses the sample standard deviation (``ddof=1``) by default.
    """
    values = np.asarray(values, dtype=float)
    if values.size <= ddof or is_constant(values):
        raise InvalidParameter("Cannot standardize a constant vector")
    return (values - values.mean()) / np.std(values, ddof=ddof)


def squared_correlation(a: np.ndarray, b: np.ndarray) -> float:
    """Squared Pearson correlation (r²) between two vectors

    Returns NaN when either vector is constant.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise InvalidParameter(f"Vectors must have the same shape, got {a.shape} and {b.shape}")
    if is_constant(a) or is_constant(b):
        return float('nan')
    r = np.corrcoef(a, b)[0, 1]
    return float(r * r)


def ld_matrix(genotypes: np.ndarray) -> np.ndarray:
    """Pairwise r² between all columns of a genotype matrix

    Monomorphic columns get NaN rows/columns; the diagonal of polymorphic
    columns is exactly 1.
    """
    genotypes = np.asarray(genotypes, dtype=float)
    if genotypes.ndim != 2:
        raise InvalidParameter("genotypes must be a 2-D array")
    centered = genotypes - genotypes.mean(axis=0)
    polymorphic = ~is_constant(genotypes, axis=0)
    sd = np.where(polymorphic, centered.std(axis=0), np.nan)
    with np.errstate(divide='ignore', invalid='ignore'):
        z = centered / sd
        r = (z.T @ z) / genotypes.shape[0]
    r2 = r ** 2
    r2[np.ix_(polymorphic, polymorphic)] = np.clip(r2[np.ix_(polymorphic, polymorphic)], 0.0, 1.0)
    idx = np.flatnonzero(polymorphic)
    r2[idx, idx] = 1.0
    return r2


def case_proportion(phenotype: np.ndarray) -> float:
    """Fraction of observations coded as cases (1)"""
    phenotype = np.asarray(phenotype)
    if phenotype.size == 0:
        return float('nan')
    return float(np.mean(phenotype == 1))


def top_k_overlap(weights: np.ndarray, causal_mask: np.ndarray, k: int) -> Tuple[np.ndarray, int]:
    """Rank variants by absolute weight and count causal hits in the top k

    Args:
        weights: Per-variant weights (e.g. model coefficients)
        causal_mask: Boolean mask of the truly causal variants
        k: Number of top-ranked variants to consider

    Returns:
        Tuple of (indices of the top k variants, number of them that are causal)
    """
    weights = np.asarray(weights, dtype=float).ravel()
    causal_mask = np.asarray(causal_mask, dtype=bool).ravel()
    if weights.shape != causal_mask.shape:
        raise InvalidParameter(
            f"weights and causal_mask must align, got {weights.shape} and {causal_mask.shape}"
        )
    k = int(min(max(k, 0), weights.size))
    # stable sort keeps ties in column order
    order = np.argsort(-np.abs(weights), kind='stable')
    top = order[:k]
    return top, int(causal_mask[top].sum())
