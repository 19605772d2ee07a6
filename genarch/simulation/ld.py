"""
Linkage disequilibrium by partial shuffling

A derived variant is made by picking a random subset of positions in a
source column and permuting the values among those positions only. The
untouched positions carry the correlation with the source; the shuffled
positions carry none. Because values only move around, the derived column
always has the same allele counts as the source.

Keeping a fraction ``f`` of positions gives a correlation of about ``f``
with the source, so ``f = sqrt(r2)`` positions are kept to reach a squared
correlation of ``r2``.
"""

import warnings
from typing import List, Tuple, Union

import numpy as np

from ..utils.validation import (
    RandomState,
    as_rng,
    check_matrix,
    check_positive_int,
    check_proportion,
    check_range,
    check_vector,
)

DEFAULT_BLOCK_LD_RANGE = (0.1, 0.9)


def n_shuffled_positions(n: int, r2: float) -> int:
    """Number of positions to shuffle for a column of length ``n``"""
    n_keep = int(round(np.sqrt(r2) * n))
    return n - n_keep


def add_simple_ld(column: np.ndarray, r2: float, rng: RandomState = None) -> np.ndarray:
    """Derive a variant in LD with ``column`` at squared correlation ~``r2``

    Args:
        column: Source genotype column (1-D)
        r2: Target squared correlation with the source, in (0, 1]
        rng: Seed or ``numpy.random.Generator``

    Returns:
        New array with the same dtype and multiset of values as ``column``.
        When one position or fewer would be shuffled (including ``r2 == 1``)
        an unmodified copy is returned.
    """
    column = check_vector(column, "column")
    r2 = check_proportion(r2, "r2", allow_zero=False)

    out = column.copy()
    n_shuffle = n_shuffled_positions(out.shape[0], r2)
    if n_shuffle <= 1:
        return out

    rng = as_rng(rng)
    positions = rng.choice(out.shape[0], size=n_shuffle, replace=False)
    out[positions] = rng.permutation(column[positions])
    return out


def replace_with_ld(genotypes: np.ndarray,
                    keep_proportion: float,
                    ld_range: Tuple[float, float],
                    rng: RandomState = None,
                    return_indices: bool = False
                    ) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """Replace a random subset of columns by LD-shuffled versions of themselves

    Args:
        genotypes: Genotype matrix (observations × variants), not modified
        keep_proportion: Proportion ``m`` of columns left untouched
        ld_range: (low, high) bounds of the per-column r² draw, inside (0, 1]
        rng: Seed or ``numpy.random.Generator``
        return_indices: Also return the replaced column indices and their r²

    Returns:
        Matrix of the same shape where ``round((1 - m) * p)`` columns have been
        passed through :func:`add_simple_ld`; optionally
        ``(matrix, replaced_indices, r2_values)``
    """
    genotypes = check_matrix(genotypes)
    keep_proportion = check_proportion(keep_proportion, "keep_proportion")
    lo, hi = check_range(ld_range, "ld_range", strict=False, allow_one=True)
    rng = as_rng(rng)

    n_snps = genotypes.shape[1]
    n_replace = int(round((1.0 - keep_proportion) * n_snps))

    out = genotypes.copy()
    replaced = np.sort(rng.choice(n_snps, size=n_replace, replace=False))
    r2_values = rng.uniform(lo, hi, size=n_replace)
    for col, r2 in zip(replaced, r2_values):
        out[:, col] = add_simple_ld(genotypes[:, col], r2, rng)

    if return_indices:
        return out, replaced, r2_values
    return out


def add_simple_ld_block(column: np.ndarray,
                        block_size: int,
                        ld_range: Tuple[float, float] = DEFAULT_BLOCK_LD_RANGE,
                        rng: RandomState = None) -> np.ndarray:
    """Expand one source column into a block of ``block_size`` LD variants

    Each block member is derived from the source independently, with its own
    r² drawn from ``ld_range``. Members are correlated with each other only
    through the shared source, not by any pairwise target.

    Returns:
        Matrix (n × block_size) with the dtype of ``column``
    """
    column = check_vector(column, "column")
    block_size = check_positive_int(block_size, "block_size")
    lo, hi = check_range(ld_range, "ld_range", strict=False, allow_one=True)
    rng = as_rng(rng)

    if column.shape[0] < 2:
        warnings.warn("Column has fewer than two observations; block members will equal the source")

    r2_values = rng.uniform(lo, hi, size=block_size)
    block = np.empty((column.shape[0], block_size), dtype=column.dtype)
    for j, r2 in enumerate(r2_values):
        block[:, j] = add_simple_ld(column, r2, rng)
    return block


def expand_ld_blocks(genotypes: np.ndarray,
                     block_size: int,
                     ld_range: Tuple[float, float] = DEFAULT_BLOCK_LD_RANGE,
                     include_source: bool = True,
                     rng: RandomState = None) -> Tuple[np.ndarray, np.ndarray]:
    """Turn every column of a matrix into an LD block

    Args:
        genotypes: Source matrix (observations × variants)
        block_size: Number of derived variants per source column
        ld_range: r² range for the derived variants
        include_source: Keep each source column as the first member of its block
        rng: Seed or ``numpy.random.Generator``

    Returns:
        Tuple of (expanded matrix, source column index of each output column)
    """
    genotypes = check_matrix(genotypes)
    block_size = check_positive_int(block_size, "block_size")
    rng = as_rng(rng)

    blocks: List[np.ndarray] = []
    sources: List[np.ndarray] = []
    for j in range(genotypes.shape[1]):
        source = genotypes[:, j]
        block = add_simple_ld_block(source, block_size, ld_range, rng)
        if include_source:
            block = np.column_stack([source, block])
        blocks.append(block)
        sources.append(np.full(block.shape[1], j, dtype=int))

    return np.hstack(blocks), np.concatenate(sources)
