"""
Logistic GLM checks for simulated phenotypes

Fits a binomial GLM of phenotype on the main effects of every variant,
optionally adding product terms for chosen variant pairs, so one can see
whether interaction effects are picked up only when the model includes
them.
"""

from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import statsmodels.api as sm

from ..simulation.genotypes import genotypes_to_frame
from ..utils.errors import InvalidParameter
from ..utils.validation import check_matrix


def build_design_matrix(genotypes: np.ndarray,
                        interaction_pairs: Optional[Sequence[Tuple[int, int]]] = None,
                        standardize: bool = False) -> pd.DataFrame:
    """Design matrix with an intercept, columns X1..Xp and product terms

    Product terms are named ``Xa:Xb`` using 1-based column numbers, so the
    pair ``(0, 1)`` becomes ``X1:X2``. When ``standardize`` is set the main
    effect columns are scaled to zero mean and unit variance before the
    products are formed.
    """
    frame = genotypes_to_frame(check_matrix(genotypes)).astype(float)
    if standardize:
        sd = frame.std(ddof=1)
        if (sd == 0).any():
            constant = sd.index[sd == 0].tolist()
            raise InvalidParameter(f"Cannot standardize constant columns: {constant}")
        frame = (frame - frame.mean()) / sd

    if interaction_pairs is not None:
        n_snps = frame.shape[1]
        for a, b in interaction_pairs:
            if not (0 <= a < n_snps and 0 <= b < n_snps):
                raise InvalidParameter(f"Interaction pair ({a}, {b}) outside 0..{n_snps - 1}")
            frame[f"X{a + 1}:X{b + 1}"] = frame.iloc[:, a] * frame.iloc[:, b]

    return sm.add_constant(frame, has_constant='add')


def fit_logistic_glm(genotypes: np.ndarray,
                     phenotype: np.ndarray,
                     interaction_pairs: Optional[Sequence[Tuple[int, int]]] = None,
                     standardize: bool = False,
                     verbose: bool = False):
    """Fit a binomial GLM of phenotype on genotypes

    Args:
        genotypes: Genotype matrix (observations × variants)
        phenotype: Binary phenotype (0/1)
        interaction_pairs: 0-based variant pairs to add as product terms
        standardize: Scale main effects before forming products
        verbose: Print the statsmodels summary

    Returns:
        statsmodels ``GLMResults``
    """
    design = build_design_matrix(genotypes, interaction_pairs, standardize)
    y = np.asarray(phenotype, dtype=float).ravel()
    if y.shape[0] != design.shape[0]:
        raise InvalidParameter(
            f"Phenotype length ({y.shape[0]}) does not match genotype rows ({design.shape[0]})"
        )
    if not np.all(np.isin(np.unique(y), [0.0, 1.0])):
        raise InvalidParameter("Phenotype must be coded 0/1")

    result = sm.GLM(y, design, family=sm.families.Binomial()).fit()
    if verbose:
        print(result.summary())
    return result


def glm_coefficient_table(result) -> pd.DataFrame:
    """Tidy coefficient table with odds ratios from a fitted GLM"""
    conf = result.conf_int()
    table = pd.DataFrame({
        'term': result.params.index,
        'estimate': result.params.values,
        'std_error': result.bse.values,
        'z': result.tvalues.values,
        'p_value': result.pvalues.values,
        'ci_lower': conf.iloc[:, 0].values,
        'ci_upper': conf.iloc[:, 1].values,
    })
    table['odds_ratio'] = np.exp(table['estimate'])
    return table
