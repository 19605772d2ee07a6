"""
Liability-threshold phenotype simulation

The liability ``l = g + e`` combines a genetic score ``g`` with Gaussian
environmental noise ``e``. The liability is standardized and observations
above the standard-normal quantile ``Phi^-1(1 - k)`` for prevalence ``k`` are
called cases. The threshold is applied to the liability, never to ``g``
alone, otherwise genotype would predict phenotype perfectly.

Two genetic architectures are supported:

- additive: a random subset of variants carries Normal(0, 1) effects and the
  noise variance is set from a target liability-scale heritability
  (:func:`simulate_liability`, :func:`simulate_y`);
- multiplicative interactions: pairs of variants contribute the product of
  their dosages times an interaction effect, on top of optional main
  effects (:func:`genetic_score`, :func:`simulate_interaction_phenotype`).
"""

from typing import Optional, Sequence, Tuple

import numpy as np
from scipy import stats

from ..utils.data_types import LiabilitySimulation
from ..utils.errors import InvalidParameter, NoCausalVariants, NonPositiveVariance
from ..utils.stats import is_constant
from ..utils.validation import RandomState, as_rng, check_matrix, check_proportion


def _noise_variance(g: np.ndarray, h2_l: float) -> float:
    """Environmental variance giving liability-scale heritability ``h2_l``

    The genetic score ``g`` must vary across observations; a score that is
    one repeated value has no variance to scale, whatever rounding leaves
    in ``np.var``.
    """
    if h2_l >= 1.0:
        raise NonPositiveVariance(
            f"Heritability must be below 1 to leave room for noise, got {h2_l}"
        )
    if g.size < 2 or is_constant(g):
        raise NonPositiveVariance(
            "Genetic score has no variance; check that causal variants are polymorphic"
        )
    var_g = float(np.var(g, ddof=1))
    var_e = var_g / h2_l - var_g
    if var_e <= 0:
        raise NonPositiveVariance(f"Derived noise variance is not positive ({var_e})")
    return var_e


def liability_threshold(liability: np.ndarray, prevalence: float) -> Tuple[np.ndarray, float]:
    """Standardize a liability and call cases above the prevalence quantile

    Args:
        liability: Raw liability per observation
        prevalence: Population proportion of cases ``k``, in (0, 1)

    Returns:
        Tuple of (int8 phenotype, threshold on the standardized scale)
    """
    prevalence = check_proportion(prevalence, "prevalence", allow_zero=False, allow_one=False)
    liability = np.asarray(liability, dtype=float)
    if liability.size < 2 or is_constant(liability):
        raise NonPositiveVariance("Liability is constant; cannot standardize")

    liability_std = (liability - liability.mean()) / np.std(liability, ddof=1)
    threshold = float(stats.norm.ppf(1.0 - prevalence))
    phenotype = (liability_std > threshold).astype(np.int8)
    return phenotype, threshold


def simulate_liability(genotypes: np.ndarray,
                       p_causal: float,
                       h2_l: float,
                       prevalence: float,
                       rng: RandomState = None) -> LiabilitySimulation:
    """Simulate a binary phenotype under the additive liability-threshold model

    Args:
        genotypes: Genotype matrix (observations × variants)
        p_causal: Proportion of variants with a non-zero effect, in (0, 1]
        h2_l: Target heritability on the liability scale, in (0, 1)
        prevalence: Population prevalence ``k``, in (0, 1)
        rng: Seed or ``numpy.random.Generator``

    Returns:
        LiabilitySimulation holding the effects, causal mask, liability
        components and phenotype

    Raises:
        InvalidParameter: out-of-range proportions or a non 2-D matrix
        NoCausalVariants: ``floor(n_snps * p_causal)`` is zero
        NonPositiveVariance: ``h2_l >= 1`` or the genetic score is constant
    """
    X = check_matrix(genotypes)
    p_causal = check_proportion(p_causal, "p_causal", allow_zero=False)
    h2_l = float(h2_l)
    if not np.isfinite(h2_l) or h2_l <= 0:
        raise InvalidParameter(f"h2_l must be positive, got {h2_l}")
    if h2_l >= 1.0:
        raise NonPositiveVariance(
            f"Heritability must be below 1 to leave room for noise, got {h2_l}"
        )
    prevalence = check_proportion(prevalence, "prevalence", allow_zero=False, allow_one=False)
    rng = as_rng(rng)

    n_obs, n_snps = X.shape
    n_causal = int(np.floor(n_snps * p_causal))
    if n_causal == 0:
        raise NoCausalVariants(
            f"p_causal={p_causal} selects no causal variants out of {n_snps}"
        )

    # m normal effects followed by zeros, then scattered uniformly over variants
    effects = np.zeros(n_snps)
    effects[:n_causal] = rng.normal(0.0, 1.0, size=n_causal)
    order = rng.permutation(n_snps)
    betas = effects[order]
    causal_mask = order < n_causal

    g = X[:, causal_mask].astype(float) @ betas[causal_mask]
    var_e = _noise_variance(g, h2_l)

    e = rng.normal(0.0, np.sqrt(var_e), size=n_obs)
    liability = g + e
    phenotype, threshold = liability_threshold(liability, prevalence)
    liability_std = (liability - liability.mean()) / np.std(liability, ddof=1)

    return LiabilitySimulation(
        betas=betas,
        causal_mask=causal_mask,
        genetic_score=g,
        noise=e,
        liability=liability,
        liability_std=liability_std,
        threshold=threshold,
        phenotype=phenotype,
        heritability=h2_l,
        prevalence=prevalence,
    )


def simulate_y(genotypes: np.ndarray,
               p_causal: float,
               h2_l: float,
               prevalence: float,
               rng: RandomState = None) -> Tuple[np.ndarray, np.ndarray]:
    """Simulate a phenotype and return ``(phenotype, causal_mask)``

    Thin wrapper over :func:`simulate_liability`; see there for parameters.
    """
    sim = simulate_liability(genotypes, p_causal, h2_l, prevalence, rng)
    return sim.phenotype, sim.causal_mask


def _check_pairs(interaction_pairs: Sequence[Tuple[int, int]], n_snps: int) -> np.ndarray:
    pairs = np.asarray(interaction_pairs, dtype=int)
    if pairs.size == 0:
        return pairs.reshape(0, 2)
    if pairs.ndim != 2 or pairs.shape[1] != 2:
        raise InvalidParameter("interaction_pairs must be a sequence of (i, j) index pairs")
    if pairs.min() < 0 or pairs.max() >= n_snps:
        raise InvalidParameter(
            f"interaction_pairs reference variants outside 0..{n_snps - 1}"
        )
    return pairs


def genetic_score(genotypes: np.ndarray,
                  main_effects: Optional[Sequence[float]] = None,
                  interaction_effects: Optional[Sequence[float]] = None,
                  interaction_pairs: Optional[Sequence[Tuple[int, int]]] = None) -> np.ndarray:
    """Genetic score from main effects plus multiplicative pairwise interactions

    ``g = X @ main_effects + sum_i interaction_effects[i] * X[:, a_i] * X[:, b_i]``
    where ``(a_i, b_i)`` are 0-based column indices.

    Args:
        genotypes: Genotype matrix (observations × variants)
        main_effects: One effect per variant (None means all zero)
        interaction_effects: One effect per interacting pair
        interaction_pairs: Column index pairs, same length as ``interaction_effects``

    Returns:
        Float array with one score per observation
    """
    X = check_matrix(genotypes).astype(float)
    n_obs, n_snps = X.shape

    g = np.zeros(n_obs)
    if main_effects is not None:
        main_effects = np.asarray(main_effects, dtype=float)
        if main_effects.shape != (n_snps,):
            raise InvalidParameter(
                f"main_effects must have one value per variant ({n_snps}), got {main_effects.shape}"
            )
        g = g + X @ main_effects

    if interaction_effects is None and interaction_pairs is None:
        return g
    if interaction_effects is None or interaction_pairs is None:
        raise InvalidParameter("interaction_effects and interaction_pairs must be given together")

    interaction_effects = np.asarray(interaction_effects, dtype=float)
    pairs = _check_pairs(interaction_pairs, n_snps)
    if interaction_effects.shape != (pairs.shape[0],):
        raise InvalidParameter(
            f"Got {interaction_effects.size} interaction effects for {pairs.shape[0]} pairs"
        )
    if pairs.shape[0]:
        products = X[:, pairs[:, 0]] * X[:, pairs[:, 1]]
        g = g + products @ interaction_effects
    return g


def simulate_interaction_phenotype(genotypes: np.ndarray,
                                   main_effects: Optional[Sequence[float]] = None,
                                   interaction_effects: Optional[Sequence[float]] = None,
                                   interaction_pairs: Optional[Sequence[Tuple[int, int]]] = None,
                                   prevalence: float = 0.2,
                                   noise_sd: Optional[float] = 0.01,
                                   heritability: Optional[float] = None,
                                   rng: RandomState = None) -> LiabilitySimulation:
    """Simulate a phenotype under main plus multiplicative interaction effects

    Noise is either a fixed ``Normal(0, noise_sd)`` draw or, when
    ``heritability`` is given, calibrated so the genetic score explains that
    share of liability variance.

    Returns:
        LiabilitySimulation; ``causal_mask`` flags every variant with a
        non-zero main effect or taking part in a non-zero interaction
    """
    X = check_matrix(genotypes)
    rng = as_rng(rng)
    n_obs, n_snps = X.shape

    g = genetic_score(X, main_effects, interaction_effects, interaction_pairs)

    betas = np.zeros(n_snps) if main_effects is None else np.asarray(main_effects, dtype=float)
    causal_mask = betas != 0
    if interaction_pairs is not None:
        pairs = _check_pairs(interaction_pairs, n_snps)
        active = np.asarray(interaction_effects, dtype=float) != 0
        causal_mask[pairs[active].ravel()] = True

    if heritability is not None:
        h2 = float(heritability)
        if not np.isfinite(h2) or h2 <= 0:
            raise InvalidParameter(f"heritability must be positive, got {h2}")
        sd_e = np.sqrt(_noise_variance(g, h2))
    elif noise_sd is not None:
        sd_e = float(noise_sd)
        if not np.isfinite(sd_e) or sd_e < 0:
            raise InvalidParameter(f"noise_sd must be non-negative, got {noise_sd}")
    else:
        raise InvalidParameter("Either noise_sd or heritability must be set")

    e = rng.normal(0.0, sd_e, size=n_obs)
    liability = g + e
    phenotype, threshold = liability_threshold(liability, prevalence)
    liability_std = (liability - liability.mean()) / np.std(liability, ddof=1)

    return LiabilitySimulation(
        betas=betas,
        causal_mask=causal_mask,
        genetic_score=g,
        noise=e,
        liability=liability,
        liability_std=liability_std,
        threshold=threshold,
        phenotype=phenotype,
        heritability=heritability,
        prevalence=prevalence,
    )
