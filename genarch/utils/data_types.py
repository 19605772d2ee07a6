"""
Core data structures for genarch
"""

import numpy as np
import pandas as pd
from typing import Any, Dict, List, Optional


class LiabilitySimulation:
    """Every intermediate of a liability-threshold phenotype draw

    Attributes:
        betas: Per-variant effect sizes (zero for non-causal variants)
        causal_mask: Boolean mask of causal variants
        genetic_score: Genetic contribution g per observation
        noise: Environmental contribution e per observation
        liability: Raw liability g + e
        liability_std: Liability standardized to mean 0, sd 1
        threshold: Standard-normal quantile used to call cases
        phenotype: Binary phenotype (1 = case)
    """

    def __init__(self, betas: np.ndarray, causal_mask: np.ndarray,
                 genetic_score: np.ndarray, noise: np.ndarray,
                 liability: np.ndarray, liability_std: np.ndarray,
                 threshold: float, phenotype: np.ndarray,
                 heritability: Optional[float] = None,
                 prevalence: Optional[float] = None):

        n_obs = len(phenotype)
        if not (len(genetic_score) == len(noise) == len(liability) == len(liability_std) == n_obs):
            raise ValueError("All per-observation arrays must have same length")
        if len(betas) != len(causal_mask):
            raise ValueError("betas and causal_mask must have same length")

        self.betas = betas
        self.causal_mask = causal_mask
        self.genetic_score = genetic_score
        self.noise = noise
        self.liability = liability
        self.liability_std = liability_std
        self.threshold = threshold
        self.phenotype = phenotype
        self.heritability = heritability
        self.prevalence = prevalence

    @property
    def n_obs(self) -> int:
        """Number of observations"""
        return len(self.phenotype)

    @property
    def n_causal(self) -> int:
        """Number of causal variants"""
        return int(np.sum(self.causal_mask))

    @property
    def causal_indices(self) -> np.ndarray:
        """Column indices of the causal variants"""
        return np.flatnonzero(self.causal_mask)

    @property
    def case_proportion(self) -> float:
        """Observed fraction of cases"""
        return float(np.mean(self.phenotype))

    @property
    def realized_heritability(self) -> float:
        """Share of liability variance explained by the genetic score"""
        var_l = np.var(self.liability, ddof=1)
        if var_l == 0:
            return float('nan')
        return float(np.var(self.genetic_score, ddof=1) / var_l)

    def to_dataframe(self) -> pd.DataFrame:
        """Per-observation table of liability components"""
        return pd.DataFrame({
            'genetic_score': self.genetic_score,
            'noise': self.noise,
            'liability': self.liability,
            'liability_std': self.liability_std,
            'phenotype': self.phenotype,
        })


class ElasticNetResult:
    """Outcome of fitting the elastic-net harness to simulated data"""

    def __init__(self, model: Any, auc: float, coefficients: np.ndarray,
                 top_variants: np.ndarray, overlap: Optional[int],
                 n_causal: Optional[int], C: float, l1_ratio: float,
                 test_indices: np.ndarray, test_scores: np.ndarray):
        self.model = model
        self.auc = auc
        self.coefficients = coefficients
        self.top_variants = top_variants
        self.overlap = overlap
        self.n_causal = n_causal
        self.C = C
        self.l1_ratio = l1_ratio
        self.test_indices = test_indices
        self.test_scores = test_scores

    @property
    def n_selected(self) -> int:
        """Number of variants with a non-zero coefficient"""
        return int(np.count_nonzero(self.coefficients))

    @property
    def recovery_rate(self) -> float:
        """Share of causal variants found among the top-ranked variants"""
        if not self.n_causal or self.overlap is None:
            return float('nan')
        return self.overlap / self.n_causal

    def summary(self) -> Dict[str, Any]:
        return {
            'auc': self.auc,
            'C': self.C,
            'l1_ratio': self.l1_ratio,
            'n_selected': self.n_selected,
            'n_causal': self.n_causal,
            'overlap': self.overlap,
            'recovery_rate': self.recovery_rate,
        }


class SimulationResult:
    """Everything produced by one pipeline run"""

    def __init__(self, genotypes: np.ndarray, phenotype: np.ndarray,
                 causal_mask: np.ndarray, maf: Optional[np.ndarray] = None,
                 liability: Optional[LiabilitySimulation] = None,
                 model_fit: Optional[ElasticNetResult] = None,
                 ld_columns: Optional[List[int]] = None,
                 config: Optional[Dict[str, Any]] = None):
        genotypes = np.asarray(genotypes)
        if genotypes.shape[0] != len(phenotype):
            raise ValueError(
                f"Genotype rows ({genotypes.shape[0]}) do not match phenotype length ({len(phenotype)})"
            )
        if genotypes.shape[1] != len(causal_mask):
            raise ValueError(
                f"Genotype columns ({genotypes.shape[1]}) do not match causal mask length ({len(causal_mask)})"
            )
        self.genotypes = genotypes
        self.phenotype = np.asarray(phenotype)
        self.causal_mask = np.asarray(causal_mask, dtype=bool)
        self.maf = maf
        self.liability = liability
        self.model_fit = model_fit
        self.ld_columns = list(ld_columns) if ld_columns is not None else []
        self.config = dict(config) if config else {}

    @property
    def n_obs(self) -> int:
        return self.genotypes.shape[0]

    @property
    def n_snps(self) -> int:
        return self.genotypes.shape[1]

    @property
    def case_proportion(self) -> float:
        return float(np.mean(self.phenotype))

    def summary(self) -> Dict[str, Any]:
        """Flat dictionary of headline numbers for reporting"""
        out: Dict[str, Any] = {
            'n_obs': self.n_obs,
            'n_snps': self.n_snps,
            'n_causal': int(self.causal_mask.sum()),
            'n_ld_columns': len(self.ld_columns),
            'case_proportion': self.case_proportion,
        }
        if self.liability is not None:
            out['realized_heritability'] = self.liability.realized_heritability
        if self.model_fit is not None:
            out.update({f'model_{k}': v for k, v in self.model_fit.summary().items()})
        return out
