"""
Diagnostic plots for simulated genotypes, liabilities and model fits
"""

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import roc_curve
from typing import Optional, Sequence, Tuple

from ..utils.data_types import ElasticNetResult, LiabilitySimulation
from ..utils.stats import calculate_maf_from_genotypes, ld_matrix


def plot_maf_distribution(genotypes: Optional[np.ndarray] = None,
                          maf: Optional[np.ndarray] = None,
                          title: str = "Minor allele frequencies",
                          bins: int = 20,
                          figsize: Tuple[int, int] = (6, 4)) -> plt.Figure:
    """Histogram of MAF, taken from ``maf`` or estimated from ``genotypes``

    When both are given the drawn and observed frequencies are overlaid.
    """
    if genotypes is None and maf is None:
        raise ValueError("Provide genotypes, maf or both")

    fig, ax = plt.subplots(figsize=figsize)
    if maf is not None:
        sns.histplot(np.asarray(maf), bins=bins, ax=ax, color='steelblue',
                     alpha=0.6, label='Simulated MAF')
    if genotypes is not None:
        observed = calculate_maf_from_genotypes(genotypes)
        sns.histplot(observed, bins=bins, ax=ax, color='darkorange',
                     alpha=0.5, label='Observed MAF')
    ax.set_xlabel('MAF')
    ax.set_ylabel('Variants')
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig


def plot_liability(sim: LiabilitySimulation,
                   title: str = "Standardized liability",
                   bins: int = 50,
                   figsize: Tuple[int, int] = (7, 4)) -> plt.Figure:
    """Liability distribution split by case status, with the threshold marked"""
    fig, ax = plt.subplots(figsize=figsize)

    cases = sim.phenotype == 1
    sns.histplot(sim.liability_std[~cases], bins=bins, ax=ax, color='grey',
                 alpha=0.6, label='Controls')
    if cases.any():
        sns.histplot(sim.liability_std[cases], bins=bins, ax=ax, color='firebrick',
                     alpha=0.6, label='Cases')
    ax.axvline(sim.threshold, color='black', linestyle='--',
               label=f'Threshold = {sim.threshold:.2f}')
    ax.set_xlabel('Liability (z)')
    ax.set_ylabel('Observations')
    ax.set_title(f'{title}\ncase proportion = {sim.case_proportion:.3f}')
    ax.legend()

    plt.tight_layout()
    return fig


def plot_ld_heatmap(genotypes: np.ndarray,
                    labels: Optional[Sequence[str]] = None,
                    title: str = "Pairwise LD (r²)",
                    figsize: Tuple[int, int] = (6, 5),
                    annotate: Optional[bool] = None) -> plt.Figure:
    """Heatmap of pairwise r² between genotype columns"""
    r2 = ld_matrix(genotypes)
    if labels is None:
        labels = [f"X{j + 1}" for j in range(r2.shape[0])]
    if annotate is None:
        annotate = r2.shape[0] <= 12

    fig, ax = plt.subplots(figsize=figsize)
    sns.heatmap(r2, vmin=0, vmax=1, cmap='viridis', square=True,
                xticklabels=labels, yticklabels=labels, annot=annotate,
                fmt='.2f', ax=ax, cbar_kws={'label': 'r²'})
    ax.set_title(title)

    plt.tight_layout()
    return fig


def plot_roc(fit: ElasticNetResult,
             phenotype: np.ndarray,
             title: str = "Held-out ROC",
             figsize: Tuple[int, int] = (5, 5)) -> plt.Figure:
    """ROC curve of an elastic-net fit on its held-out split"""
    y_test = np.asarray(phenotype)[fit.test_indices]
    fpr, tpr, _ = roc_curve(y_test, fit.test_scores)

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(fpr, tpr, color='navy', label=f'AUC = {fit.auc:.3f}')
    ax.plot([0, 1], [0, 1], 'r--', alpha=0.8, label='Chance')
    ax.set_xlabel('False positive rate')
    ax.set_ylabel('True positive rate')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='lower right')

    plt.tight_layout()
    return fig
