import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from genarch.models.elastic_net import fit_elastic_net
from genarch.simulation.genotypes import simulate_genotypes
from genarch.simulation.ld import expand_ld_blocks
from genarch.simulation.phenotype import simulate_liability
from genarch.visualization import plots


@pytest.fixture(scope="module")
def simulated():
    geno, maf = simulate_genotypes(600, 10, maf_range=(0.2, 0.5), rng=8, return_maf=True)
    sim = simulate_liability(geno, 0.3, 0.7, 0.3, rng=9)
    return geno, maf, sim


def test_plot_maf_distribution_from_genotypes_and_maf(simulated) -> None:
    geno, maf, _ = simulated

    fig = plots.plot_maf_distribution(geno, maf=maf)
    assert isinstance(fig, matplotlib.figure.Figure)
    plt.close(fig)

    fig_maf_only = plots.plot_maf_distribution(maf=maf, title="")
    assert isinstance(fig_maf_only, matplotlib.figure.Figure)
    plt.close(fig_maf_only)


def test_plot_maf_distribution_requires_input() -> None:
    with pytest.raises(ValueError):
        plots.plot_maf_distribution()


def test_plot_liability_marks_threshold(simulated) -> None:
    _, _, sim = simulated

    fig = plots.plot_liability(sim)

    assert isinstance(fig, matplotlib.figure.Figure)
    ax = fig.axes[0]
    assert "case proportion" in ax.get_title()
    plt.close(fig)


def test_plot_ld_heatmap_labels(simulated) -> None:
    geno, _, _ = simulated
    blocks, _ = expand_ld_blocks(geno[:, :3], 2, rng=1)

    fig = plots.plot_ld_heatmap(blocks)

    assert isinstance(fig, matplotlib.figure.Figure)
    labels = [t.get_text() for t in fig.axes[0].get_xticklabels()]
    assert labels[0] == "X1"
    plt.close(fig)


def test_plot_roc(simulated) -> None:
    geno, _, sim = simulated
    fit = fit_elastic_net(geno, sim.phenotype, causal_mask=sim.causal_mask, Cs=3, cv=3, rng=0)

    fig = plots.plot_roc(fit, sim.phenotype)

    assert isinstance(fig, matplotlib.figure.Figure)
    plt.close(fig)
