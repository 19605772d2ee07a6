import numpy as np
import pytest

from genarch.simulation.genotypes import draw_maf, genotypes_to_frame, simulate_genotypes
from genarch.utils.errors import InvalidParameter
from genarch.utils.stats import calculate_maf_from_genotypes


def test_simulate_genotypes_values_and_shape() -> None:
    geno = simulate_genotypes(500, 25, maf_range=(0.05, 0.5), rng=1)

    assert geno.shape == (500, 25)
    assert geno.dtype == np.int8
    assert set(np.unique(geno)).issubset({0, 1, 2})


def test_simulate_genotypes_returns_maf_within_range() -> None:
    geno, maf = simulate_genotypes(20000, 10, maf_range=(0.35, 0.5), rng=3, return_maf=True)

    assert maf.shape == (10,)
    assert np.all((maf >= 0.35) & (maf <= 0.5))
    # Binomial(2, maf) dosages average to 2 * maf
    observed = geno.mean(axis=0) / 2.0
    np.testing.assert_allclose(observed, maf, atol=0.02)
    np.testing.assert_allclose(calculate_maf_from_genotypes(geno), maf, atol=0.02)


def test_simulate_genotypes_is_reproducible_with_seed_or_generator() -> None:
    a = simulate_genotypes(100, 5, rng=42)
    b = simulate_genotypes(100, 5, rng=42)
    c = simulate_genotypes(100, 5, rng=np.random.default_rng(42))

    np.testing.assert_array_equal(a, b)
    np.testing.assert_array_equal(a, c)


@pytest.mark.parametrize(
    "n_obs,n_snps,maf_range",
    [
        (0, 5, (0.1, 0.5)),
        (10, 0, (0.1, 0.5)),
        (-1, 5, (0.1, 0.5)),
        (10, 5, (0.5, 0.5)),
        (10, 5, (0.4, 0.1)),
        (10, 5, (0.0, 0.5)),
        (10, 5, (0.1, 1.0)),
        (10.5, 5, (0.1, 0.5)),
    ],
)
def test_simulate_genotypes_rejects_invalid_parameters(n_obs, n_snps, maf_range) -> None:
    with pytest.raises(InvalidParameter):
        simulate_genotypes(n_obs, n_snps, maf_range=maf_range)


def test_draw_maf_uniform_bounds() -> None:
    maf = draw_maf(1000, (0.1, 0.2), rng=0)

    assert maf.min() >= 0.1
    assert maf.max() <= 0.2


def test_invalid_parameter_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        draw_maf(0)


def test_genotypes_to_frame_names_columns() -> None:
    frame = genotypes_to_frame(np.zeros((3, 4), dtype=np.int8))

    assert list(frame.columns) == ["X1", "X2", "X3", "X4"]
    assert frame.shape == (3, 4)
