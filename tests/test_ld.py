import numpy as np
import pytest

from genarch.simulation.genotypes import simulate_genotypes
from genarch.simulation.ld import (
    add_simple_ld,
    add_simple_ld_block,
    expand_ld_blocks,
    n_shuffled_positions,
    replace_with_ld,
)
from genarch.utils.errors import InvalidParameter
from genarch.utils.stats import squared_correlation


@pytest.fixture
def source_column() -> np.ndarray:
    rng = np.random.default_rng(2023)
    return rng.binomial(2, 0.4, size=10000).astype(np.int8)


def test_add_simple_ld_r2_one_is_identity(source_column) -> None:
    out = add_simple_ld(source_column, 1.0, rng=0)

    assert out is not source_column
    assert out.dtype == source_column.dtype
    assert out.tobytes() == source_column.tobytes()


@pytest.mark.parametrize("r2", [0.05, 0.3, 0.5, 0.8, 1.0])
def test_add_simple_ld_preserves_value_counts(source_column, r2) -> None:
    out = add_simple_ld(source_column, r2, rng=1)

    np.testing.assert_array_equal(np.sort(out), np.sort(source_column))


def test_add_simple_ld_half_r2_within_tolerance(source_column) -> None:
    rng = np.random.default_rng(5)
    for _ in range(5):
        out = add_simple_ld(source_column, 0.5, rng=rng)
        r2 = squared_correlation(source_column, out)
        assert 0.4 <= r2 <= 0.6


def test_add_simple_ld_tracks_target_across_range(source_column) -> None:
    rng = np.random.default_rng(8)
    for target in (0.2, 0.7, 0.9):
        out = add_simple_ld(source_column, target, rng=rng)
        assert squared_correlation(source_column, out) == pytest.approx(target, abs=0.08)


def test_add_simple_ld_does_not_modify_input(source_column) -> None:
    before = source_column.copy()
    add_simple_ld(source_column, 0.3, rng=2)

    np.testing.assert_array_equal(source_column, before)


def test_add_simple_ld_single_shuffle_position_is_noop() -> None:
    column = np.array([0, 1, 2], dtype=np.int8)
    # round(sqrt(0.5) * 3) = 2 kept, so only one position would move
    assert n_shuffled_positions(3, 0.5) == 1

    out = add_simple_ld(column, 0.5, rng=0)

    np.testing.assert_array_equal(out, column)


@pytest.mark.parametrize("r2", [0.0, -0.1, 1.5, float("nan")])
def test_add_simple_ld_rejects_out_of_range_r2(source_column, r2) -> None:
    with pytest.raises(InvalidParameter):
        add_simple_ld(source_column, r2)


def test_add_simple_ld_rejects_matrix_input() -> None:
    with pytest.raises(InvalidParameter):
        add_simple_ld(np.zeros((4, 2)), 0.5)


def test_replace_with_ld_changes_expected_number_of_columns() -> None:
    geno = simulate_genotypes(2000, 20, maf_range=(0.2, 0.5), rng=11)
    original = geno.copy()

    out, replaced, r2_values = replace_with_ld(geno, 0.25, (0.2, 0.5), rng=4, return_indices=True)

    expected = int(round((1 - 0.25) * 20))
    differs = np.any(out != geno, axis=0)
    assert differs.sum() == expected
    assert replaced.size == expected
    np.testing.assert_array_equal(np.flatnonzero(differs), replaced)
    assert np.all((r2_values >= 0.2) & (r2_values <= 0.5))
    # untouched columns identical and input left alone
    np.testing.assert_array_equal(out[:, ~differs], geno[:, ~differs])
    np.testing.assert_array_equal(geno, original)
    assert out.shape == geno.shape


def test_replace_with_ld_preserves_column_value_counts() -> None:
    geno = simulate_genotypes(1000, 8, rng=12)

    out = replace_with_ld(geno, 0.0, (0.3, 0.6), rng=6)

    for j in range(geno.shape[1]):
        np.testing.assert_array_equal(np.sort(out[:, j]), np.sort(geno[:, j]))


@pytest.mark.parametrize("keep,expected", [(1.0, 0), (0.0, 10), (0.55, 4)])
def test_replace_with_ld_keep_proportion_edges(keep, expected) -> None:
    geno = simulate_genotypes(1500, 10, maf_range=(0.3, 0.5), rng=21)

    _, replaced, _ = replace_with_ld(geno, keep, (0.2, 0.4), rng=9, return_indices=True)

    assert replaced.size == expected


@pytest.mark.parametrize(
    "keep,ld_range",
    [(-0.1, (0.2, 0.4)), (1.2, (0.2, 0.4)), (0.5, (0.0, 0.4)), (0.5, (0.6, 0.4)), (0.5, (0.2, 1.2))],
)
def test_replace_with_ld_rejects_invalid_parameters(keep, ld_range) -> None:
    geno = simulate_genotypes(50, 4, rng=0)
    with pytest.raises(InvalidParameter):
        replace_with_ld(geno, keep, ld_range)


def test_add_simple_ld_block_shape_and_correlation(source_column) -> None:
    block = add_simple_ld_block(source_column, 6, rng=13)

    assert block.shape == (source_column.size, 6)
    assert block.dtype == source_column.dtype
    for j in range(block.shape[1]):
        np.testing.assert_array_equal(np.sort(block[:, j]), np.sort(source_column))
        r2 = squared_correlation(source_column, block[:, j])
        assert 0.03 < r2 < 0.98


def test_add_simple_ld_block_rejects_non_positive_size(source_column) -> None:
    with pytest.raises(InvalidParameter):
        add_simple_ld_block(source_column, 0)


def test_expand_ld_blocks_layout() -> None:
    geno = simulate_genotypes(300, 3, rng=14)

    expanded, sources = expand_ld_blocks(geno, 2, rng=15)

    assert expanded.shape == (300, 9)
    np.testing.assert_array_equal(sources, [0, 0, 0, 1, 1, 1, 2, 2, 2])
    np.testing.assert_array_equal(expanded[:, 0], geno[:, 0])
    np.testing.assert_array_equal(expanded[:, 3], geno[:, 1])

    without_source, sources2 = expand_ld_blocks(geno, 2, include_source=False, rng=15)
    assert without_source.shape == (300, 6)
    np.testing.assert_array_equal(sources2, [0, 0, 1, 1, 2, 2])
