import argparse

import pytest

from genarch.cli import utils


def test_parse_float_list() -> None:
    assert utils.parse_float_list("0.01, 0.01,0") == [0.01, 0.01, 0.0]
    assert utils.parse_float_list(None) is None
    assert utils.parse_float_list("  ") is None


def test_parse_pairs_converts_to_zero_based() -> None:
    assert utils.parse_pairs("1:2,3:4") == [(0, 1), (2, 3)]
    assert utils.parse_pairs(None) is None
    with pytest.raises(argparse.ArgumentTypeError):
        utils.parse_pairs("1-2")
    with pytest.raises(argparse.ArgumentTypeError):
        utils.parse_pairs("0:1")


def test_parse_args_defaults() -> None:
    args = utils.parse_args([])

    assert args.n_obs == 10000
    assert args.n_snps == 10
    assert args.model == "liability"
    assert args.ld is False
    assert args.fit is False
    assert args.replicates == 1
    assert args.output_prefix is None
    assert args.l1_ratios == [0.5]
    assert args.interaction_pairs is None


def test_parse_args_rejects_unknown_model() -> None:
    with pytest.raises(SystemExit):
        utils.parse_args(["--model", "dominance"])


@pytest.mark.parametrize(
    "argv",
    [
        ["--interaction-pairs", "1-2"],
        ["--interaction-pairs", "1:2,3"],
        ["--main-effects", "0.1,abc"],
        ["--l1-ratios", "x"],
    ],
)
def test_parse_args_reports_malformed_lists_as_usage_errors(argv, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        utils.parse_args(argv)

    assert excinfo.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_config_from_args_builds_nested_config(tmp_path) -> None:
    args = utils.parse_args(
        [
            "-n", "500",
            "-p", "8",
            "--ld",
            "--ld-keep", "0.25",
            "--ld-block-size", "2",
            "--model", "interaction",
            "--main-effects", "0,0,0,0,0,0,0,0",
            "--interaction-effects", "0.5,0.5",
            "--interaction-pairs", "1:2,3:4",
            "--use-heritability-noise",
            "--fit",
            "--l1-ratios", "0.2,0.8",
            "-o", str(tmp_path / "sim"),
        ]
    )

    config = utils.config_from_args(args)

    assert config['n_obs'] == 500
    assert config['ld']['enabled'] is True
    assert config['ld']['keep_proportion'] == 0.25
    assert config['ld']['block_size'] == 2
    # block LD range keeps its default
    assert config['ld']['block_ld_range'] == (0.1, 0.9)
    assert config['phenotype']['interaction_pairs'] == [(0, 1), (2, 3)]
    assert config['phenotype']['noise_sd'] is None
    assert config['model_fit']['l1_ratios'] == (0.2, 0.8)
    assert config['output_prefix'].endswith("sim")
