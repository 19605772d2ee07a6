"""Tests for the VCF reader and its GT/region helpers."""

import gzip

import numpy as np
import pytest

from genarch.data.load_genotype_vcf import MISSING, decode_gt, load_genotype_vcf, parse_region

VCF_TEXT = """##fileformat=VCFv4.2
##contig=<ID=22>
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1\tS2\tS3\tS4
22\t100\trs1\tA\tG\t.\tPASS\t.\tGT\t0|0\t0|1\t1|1\t1|0
22\t200\trs2\tA\tG,T\t.\tPASS\t.\tGT\t0|0\t0|1\t1|2\t0|0
22\t300\trs3\tAT\tA\t.\tPASS\t.\tGT\t0|0\t0|1\t1|1\t0|0
22\t400\t.\tC\tT\t.\tPASS\t.\tGT:DP\t0/1:10\t./.:0\t1/1:12\t0/0:9
22\t500\trs5\tG\tC\t.\tPASS\t.\tGT\t0|0\t0|0\t0|0\t0|1
21\t150\trs6\tT\tC\t.\tPASS\t.\tGT\t0|1\t0|1\t0|1\t0|1
"""


@pytest.fixture
def vcf_path(tmp_path):
    path = tmp_path / "toy.vcf"
    path.write_text(VCF_TEXT)
    return path


@pytest.mark.parametrize(
    "gt,expected",
    [("0|0", 0), ("0/1", 1), ("1|0", 1), ("1/1", 2), ("./.", MISSING), (".", MISSING),
     ("0|2", MISSING), ("1", MISSING), ("0/1/1", MISSING), (None, MISSING)],
)
def test_decode_gt(gt, expected) -> None:
    assert decode_gt(gt) == expected


@pytest.mark.parametrize(
    "region,expected",
    [
        ("22:100-400", ("22", 100, 400)),
        ("chr22:1,000-2,000", ("22", 1000, 2000)),
        ("22", ("22", None, None)),
        ("X:500-", ("X", 500, None)),
        (("chr1", 5, None), ("1", 5, None)),
        (None, None),
    ],
)
def test_parse_region(region, expected) -> None:
    assert parse_region(region) == expected


@pytest.mark.parametrize("region", ["22:400-100", ("22", 1), "22:a-b"])
def test_parse_region_rejects_malformed(region) -> None:
    with pytest.raises(ValueError):
        parse_region(region)


def test_load_genotype_vcf_filters_and_imputes(vcf_path) -> None:
    geno, samples, variants = load_genotype_vcf(vcf_path, region="22")

    assert samples == ["S1", "S2", "S3", "S4"]
    # multi-allelic and indel records dropped
    assert variants["SNP"].tolist() == ["rs1", "22:400:C:T", "rs5"]
    assert geno.shape == (4, 3)
    assert geno.dtype == np.int8
    np.testing.assert_array_equal(geno[:, 0], [0, 1, 2, 1])
    # S2 missing at 22:400 -> rounded mean of (1, 2, 0) = 1
    np.testing.assert_array_equal(geno[:, 1], [1, 1, 2, 0])
    assert variants.loc[1, "MISSING_RATE"] == pytest.approx(0.25)
    assert variants.loc[0, "MAF"] == pytest.approx(0.5)


def test_load_genotype_vcf_region_bounds_and_qc(vcf_path) -> None:
    geno, _, variants = load_genotype_vcf(vcf_path, region="22:150-450", impute=False)

    assert variants["POS"].tolist() == [400]
    assert geno[1, 0] == MISSING

    _, _, kept = load_genotype_vcf(vcf_path, region="22", max_missing=0.1)
    assert "22:400:C:T" not in kept["SNP"].tolist()

    _, _, common = load_genotype_vcf(vcf_path, region="22", min_maf=0.2)
    assert "rs5" not in common["SNP"].tolist()


def test_load_genotype_vcf_keeps_indels_when_requested(vcf_path) -> None:
    _, _, variants = load_genotype_vcf(vcf_path, snps_only=False)

    assert "rs3" in variants["SNP"].tolist()
    assert "rs6" in variants["SNP"].tolist()
    assert "rs2" not in variants["SNP"].tolist()


def test_load_genotype_vcf_reads_gzip(tmp_path) -> None:
    path = tmp_path / "toy.vcf.gz"
    with gzip.open(path, "wt") as fh:
        fh.write(VCF_TEXT)

    geno, samples, variants = load_genotype_vcf(path, region=("chr21", None, None))

    assert variants["SNP"].tolist() == ["rs6"]
    np.testing.assert_array_equal(geno[:, 0], [1, 1, 1, 1])


def test_load_genotype_vcf_warns_when_nothing_passes(vcf_path) -> None:
    with pytest.warns(UserWarning):
        geno, samples, variants = load_genotype_vcf(vcf_path, region="5")

    assert geno.shape == (4, 0)
    assert variants.empty


def test_load_genotype_vcf_requires_header(tmp_path) -> None:
    path = tmp_path / "bad.vcf"
    path.write_text("22\t100\trs1\tA\tG\t.\tPASS\t.\tGT\t0|0\n")

    with pytest.raises(ValueError):
        load_genotype_vcf(path)
