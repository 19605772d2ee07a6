"""
VCF reader for pulling a real genomic region into a dosage matrix.

Key features:
- Streaming parsing of VCF text (supports .vcf and .vcf.gz)
- Region restriction by chromosome and 1-based inclusive positions
- Biallelic records only; GT-based coding counts ALT alleles (0, 1, 2)
- Missing calls coded as -9 and optionally mean-imputed
- Optional basic QC filters: SNPs only, missingness, MAF

Return signature:
    (genotypes: np.ndarray[int8] samples × variants, sample_ids: List[str], variant_map: DataFrame)
"""
import gzip
import io
import re
import warnings
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

MISSING = -9

Region = Tuple[str, Optional[int], Optional[int]]

_GT_DOSAGE: Dict[str, int] = {
    '0/0': 0, '0|0': 0,
    '0/1': 1, '1/0': 1, '0|1': 1, '1|0': 1,
    '1/1': 2, '1|1': 2,
    './.': MISSING, '.|.': MISSING, '.': MISSING,
}
_GT_CACHE: Dict[str, int] = {}

_REGION_RE = re.compile(r'^(?P<chrom>[^:]+)(?::(?P<start>[\d,]+)?-?(?P<end>[\d,]+)?)?$')


def _open_text(path):
    """Open VCF text transparently from plain or gzip-compressed files."""
    p = str(path)
    pl = p.lower()
    if pl.endswith('.gz') or pl.endswith('.bgz'):
        return io.TextIOWrapper(gzip.open(p, 'rb'))
    return open(p, 'r')


def _normalize_chrom(chrom: str) -> str:
    chrom = str(chrom)
    return chrom[3:] if chrom.lower().startswith('chr') else chrom


def parse_region(region: Union[str, Region, None]) -> Optional[Region]:
    """Parse ``"chr22:16050000-16100000"`` or a ``(chrom, start, end)`` tuple.

    Start and end are 1-based and inclusive; either may be omitted. A leading
    ``chr`` is dropped so ``chr22`` and ``22`` select the same records.
    """
    if region is None:
        return None
    if isinstance(region, str):
        m = _REGION_RE.match(region.strip())
        if not m:
            raise ValueError(f"Malformed region string: {region!r}")
        start = m.group('start')
        end = m.group('end')
        chrom = m.group('chrom')
        start_i = int(start.replace(',', '')) if start else None
        end_i = int(end.replace(',', '')) if end else None
    else:
        try:
            chrom, start_i, end_i = region
        except (TypeError, ValueError):
            raise ValueError(f"Region must be a string or (chrom, start, end), got {region!r}")
        start_i = int(start_i) if start_i is not None else None
        end_i = int(end_i) if end_i is not None else None
    if start_i is not None and end_i is not None and start_i > end_i:
        raise ValueError(f"Region start {start_i} is after end {end_i}")
    return _normalize_chrom(chrom), start_i, end_i


def _in_region(chrom: str, pos: int, region: Optional[Region]) -> bool:
    if region is None:
        return True
    r_chrom, r_start, r_end = region
    if _normalize_chrom(chrom) != r_chrom:
        return False
    if r_start is not None and pos < r_start:
        return False
    if r_end is not None and pos > r_end:
        return False
    return True


def _parse_samples(header_line: str) -> List[str]:
    cols = header_line.rstrip('\n').split('\t')
    if len(cols) < 9 or cols[0] != '#CHROM':
        raise ValueError('Malformed VCF header line: missing #CHROM ... FORMAT ...')
    return cols[9:]


def _build_snp_id(chrom, pos, vid, ref, alt):
    if vid and vid != '.':
        return vid
    return "%s:%s:%s:%s" % (chrom, pos, ref, alt)


def decode_gt(gt: Optional[str]) -> int:
    """ALT-allele count for a diploid biallelic GT string, or MISSING."""
    if gt is None:
        return MISSING
    direct = _GT_DOSAGE.get(gt)
    if direct is not None:
        return direct
    cached = _GT_CACHE.get(gt)
    if cached is not None:
        return cached
    sep = '/' if '/' in gt else '|' if '|' in gt else None
    tokens = gt.split(sep) if sep else [gt]
    result = 0
    for token in tokens:
        if token not in ('0', '1'):
            result = MISSING
            break
        result += int(token)
    if len(tokens) != 2:
        # haploid or polyploid calls do not fit a 0/1/2 dosage
        result = MISSING
    _GT_CACHE[gt] = result
    return result


def _impute_mean(genotypes: np.ndarray) -> int:
    """Replace MISSING entries column-wise by the rounded mean dosage."""
    missing = genotypes == MISSING
    n_missing = int(missing.sum())
    if n_missing == 0:
        return 0
    for j in np.flatnonzero(missing.any(axis=0)):
        col = genotypes[:, j]
        observed = col[col != MISSING]
        fill = int(round(observed.mean())) if observed.size else 0
        col[col == MISSING] = fill
    return n_missing


def load_genotype_vcf(
    vcf_path: Union[str, Path],
    region: Union[str, Region, None] = None,
    snps_only: bool = True,
    max_missing: float = 1.0,
    min_maf: float = 0.0,
    impute: bool = True,
    verbose: bool = False,
) -> Tuple[np.ndarray, List[str], pd.DataFrame]:
    """
    Load a VCF file and return (genotypes, sample_ids, variant_map).

    Parameters
    - vcf_path: path to .vcf or .vcf.gz
    - region: "chrom:start-end" string or (chrom, start, end); None keeps all records
    - snps_only: keep only single-base REF/ALT records
    - max_missing: drop variants with missing rate > threshold (0..1]
    - min_maf: drop variants with minor allele frequency < threshold
    - impute: replace missing calls by the rounded mean dosage of their variant
    - verbose: print a short summary of what was kept
    """
    if not 0.0 <= max_missing <= 1.0:
        raise ValueError(f"max_missing must lie in [0, 1], got {max_missing}")
    if not 0.0 <= min_maf <= 0.5:
        raise ValueError(f"min_maf must lie in [0, 0.5], got {min_maf}")
    region_t = parse_region(region)

    samples: Optional[List[str]] = None
    columns: List[np.ndarray] = []
    rows: List[dict] = []
    counts = {'records': 0, 'outside_region': 0, 'multiallelic': 0,
              'non_snp': 0, 'no_gt': 0, 'missingness': 0, 'maf': 0}

    with _open_text(vcf_path) as fh:
        for line in fh:
            if line.startswith('##'):
                continue
            if line.startswith('#CHROM'):
                samples = _parse_samples(line)
                continue
            if not line.strip():
                continue
            if samples is None:
                raise ValueError('VCF data line found before #CHROM header')

            fields = line.rstrip('\n').split('\t')
            if len(fields) < 9 + len(samples):
                raise ValueError(
                    f"VCF record has {len(fields)} columns, expected {9 + len(samples)}"
                )
            counts['records'] += 1
            chrom, pos_s, vid, ref, alt = fields[:5]
            pos = int(pos_s)
            if not _in_region(chrom, pos, region_t):
                counts['outside_region'] += 1
                continue
            if ',' in alt or alt in ('.', '*'):
                counts['multiallelic'] += 1
                continue
            if snps_only and (len(ref) != 1 or len(alt) != 1):
                counts['non_snp'] += 1
                continue

            fmt_keys = fields[8].split(':')
            if 'GT' not in fmt_keys:
                counts['no_gt'] += 1
                continue
            gt_idx = fmt_keys.index('GT')

            dosages = np.empty(len(samples), dtype=np.int8)
            for i, sample_field in enumerate(fields[9:9 + len(samples)]):
                parts = sample_field.split(':')
                dosages[i] = decode_gt(parts[gt_idx] if gt_idx < len(parts) else None)

            observed = dosages != MISSING
            missing_rate = 1.0 - observed.mean()
            if missing_rate > max_missing:
                counts['missingness'] += 1
                continue
            if observed.any():
                alt_freq = dosages[observed].mean() / 2.0
                maf = min(alt_freq, 1.0 - alt_freq)
            else:
                alt_freq = maf = 0.0
            if maf < min_maf:
                counts['maf'] += 1
                continue

            columns.append(dosages)
            rows.append({
                'SNP': _build_snp_id(chrom, pos, vid, ref, alt),
                'CHROM': chrom,
                'POS': pos,
                'REF': ref,
                'ALT': alt,
                'ALT_FREQ': alt_freq,
                'MAF': maf,
                'MISSING_RATE': missing_rate,
            })

    if samples is None:
        raise ValueError(f"No #CHROM header found in {vcf_path}")

    if columns:
        genotypes = np.column_stack(columns).astype(np.int8)
    else:
        genotypes = np.zeros((len(samples), 0), dtype=np.int8)
        warnings.warn(f"No variants in {vcf_path} passed the region and QC filters")

    n_imputed = _impute_mean(genotypes) if impute else 0
    variant_map = pd.DataFrame(rows, columns=['SNP', 'CHROM', 'POS', 'REF', 'ALT',
                                              'ALT_FREQ', 'MAF', 'MISSING_RATE'])

    if verbose:
        print(f"Loaded {genotypes.shape[1]} variants x {len(samples)} samples from {vcf_path}")
        skipped = {k: v for k, v in counts.items() if k != 'records' and v}
        if skipped:
            print("   Skipped: " + ", ".join(f"{k}={v}" for k, v in skipped.items()))
        if n_imputed:
            print(f"   Imputed {n_imputed} missing calls with the variant mean")

    return genotypes, list(samples), variant_map
