#!/usr/bin/env python3
"""
Genotype/phenotype simulation script using genarch
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from genarch.cli.utils import config_from_args, parse_args
from genarch.pipelines.simulation import SimulationPipeline, run_replicates


def main():
    args = parse_args()
    config = config_from_args(args)
    verbose = not args.quiet

    if args.replicates > 1:
        summary = run_replicates(config, n_replicates=args.replicates, verbose=verbose)
        print(summary.describe().T.to_string())
        if args.output_prefix:
            out = Path(f"{args.output_prefix}.replicates.csv")
            out.parent.mkdir(parents=True, exist_ok=True)
            summary.to_csv(out, index=False)
            print(f"Replicate summaries written to {out}")
        return

    result = SimulationPipeline(config, verbose=verbose).run()
    for key, value in result.summary().items():
        print(f"{key:>28}: {value}")


if __name__ == '__main__':
    main()
