#!/usr/bin/env python3
"""
Command-line script to preview batch plans for a data snapshot.

Usage:
    python -m sprayline.scripts.preview_planning --snapshot snapshot.json [--summary-only]

Options:
    --snapshot PATH   JSON file with products, nozzles, employees, batches, adjustments
    --summary-only    Show only summary, not every batch
"""

import sys
import argparse

from sprayline import create_app
from sprayline.planning.preview import run_preview_script


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Preview estimates and delivery dates for a data snapshot'
    )
    parser.add_argument(
        '--snapshot',
        required=True,
        help='Path to a JSON snapshot of catalogs and batches'
    )
    parser.add_argument(
        '--summary-only',
        action='store_true',
        help='Show only summary statistics, not every batch'
    )

    args = parser.parse_args(argv)

    app = create_app()

    with app.app_context():
        try:
            run_preview_script(
                args.snapshot,
                detailed=not args.summary_only,
                config=app.config["PLANNING_CONFIG"],
            )
        except Exception as e:
            print(f"\nFatal error: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
