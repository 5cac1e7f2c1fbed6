"""
HiveScout CLI

Usage:
    python -m hivescout signature <window-file>                     # Signature as JSON
    python -m hivescout choose <window-file> --rules rules.yaml     # Recommendation as JSON
    python -m hivescout choose <window-file> --preset default       # Built-in rule table
    python -m hivescout batch <triples-file> -o signatures.parquet  # One signature per window_id
    python -m hivescout presets                                     # List built-in rule tables

Window files are CSV, TSV or Parquet tables with subject, predicate,
object (+ optional datatype, object_type, window_id) columns.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from hivescout.config.thresholds import get_preset, list_presets
from hivescout.errors import HiveScoutError, get_safe_message, log_error
from hivescout.intake.reader import read_frame, read_window
from hivescout.selector.selector import ApproachSelector
from hivescout.signature.extractor import build_signature_frame, extract_signature


def run_signature(window_path: Path) -> dict:
    """Signature of a single window file."""
    window = read_window(window_path)
    return extract_signature(window).to_dict()


def run_choose(
    window_path: Path,
    rules_path: Optional[Path] = None,
    preset: Optional[str] = None,
) -> dict:
    """Recommendation for a single window file."""
    if rules_path is not None:
        selector = ApproachSelector.from_file(rules_path)
    else:
        selector = ApproachSelector(get_preset(preset or 'default'))

    window = read_window(window_path)
    return selector.choose_approach(window).to_dict()


def run_batch(
    triples_path: Path,
    output_path: Path,
    window_column: str = 'window_id',
    verbose: bool = True,
) -> dict:
    """Signature frame for every window in a triple table."""
    df = read_frame(triples_path)
    result = build_signature_frame(df, window_column=window_column, verbose=verbose)
    result.write_parquet(output_path)

    if verbose:
        print(f"Saved: {output_path}")
        print(f"Shape: {result.shape}")

    return {'signatures': str(output_path), 'rows': result.height}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hivescout',
        description='Window signatures and approach selection for triple streams',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')

    sub = parser.add_subparsers(dest='command', required=True)

    p_sig = sub.add_parser('signature', help='Print the signature of a window')
    p_sig.add_argument('window', help='Window table (csv/tsv/parquet)')

    p_choose = sub.add_parser('choose', help='Recommend an approach for a window')
    p_choose.add_argument('window', help='Window table (csv/tsv/parquet)')
    group = p_choose.add_mutually_exclusive_group()
    group.add_argument('--rules', help='Rule file (yaml/json)')
    group.add_argument('--preset', help='Built-in rule table (default: default)')

    p_batch = sub.add_parser('batch', help='Signature per window into a parquet file')
    p_batch.add_argument('triples', help='Triple table with a window column')
    p_batch.add_argument('-o', '--output', default='signatures.parquet',
                         help='Output path (default: signatures.parquet)')
    p_batch.add_argument('--window-column', default='window_id',
                         help='Column that groups rows into windows (default: window_id)')

    sub.add_parser('presets', help='List built-in rule tables')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """HiveScout CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        if args.command == 'signature':
            result = run_signature(Path(args.window))
        elif args.command == 'choose':
            result = run_choose(
                Path(args.window),
                rules_path=Path(args.rules) if args.rules else None,
                preset=args.preset,
            )
        elif args.command == 'batch':
            result = run_batch(
                Path(args.triples),
                Path(args.output),
                window_column=args.window_column,
                verbose=not args.quiet,
            )
        else:
            result = {'presets': list_presets()}
    except HiveScoutError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        error_id = log_error(e, context=args.command)
        print(json.dumps({'error': get_safe_message(e), 'error_id': error_id}), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
