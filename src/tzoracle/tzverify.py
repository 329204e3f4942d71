#!/usr/bin/env python3
#
# Copyright 2026 The tzoracle Authors
#
# MIT License.

"""
Verify the literal (local, utc) test vectors of each zone against the offset
regimes of the zone, and report every failing vector.

The verifier has a number of stages implemented by various helper classes:

* RuleTableLoader
    * Parse the raw regime records (builtin zonedb, or `--zones_file`) into an
      immutable RuleTable.
* CaseRunner
    * Run each vector through the VerificationOracle, which checks both the
      utc→local and the local→utc directions using the ZoneConverter.
* JsonGenerator
    * Write the RunReport to `--json_file` if requested.

Input Flags:

* `--zones_file {file}`
    * JSON file of {zoneName -> regimes[]}. Default: builtin zonedb.
* `--vectors_file {file}`
    * JSON file of {zoneName -> vectors[]}. Default: builtin vectors.
* `--include_list {file}`
    * Verify only the zones listed in this file.

Loader Flags:

* --strict, --nostrict
    * Abort on the first malformed zone (default), or drop malformed zones.

Runner Flags:

* `--workers {n}`
    * Verify zones in parallel using n threads (default: 1).

Output Flags:

* `--output_dir {dir}`
    * The directory where the JSON report should be created.
* `--json_file {file}`
    * Name of the JSON report. No report is written if empty.
* `--log_level {level}`
    * DEBUG also logs every passing vector.

Exits with status 0 if every vector passed, 1 otherwise.

Examples:

    $ tzverify.py
    $ tzverify.py --zones_file zones.json --vectors_file vectors.json \\
        --workers 4 --json_file report.json
"""

import argparse
import logging
import sys

from tzoracle.data_types.oracle_types import create_run_report
from tzoracle.generator.jsongenerator import JsonGenerator
from tzoracle.loader.loader import filter_include_vectors
from tzoracle.loader.loader import load_vectors_file
from tzoracle.loader.loader import load_zones_file
from tzoracle.loader.loader import read_include_list
from tzoracle.ruletable.ruletable import RuleTableLoader
from tzoracle.runner.runner import CaseRunner
from tzoracle.runner.runner import LoggingReporter
from tzoracle.zonedb.zone_regimes import ZONES_MAP
from tzoracle.zonedb.zone_vectors import VECTORS_MAP


def main() -> None:
    """
    Main driver of the verifier.

    Usage:
        tzverify.py [flags...]
    """
    # Configure command line flags.
    parser = argparse.ArgumentParser(
        description='Verify timezone conversion vectors.')

    # Input flags.
    parser.add_argument(
        '--zones_file',
        help='JSON file of zone regimes (default: builtin zonedb)',
        default='',
    )
    parser.add_argument(
        '--vectors_file',
        help='JSON file of test vectors (default: builtin vectors)',
        default='',
    )
    parser.add_argument(
        '--include_list',
        help='File containing list of zones to verify',
        default='',
    )

    # Make --strict the default, --nostrict optional.
    parser.add_argument(
        '--strict',
        help='Abort if any zone has malformed regimes',
        action='store_true',
        default=True,
    )
    parser.add_argument(
        '--nostrict',
        help='Drop zones with malformed regimes',
        action='store_false',
        dest='strict',
    )

    # Runner flags.
    parser.add_argument(
        '--workers',
        help='Number of threads used to verify zones (default: 1)',
        type=int,
        default=1,
    )

    # Output flags.
    parser.add_argument(
        '--output_dir',
        help='Location of the output directory',
        default='',
    )
    parser.add_argument(
        '--json_file',
        help='The JSON report file (default: none)',
        default='',
    )
    parser.add_argument(
        '--log_level',
        help='Logging level (default: INFO)',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
    )

    # Parse the command line arguments
    args = parser.parse_args()

    # Configure logging. This should normally be executed after the
    # parser.parse_args() because it allows us set the logging.level using a
    # flag.
    logging.basicConfig(level=getattr(logging, args.log_level))

    # How the script was invoked
    invocation = ' '.join(sys.argv)

    logging.info('======== Verifier settings')
    logging.info(f'Zones file: {args.zones_file or "(builtin)"}')
    logging.info(f'Vectors file: {args.vectors_file or "(builtin)"}')
    logging.info(f'Strict: {args.strict}')
    logging.info(f'Workers: {args.workers}')

    # Load the regimes.
    logging.info('======== Loading rule table')
    zones_map = load_zones_file(args.zones_file) if args.zones_file \
        else ZONES_MAP
    loader = RuleTableLoader(strict=args.strict)
    rule_table = loader.load(zones_map)
    loader.print_summary()

    # Load the vectors.
    logging.info('======== Loading test vectors')
    vectors_map = load_vectors_file(args.vectors_file) if args.vectors_file \
        else VECTORS_MAP
    include_list = read_include_list(args.include_list)
    vectors_map = filter_include_vectors(vectors_map, include_list)

    # Verify.
    logging.info('======== Verifying test vectors')
    runner = CaseRunner(
        rule_table=rule_table,
        reporter=LoggingReporter(),
        workers=args.workers,
    )
    result = runner.run(vectors_map)
    runner.print_summary(result)

    if args.json_file:
        logging.info('======== Creating JSON report')
        report = create_run_report(
            invocation=invocation,
            zone_names=rule_table.zone_names(),
            removed_zones=loader.removed_zones,
            result=result,
        )
        generator = JsonGenerator(report=report, json_file=args.json_file)
        generator.generate_files(args.output_dir)

    logging.info('======== Finished verifying test vectors.')
    sys.exit(0 if result.all_passed else 1)


if __name__ == '__main__':
    main()
