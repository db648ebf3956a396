#!/usr/bin/env python3
"""Write the active parameter table as JSON.

Usage:
    python -m poseidon377.params.export -o params.json
    python -m poseidon377.params.export --security-bits 128 --rate 3
"""

import argparse
import json
import logging
import sys

from poseidon377.config import Poseidon377Config
from poseidon377.params.table import ParameterSet, default_parameter_set, parameters_to_dict

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Export Poseidon377 parameters as JSON")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("--security-bits", type=int, default=None,
                        help="Derive the table at this security level instead of the configured one")
    parser.add_argument("--rate", type=int, default=None,
                        help="Export a single rate (1..7)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.security_bits is not None:
        table = ParameterSet.derived(Poseidon377Config(security_bits=args.security_bits))
    else:
        table = default_parameter_set()
    logger.info("exporting %s", table)

    if args.rate is not None:
        text = json.dumps({"rates": {str(args.rate): parameters_to_dict(table.get(args.rate))}},
                          indent=2)
    else:
        text = table.to_json()

    if args.output:
        with open(args.output, "w") as f:
            f.write(text + "\n")
        logger.info("wrote %s", args.output)
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
