import argparse
import logging
import sys
import asyncio

from lldp_discovery.config import load_settings
from lldp_discovery.csv_io import read_targets, write_batch_csv
from lldp_discovery.poller import LLDPPoller
from lldp_discovery.table import GROUPING_STRATEGIES
from lldp_discovery.utils import configure_logging


def build_parser(settings):
    parser = argparse.ArgumentParser(description="Collect LLDP neighbor information over SNMP")
    parser.add_argument("-i", "--input", default=settings.input_csv, help="CSV file of target,community pairs")
    parser.add_argument("-o", "--output", default=settings.output_csv, help="CSV file to write the results to")
    parser.add_argument("--version", type=int, choices=[1, 2], default=settings.snmp_version, help="SNMP Version (1 or 2 for v2c)")
    parser.add_argument("--port", type=int, default=settings.snmp_port, help="SNMP agent UDP port")
    parser.add_argument("--timeout", type=float, default=settings.snmp_timeout, help="Per-request timeout in seconds")
    parser.add_argument("--retries", type=int, default=settings.snmp_retries, help="Retries per request")
    parser.add_argument("--max-concurrency", type=int, default=settings.max_concurrency, help="Targets polled at the same time")
    parser.add_argument("--strategy", choices=GROUPING_STRATEGIES, default=settings.grouping, help="How remote table cells are grouped into neighbors")
    parser.add_argument("--log-file", default=settings.log_file, help="Log file path")
    parser.add_argument("--verbose", action="store_true", help="Log every OID and value")
    return parser


async def main(argv=None):
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    args = build_parser(settings).parse_args(argv)

    configure_logging(args.log_file, verbose=args.verbose)

    try:
        targets = read_targets(args.input)
    except (OSError, UnicodeDecodeError) as e:
        logging.error(f"Error reading input CSV file: {e}")
        return 1

    poller = LLDPPoller(
        version=args.version,
        port=args.port,
        timeout=args.timeout,
        retries=args.retries,
        max_concurrency=args.max_concurrency,
        grouping=args.strategy,
    )
    results = await poller.poll_all(targets)

    try:
        write_batch_csv(args.output, results)
    except OSError as e:
        logging.error(f"Error writing output CSV file: {e}")
        return 1

    logging.info(f"LLDP information successfully written to {args.output}")
    return 0


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
