"""Command-line entry point: print a one-shot JSON snapshot of server metrics."""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError
import yaml

from .aggregator import ProbeAggregator, build_default_probes
from .config.loader import ConfigLoader
from .config.resolver import InstallationNotFoundError, InstallationResolver
from .config.settings import Settings
from .utils.logger import setup_logger
from .utils.report import format_report
from .utils.verbosity import Verbosity


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='chef-server-stats',
        description='Collect a point-in-time JSON snapshot of Chef server metrics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compact JSON, suitable for a graphing pipeline
  chef-server-stats

  # Pretty JSON plus a line per failed probe
  chef-server-stats -V

  # Also print tracebacks for failed probes
  chef-server-stats -VV
        """
    )

    parser.add_argument(
        '-V', '--verbose',
        action='count',
        default=0,
        help='Pretty-print output and report probe failures (repeat for tracebacks)'
    )

    parser.add_argument(
        '--hostname',
        default=None,
        help='Host for HTTP stats endpoints (default: localhost or CHEF_STATS_HOSTNAME)'
    )

    parser.add_argument(
        '--config',
        default=Settings.config_path(),
        help='Optional YAML configuration file (default: CHEF_STATS_CONFIG env var)'
    )

    parser.add_argument(
        '--log-level',
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Diagnostic level; overrides -V (default: LOG_LEVEL env var when -V is not given)'
    )

    parser.add_argument(
        '--log-json',
        action='store_true',
        help='Write diagnostics as JSON log lines'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        int: 0 once a report was printed (however many probes failed),
        1 if the config is invalid or no installation was found
    """
    args = parse_args(argv)

    # --log-level, then -V, then LOG_LEVEL
    log_level = args.log_level
    if not log_level and not args.verbose:
        log_level = Settings.log_level()

    if log_level:
        verbosity = Verbosity.from_log_level(log_level)
    else:
        verbosity = Verbosity.from_count(args.verbose)
        log_level = verbosity.to_log_level()

    logger = setup_logger("chef_server_stats", log_level, json_format=args.log_json)

    try:
        config = ConfigLoader.load(args.config, hostname=args.hostname)
    except (FileNotFoundError, yaml.YAMLError, ValidationError) as e:
        logger.error(f"ERROR: Failed to load configuration: {e}")
        return 1

    try:
        context = InstallationResolver(config.installation, logger).resolve(config.hostname)
    except InstallationNotFoundError as e:
        logger.error(f"ERROR: {e}")
        return 1

    aggregator = ProbeAggregator(build_default_probes(config, logger), logger, verbosity)
    report = aggregator.collect(context)

    print(format_report(report, pretty=verbosity >= Verbosity.INFO))
    return 0


if __name__ == '__main__':
    sys.exit(main())
