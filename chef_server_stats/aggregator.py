"""Probe orchestration: run every probe in order and merge what they return."""

import logging
from typing import List, Optional

from .config.models import InstallationContext, StatsConfig
from .probes.base import BaseProbe
from .probes.api_probe import ApiCountsProbe
from .probes.couchdb_probe import CouchDBProbe
from .probes.rabbitmq_probe import RabbitMQProbe
from .probes.postgresql_probe import PostgreSQLProbe
from .probes.authz_probe import AuthzProbe
from .probes.redis_probe import RedisProbe
from .probes.status_probe import ServerStatusProbe
from .services.chef_api import KnifeApiClient
from .services.command_runner import CommandRunner
from .services.http_client import HttpClient
from .utils.metrics import MetricReport, ProbeResult, merge_reports
from .utils.verbosity import Verbosity


def build_default_probes(
    config: StatsConfig,
    logger: logging.Logger,
    runner: Optional[CommandRunner] = None,
    http: Optional[HttpClient] = None,
    api: Optional[KnifeApiClient] = None
) -> List[BaseProbe]:
    """
    Create the standard probe sequence.

    Order only matters for key collisions (last probe wins), which the
    per-probe key names rule out in practice.

    Args:
        config: Run configuration
        logger: Parent logger; each probe gets a child
        runner: Command runner shared by binary-backed probes
        http: HTTP client shared by endpoint probes
        api: Chef API client

    Returns:
        List[BaseProbe]: API counts, CouchDB, RabbitMQ, PostgreSQL, authz,
        Redis, server status
    """
    runner = runner or CommandRunner(timeout=config.command_timeout_sec, logger=logger)
    http = http or HttpClient(timeout=config.http_timeout_sec, logger=logger)
    api = api or KnifeApiClient(
        runner,
        knife_bin=config.api.knife_bin,
        knife_config=config.api.knife_config,
        logger=logger,
    )

    return [
        ApiCountsProbe(config, logger, api),
        CouchDBProbe(config, logger, http),
        RabbitMQProbe(config, logger, runner),
        PostgreSQLProbe(config, logger, runner),
        AuthzProbe(config, logger, http),
        RedisProbe(config, logger, runner),
        ServerStatusProbe(config, logger, http),
    ]


class ProbeAggregator:
    """
    Runs a fixed probe sequence, one probe at a time, and merges the results.

    Nothing a probe does can stop the run: inapplicable probes are skipped,
    failed probes contribute their fallback metrics (usually none).
    """

    def __init__(
        self,
        probes: List[BaseProbe],
        logger: Optional[logging.Logger] = None,
        verbosity: Verbosity = Verbosity.QUIET
    ):
        self.probes = probes
        self.logger = logger or logging.getLogger(__name__)
        self.verbosity = verbosity
        self.results: List[ProbeResult] = []

    def _applicable(self, probe: BaseProbe, context: InstallationContext) -> bool:
        try:
            return bool(probe.is_applicable(context))
        except Exception as e:
            if self.verbosity >= Verbosity.INFO:
                self.logger.warning(
                    f"{probe.name}: applicability check failed: {e}",
                    exc_info=self.verbosity >= Verbosity.DEBUG
                )
            return False

    def collect(self, context: InstallationContext) -> MetricReport:
        """
        Run every probe and merge their reports.

        Args:
            context: Resolved installation context

        Returns:
            MetricReport: Merged report; later probes overwrite earlier keys
        """
        contributions: List[MetricReport] = []
        self.results = []

        for probe in self.probes:
            if not self._applicable(probe, context):
                self.logger.debug(f"{probe.name}: skipped")
                continue

            result = probe.run(context, self.verbosity)
            self.results.append(result)

            if result.failed:
                contributions.append(probe.fallback_metrics())
            else:
                contributions.append(result.metrics)

        report = merge_reports(contributions)
        failed = sum(1 for result in self.results if result.failed)
        self.logger.debug(
            f"Ran {len(self.results)}/{len(self.probes)} probe(s), "
            f"{failed} failed, {len(report)} metric(s)"
        )
        return report
