"""Authz service statistics (enterprise installs only)."""

import logging

from ..config.models import InstallationContext, StatsConfig
from ..services.http_client import HttpClient
from ..utils.metrics import MetricReport, add_metric
from .base import BaseProbe


class AuthzProbe(BaseProbe):
    """Reads the system_statistics section of the authz /_ping document."""

    name = "authz_stats"

    def __init__(self, config: StatsConfig, logger: logging.Logger, http: HttpClient):
        super().__init__(config, logger)
        self.http = http

    def is_applicable(self, context: InstallationContext) -> bool:
        return not context.is_open_source

    def url(self, context: InstallationContext) -> str:
        endpoints = self.config.endpoints
        return f"http://{context.hostname}:{endpoints.authz_port}{endpoints.authz_path}"

    def collect(self, context: InstallationContext) -> MetricReport:
        system_statistics = self.http.get_json(self.url(context))['system_statistics']

        stats: MetricReport = {}
        for stat, entry in system_statistics.items():
            add_metric(stats, self.key(f"authz_{stat}"), entry['count'], logger=self.logger)
        return stats
