"""CouchDB read/write statistics (enterprise installs only)."""

import logging

from ..config.models import InstallationContext, StatsConfig
from ..services.http_client import HttpClient
from ..utils.metrics import MetricReport, add_metric, to_float, to_int
from .base import BaseProbe


class CouchDBProbe(BaseProbe):
    """Reads /_stats from the local CouchDB."""

    name = "couchdb_stats"

    def __init__(self, config: StatsConfig, logger: logging.Logger, http: HttpClient):
        super().__init__(config, logger)
        self.http = http

    def is_applicable(self, context: InstallationContext) -> bool:
        return not context.is_open_source

    def url(self, context: InstallationContext) -> str:
        endpoints = self.config.endpoints
        return f"http://{context.hostname}:{endpoints.couchdb_port}{endpoints.couchdb_path}"

    def collect(self, context: InstallationContext) -> MetricReport:
        couch = self.http.get_json(self.url(context))['couchdb']

        # Index every field first so a missing section fails the whole probe
        reads = couch['database_reads']['current']
        writes = couch['database_writes']['current']
        request_time = couch['request_time']['mean']

        stats: MetricReport = {}
        add_metric(stats, self.key("couch_db_reads"), reads, to_int, self.logger)
        add_metric(stats, self.key("couch_db_writes"), writes, to_int, self.logger)
        add_metric(stats, self.key("couch_avg_request_time"), request_time, to_float, self.logger)
        return stats
