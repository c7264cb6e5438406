"""Server liveness via the /_status endpoint."""

import logging

from ..config.models import InstallationContext, StatsConfig
from ..services.http_client import HttpClient
from ..utils.metrics import MetricReport
from .base import BaseProbe


class ServerStatusProbe(BaseProbe):
    """
    Reports status=1 when /_status answers with the success token, else 0.

    Unlike the other probes a failure is itself the signal, so the key is
    always present: an unreachable host or unreadable body reports 0.
    """

    name = "server_status"

    def __init__(self, config: StatsConfig, logger: logging.Logger, http: HttpClient):
        super().__init__(config, logger)
        self.http = http

    def url(self, context: InstallationContext) -> str:
        return f"https://{context.hostname}{self.config.endpoints.status_path}"

    def collect(self, context: InstallationContext) -> MetricReport:
        body = self.http.get_json(self.url(context), verify=self.config.endpoints.verify_tls)
        up = isinstance(body, dict) and body.get('status') == self.config.endpoints.status_ok_token
        return {self.key("status"): 1 if up else 0}

    def fallback_metrics(self) -> MetricReport:
        return {self.key("status"): 0}
