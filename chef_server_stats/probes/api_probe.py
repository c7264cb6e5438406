"""Chef API object counts."""

import logging
from typing import List

from ..config.models import InstallationContext, StatsConfig
from ..services.chef_api import KnifeApiClient
from ..utils.metrics import MetricReport
from .base import BaseProbe


class ApiCountsProbe(BaseProbe):
    """Counts nodes, cookbooks and roles (and optionally clients) on the server."""

    name = "api_counts"

    def __init__(self, config: StatsConfig, logger: logging.Logger, api: KnifeApiClient):
        super().__init__(config, logger)
        self.api = api

    def collections(self) -> List[str]:
        collections = list(self.config.api.collections)
        if self.config.api.include_clients and "clients" not in collections:
            collections.append("clients")
        return collections

    def collect(self, context: InstallationContext) -> MetricReport:
        # All-or-nothing: one failed request discards the other counts
        return {
            self.key(f"num_{collection}"): self.api.count(collection)
            for collection in self.collections()
        }
