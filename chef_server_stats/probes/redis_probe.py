"""Redis keyspace and memory statistics."""

import logging
import os
import re

from ..config.models import InstallationContext, StatsConfig
from ..services.command_runner import CommandRunner
from ..utils.metrics import MetricReport, add_metric
from .base import BaseProbe


SINGLE_KEYS = ("keyspace_hits", "keyspace_misses", "used_memory")


class RedisProbe(BaseProbe):
    """Scans `redis-cli info` output for a few counters."""

    name = "redis_stats"

    def __init__(self, config: StatsConfig, logger: logging.Logger, runner: CommandRunner):
        super().__init__(config, logger)
        self.runner = runner
        self.keyspace_line = re.compile(
            rf'{re.escape(config.redis.keyspace_db)}:keys=(\d+),expires=(\d+)'
        )

    def is_applicable(self, context: InstallationContext) -> bool:
        return os.path.exists(self.config.redis.cli_path)

    def parse_info(self, output: str) -> MetricReport:
        """Pick the wanted counters out of INFO output; anything unmatched is skipped."""
        stats: MetricReport = {}
        for line in output.split():
            # The keyspace section packs two counters into one line
            match = self.keyspace_line.search(line)
            if match:
                add_metric(stats, self.key("redis_keys"), match.group(1), logger=self.logger)
                add_metric(stats, self.key("redis_expires"), match.group(2), logger=self.logger)
                continue

            name, sep, value = line.partition(':')
            if sep and name in SINGLE_KEYS:
                add_metric(stats, self.key(f"redis_{name}"), value, logger=self.logger)
        return stats

    def collect(self, context: InstallationContext) -> MetricReport:
        # Exit status is not checked; whatever was printed is parsed
        result = self.runner.run([self.config.redis.cli_path, "info"])
        return self.parse_info(result.stdout)
