"""RabbitMQ pending message count."""

import logging
import os
import re
from typing import Iterable

from ..config.models import InstallationContext, StatsConfig
from ..services.command_runner import CommandRunner
from ..utils.metrics import MetricReport
from .base import BaseProbe, ProbeError


VALUE_LINE = re.compile(r'^\d+$')


def sum_value_lines(lines: Iterable[str]) -> int:
    """
    Add up the per-queue values printed one per line.

    Headers, banners and blank lines don't match the all-digit pattern and
    are skipped.
    """
    return sum(int(line) for line in lines if VALUE_LINE.match(line))


class RabbitMQProbe(BaseProbe):
    """Sums messages_ready across the queues of the chef vhost."""

    name = "rabbitmq_stats"

    def __init__(self, config: StatsConfig, logger: logging.Logger, runner: CommandRunner):
        super().__init__(config, logger)
        self.runner = runner

    def binary(self, context: InstallationContext) -> str:
        return os.path.join(context.embedded_bin_path, "rabbitmqctl")

    def is_applicable(self, context: InstallationContext) -> bool:
        return os.path.exists(self.binary(context))

    def collect(self, context: InstallationContext) -> MetricReport:
        rabbit = self.config.rabbitmq
        result = self.runner.run(
            [self.binary(context), "list_queues", "-p", rabbit.vhost, rabbit.column],
            path_prefix=context.embedded_bin_path,
        )
        if not result.ok:
            raise ProbeError(f"rabbitmqctl exited {result.exit_status}")

        total = sum_value_lines(result.stdout.split('\n'))
        return {self.key(f"rabbitmq_{rabbit.column}"): total}
