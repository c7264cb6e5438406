"""PostgreSQL table activity and connection statistics."""

import logging
import os
import shlex
from typing import List

from ..config.models import InstallationContext, StatsConfig
from ..services.command_runner import CommandResult, CommandRunner
from ..utils.metrics import MetricReport, add_metric
from .base import BaseProbe


class PostgreSQLProbe(BaseProbe):
    """
    Sums pg_stat_all_tables counters and counts connections to the chef database.

    See "Table pg_stat_all_tables View" in the PostgreSQL monitoring docs for
    the meaning of each column.

    The two queries are independent: if one fails its keys are omitted and
    the other's are still reported.
    """

    name = "postgresql_stats"

    def __init__(self, config: StatsConfig, logger: logging.Logger, runner: CommandRunner):
        super().__init__(config, logger)
        self.runner = runner

    def binary(self, context: InstallationContext) -> str:
        return os.path.join(context.embedded_bin_path, "psql")

    def is_applicable(self, context: InstallationContext) -> bool:
        return os.path.exists(self.binary(context))

    def table_stats_query(self) -> str:
        sums = ", ".join(f"SUM({column})" for column in self.config.postgresql.columns)
        return f"SELECT {sums} FROM pg_stat_all_tables;"

    def connection_count_query(self) -> str:
        return (
            "SELECT count(*) FROM pg_stat_activity "
            f"WHERE datname = '{self.config.postgresql.database}';"
        )

    def _psql(self, context: InstallationContext, query: str) -> CommandResult:
        pg = self.config.postgresql
        psql = " ".join([
            shlex.quote(self.binary(context)),
            "-A", "-P", "tuples_only",
            "-U", shlex.quote(pg.db_user),
            "-d", shlex.quote(pg.database),
            "-c", shlex.quote(query),
        ])
        # cd first so psql doesn't complain about an unreadable cwd
        return self.runner.run(["su", pg.system_user, "-c", f"cd; {psql}"])

    def parse_table_stats(self, output: str) -> MetricReport:
        """
        Pair the "|"-separated sums with the requested columns by position.

        psql prints the values in SELECT order with no column names, so the
        pairing relies on that order. Extra values are ignored; missing ones
        leave their columns out.
        """
        columns: List[str] = self.config.postgresql.columns
        values = output.strip().split('|')
        stats: MetricReport = {}
        for column, value in zip(columns, values):
            add_metric(stats, self.key(f"postgresql_{column}"), value, logger=self.logger)
        return stats

    def collect(self, context: InstallationContext) -> MetricReport:
        stats: MetricReport = {}

        result = self._psql(context, self.table_stats_query())
        if result.ok:
            stats.update(self.parse_table_stats(result.stdout))
        else:
            self.logger.debug(f"Table stats query exited {result.exit_status}")

        result = self._psql(context, self.connection_count_query())
        if result.ok:
            add_metric(
                stats,
                self.key("postgresql_connection_count"),
                result.stdout,
                logger=self.logger,
            )
        else:
            self.logger.debug(f"Connection count query exited {result.exit_status}")

        return stats
