"""Tests for the RabbitMQ probe."""

import subprocess

from chef_server_stats.probes.rabbitmq_probe import RabbitMQProbe, sum_value_lines
from chef_server_stats.utils.verbosity import Verbosity

from conftest import failed, make_binary, ok


LIST_QUEUES_OUTPUT = """Listing queues ...
3
0
7
...done.
"""


def test_sum_value_lines_skips_non_numeric():
    assert sum_value_lines(["foo", "3", "bar", "7", ""]) == 10


def test_sum_value_lines_ignores_mixed_lines():
    assert sum_value_lines(["12 messages", "-4", "4.5", " 6", "8"]) == 8


def test_sum_value_lines_empty():
    assert sum_value_lines([]) == 0


def test_rabbitmq_not_applicable_without_binary(config, logger, runner, enterprise_context):
    probe = RabbitMQProbe(config, logger, runner)

    assert probe.is_applicable(enterprise_context) is False


def test_rabbitmq_applicable_with_binary(config, logger, runner, enterprise_context, embedded_bin):
    make_binary(embedded_bin, "rabbitmqctl")
    probe = RabbitMQProbe(config, logger, runner)

    assert probe.is_applicable(enterprise_context) is True


def test_rabbitmq_messages_ready(config, logger, runner, enterprise_context, embedded_bin):
    runner.run.return_value = ok(LIST_QUEUES_OUTPUT)
    probe = RabbitMQProbe(config, logger, runner)

    metrics = probe.collect(enterprise_context)

    assert metrics == {"server.rabbitmq_messages_ready": 10}
    args, kwargs = runner.run.call_args
    assert args[0] == [
        str(embedded_bin / "rabbitmqctl"), "list_queues", "-p", "/chef", "messages_ready"
    ]
    assert kwargs["path_prefix"] == str(embedded_bin)


def test_rabbitmq_no_queues_reports_zero(config, logger, runner, enterprise_context):
    runner.run.return_value = ok("Listing queues ...\n...done.\n")

    metrics = RabbitMQProbe(config, logger, runner).collect(enterprise_context)

    assert metrics == {"server.rabbitmq_messages_ready": 0}


def test_rabbitmq_nonzero_exit_is_empty(config, logger, runner, enterprise_context):
    runner.run.return_value = failed(exit_status=2)

    result = RabbitMQProbe(config, logger, runner).run(enterprise_context, Verbosity.QUIET)

    assert result.failed is True
    assert result.metrics == {}


def test_rabbitmq_timeout_is_empty(config, logger, runner, enterprise_context):
    runner.run.side_effect = subprocess.TimeoutExpired(cmd="rabbitmqctl", timeout=30)

    result = RabbitMQProbe(config, logger, runner).run(enterprise_context, Verbosity.QUIET)

    assert result.failed is True
    assert result.metrics == {}
