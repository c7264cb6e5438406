"""Shared pytest configuration and fixtures."""

import logging
from unittest.mock import Mock

import pytest

from chef_server_stats.config.models import (
    Flavor,
    InstallationContext,
    InstallationPathsConfig,
    RedisConfig,
    StatsConfig,
)
from chef_server_stats.services.command_runner import CommandResult, CommandRunner
from chef_server_stats.services.http_client import HttpClient


@pytest.fixture
def logger():
    """Create a propagating logger so caplog sees probe diagnostics."""
    logger = logging.getLogger("test_chef_server_stats")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def embedded_bin(tmp_path):
    """Empty embedded bin directory; tests create the binaries they need."""
    path = tmp_path / "embedded" / "bin"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def config(tmp_path):
    """Configuration pointing every filesystem path into tmp_path."""
    return StatsConfig(
        installation=InstallationPathsConfig(
            open_source_marker=str(tmp_path / "osc" / "chef-server-ctl"),
            open_source_embedded_bin=str(tmp_path / "embedded" / "bin"),
            enterprise_marker=str(tmp_path / "opc" / "private-chef-ctl"),
            enterprise_embedded_bin=str(tmp_path / "embedded" / "bin"),
        ),
        redis=RedisConfig(cli_path=str(tmp_path / "embedded" / "bin" / "redis-cli")),
    )


@pytest.fixture
def enterprise_context(embedded_bin):
    return InstallationContext(
        flavor=Flavor.ENTERPRISE,
        embedded_bin_path=str(embedded_bin),
        hostname="localhost",
    )


@pytest.fixture
def open_source_context(embedded_bin):
    return InstallationContext(
        flavor=Flavor.OPEN_SOURCE,
        embedded_bin_path=str(embedded_bin),
        hostname="localhost",
    )


@pytest.fixture
def runner():
    """Command runner double; set .run.return_value or .run.side_effect."""
    return Mock(spec=CommandRunner)


@pytest.fixture
def http():
    """HTTP client double; set .get_json.return_value or .get_json.side_effect."""
    return Mock(spec=HttpClient)


def make_binary(directory, name):
    """Create an empty file standing in for an installed binary."""
    path = directory / name
    path.write_text("")
    return path


def ok(stdout):
    return CommandResult(exit_status=0, stdout=stdout)


def failed(exit_status=1, stderr="boom"):
    return CommandResult(exit_status=exit_status, stdout="", stderr=stderr)
