"""Tests for the CouchDB stats probe."""

import httpx
import pytest

from chef_server_stats.probes.couchdb_probe import CouchDBProbe
from chef_server_stats.utils.verbosity import Verbosity


@pytest.fixture
def couch_stats():
    return {
        "couchdb": {
            "database_reads": {"current": 1520.0, "mean": 3.1},
            "database_writes": {"current": 310.0, "mean": 0.4},
            "request_time": {"current": 9000.5, "mean": 12.75},
        },
        "httpd": {"requests": {"current": 2000.0}},
    }


def test_couchdb_stats(config, logger, http, enterprise_context, couch_stats):
    http.get_json.return_value = couch_stats
    probe = CouchDBProbe(config, logger, http)

    metrics = probe.collect(enterprise_context)

    http.get_json.assert_called_once_with("http://localhost:5984/_stats")
    assert metrics == {
        "server.couch_db_reads": 1520,
        "server.couch_db_writes": 310,
        "server.couch_avg_request_time": 12.75,
    }
    assert isinstance(metrics["server.couch_db_reads"], int)
    assert isinstance(metrics["server.couch_avg_request_time"], float)


def test_couchdb_skipped_on_open_source(config, logger, http, open_source_context):
    probe = CouchDBProbe(config, logger, http)

    assert probe.is_applicable(open_source_context) is False
    http.get_json.assert_not_called()


def test_couchdb_applicable_on_enterprise(config, logger, http, enterprise_context):
    probe = CouchDBProbe(config, logger, http)

    assert probe.is_applicable(enterprise_context) is True


def test_couchdb_uses_context_hostname(config, logger, http, enterprise_context, couch_stats):
    http.get_json.return_value = couch_stats
    context = enterprise_context.model_copy(update={"hostname": "chef-be01"})

    CouchDBProbe(config, logger, http).collect(context)

    http.get_json.assert_called_once_with("http://chef-be01:5984/_stats")


def test_couchdb_null_current_is_dropped(config, logger, http, enterprise_context, couch_stats):
    couch_stats["couchdb"]["database_writes"]["current"] = None
    http.get_json.return_value = couch_stats

    metrics = CouchDBProbe(config, logger, http).collect(enterprise_context)

    assert "server.couch_db_writes" not in metrics
    assert metrics["server.couch_db_reads"] == 1520


def test_couchdb_missing_section_fails(config, logger, http, enterprise_context, couch_stats):
    del couch_stats["couchdb"]["request_time"]
    http.get_json.return_value = couch_stats

    result = CouchDBProbe(config, logger, http).run(enterprise_context, Verbosity.QUIET)

    assert result.failed is True
    assert result.metrics == {}


def test_couchdb_connection_error(config, logger, http, enterprise_context):
    http.get_json.side_effect = httpx.ConnectError("Connection refused")

    result = CouchDBProbe(config, logger, http).run(enterprise_context, Verbosity.QUIET)

    assert result.failed is True
    assert result.metrics == {}


def test_couchdb_drops_nan_average(config, logger, http, enterprise_context, couch_stats):
    couch_stats["couchdb"]["request_time"]["mean"] = float("nan")
    http.get_json.return_value = couch_stats
    probe = CouchDBProbe(config, logger, http)

    metrics = probe.collect(enterprise_context)

    assert metrics == {
        "server.couch_db_reads": 1520,
        "server.couch_db_writes": 310,
    }
