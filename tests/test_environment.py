"""Tests for EnvironmentReporter."""

from types import SimpleNamespace

import requests

from wp_supervisor.engine.environment import EnvironmentReporter
from wp_supervisor.engine.hooks import SERVER_DATA_FILTER, SERVER_IP_FILTER, FilterRegistry
from wp_supervisor.model.server import DatabaseInfo, ServerData, WebServerInfo
from wp_supervisor.storage.transients import DAY_IN_SECONDS

from conftest import FakeConnector, lemp_connector


def test_collects_lemp_stack(connector, store):
    data = EnvironmentReporter(connector, store).get_data()

    assert data == ServerData(
        database=DatabaseInfo("MySQL", "8.0.34"),
        php="8.1.2",
        wp="6.4.3",
        web=WebServerInfo("nginx", "1.24.0"),
    )


def test_caches_for_a_day(connector, store, clock):
    reporter = EnvironmentReporter(connector, store)
    reporter.get_data()
    scans = len(connector.calls)

    clock.advance(DAY_IN_SECONDS - 1)
    assert reporter.get_data().php == "8.1.2"
    assert len(connector.calls) == scans

    clock.advance(2)
    reporter.get_data()
    assert len(connector.calls) == 2 * scans


def test_cached_value_is_plain_dict(connector, store):
    EnvironmentReporter(connector, store).get_data()

    cached = store.get(EnvironmentReporter.SERVER_DATA_TRANSIENT)
    assert cached["database"] == {"service": "MySQL", "version": "8.0.34"}
    assert cached["web"] == {"service": "nginx", "version": "1.24.0"}


def test_flush_forces_inspection(connector, store):
    reporter = EnvironmentReporter(connector, store)
    reporter.get_data()
    scans = len(connector.calls)

    assert reporter.flush() is True
    reporter.get_data()
    assert len(connector.calls) == 2 * scans


def test_wp_path_is_respected(store):
    connector = lemp_connector()
    connector.files = {"/srv/blog/wp-includes/version.php": "<?php $wp_version = '6.5.2';"}

    assert EnvironmentReporter(connector, store, wp_path="/srv/blog").get_data().wp == "6.5.2"


def test_bare_host_reports_empty_values(store):
    data = EnvironmentReporter(FakeConnector(), store).get_data()

    assert data.php == ""
    assert data.wp == ""
    assert data.database == DatabaseInfo("MySQL", "")
    assert data.web is None


def test_server_software_override(connector, store):
    reporter = EnvironmentReporter(connector, store, server_software="LiteSpeed")
    assert reporter.get_data().web == WebServerInfo("Web", "LiteSpeed")
    assert "nginx -v" not in connector.calls


def test_falls_back_to_server_header(store, http_session):
    http_session.head.return_value = SimpleNamespace(status_code=200, headers={"Server": "Apache/2.4.58 (Debian)"})
    reporter = EnvironmentReporter(
        FakeConnector(),
        store,
        site_url="https://blog.example.com",
        session=http_session,
    )

    assert reporter.get_data().web == WebServerInfo("apache", "2.4.58")


def test_header_probe_failure_leaves_web_unknown(store, http_session):
    http_session.head.side_effect = requests.Timeout("timed out")
    reporter = EnvironmentReporter(FakeConnector(), store, site_url="https://blog.example.com", session=http_session)

    assert reporter.get_data().web is None


def test_data_filter(connector, store):
    hooks = FilterRegistry()

    def hide_php(data):
        data.php = ""
        return data

    hooks.add_filter(SERVER_DATA_FILTER, hide_php)
    reporter = EnvironmentReporter(connector, store, hooks=hooks)

    assert reporter.get_data().php == ""
    assert reporter.get_data().php == ""
    assert store.get(EnvironmentReporter.SERVER_DATA_TRANSIENT)["php"] == "8.1.2"


class TestGetIP:
    def test_first_address_from_hostname(self, connector, store):
        assert EnvironmentReporter(connector, store).get_ip() == "10.0.0.5"

    def test_falls_back_to_resolved_address(self, store):
        connector = FakeConnector(address="192.0.2.10")
        assert EnvironmentReporter(connector, store).get_ip() == "192.0.2.10"

    def test_garbage_is_rejected(self, store):
        connector = FakeConnector(commands={"hostname -I": ("localhost\n", "", 0)})
        assert EnvironmentReporter(connector, store).get_ip() is None

    def test_filter_can_supply_address(self, store):
        hooks = FilterRegistry()
        hooks.add_filter(SERVER_IP_FILTER, lambda ip: ip or "203.0.113.7")
        assert EnvironmentReporter(FakeConnector(), store, hooks=hooks).get_ip() == "203.0.113.7"

    def test_not_cached(self, connector, store):
        reporter = EnvironmentReporter(connector, store)
        reporter.get_ip()
        reporter.get_ip()
        assert connector.calls.count("hostname -I") == 2
        assert store.names() == []
