"""Tests for version parsing and environment string extraction."""

import pytest

from wp_supervisor.model.server import WebServerInfo
from wp_supervisor.parser.versions import (
    Version,
    compare_versions,
    detect_db_service,
    extract_db_version,
    extract_php_version,
    extract_wp_version,
    major_minor,
    parse_server_software,
)

from conftest import WP_VERSION_PHP


class TestVersion:
    def test_parse_takes_first_dotted_number(self):
        assert Version.parse("8.0.34-0ubuntu0.22.04.1").parts == (8, 0, 34)
        assert Version.parse("v1.2").parts == (1, 2)

    def test_parse_without_digits(self):
        assert Version.parse("LiteSpeed") is None
        assert Version.parse("") is None
        assert Version.parse(None) is None

    def test_shorter_side_is_zero_padded(self):
        assert Version.parse("8.2") == Version.parse("8.2.0")
        assert hash(Version.parse("8.2")) == hash(Version.parse("8.2.0"))
        assert Version.parse("6.4") < Version.parse("6.4.1")

    def test_components_compare_numerically(self):
        assert Version.parse("10.6") > Version.parse("9.9")
        assert Version.parse("1.10.0") > Version.parse("1.9.9")

    def test_major_minor(self):
        assert Version.parse("6.4.3").major_minor == "6.4"
        assert Version.parse("7").major_minor == "7"


@pytest.mark.parametrize(
    "left,right,expected",
    [
        ("8.1.2", "8.1.2", 0),
        ("8.1", "8.1.0", 0),
        ("8.1.2", "8.2", -1),
        ("10.0", "9.12", 1),
    ],
)
def test_compare_versions(left, right, expected):
    assert compare_versions(left, right) == expected


def test_compare_versions_rejects_non_versions():
    with pytest.raises(ValueError):
        compare_versions("nginx", "1.24")


def test_major_minor_helper():
    assert major_minor("6.4.3") == "6.4"
    assert major_minor("6.4") == "6.4"
    assert major_minor("6") == "6"
    assert major_minor("") == ""


class TestPHPVersion:
    def test_runtime_version_string(self):
        assert extract_php_version("8.2.10-1ubuntu1") == "8.2.10"

    def test_cli_banner(self):
        banner = "PHP 8.1.2-1ubuntu2.14 (cli) (built: Aug 18 2023 11:41:11) (NTS)\nCopyright (c) The PHP Group"
        assert extract_php_version(banner) == "8.1.2"

    def test_unparseable(self):
        assert extract_php_version("php: command not found") == ""
        assert extract_php_version(None) == ""


class TestDatabase:
    def test_detects_mariadb(self):
        assert detect_db_service("5.5.5-10.6.12-MariaDB-0ubuntu0.22.04.1") == "MariaDB"
        assert detect_db_service("mariadbd  Ver 10.11.6-MariaDB for debian-linux-gnu") == "MariaDB"

    def test_defaults_to_mysql(self):
        assert detect_db_service("8.0.34-0ubuntu0.22.04.1") == "MySQL"
        assert detect_db_service("") == "MySQL"

    @pytest.mark.parametrize(
        "banner,expected",
        [
            ("8.0.34-0ubuntu0.22.04.1", "8.0.34"),
            ("10.6.12-MariaDB-0ubuntu0.22.04.1", "10.6.12"),
            ("5.5.5-10.6.12-MariaDB-log", "10.6.12"),
            ("/usr/sbin/mysqld  Ver 8.0.34-0ubuntu0.22.04.1 for Linux on x86_64 ((Ubuntu))", "8.0.34"),
            ("mysql  Ver 15.1 Distrib 10.6.12-MariaDB, for debian-linux-gnu (x86_64)", "10.6.12"),
            ("mysql from 11.4.2-MariaDB, client 15.2 for debian-linux-gnu (x86_64)", "11.4.2"),
            ("", ""),
        ],
    )
    def test_extract_db_version(self, banner, expected):
        assert extract_db_version(banner) == expected


class TestServerSoftware:
    def test_apache(self):
        assert parse_server_software("Apache/2.4.52 (Ubuntu)") == WebServerInfo("apache", "2.4.52")

    def test_nginx_is_case_insensitive(self):
        assert parse_server_software("NGINX/1.24.0") == WebServerInfo("nginx", "1.24.0")

    def test_known_server_without_version(self):
        assert parse_server_software("Apache") == WebServerInfo("apache", None)

    def test_unknown_server_keeps_raw_string(self):
        assert parse_server_software("LiteSpeed") == WebServerInfo("Web", "LiteSpeed")

    def test_empty_means_unknown(self):
        assert parse_server_software("") is None
        assert parse_server_software("   ") is None
        assert parse_server_software(None) is None


def test_extract_wp_version():
    assert extract_wp_version(WP_VERSION_PHP) == "6.4.3"
    assert extract_wp_version("<?php\n$wp_version = \"6.5-RC1\";") == "6.5-RC1"
    assert extract_wp_version("<?php // nothing here") == ""
