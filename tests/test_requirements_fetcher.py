"""Tests for the requirements fetcher and its weekly cache."""

import pytest
import requests

from wp_supervisor import __version__
from wp_supervisor.engine.hooks import SERVER_REQUIREMENTS_FILTER, FilterRegistry
from wp_supervisor.engine.requirements import DEFAULT_API_URL, RequirementsFetcher
from wp_supervisor.storage.transients import WEEK_IN_SECONDS

from conftest import json_response


@pytest.fixture
def fetcher(store, http_session):
    return RequirementsFetcher(store, site_url="https://blog.example.com", session=http_session)


def test_fetches_and_caches_document(fetcher, store, http_session, requirements_doc):
    assert fetcher.get_requirements() == requirements_doc
    assert store.get(RequirementsFetcher.MIN_REQUIREMENTS_TRANSIENT) == requirements_doc
    http_session.get.assert_called_once()


def test_request_identifies_the_site(fetcher, http_session):
    fetcher.get_requirements()

    args, kwargs = http_session.get.call_args
    assert args[0] == DEFAULT_API_URL
    assert kwargs["headers"]["User-Agent"] == f"Supervisor/{__version__}; https://blog.example.com"
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["timeout"] == 20


def test_second_call_within_a_week_uses_cache(fetcher, http_session, clock):
    fetcher.get_requirements()
    clock.advance(WEEK_IN_SECONDS - 1)
    fetcher.get_requirements()

    assert http_session.get.call_count == 1


def test_refetches_after_a_week(fetcher, http_session, clock):
    fetcher.get_requirements()
    clock.advance(WEEK_IN_SECONDS + 1)
    fetcher.get_requirements()

    assert http_session.get.call_count == 2


@pytest.mark.parametrize(
    "response",
    [
        json_response({"error": "maintenance"}, status_code=500),
        json_response({}, status_code=404),
        json_response(ValueError("Expecting value: line 1 column 1 (char 0)")),
        json_response(["not", "an", "object"]),
        json_response({}),
    ],
)
def test_bad_answers_are_not_cached(fetcher, store, http_session, response):
    http_session.get.return_value = response

    assert fetcher.get_requirements() is None
    assert store.get(RequirementsFetcher.MIN_REQUIREMENTS_TRANSIENT) is None

    fetcher.get_requirements()
    assert http_session.get.call_count == 2


def test_transport_error(fetcher, store, http_session):
    http_session.get.side_effect = requests.ConnectionError("Name or service not known")

    assert fetcher.get_requirements() is None
    assert store.names() == []


def test_filter_applies_to_cached_and_fresh_values(store, http_session):
    hooks = FilterRegistry()
    hooks.add_filter(SERVER_REQUIREMENTS_FILTER, lambda doc: {**doc, "php": {"recommended": "8.4", "minimum": "8.1"}})
    fetcher = RequirementsFetcher(store, session=http_session, hooks=hooks)

    assert fetcher.get_requirements()["php"] == {"recommended": "8.4", "minimum": "8.1"}
    assert fetcher.get_requirements()["php"] == {"recommended": "8.4", "minimum": "8.1"}
    # The cache keeps the unfiltered document
    assert store.get(RequirementsFetcher.MIN_REQUIREMENTS_TRANSIENT)["php"] == {"recommended": "8.3", "minimum": "7.4"}


def test_flush(fetcher, http_session):
    fetcher.get_requirements()
    assert fetcher.flush() is True
    fetcher.get_requirements()
    assert http_session.get.call_count == 2
