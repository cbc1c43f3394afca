"""
tests/test_fetch_from_elastic.py

Installed-software collaborator with requests.get patched out.
"""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
import requests

from office_errors import FetchError
from fetch_from_elastic import get_elastic_installs

QUERY = "SELECT name, version FROM programs WHERE name LIKE 'Microsoft 365%';"


def _hit(agent, version, query=QUERY, agent_id=None):
    return {"_source": {
        "@timestamp": "2025-10-19T06:35:51.475Z",
        "agent": {"name": agent, "id": agent_id or f"id-{agent}"},
        "action_data": {"query": query},
        "osquery": {"name": "Microsoft 365 Apps for enterprise - en-us", "version": version},
    }}


def _response(hits):
    resp = Mock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = {"hits": {"hits": hits}}
    return resp


def _call(**kw):
    return get_elastic_installs(es_url="https://es.example:9200/", index="osquery-*",
                                api_key_b64="a2V5", query=QUERY, **kw)


@patch("fetch_from_elastic.requests.get")
def test_rows_from_matching_docs(mock_get) -> None:
    mock_get.return_value = _response([
        _hit("PC1", "16.0.14701.20164"),
        _hit("PC2", "16.0.14527.20276"),
        _hit("PC3", "1.0", query="SELECT * FROM os_version;"),
    ])
    rows = _call()
    assert [(r["computer_name"], r["computer_id"], r["version"]) for r in rows] == [
        ("PC1", "id-PC1", "16.0.14701.20164"),
        ("PC2", "id-PC2", "16.0.14527.20276"),
    ]
    url = mock_get.call_args.args[0]
    assert url == "https://es.example:9200/osquery-*/_search"
    assert mock_get.call_args.kwargs["headers"] == {"Authorization": "ApiKey a2V5"}


@patch("fetch_from_elastic.requests.get")
def test_first_doc_per_agent_wins(mock_get) -> None:
    mock_get.return_value = _response([_hit("PC1", "16.0.2.2"), _hit("PC1", "16.0.1.1")])
    assert [r["version"] for r in _call()] == ["16.0.2.2"]


@patch("fetch_from_elastic.requests.get")
def test_http_error_raises_fetch_error(mock_get) -> None:
    mock_get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(FetchError):
        _call()


@patch("fetch_from_elastic.requests.get")
def test_bad_json_raises_fetch_error(mock_get) -> None:
    resp = Mock()
    resp.raise_for_status.return_value = None
    resp.json.side_effect = ValueError("no json")
    mock_get.return_value = resp
    with pytest.raises(FetchError):
        _call()


def test_missing_connection_settings() -> None:
    with patch("fetch_from_elastic.ES_URL", None), patch("fetch_from_elastic.SOURCE_INDEX", None):
        with pytest.raises(FetchError):
            get_elastic_installs()
