from __future__ import annotations

import json
import logging

import pytest
import requests

from catalogdemo.api.client import CatalogApiError, CatalogHttpClient
from catalogdemo.catalog.models import (
    BatchUpsertCatalogObjectsRequest,
    CatalogObjectBatch,
    ListCatalogResponse,
)

LOGGER = "catalogdemo.api.client"


class FakeResponse:
    def __init__(self, status_code=200, body="", reason="OK", url="https://api.test/x"):
        self.status_code = status_code
        self.text = body
        self.content = body.encode("utf-8")
        self.reason = reason
        self.url = url


class Recorder:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


def _client():
    return CatalogHttpClient("tok", base_url="https://api.test/", timeout_seconds=3, api_version="2024-01-18")


def test_get_decodes_ok_response(monkeypatch):
    body = json.dumps({"objects": [{"type": "MODIFIER_LIST", "id": "A"}], "cursor": "next"})
    fake = Recorder(FakeResponse(body=body))
    monkeypatch.setattr(requests, "get", fake)

    resp = _client().get("/v2/catalog/list", ListCatalogResponse, params={"types": "MODIFIER_LIST"})

    assert resp.cursor == "next"
    assert resp.objects[0].id == "A"
    url, kwargs = fake.calls[0]
    assert url == "https://api.test/v2/catalog/list"
    assert kwargs["params"] == {"types": "MODIFIER_LIST"}
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["headers"]["Square-Version"] == "2024-01-18"
    assert kwargs["timeout"] == 3


def test_post_sends_json_without_nulls(monkeypatch):
    fake = Recorder(FakeResponse(body="{}"))
    monkeypatch.setattr(requests, "post", fake)
    request = BatchUpsertCatalogObjectsRequest(
        idempotency_key="k",
        batches=[CatalogObjectBatch.model_validate({"objects": [{"type": "MODIFIER_LIST", "id": "#A"}]})],
    )

    resp = _client().post("/v2/catalog/batch-upsert", request, ListCatalogResponse)

    assert resp is not None and resp.objects == []
    _, kwargs = fake.calls[0]
    assert kwargs["json"] == {
        "idempotency_key": "k",
        "batches": [{"objects": [{"type": "MODIFIER_LIST", "id": "#A"}]}],
    }


def test_api_errors_are_logged_and_return_none(monkeypatch, caplog):
    body = json.dumps({"errors": [{"category": "AUTHENTICATION_ERROR", "code": "UNAUTHORIZED", "detail": "bad token"}]})
    monkeypatch.setattr(requests, "get", Recorder(FakeResponse(401, body, "Unauthorized")))

    with caplog.at_level(logging.ERROR, logger=LOGGER):
        assert _client().get("/v2/catalog/list", ListCatalogResponse) is None
    assert "[UNAUTHORIZED] bad token" in caplog.text


def test_non_json_error_body_is_logged_raw(monkeypatch, caplog):
    monkeypatch.setattr(requests, "get", Recorder(FakeResponse(502, "<html>bad gateway</html>", "Bad Gateway")))

    with caplog.at_level(logging.ERROR, logger=LOGGER):
        assert _client().get("/v2/catalog/list", ListCatalogResponse) is None
    assert "[502 Bad Gateway] <html>bad gateway</html>" in caplog.text


def test_empty_error_body_logs_status(monkeypatch, caplog):
    monkeypatch.setattr(requests, "get", Recorder(FakeResponse(503, "", "Service Unavailable")))

    with caplog.at_level(logging.ERROR, logger=LOGGER):
        assert _client().get("/v2/catalog/list", ListCatalogResponse) is None
    assert "503 (Service Unavailable)" in caplog.text


def test_transport_failure_raises(monkeypatch):
    monkeypatch.setattr(requests, "get", Recorder(exc=requests.ConnectionError("refused")))
    with pytest.raises(CatalogApiError):
        _client().get("/v2/catalog/list", ListCatalogResponse)


def test_undecodable_ok_body_raises(monkeypatch):
    monkeypatch.setattr(requests, "get", Recorder(FakeResponse(body="not json")))
    with pytest.raises(CatalogApiError):
        _client().get("/v2/catalog/list", ListCatalogResponse)
