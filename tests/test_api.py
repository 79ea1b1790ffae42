"""Tests for the HTTP API."""

import inspect

import pytest
from fastapi.testclient import TestClient

from credit_trends.api.dependencies import set_store
from credit_trends.api.router_upload import upload_csv
from credit_trends.data.store import DataStore
from credit_trends.main import create_app

from tests.conftest import HEADER


@pytest.fixture
def client():
    set_store(DataStore())
    yield TestClient(create_app())
    set_store(None)


@pytest.fixture
def loaded_client(client, sample_text):
    resp = client.post("/api/upload", files={"file": ("credits.csv", sample_text, "text/csv")})
    assert resp.status_code == 200
    return client


class TestHealthAndUpload:
    """Upload replaces the session dataset."""

    def test_health_before_upload(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "ok"
        assert body["loaded"] is False
        assert body["rows"] == 0

    def test_views_need_data(self, client):
        assert client.get("/api/summary").status_code == 503

    def test_upload(self, client, sample_text):
        resp = client.post("/api/upload", files={"file": ("credits.csv", sample_text, "text/csv")})
        assert resp.status_code == 200
        assert resp.json() == {"status": "uploaded", "source": "credits.csv", "records": 6, "skipped_rows": 0}
        assert client.get("/api/health").json()["rows"] == 6

    def test_rejects_non_csv(self, client, sample_text):
        resp = client.post("/api/upload", files={"file": ("credits.xlsx", sample_text, "text/plain")})
        assert resp.status_code == 400

    def test_empty_upload_keeps_previous_data(self, loaded_client):
        resp = loaded_client.post("/api/upload", files={"file": ("empty.csv", HEADER, "text/csv")})
        assert resp.status_code == 400
        assert "8 columns" in resp.json()["detail"]
        health = loaded_client.get("/api/health").json()
        assert health["rows"] == 6
        assert health["source"] == "credits.csv"

    def test_upload_with_oversized_integers(self, client):
        text = HEADER + "\n2020,CA,R&D,Tech,1000,99999999999999999999,High,IRS"
        resp = client.post("/api/upload", files={"file": ("big.csv", text, "text/csv")})
        assert resp.status_code == 200
        assert resp.json()["records"] == 1
        assert client.get("/api/summary").status_code == 200

    def test_upload_handler_runs_in_threadpool(self):
        assert not inspect.iscoroutinefunction(upload_csv)


class TestFilters:
    """Filter selection endpoints."""

    def test_options(self, loaded_client):
        body = loaded_client.get("/api/filters").json()
        assert body["options"]["years"] == [2022, 2021, 2020]
        assert body["options"]["states"] == ["CA", "NY", "TX", "WA"]
        assert body["active_filters"] == 0
        assert body["active_rows"] == 6

    def test_add_remove_clear(self, loaded_client):
        body = loaded_client.post("/api/filters/years", json={"value": 2021}).json()
        assert body["selection"]["years"] == [2021]
        assert body["active_rows"] == 2

        body = loaded_client.post("/api/filters/states", json={"value": "TX"}).json()
        assert body["active_filters"] == 2
        assert body["active_rows"] == 1

        body = loaded_client.delete("/api/filters/years/2021").json()
        assert body["selection"]["years"] == []
        assert body["active_rows"] == 1

        body = loaded_client.delete("/api/filters").json()
        assert body["active_filters"] == 0
        assert body["active_rows"] == 6

    def test_camel_case_dimension(self, loaded_client):
        body = loaded_client.post("/api/filters/creditTypes", json={"value": "Solar"}).json()
        assert body["selection"]["credit_types"] == ["Solar"]

    def test_unknown_dimension(self, loaded_client):
        assert loaded_client.post("/api/filters/colour", json={"value": "red"}).status_code == 400

    def test_invalid_year(self, loaded_client):
        assert loaded_client.post("/api/filters/years", json={"value": "soon"}).status_code == 400


class TestDashboard:
    """Dashboard projections over the active subset."""

    def test_summary(self, loaded_client):
        body = loaded_client.get("/api/summary").json()
        assert body["metrics"]["total_claims"] == 16
        assert body["metrics"]["top_state"] == "CA"

    def test_summary_follows_session_filters(self, loaded_client):
        loaded_client.post("/api/filters/states", json={"value": "TX"})
        body = loaded_client.get("/api/summary").json()
        assert body["metrics"]["total_amount"] == 300.0

    def test_query_params_override(self, loaded_client):
        body = loaded_client.get("/api/summary", params={"state": ["NY", "TX"]}).json()
        assert body["metrics"]["total_amount"] == 500.0

    def test_trends(self, loaded_client):
        yearly = loaded_client.get("/api/trends").json()["yearly"]
        assert [r["year"] for r in yearly] == [2020, 2021, 2022]

    def test_analysis(self, loaded_client):
        body = loaded_client.get("/api/analysis").json()
        assert body["credit_types"][0]["credit_type"] == "R&D"
        assert body["summary"]["market_concentration"] == pytest.approx(100.0)


class TestExport:
    """File downloads."""

    def test_csv(self, loaded_client, sample_text):
        resp = loaded_client.get("/api/export/csv")
        assert resp.status_code == 200
        assert "tax_credit_data_" in resp.headers["content-disposition"]
        assert resp.text.splitlines()[0] == HEADER
        assert len(resp.text.splitlines()) == 7

    def test_report(self, loaded_client):
        resp = loaded_client.get("/api/export/report")
        assert resp.status_code == 200
        assert ".txt" in resp.headers["content-disposition"]
        assert resp.text.startswith("TAX CREDIT UTILIZATION SUMMARY REPORT")

    def test_empty_subset_rejected(self, loaded_client):
        loaded_client.post("/api/filters/states", json={"value": "ZZ"})
        assert loaded_client.get("/api/export/csv").status_code == 400
        assert loaded_client.get("/api/export/report").status_code == 400
