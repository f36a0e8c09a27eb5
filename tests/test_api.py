"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from statement_importer.api.main import create_app

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


class TestServiceEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "POST /import" in response.json()["endpoints"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestDetect:

    def test_detects_pdf_by_extension(self, client):
        response = client.post("/detect", files={"file": ("statement.PDF", b"%PDF", "application/octet-stream")})

        assert response.status_code == 200
        assert response.json() == {"filename": "statement.PDF", "fileType": "pdf", "supported": True}

    def test_unknown_file(self, client):
        response = client.post("/detect", files={"file": ("notes.txt", b"hello", "text/plain")})
        assert response.json()["fileType"] == "unknown"
        assert response.json()["supported"] is False


class TestImport:

    def test_imports_workbook_and_updates_store(self, client, bank_export_xlsx):
        response = client.post("/import", files={"file": ("export.xlsx", bank_export_xlsx, XLSX_MIME)})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["sourceName"] == "export.xlsx"
        assert body["metadata"]["fileType"] == "excel"
        assert body["metadata"]["contentType"] == XLSX_MIME
        assert body["transactions"][0] == {
            "date": "2024-01-05T00:00:00.000Z",
            "description": "Coffee Shop",
            "amount": -4.5,
            "category": "Dining",
            "account": "Checking",
        }
        assert body["summary"]["count"] == 3
        assert body["summary"]["total"] == pytest.approx(2443.37)

        stored = client.get("/transactions").json()
        assert stored["total_transactions"] == 3
        assert stored["transactions"] == body["transactions"]

    def test_imports_pdf(self, client, statement_pdf):
        response = client.post("/import", files={"file": ("statement.pdf", statement_pdf, "application/pdf")})

        assert response.status_code == 200
        assert [t["description"] for t in response.json()["transactions"]] == [
            "Grocery Store", "Coffee Shop", "Rent payment"
        ]

    def test_no_transactions_is_not_an_error(self, client, make_pdf):
        data = make_pdf([["Statement continued on next page"]])

        response = client.post("/import", files={"file": ("empty.pdf", data, "application/pdf")})

        assert response.status_code == 200
        assert response.json()["status"] == "no_transactions"
        assert response.json()["transactions"] == []

    def test_unknown_format_is_rejected(self, client):
        response = client.post("/import", files={"file": ("notes.txt", b"hello", "text/plain")})

        assert response.status_code == 415
        assert response.json()["detail"] == "No parser available for file: notes.txt"

    def test_empty_upload_is_rejected(self, client):
        response = client.post("/import", files={"file": ("export.xlsx", b"", XLSX_MIME)})
        assert response.status_code == 400

    def test_corrupted_file_is_rejected(self, client):
        response = client.post("/import", files={"file": ("broken.pdf", b"not a pdf", "application/pdf")})
        assert response.status_code == 422

    def test_failed_import_keeps_previous_transactions(self, client, statement_pdf):
        client.post("/import", files={"file": ("statement.pdf", statement_pdf, "application/pdf")})
        client.post("/import", files={"file": ("broken.pdf", b"not a pdf", "application/pdf")})

        assert client.get("/transactions").json()["total_transactions"] == 3

    def test_each_app_has_its_own_store(self, statement_pdf):
        first, second = TestClient(create_app()), TestClient(create_app())

        first.post("/import", files={"file": ("statement.pdf", statement_pdf, "application/pdf")})

        assert second.get("/transactions").json()["total_transactions"] == 0
