"""
HTTP tests for the FastAPI application.

The resume service dependency is overridden with one wired to a fake
completion client and a temporary sqlite database.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from resume_optimizer.core.data_manager import DataManager
from resume_optimizer.core.resume_analyzer import ResumeAnalyzer
from resume_optimizer.core.suggestion_generator import SuggestionGenerator
from resume_optimizer.integrations.openai_api import OpenAIAPIError
from resume_optimizer.main import app
from resume_optimizer.services.resume_service import ResumeService, get_resume_service
from resume_optimizer.utils.config import UploadConfig
from tests.conftest import PDF_MIME, DOCX_MIME, JOB_DESCRIPTION


@pytest.fixture
def completion_client():
    client = MagicMock()
    client.complete = AsyncMock(return_value='["Add Kubernetes", "Quantify results"]')
    return client


@pytest.fixture
def data_manager(tmp_path):
    return DataManager(str(tmp_path / "api.db"))


def make_service(data_manager, generator, tmp_path) -> ResumeService:
    upload_config = UploadConfig(upload_dir=str(tmp_path / "uploads"), save_files=False)
    return ResumeService(ResumeAnalyzer(data_manager, generator), upload_config)


@pytest.fixture
def client(data_manager, completion_client, tmp_path):
    service = make_service(data_manager, SuggestionGenerator(completion_client), tmp_path)
    app.dependency_overrides[get_resume_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestAnalyzeEndpoint:

    def test_analyze_pdf(self, client, resume_pdf):
        response = client.post(
            "/api/resume/analyze",
            files={"resume": ("cv.pdf", resume_pdf, PDF_MIME)},
            data={"jobDescription": JOB_DESCRIPTION},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["atsScore"] == 50
        assert body["matchSummary"] == "Matched 5 of 10 keywords"
        assert body["recommendations"] == ["Add Kubernetes", "Quantify results"]
        assert isinstance(body["resumeId"], int)

        record = client.get(f"/api/resume/{body['resumeId']}")
        assert record.status_code == 200
        assert record.json()["original_filename"] == "cv.pdf"
        assert record.json()["ats_score"] == 50

    def test_analyze_docx(self, client, resume_docx):
        response = client.post(
            "/api/resume/analyze",
            files={"resume": ("cv.docx", resume_docx, DOCX_MIME)},
            data={"jobDescription": JOB_DESCRIPTION},
        )

        assert response.status_code == 200
        assert response.json()["atsScore"] == 50

    def test_missing_file(self, client):
        response = client.post("/api/resume/analyze", data={"jobDescription": JOB_DESCRIPTION})

        assert response.status_code == 400
        assert response.json() == {"error": "Resume file is required."}

    def test_missing_job_description(self, client, resume_pdf):
        response = client.post(
            "/api/resume/analyze",
            files={"resume": ("cv.pdf", resume_pdf, PDF_MIME)},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Job description is required."}

    def test_unsupported_type(self, client, completion_client):
        response = client.post(
            "/api/resume/analyze",
            files={"resume": ("cv.txt", b"Python developer", "text/plain")},
            data={"jobDescription": JOB_DESCRIPTION},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Unsupported file type. Use PDF or DOCX."}
        completion_client.complete.assert_not_awaited()

    def test_malformed_document(self, client):
        response = client.post(
            "/api/resume/analyze",
            files={"resume": ("cv.pdf", b"this is not a pdf", PDF_MIME)},
            data={"jobDescription": JOB_DESCRIPTION},
        )

        assert response.status_code == 500
        assert "error" in response.json()

    def test_suggestion_failure_still_succeeds(self, client, completion_client, resume_pdf):
        completion_client.complete.side_effect = OpenAIAPIError("网络请求失败")

        response = client.post(
            "/api/resume/analyze",
            files={"resume": ("cv.pdf", resume_pdf, PDF_MIME)},
            data={"jobDescription": JOB_DESCRIPTION},
        )

        assert response.status_code == 200
        assert response.json()["recommendations"] == ["Unable to generate suggestions at this time."]

    def test_file_too_large(self, client):
        response = client.post(
            "/api/resume/analyze",
            files={"resume": ("cv.pdf", b"x" * (5 * 1024 * 1024 + 1), PDF_MIME)},
            data={"jobDescription": JOB_DESCRIPTION},
        )

        assert response.status_code == 413
        assert response.json() == {"error": "File too large. Maximum size is 5MB."}


class TestConfigurationAndPersistence:

    def test_missing_api_key(self, data_manager, tmp_path, resume_pdf):
        app.dependency_overrides[get_resume_service] = lambda: make_service(data_manager, None, tmp_path)
        try:
            with TestClient(app) as client:
                response = client.post(
                    "/api/resume/analyze",
                    files={"resume": ("cv.pdf", resume_pdf, PDF_MIME)},
                    data={"jobDescription": JOB_DESCRIPTION},
                )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert "OpenAI API Key is missing" in response.json()["error"]

    def test_persistence_failure_returns_null_id(self, completion_client, tmp_path, resume_pdf):
        broken_store = MagicMock()
        broken_store.create_resume = AsyncMock(side_effect=RuntimeError("disk full"))
        service = make_service(broken_store, SuggestionGenerator(completion_client), tmp_path)
        app.dependency_overrides[get_resume_service] = lambda: service
        try:
            with TestClient(app) as client:
                response = client.post(
                    "/api/resume/analyze",
                    files={"resume": ("cv.pdf", resume_pdf, PDF_MIME)},
                    data={"jobDescription": JOB_DESCRIPTION},
                )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["resumeId"] is None
        assert response.json()["atsScore"] == 50


class TestMiscEndpoints:

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_record(self, client):
        response = client.get("/api/resume/12345")

        assert response.status_code == 404
        assert response.json() == {"error": "Resume record not found."}

    def test_invalid_record_id_uses_error_shape(self, client):
        response = client.get("/api/resume/abc")

        assert response.status_code == 422
        body = response.json()
        assert set(body) == {"error"}
        assert "resume_id" in body["error"]


class TestListEndpoint:

    def test_empty_list(self, client):
        response = client.get("/api/resume")

        assert response.status_code == 200
        assert response.json() == {"resumes": [], "total": 0, "limit": 20}

    def test_lists_saved_analyses(self, client, resume_pdf):
        for name in ("first.pdf", "second.pdf"):
            client.post(
                "/api/resume/analyze",
                files={"resume": (name, resume_pdf, PDF_MIME)},
                data={"jobDescription": JOB_DESCRIPTION},
            )

        response = client.get("/api/resume", params={"limit": 1})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert body["limit"] == 1
        assert len(body["resumes"]) == 1
        assert body["resumes"][0]["original_filename"] == "second.pdf"
        assert body["resumes"][0]["ats_score"] == 50

    def test_limit_out_of_range(self, client):
        response = client.get("/api/resume", params={"limit": 0})

        assert response.status_code == 422
        assert "limit" in response.json()["error"]
