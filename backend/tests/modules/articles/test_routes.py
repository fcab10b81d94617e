"""
Tests for article API endpoints.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_admin_gate_factory, get_article_service
from modules.articles.models import (
    Article,
    GenerateArticleResponse,
    GeneratedArticleResult,
    ImportArticleResponse,
    ImportFile,
)
from modules.articles.exceptions import (
    ArticleNotFoundError,
    GenerationError,
    GenerationRateLimitError,
    GeneratorNotConfiguredError,
    ImportFileNotFoundError,
    InvalidImportRequestError,
    InvalidSlugError,
    InvalidTopicError,
    MissingApproveFlagError,
    MissingTemplateVariablesError,
    SlugConflictError,
)
from modules.prompts.exceptions import TemplateNotFoundError

from tests.conftest import admin_gate_factory

BASE = "/api/admin/articles"


@pytest.fixture
def app():
    """Create a fresh app for each test."""
    app = create_app()
    app.dependency_overrides[get_admin_gate_factory] = lambda: admin_gate_factory()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def mock_service(app) -> AsyncMock:
    service = AsyncMock()
    app.dependency_overrides[get_article_service] = lambda: service
    return service


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def article() -> Article:
    return Article(id="art-1", title="Evening ritual", slug="evening-ritual", content="Body")


class TestAdminGuard:
    def test_missing_token(self, client, mock_service):
        assert client.get(BASE).status_code == 401
        mock_service.list_articles.assert_not_called()

    def test_rejected_token(self, app, client, mock_service, admin_headers):
        app.dependency_overrides[get_admin_gate_factory] = lambda: admin_gate_factory(error="invalid JWT")

        response = client.get(BASE, headers=admin_headers)

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_non_admin(self, app, client, mock_service, admin_headers):
        app.dependency_overrides[get_admin_gate_factory] = lambda: admin_gate_factory(
            email="user@example.com"
        )

        assert client.post(f"{BASE}/art-1/approve", json={"approve": True}, headers=admin_headers).status_code == 403
        mock_service.approve_article.assert_not_called()


class TestAdminArticles:
    def test_list_filter(self, client, mock_service, article, admin_headers):
        mock_service.list_articles.return_value = [article]

        response = client.get(f"{BASE}?published=false", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["articles"][0]["slug"] == "evening-ritual"
        mock_service.list_articles.assert_called_once_with(False)

    def test_create(self, client, mock_service, article, admin_headers):
        mock_service.create_article.return_value = article

        response = client.post(
            BASE,
            json={"title": "Evening ritual", "slug": "evening-ritual", "content": "Body"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert mock_service.create_article.call_args[0][0] == "admin-1"

    def test_create_conflict(self, client, mock_service, admin_headers):
        mock_service.create_article.side_effect = SlugConflictError("evening-ritual")

        response = client.post(BASE, json={"title": "T", "slug": "evening-ritual", "content": "B"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Article with this slug already exists"

    def test_get_not_found(self, client, mock_service, admin_headers):
        mock_service.get_article.side_effect = ArticleNotFoundError("missing")

        assert client.get(f"{BASE}/missing", headers=admin_headers).status_code == 404

    def test_update(self, client, mock_service, article, admin_headers):
        mock_service.update_article.return_value = article

        response = client.patch(f"{BASE}/art-1", json={"published": False}, headers=admin_headers)

        assert response.status_code == 200
        article_id, request = mock_service.update_article.call_args[0]
        assert article_id == "art-1"
        assert request.model_fields_set == {"published"}

    def test_delete(self, client, mock_service, admin_headers):
        assert client.delete(f"{BASE}/art-1", headers=admin_headers).status_code == 204
        mock_service.delete_article.assert_called_once_with("art-1")

    def test_approve(self, client, mock_service, article, admin_headers):
        mock_service.approve_article.return_value = article

        response = client.post(f"{BASE}/art-1/approve", json={"approve": True}, headers=admin_headers)

        assert response.status_code == 200
        mock_service.approve_article.assert_called_once_with("art-1", True, None)

    def test_approve_missing_flag(self, client, mock_service, admin_headers):
        mock_service.approve_article.side_effect = MissingApproveFlagError()

        response = client.post(f"{BASE}/art-1/approve", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing approve parameter"


class TestGenerate:
    def test_success(self, client, mock_service, admin_headers):
        mock_service.generate_article.return_value = GenerateArticleResponse(
            article=GeneratedArticleResult(
                id="art-1",
                title="Evening ritual",
                slug="evening-ritual",
                content="Body",
                excerpt="Body",
                seo_title="Evening ritual | CandleTime",
                seo_description="Body",
                reading_time=1,
            ),
            action="created",
        )

        response = client.post(f"{BASE}/generate", json={"topic": "Вечерний ритуал"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["action"] == "created"

    @pytest.mark.parametrize(
        "error, status",
        [
            (InvalidTopicError("Topic must be at least 10 characters long"), 400),
            (MissingTemplateVariablesError(["audience"]), 400),
            (InvalidSlugError(""), 400),
            (TemplateNotFoundError("tpl-x"), 404),
            (GenerationRateLimitError(), 429),
            (GeneratorNotConfiguredError(), 500),
            (GenerationError(), 502),
        ],
    )
    def test_error_mapping(self, client, mock_service, admin_headers, error, status):
        mock_service.generate_article.side_effect = error

        response = client.post(f"{BASE}/generate", json={"topic": "Вечерний ритуал"}, headers=admin_headers)

        assert response.status_code == status


class TestImport:
    def test_list_files(self, client, mock_service, admin_headers):
        mock_service.list_import_files.return_value = [ImportFile(filename="a.md", slug="a")]

        response = client.get(f"{BASE}/import", headers=admin_headers)

        assert response.json() == {"files": [{"filename": "a.md", "slug": "a"}]}

    def test_import(self, client, mock_service, article, admin_headers):
        mock_service.import_article.return_value = ImportArticleResponse(article=article, action="updated")

        response = client.post(
            f"{BASE}/import", json={"slug": "evening-ritual", "filename": "evening-ritual.md"}, headers=admin_headers
        )

        assert response.status_code == 200
        mock_service.import_article.assert_called_once_with("admin-1", "evening-ritual", "evening-ritual.md")

    def test_invalid(self, client, mock_service, admin_headers):
        mock_service.import_article.side_effect = InvalidImportRequestError()

        assert client.post(f"{BASE}/import", json={}, headers=admin_headers).status_code == 400

    def test_file_not_found(self, client, mock_service, admin_headers):
        mock_service.import_article.side_effect = ImportFileNotFoundError("ghost.md")

        response = client.post(f"{BASE}/import", json={"slug": "g", "filename": "ghost.md"}, headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "File not found"


class TestPublicArticles:
    def test_list_needs_no_auth(self, client, mock_service, article):
        mock_service.list_published.return_value = [article]

        response = client.get("/api/articles")

        assert response.status_code == 200
        assert len(response.json()["articles"]) == 1

    def test_get_by_slug(self, client, mock_service, article):
        mock_service.get_published.return_value = article

        assert client.get("/api/articles/evening-ritual").json()["id"] == "art-1"

    def test_draft_not_found(self, client, mock_service):
        mock_service.get_published.side_effect = ArticleNotFoundError("draft")

        assert client.get("/api/articles/draft").status_code == 404
