"""Document endpoint tests. Use cases are replaced through app.dependency_overrides."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from doclibrary.api.v1.dependencies import (
    get_document_management_service,
    get_document_query_service,
    get_document_upload_service,
    get_search_log_service,
)
from doclibrary.application.dtos.document import UploadResult
from doclibrary.application.use_cases.documents import (
    DocumentManagementService,
    DocumentQueryService,
)
from doclibrary.domain.exceptions import (
    AuthorizationException,
    CompensationFailedException,
    RemoteException,
    UnsupportedTypeException,
)
from doclibrary.main import app
from tests.factories import ADMIN_ID, USER_ID, make_document


@pytest.fixture
def document_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.list_documents.return_value = [
        make_document(id="1", title="Budget Speech"),
        make_document(id="2", title="Finance Bill"),
        make_document(id="3", title="Budget Committee Report"),
    ]
    repo.get_by_id.return_value = make_document()
    return repo


@pytest.fixture
def search_log() -> AsyncMock:
    svc = AsyncMock()
    app.dependency_overrides[get_search_log_service] = lambda: svc
    return svc


@pytest.fixture
def query_service(document_repo) -> DocumentQueryService:
    svc = DocumentQueryService(document_repo)
    app.dependency_overrides[get_document_query_service] = lambda: svc
    return svc


@pytest.fixture
def management(document_repo, storage, authorization) -> DocumentManagementService:
    svc = DocumentManagementService(document_repo, storage, authorization)
    app.dependency_overrides[get_document_management_service] = lambda: svc
    return svc


class TestList:
    async def test_filters_reach_the_repository(
        self, client: AsyncClient, query_service, search_log, document_repo
    ) -> None:
        response = await client.get(
            "/api/v1/documents",
            params=[
                ("category", "Hansards"),
                ("status", "active"),
                ("type", "application/pdf"),
                ("sort", "title"),
                ("direction", "asc"),
            ],
        )
        assert response.status_code == 200
        assert response.json()["total"] == 3
        filters, sort = document_repo.list_documents.await_args.args
        assert filters.category == "Hansards"
        assert filters.types == ("application/pdf",)
        assert (sort.field, sort.direction) == ("title", "asc")
        search_log.log_search.assert_not_awaited()

    async def test_keyword_search_is_logged(
        self, client: AsyncClient, query_service, search_log, as_user
    ) -> None:
        as_user(USER_ID)
        response = await client.get("/api/v1/documents", params={"keywords": "budget"})
        body = response.json()
        assert [d["id"] for d in body["items"]] == ["1", "3"]
        term, user_id, count, _elapsed = search_log.log_search.await_args.args
        assert (term, user_id, count) == ("budget", USER_ID, 2)

    async def test_page_is_applied_after_filtering(
        self, client: AsyncClient, query_service, search_log
    ) -> None:
        response = await client.get("/api/v1/documents", params={"page": 2, "page_size": 2})
        body = response.json()
        assert [d["id"] for d in body["items"]] == ["3"]
        assert (body["total"], body["page"], body["total_pages"]) == (3, 2, 2)

    async def test_unknown_sort_field_is_400(
        self, client: AsyncClient, query_service, search_log
    ) -> None:
        response = await client.get("/api/v1/documents", params={"sort": "file_url"})
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_store_failure_is_502(
        self, client: AsyncClient, query_service, search_log, document_repo
    ) -> None:
        document_repo.list_documents.side_effect = RemoteException("boom", status_code=500)
        response = await client.get("/api/v1/documents")
        assert response.status_code == 502
        assert response.json()["error"] == "REMOTE_ERROR"


class TestGet:
    async def test_get_document(self, client: AsyncClient, query_service) -> None:
        response = await client.get("/api/v1/documents/doc-1")
        assert response.status_code == 200
        assert response.json()["title"] == "Budget Speech"

    async def test_missing_document_is_404(self, client: AsyncClient, query_service, document_repo) -> None:
        document_repo.get_by_id.return_value = None
        response = await client.get("/api/v1/documents/nope")
        assert response.status_code == 404
        assert response.json()["details"]["resource_id"] == "nope"

    async def test_versions_of_missing_document_is_404(
        self, client: AsyncClient, query_service, document_repo
    ) -> None:
        document_repo.get_by_id.return_value = None
        response = await client.get("/api/v1/documents/nope/versions")
        assert response.status_code == 404
        document_repo.get_versions.assert_not_awaited()

    async def test_access_check(self, client: AsyncClient, management, document_repo, as_user) -> None:
        document_repo.get_by_id.return_value = make_document(metadata={"accessLevel": "exclusive"})
        as_user(USER_ID)
        response = await client.get("/api/v1/documents/doc-1/access")
        assert response.json() == {"document_id": "doc-1", "has_access": False}

        as_user(ADMIN_ID)
        response = await client.get("/api/v1/documents/doc-1/access")
        assert response.json()["has_access"] is True

    async def test_access_check_signed_out(self, client: AsyncClient, management) -> None:
        response = await client.get("/api/v1/documents/doc-1/access")
        assert response.status_code == 200
        assert response.json()["has_access"] is False


class TestUpload:
    @pytest.fixture
    def upload_service(self) -> AsyncMock:
        svc = AsyncMock()
        app.dependency_overrides[get_document_upload_service] = lambda: svc
        return svc

    async def test_upload(self, client: AsyncClient, upload_service, as_user) -> None:
        doc = make_document()
        upload_service.upload_document.return_value = UploadResult(
            public_url=doc.file_url, path="2024/x.pdf", bucket="hansards", document=doc
        )
        ctx = as_user(ADMIN_ID)
        response = await client.post(
            "/api/v1/documents",
            files={"file": ("budget.pdf", b"%PDF-1.4", "application/pdf")},
            data={
                "category": "Hansards",
                "subcategory": "2024",
                "metadata": '{"keywords": ["budget"]}',
                "last_modified": "1700000000000",
            },
        )
        assert response.status_code == 201
        assert response.json()["bucket"] == "hansards"
        session, upload, category, subcategory, metadata = (
            upload_service.upload_document.await_args.args
        )
        assert session == ctx
        assert (upload.filename, upload.data, upload.last_modified) == (
            "budget.pdf",
            b"%PDF-1.4",
            1700000000000,
        )
        assert (category, subcategory) == ("Hansards", "2024")
        assert metadata == {"keywords": ["budget"]}

    async def test_bad_metadata_json_is_400(self, client: AsyncClient, upload_service) -> None:
        response = await client.post(
            "/api/v1/documents",
            files={"file": ("budget.pdf", b"%PDF", "application/pdf")},
            data={"category": "Hansards", "subcategory": "2024", "metadata": "[1, 2"},
        )
        assert response.status_code == 400
        upload_service.upload_document.assert_not_awaited()

    async def test_unsupported_type_is_415(self, client: AsyncClient, upload_service) -> None:
        upload_service.upload_document.side_effect = UnsupportedTypeException("a.png", "image/png")
        response = await client.post(
            "/api/v1/documents",
            files={"file": ("a.png", b"x", "image/png")},
            data={"category": "Hansards", "subcategory": "2024"},
        )
        assert response.status_code == 415
        assert response.json()["error"] == "UNSUPPORTED_TYPE"

    async def test_missing_category_is_422(self, client: AsyncClient, upload_service) -> None:
        response = await client.post(
            "/api/v1/documents",
            files={"file": ("a.pdf", b"x", "application/pdf")},
            data={"subcategory": "2024"},
        )
        assert response.status_code == 422
        assert response.json()["message"] == "Request validation failed"


class TestManage:
    async def test_patch_merges_metadata(
        self, client: AsyncClient, management, document_repo, as_user
    ) -> None:
        document_repo.get_by_id.return_value = make_document(
            metadata={"status": "active", "keywords": ["budget"]}
        )
        document_repo.update.side_effect = lambda document_id, values: make_document(**values)
        as_user(ADMIN_ID)
        response = await client.patch(
            "/api/v1/documents/doc-1", json={"metadata": {"description": "Day one"}}
        )
        assert response.status_code == 200
        meta = response.json()["metadata"]
        assert meta["keywords"] == ["budget"]
        assert meta["description"] == "Day one"

    async def test_archive_requires_admin(self, client: AsyncClient, management, as_user) -> None:
        as_user(USER_ID)
        response = await client.post("/api/v1/documents/doc-1/archive")
        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"

    async def test_archive_signed_out_is_401(self, client: AsyncClient, management) -> None:
        response = await client.post("/api/v1/documents/doc-1/archive")
        assert response.status_code == 401

    async def test_delete(
        self, client: AsyncClient, query_service, management, storage, document_repo, as_user
    ) -> None:
        storage.objects[("hansards", "2024/budget.pdf")] = b"%PDF"
        as_user(ADMIN_ID)
        response = await client.delete("/api/v1/documents/doc-1")
        assert response.status_code == 204
        assert storage.objects == {}
        document_repo.delete.assert_awaited_once_with("doc-1")

    async def test_delete_by_subscriber_is_403(
        self, client: AsyncClient, query_service, management, document_repo, as_user
    ) -> None:
        as_user(USER_ID)
        response = await client.delete("/api/v1/documents/doc-1")
        assert response.status_code == 403
        document_repo.delete.assert_not_awaited()

    async def test_delete_half_done_is_500(
        self, client: AsyncClient, query_service, document_repo, as_user
    ) -> None:
        svc = AsyncMock()
        svc.delete_document.side_effect = CompensationFailedException(
            "delete_document", RemoteException("row locked")
        )
        app.dependency_overrides[get_document_management_service] = lambda: svc
        as_user(ADMIN_ID)
        response = await client.delete("/api/v1/documents/doc-1")
        assert response.status_code == 500
        assert response.json()["error"] == "COMPENSATION_FAILED"

    async def test_restore_maps_domain_error(self, client: AsyncClient) -> None:
        svc = AsyncMock()
        svc.restore_document.side_effect = AuthorizationException(resource="document", action="update")
        app.dependency_overrides[get_document_management_service] = lambda: svc
        response = await client.post("/api/v1/documents/doc-1/restore")
        assert response.status_code == 403
