"""
MermaidUI API Client
====================

Async client data layer mirroring the MermaidUI HTTP API one-to-one.

Lookups that miss (``get_*``) return None and deletes that miss return
False; every other 400/404/500 response raises a typed error carrying
the server's ``error`` and ``details`` fields.

Usage:
    async with MermaidUIClient("http://localhost:3001/api") as client:
        collections = await client.get_collections()

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Dict, List, Optional
import logging

import httpx

from models.common import ExportFormat
from models.responses import (
    CollectionResponse,
    DiagramResponse,
    HealthResponse,
    PreviewResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"


class MermaidUIError(Exception):
    """Base error for failed API calls."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class ValidationFailedError(MermaidUIError):
    """400: the request was rejected."""


class NotFoundError(MermaidUIError):
    """404: the collection or diagram does not exist."""


class ServerError(MermaidUIError):
    """500: the server failed, including export failures."""


ERRORS_BY_STATUS = {
    400: ValidationFailedError,
    404: NotFoundError,
}


def _error_from_response(response: httpx.Response) -> MermaidUIError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = body.get("error") or f"Request failed with status {response.status_code}"
    error_class = ERRORS_BY_STATUS.get(response.status_code)
    if error_class is None:
        error_class = ServerError if response.status_code >= 500 else MermaidUIError
    return error_class(message, status_code=response.status_code, details=body.get("details"))


class MermaidUIClient:
    """Async httpx client for the collections, diagrams, export and preview API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize client.

        Args:
            base_url: API root including the ``/api`` prefix
            timeout: Request timeout in seconds (exports launch a browser)
            transport: Optional transport, e.g. ``httpx.ASGITransport(app=app)``
        """
        self.base_url = base_url.rstrip('/')
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=10.0),
            transport=transport
        )

    async def __aenter__(self) -> "MermaidUIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            error = _error_from_response(response)
            logger.debug(
                "[MermaidUIClient] %s %s -> %s: %s",
                method, path, response.status_code, error.message
            )
            raise error
        return response

    async def _get_optional(self, path: str) -> Optional[Dict[str, Any]]:
        try:
            response = await self._request("GET", path)
        except NotFoundError:
            return None
        return response.json()

    async def _delete(self, path: str) -> bool:
        try:
            response = await self._request("DELETE", path)
        except NotFoundError:
            return False
        return bool(response.json().get("success"))

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    async def get_collections(self) -> List[CollectionResponse]:
        response = await self._request("GET", "/collections")
        return [CollectionResponse.model_validate(item) for item in response.json()]

    async def get_collection(self, collection_id: int) -> Optional[CollectionResponse]:
        data = await self._get_optional(f"/collections/{collection_id}")
        return CollectionResponse.model_validate(data) if data is not None else None

    async def create_collection(self, name: str, description: Optional[str] = None) -> CollectionResponse:
        response = await self._request(
            "POST", "/collections",
            json={"name": name, "description": description}
        )
        return CollectionResponse.model_validate(response.json())

    async def update_collection(
        self,
        collection_id: int,
        name: str,
        description: Optional[str] = None
    ) -> CollectionResponse:
        response = await self._request(
            "PUT", f"/collections/{collection_id}",
            json={"name": name, "description": description}
        )
        return CollectionResponse.model_validate(response.json())

    async def delete_collection(self, collection_id: int) -> bool:
        return await self._delete(f"/collections/{collection_id}")

    # ------------------------------------------------------------------
    # Diagrams
    # ------------------------------------------------------------------

    async def get_diagrams_by_collection(self, collection_id: int) -> List[DiagramResponse]:
        response = await self._request("GET", f"/diagrams/collection/{collection_id}")
        return [DiagramResponse.model_validate(item) for item in response.json()]

    async def get_diagram(self, diagram_id: int) -> Optional[DiagramResponse]:
        data = await self._get_optional(f"/diagrams/{diagram_id}")
        return DiagramResponse.model_validate(data) if data is not None else None

    async def create_diagram(self, collection_id: int, name: str, content: str) -> DiagramResponse:
        response = await self._request(
            "POST", "/diagrams",
            json={"collection_id": collection_id, "name": name, "content": content}
        )
        return DiagramResponse.model_validate(response.json())

    async def update_diagram(self, diagram_id: int, name: str, content: str) -> DiagramResponse:
        response = await self._request(
            "PUT", f"/diagrams/{diagram_id}",
            json={"name": name, "content": content}
        )
        return DiagramResponse.model_validate(response.json())

    async def delete_diagram(self, diagram_id: int) -> bool:
        return await self._delete(f"/diagrams/{diagram_id}")

    async def upload_diagram(self, collection_id: int, filename: str, data: bytes) -> DiagramResponse:
        response = await self._request(
            "POST", "/diagrams/upload",
            data={"collection_id": str(collection_id)},
            files={"file": (filename, data, "text/plain")}
        )
        return DiagramResponse.model_validate(response.json())

    async def duplicate_diagram(self, diagram_id: int) -> DiagramResponse:
        response = await self._request("POST", f"/diagrams/{diagram_id}/duplicate")
        return DiagramResponse.model_validate(response.json())

    # ------------------------------------------------------------------
    # Export / preview / health
    # ------------------------------------------------------------------

    async def export_diagram(self, diagram_id: int, export_format: ExportFormat) -> bytes:
        """
        Export a stored diagram.

        Raises:
            ServerError: Export failed; ``message`` prefers the server's details
        """
        export_format = ExportFormat(export_format)
        try:
            response = await self._request("POST", f"/export/{export_format.value}/{diagram_id}")
        except ServerError as e:
            raise ServerError(
                e.details or e.message,
                status_code=e.status_code,
                details=e.details
            ) from e
        return response.content

    async def preview(self, content: str) -> PreviewResponse:
        response = await self._request("POST", "/preview", json={"content": content})
        return PreviewResponse.model_validate(response.json())

    async def health(self) -> HealthResponse:
        response = await self._request("GET", "/health")
        return HealthResponse.model_validate(response.json())
