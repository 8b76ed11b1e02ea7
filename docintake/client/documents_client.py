from typing import Any

import httpx

from docintake.client.exceptions import ClientError
from docintake.client.status_poller import StatusCallback, StatusPoller
from docintake.database.exceptions import DocumentNotFoundError
from docintake.database.models import DocumentStatus

OWNER_HEADER = "X-Owner-Id"


class DocumentsClient:
    """Thin client for the documents HTTP API, scoped to one owner."""

    def __init__(
        self,
        base_url: str,
        owner_id: str,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url,
            headers={OWNER_HEADER: owner_id},
            timeout=timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "DocumentsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def upload(
        self,
        filename: str,
        content: bytes,
        mime_type: str,
        category: str,
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            "/documents/upload",
            files={"file": (filename, content, mime_type)},
            data={"type": category},
        )

    def list_documents(
        self,
        *,
        category: str | None = None,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if category is not None:
            params["type"] = category
        if status is not None:
            params["status"] = status
        return self._request("GET", "/documents", params=params)["documents"]

    def get_document(self, document_id: str) -> dict[str, Any]:
        return self._request("GET", f"/documents/{document_id}")["document"]

    def get_status(self, document_id: str) -> DocumentStatus:
        return DocumentStatus(self.get_document(document_id)["status"])

    def delete_document(self, document_id: str) -> None:
        self._request("DELETE", f"/documents/{document_id}")

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise ClientError(f"{method} {url} failed: {exc}") from exc
        if response.status_code == httpx.codes.NOT_FOUND:
            raise DocumentNotFoundError(f"{url} not found")
        if response.is_error:
            raise ClientError(
                f"{method} {url} returned {response.status_code}: {_error_message(response)}"
            )
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return response.text


def poll_document_status(
    client: DocumentsClient,
    document_id: str,
    *,
    interval_seconds: float = 2.0,
    on_completed: StatusCallback | None = None,
    on_failed: StatusCallback | None = None,
    max_polls: int | None = None,
) -> DocumentStatus | None:
    """Block until the document settles, firing the edge callbacks."""
    def fetch() -> DocumentStatus:
        return client.get_status(document_id)

    poller = StatusPoller(
        fetch,
        interval_seconds=interval_seconds,
        on_completed=on_completed,
        on_failed=on_failed,
        max_polls=max_polls,
    )
    return poller.run()
