"""Google Drive v3 remote store."""

from __future__ import annotations

import asyncio
import io
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httplib2
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload, MediaIoBaseUpload

from drivefs.errors import TransportError
from drivefs.types import NodeKind, NodePage, RemoteNode

logger = logging.getLogger(__name__)

__all__ = ["FOLDER_MIME_TYPE", "GoogleDriveStore"]

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive"]
NODE_FIELDS = "id, name, mimeType, parents"
LIST_FIELDS = f"nextPageToken, files({NODE_FIELDS})"
NAME_LOOKUP_PAGE_SIZE = 200


def escape_query_value(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive query literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def to_node(item: dict[str, Any]) -> RemoteNode:
    """Convert a Drive file resource into a RemoteNode.

    Raises:
        TransportError: If the descriptor lacks an id, name or mime type.
    """
    node_id = item.get("id")
    name = item.get("name")
    mime_type = item.get("mimeType")
    if not node_id or name is None or not mime_type:
        raise TransportError("Google Drive returned an invalid file descriptor.")

    parents = tuple(p for p in item.get("parents") or () if p and p.strip())
    kind = NodeKind.FOLDER if mime_type == FOLDER_MIME_TYPE else NodeKind.FILE
    return RemoteNode(id=node_id, name=name, kind=kind, parents=parents)


class GoogleDriveStore:
    """RemoteStore backed by the Google Drive v3 API.

    The Drive client is synchronous, so every request is executed in a worker
    thread. httplib2 connections must not be shared between threads, so each
    worker thread gets its own HTTP client from ``http_factory``. Satisfies
    the RemoteStore protocol structurally.
    """

    def __init__(
        self,
        service: Any,
        use_all_drives_search: bool = False,
        http_factory: Callable[[], Any] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            service: Drive v3 resource returned by googleapiclient's build().
            use_all_drives_search: Search children across all shared drives
                instead of the user's own corpus. Broader but slower.
            http_factory: Builds an authorized HTTP client; called once per
                worker thread. When None, requests use the service's own client.

        Note:
            Prefer the factory method `from_service_account_file()` in production.
        """
        self.service = service
        self.use_all_drives_search = use_all_drives_search
        self.http_factory = http_factory
        self._local = threading.local()

    @classmethod
    def from_service_account_file(
        cls,
        credentials_path: Path,
        use_all_drives_search: bool = False,
    ) -> GoogleDriveStore:
        """Create a store authenticated with a service account key file.

        Args:
            credentials_path: Path to the service account JSON key.
            use_all_drives_search: See __init__.

        Returns:
            Configured GoogleDriveStore.

        Raises:
            FileNotFoundError: If the key file does not exist.
        """
        from google.oauth2 import service_account

        if not credentials_path.exists():
            raise FileNotFoundError(f"Service account json was not found at '{credentials_path}'.")

        credentials = service_account.Credentials.from_service_account_file(
            str(credentials_path), scopes=DRIVE_SCOPES
        )
        service = build("drive", "v3", credentials=credentials, cache_discovery=False)

        def http_factory() -> AuthorizedHttp:
            return AuthorizedHttp(credentials, http=httplib2.Http())

        return cls(
            service,
            use_all_drives_search=use_all_drives_search,
            http_factory=http_factory,
        )

    async def list_children(
        self,
        parent_id: str,
        name: str | None = None,
        page_token: str | None = None,
    ) -> NodePage:
        query = f"'{escape_query_value(parent_id)}' in parents and trashed = false"
        params: dict[str, Any] = {
            "fields": LIST_FIELDS,
            "supportsAllDrives": True,
        }
        if name is not None:
            query = (
                f"'{escape_query_value(parent_id)}' in parents "
                f"and name = '{escape_query_value(name)}' and trashed = false"
            )
            params["pageSize"] = NAME_LOOKUP_PAGE_SIZE
        if page_token:
            params["pageToken"] = page_token
        if self.use_all_drives_search:
            params["includeItemsFromAllDrives"] = True
            params["corpora"] = "allDrives"

        request = self.service.files().list(q=query, **params)
        response = await self._execute(request, "list")
        nodes = [to_node(item) for item in response.get("files") or []]
        return NodePage(nodes=nodes, next_page_token=response.get("nextPageToken") or None)

    async def create_folder(self, parent_id: str, name: str) -> RemoteNode:
        request = self.service.files().create(
            body={"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]},
            fields=NODE_FIELDS,
            supportsAllDrives=True,
        )
        return to_node(await self._execute(request, "create folder"))

    async def create_file(self, parent_id: str, name: str, content: bytes) -> RemoteNode:
        media = MediaIoBaseUpload(
            io.BytesIO(content), mimetype="application/octet-stream", resumable=False
        )
        request = self.service.files().create(
            body={"name": name, "parents": [parent_id]},
            media_body=media,
            fields=NODE_FIELDS,
            supportsAllDrives=True,
        )
        return to_node(await self._execute(request, "upload"))

    async def delete_node(self, node_id: str) -> None:
        request = self.service.files().delete(fileId=node_id, supportsAllDrives=True)
        await self._execute(request, "delete")

    async def copy_node(self, source_id: str, parent_id: str, name: str) -> RemoteNode:
        request = self.service.files().copy(
            fileId=source_id,
            body={"name": name, "parents": [parent_id]},
            fields=NODE_FIELDS,
            supportsAllDrives=True,
        )
        return to_node(await self._execute(request, "copy"))

    async def update_node(
        self,
        node_id: str,
        name: str | None = None,
        add_parent: str | None = None,
        remove_parents: tuple[str, ...] = (),
    ) -> None:
        params: dict[str, Any] = {"supportsAllDrives": True}
        # Drive rejects a parent that is both added and removed; keeping it is a no-op.
        removed = [p for p in remove_parents if p != add_parent]
        if add_parent and add_parent not in remove_parents:
            params["addParents"] = add_parent
        if removed:
            params["removeParents"] = ",".join(removed)

        body = {"name": name} if name is not None else {}
        request = self.service.files().update(fileId=node_id, body=body, **params)
        await self._execute(request, "update")

    async def download_content(self, node_id: str) -> bytes:
        request = self.service.files().get_media(fileId=node_id, supportsAllDrives=True)

        def _download() -> bytes:
            http = self._thread_http()
            if http is not None:
                request.http = http
            buffer = io.BytesIO()
            downloader = MediaIoBaseDownload(buffer, request)
            done = False
            while not done:
                _, done = downloader.next_chunk()
            return buffer.getvalue()

        try:
            return await asyncio.to_thread(_download)
        except (HttpError, OSError) as e:
            raise TransportError(f"File download from Google Drive failed: {e}") from e

    async def _execute(self, request: Any, action: str) -> dict[str, Any]:
        """Run a prepared request in a worker thread, wrapping client errors."""
        try:
            response = await asyncio.to_thread(
                lambda: request.execute(http=self._thread_http())
            )
        except (HttpError, OSError) as e:
            raise TransportError(f"Google Drive {action} failed: {e}") from e
        logger.debug("Google Drive %s succeeded", action)
        return response or {}

    def _thread_http(self) -> Any:
        """Return the calling thread's HTTP client, creating it on first use."""
        if self.http_factory is None:
            return None
        http = getattr(self._local, "http", None)
        if http is None:
            http = self.http_factory()
            self._local.http = http
            logger.debug("Created HTTP client for thread %s", threading.current_thread().name)
        return http
