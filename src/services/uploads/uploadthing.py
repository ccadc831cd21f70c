from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
import logging
import time
import httpx
from tenacity import retry, stop_after_attempt, wait_exponential_jitter, retry_if_exception
from .base import FileHostProvider, UploadedFile, DeleteResult, UploadError, UploadRetryable, UploadTimeout, file_url_for_key

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {408, 409, 429, 500, 502, 503, 504}

def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, UploadRetryable)

class UploadThingProvider(FileHostProvider):
    """Server-side client for the UploadThing REST API (file listing and deletion)."""

    def __init__(self, api_key: Optional[str] = None, base_url: str = "https://api.uploadthing.com", request_timeout_s: float = 30, list_page_size: int = 500, client: Optional[httpx.Client] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.request_timeout_s = request_timeout_s
        self.list_page_size = list_page_size
        self.client = client or httpx.Client(base_url=self.base_url, timeout=request_timeout_s)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @retry(reraise=True, wait=wait_exponential_jitter(initial=0.5, max=4), stop=stop_after_attempt(3), retry=retry_if_exception(_is_retryable))
    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.configured:
            raise UploadError("UploadThing API key is not configured")

        headers = {"x-uploadthing-api-key": self.api_key, "Content-Type": "application/json"}
        t0 = time.perf_counter()
        try:
            response = self.client.post(path, json=payload, headers=headers)
        except httpx.ReadTimeout as e:
            raise UploadTimeout(f"UploadThing timeout after {self.request_timeout_s}s: {e}") from e
        except (httpx.ConnectTimeout, httpx.ConnectError, httpx.RemoteProtocolError) as e:
            raise UploadRetryable(f"UploadThing unreachable: {e}") from e
        except httpx.HTTPError as e:
            raise UploadError(f"UploadThing request failed: {e}") from e

        if response.status_code in RETRYABLE_STATUS:
            raise UploadRetryable(f"UploadThing {path} returned {response.status_code}")
        if response.status_code >= 400:
            raise UploadError(f"UploadThing {path} returned {response.status_code}: {response.text[:200]}")

        logger.debug(f"UploadThing {path} took {(time.perf_counter() - t0) * 1000:.0f}ms")
        try:
            return response.json()
        except ValueError as e:
            raise UploadError(f"UploadThing {path} returned invalid JSON") from e

    @staticmethod
    def _to_uploaded_file(raw: Dict[str, Any]) -> UploadedFile:
        key = raw.get("key", "")
        uploaded_at = raw.get("uploadedAt")
        if isinstance(uploaded_at, (int, float)):
            uploaded_at = datetime.fromtimestamp(uploaded_at / 1000, tz=timezone.utc).isoformat()
        return UploadedFile(
            url=raw.get("url") or (file_url_for_key(key) if key else ""),
            key=key,
            name=raw.get("name") or key,
            size=int(raw.get("size") or 0),
            uploaded_at=uploaded_at,
        )

    def list_files(self) -> List[UploadedFile]:
        files: List[UploadedFile] = []
        offset = 0
        while True:
            data = self._post("/v6/listFiles", {"limit": self.list_page_size, "offset": offset})
            page = data.get("files") or []
            files.extend(self._to_uploaded_file(item) for item in page)
            if not data.get("hasMore") or not page:
                break
            offset += len(page)
        return files

    def delete_files(self, keys: Sequence[str]) -> DeleteResult:
        keys = [k for k in keys if k]
        if not keys:
            return DeleteResult(success=True, deleted_count=0)
        data = self._post("/v6/deleteFiles", {"fileKeys": keys})
        deleted = int(data.get("deletedCount", len(keys) if data.get("success") else 0))
        logger.info(f"Deleted {deleted}/{len(keys)} files from UploadThing")
        return DeleteResult(success=bool(data.get("success")), deleted_count=deleted)

    def cleanup(self) -> None:
        self.client.close()
