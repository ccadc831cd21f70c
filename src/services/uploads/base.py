from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import urlparse

#unified upload errors
class UploadError(RuntimeError): ...
class UploadTimeout(UploadError): ...
class UploadRetryable(UploadError): ...

FILE_HOSTS = ("utfs.io", "ufs.sh")


@dataclass(frozen=True)
class UploadedFile:
    url: str
    key: str
    name: str
    size: int
    uploaded_at: Optional[str] = None  # ISO timestamp as reported by the provider


@dataclass(frozen=True)
class DeleteResult:
    success: bool
    deleted_count: int


def extract_file_key(url: Optional[str]) -> Optional[str]:
    """Return the file key from a utfs.io / *.ufs.sh URL (".../f/<key>"), or None."""
    if not url:
        return None
    parsed = urlparse(url)
    host = parsed.netloc.lower()
    if not any(host == h or host.endswith("." + h) for h in FILE_HOSTS):
        return None
    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) >= 2 and parts[-2] == "f":
        return parts[-1]
    return None


def file_url_for_key(key: str) -> str:
    # newer keys are served from ufs.sh
    if key.startswith("o1"):
        return f"https://ufs.sh/f/{key}"
    return f"https://utfs.io/f/{key}"


class FileHostProvider(ABC):
    @abstractmethod
    def list_files(self) -> List[UploadedFile]:
        raise NotImplementedError

    @abstractmethod
    def delete_files(self, keys: Sequence[str]) -> DeleteResult:
        raise NotImplementedError

    def delete_file(self, key: str) -> DeleteResult:
        return self.delete_files([key])

    def cleanup(self) -> None:
        pass
