"""
Bookkeeping for uploads made while an admin form is open.

Files go straight from the browser to the file host, so the server only learns
about them when the client tracks them. Tracked files are either committed (saved
into a record) or cleaned up when the form is abandoned.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional
import threading
import logging

from .base import FileHostProvider, UploadError, extract_file_key

logger = logging.getLogger(__name__)


@dataclass
class TrackedFile:
    url: str
    session_id: str
    key: Optional[str] = None
    filename: Optional[str] = None
    tracked_at: datetime = field(default_factory=datetime.utcnow)
    committed: bool = False


@dataclass
class CleanupReport:
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    preserved: List[str] = field(default_factory=list)


class FileTracker:
    def __init__(self, provider: FileHostProvider):
        self.provider = provider
        self._files: Dict[str, TrackedFile] = {}
        self._lock = threading.Lock()

    def track(self, url: str, session_id: str, filename: Optional[str] = None) -> TrackedFile:
        tracked = TrackedFile(url=url, session_id=session_id, key=extract_file_key(url), filename=filename)
        with self._lock:
            self._files[url] = tracked
        logger.info(f"Tracking file {tracked.key or url} for session {session_id}")
        return tracked

    def commit(self, session_id: str, urls: Optional[Iterable[str]] = None) -> List[TrackedFile]:
        wanted = set(urls) if urls is not None else None
        committed = []
        with self._lock:
            for tracked in self._files.values():
                if tracked.session_id != session_id or tracked.committed:
                    continue
                if wanted is not None and tracked.url not in wanted:
                    continue
                tracked.committed = True
                committed.append(tracked)
        logger.info(f"Committed {len(committed)} files for session {session_id}")
        return committed

    def pending(self, session_id: Optional[str] = None) -> List[TrackedFile]:
        with self._lock:
            return [
                f for f in self._files.values()
                if not f.committed and (session_id is None or f.session_id == session_id)
            ]

    def cleanup(
        self,
        session_id: Optional[str] = None,
        urls: Optional[Iterable[str]] = None,
        preserve_urls: Iterable[str] = (),
    ) -> CleanupReport:
        """
        Delete uncommitted files from the file host.

        With urls, exactly those files are candidates; otherwise every uncommitted file
        of the session. Anything in preserve_urls is never deleted.
        """
        if session_id is None and urls is None:
            raise ValueError("Either a session id or file urls are required")

        preserve = set(preserve_urls)
        if urls is not None:
            candidates = list(dict.fromkeys(urls))
        else:
            candidates = [f.url for f in self.pending(session_id)]

        report = CleanupReport()
        to_delete: Dict[str, str] = {}
        for url in candidates:
            if url in preserve:
                report.preserved.append(url)
                continue
            key = extract_file_key(url)
            if key is None:
                logger.warning(f"Cannot derive a file key from {url}, skipping")
                report.failed.append(url)
                continue
            to_delete[url] = key

        if to_delete:
            try:
                result = self.provider.delete_files(list(to_delete.values()))
            except UploadError as e:
                logger.error(f"Cleanup for session {session_id or '*'} failed: {e}")
                report.failed.extend(to_delete)
            else:
                if result.success:
                    report.deleted.extend(to_delete)
                else:
                    report.failed.extend(to_delete)

        with self._lock:
            for url in report.deleted + report.preserved:
                self._files.pop(url, None)

        logger.info(
            f"Cleanup for session {session_id or '*'}: {len(report.deleted)} deleted, "
            f"{len(report.failed)} failed, {len(report.preserved)} preserved"
        )
        return report
