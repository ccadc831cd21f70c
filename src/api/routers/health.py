"""
Liveness and diagnostics endpoints.
"""

import time
from fastapi import APIRouter, Depends
from datetime import datetime

from ..models.common import HealthStatus
from ..dependencies.services import get_store, get_file_host, get_aggregator, get_settings, get_notifier
from src.content.store import ContentStore
from src.content.notifications.aggregator import NotificationAggregator
from src.services.uploads.base import FileHostProvider
from src.services.mail.notifier import EmailNotifier
from src.utils.config import Settings

router = APIRouter()

_started_at = time.time()


def _format_uptime(seconds: float) -> str:
    return f"{seconds//3600:.0f}h {(seconds%3600)//60:.0f}m {seconds%60:.0f}s"


@router.get("", response_model=HealthStatus)
async def health_check(
    store: ContentStore = Depends(get_store),
    file_host: FileHostProvider = Depends(get_file_host),
    settings: Settings = Depends(get_settings),
):
    """
    Report the content store and whether the file host and mail are configured.

    Nothing here calls out to external services, so it is safe to poll.
    """
    stats = store.get_stats()
    configured = getattr(file_host, "configured", True)

    return HealthStatus(
        status="healthy" if configured else "degraded",
        version=settings.app.version,
        uptime=time.time() - _started_at,
        dependencies={
            "content_store": f"ok ({stats['projects']} projects, {stats['gallery_images']} images)",
            "file_host": "configured" if configured else "not configured",
            "email": "enabled" if settings.email.enabled else "disabled",
        },
    )

@router.get("/detailed")
async def detailed_health_check(
    store: ContentStore = Depends(get_store),
    aggregator: NotificationAggregator = Depends(get_aggregator),
    notifier: EmailNotifier = Depends(get_notifier),
):
    """Store sizes, aggregator statistics and the email templates on disk."""
    uptime = time.time() - _started_at
    return {
        "checked_at": datetime.utcnow().isoformat(),
        "uptime_seconds": uptime,
        "uptime_human": _format_uptime(uptime),
        "content": store.get_stats(),
        "notifications": aggregator.get_stats(),
        "email": {
            "templates": notifier.templates.available(),
            "sent_or_queued": len(notifier.outbox),
        },
    }
