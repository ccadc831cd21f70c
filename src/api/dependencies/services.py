"""
Shared services for request handlers.

The application factory builds one instance of each service and parks it on
app.state; these dependency functions hand them to the endpoints. Tests swap them
out through app.dependency_overrides.
"""

import secrets
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request

from src.content.store import ContentStore
from src.content.notifications.aggregator import NotificationAggregator
from src.services.uploads.base import FileHostProvider
from src.services.uploads.tracker import FileTracker
from src.services.mail.notifier import EmailNotifier
from src.utils.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_store(request: Request) -> ContentStore:
    return request.app.state.store

def get_aggregator(request: Request) -> NotificationAggregator:
    return request.app.state.aggregator

def get_file_host(request: Request) -> FileHostProvider:
    return request.app.state.file_host

def get_file_tracker(request: Request) -> FileTracker:
    return request.app.state.file_tracker

def get_notifier(request: Request) -> EmailNotifier:
    return request.app.state.notifier

def require_admin(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Guard for back-office endpoints. Open when no admin key is configured."""
    expected = settings.admin.api_key
    if not expected:
        return
    if not x_api_key or not secrets.compare_digest(x_api_key, expected):
        raise HTTPException(status_code=401, detail="Admin API key required")
