"""
Subcontractor and vendor application endpoints.

Both kinds share one workflow: a public form, an email to the office and the
applicant, and a back-office review with a status and private notes.
"""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from ..models.applications import (
    ApplicationBase, SubcontractorApply, VendorApply, ApplicationOut,
    ApplicationStatusUpdate, ApplicationNotesUpdate, ApplicationSubmitResponse,
)
from ..dependencies.services import get_store, get_notifier, require_admin
from src.content.store import ContentStore
from src.content.errors import NotFoundError
from src.content.types import Application
from src.services.mail.notifier import EmailNotifier
from src.utils.sanitize import strip_html, mask_email

logger = logging.getLogger(__name__)

router = APIRouter()


def _submit(kind: str, request: ApplicationBase, store: ContentStore) -> Application:
    data = request.model_dump(exclude={"service_types", "supply_types"})
    data["service_description"] = strip_html(data["service_description"])
    application = store.create_application(kind, trades=request.trades(), **data)
    logger.info(f"{kind.capitalize()} application {application.id} from {mask_email(application.email)}")
    return application


@router.post("/subcontractors/apply", response_model=ApplicationSubmitResponse, status_code=201)
async def apply_as_subcontractor(
    request: SubcontractorApply,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    notifier: EmailNotifier = Depends(get_notifier),
):
    application = _submit("subcontractor", request, store)
    background_tasks.add_task(notifier.notify_application, application)
    return ApplicationSubmitResponse(message="Your application has been submitted successfully", id=application.id)

@router.post("/vendors/apply", response_model=ApplicationSubmitResponse, status_code=201)
async def apply_as_vendor(
    request: VendorApply,
    background_tasks: BackgroundTasks,
    store: ContentStore = Depends(get_store),
    notifier: EmailNotifier = Depends(get_notifier),
):
    application = _submit("vendor", request, store)
    background_tasks.add_task(notifier.notify_application, application)
    return ApplicationSubmitResponse(message="Your application has been submitted successfully", id=application.id)


def build_admin_router(kind: str) -> APIRouter:
    """Review endpoints for one kind of application."""
    admin_router = APIRouter(dependencies=[Depends(require_admin)])

    @admin_router.get("", response_model=List[ApplicationOut])
    async def list_applications(store: ContentStore = Depends(get_store)):
        return store.list_applications(kind)

    @admin_router.get("/{application_id}", response_model=ApplicationOut)
    async def get_application(application_id: int, store: ContentStore = Depends(get_store)):
        try:
            return store.get_application(kind, application_id)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @admin_router.put("/{application_id}/status", response_model=ApplicationOut)
    async def update_status(application_id: int, request: ApplicationStatusUpdate, store: ContentStore = Depends(get_store)):
        try:
            return store.update_application(kind, application_id, status=request.status)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @admin_router.put("/{application_id}/notes", response_model=ApplicationOut)
    async def update_notes(application_id: int, request: ApplicationNotesUpdate, store: ContentStore = Depends(get_store)):
        try:
            return store.update_application(kind, application_id, notes=strip_html(request.notes))
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @admin_router.delete("/{application_id}", status_code=204)
    async def delete_application(application_id: int, store: ContentStore = Depends(get_store)):
        try:
            store.delete_application(kind, application_id)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return Response(status_code=204)

    return admin_router
