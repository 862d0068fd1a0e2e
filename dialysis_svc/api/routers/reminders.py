"""
Reminders router - notification permission and delivered reminders.

The reminder loop itself runs in the app lifespan (see main.py); this
router only flips the permission gate and exposes the in-app outbox.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from core.dependencies import (
    get_notification_outbox,
    get_notification_sink,
    get_state_controller,
)
from models import NotificationPermission
from schemas import NotificationResponse, PermissionResponse, PermissionUpdate
from services.reminders import NotificationOutbox, NotificationSink
from services.state_controller import AppStateController

logger = logging.getLogger(__name__)

CONFIRMATION_TITLE = "Medication reminders are on"
CONFIRMATION_BODY = "You will be reminded at each medication's reminder time."

router = APIRouter(
    prefix="/api/v1/reminders",
    tags=["Reminders"],
)


@router.get(
    "/permission",
    response_model=PermissionResponse,
    summary="Get the notification permission",
)
async def get_permission(
    controller: AppStateController = Depends(get_state_controller)
):
    return PermissionResponse(permission=controller.notification_permission)


@router.put(
    "/permission",
    response_model=PermissionResponse,
    summary="Set the notification permission",
    description="Reminders are only delivered while the permission is `granted`. "
                "Granting sends one confirmation notification."
)
async def set_permission(
    update: PermissionUpdate,
    controller: AppStateController = Depends(get_state_controller),
    sink: NotificationSink = Depends(get_notification_sink)
):
    previous = controller.notification_permission
    permission = controller.set_notification_permission(update.permission)

    if permission == NotificationPermission.GRANTED and previous != NotificationPermission.GRANTED:
        try:
            await sink.notify(CONFIRMATION_TITLE, CONFIRMATION_BODY, {"require_interaction": False})
        except Exception as e:
            logger.warning(f"Confirmation notification failed: {e}")

    return PermissionResponse(permission=permission)


@router.get(
    "/notifications",
    response_model=List[NotificationResponse],
    summary="Recently delivered notifications",
    description="Newest first. The front-end polls this to surface reminders."
)
async def list_notifications(
    limit: int = Query(20, ge=1, le=50),
    outbox: NotificationOutbox = Depends(get_notification_outbox)
):
    return [
        NotificationResponse(
            title=item.title,
            body=item.body,
            medication_id=item.medication_id,
            sent_at=item.sent_at.isoformat(timespec="seconds"),
        )
        for item in outbox.recent(limit)
    ]
