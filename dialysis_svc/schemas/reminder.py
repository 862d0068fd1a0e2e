"""
Pydantic schemas for reminder permission and delivered notifications.
"""
from typing import Optional

from pydantic import BaseModel, Field

from models import NotificationPermission


class PermissionUpdate(BaseModel):
    permission: NotificationPermission = Field(..., examples=["granted"])


class PermissionResponse(BaseModel):
    permission: NotificationPermission


class NotificationResponse(BaseModel):
    """A notification that was delivered to the in-app outbox."""
    title: str = Field(..., examples=["Medication reminder"])
    body: str = Field(..., examples=["Time to take: Calcium carbonate 1 tablet"])
    medication_id: Optional[str] = None
    sent_at: str = Field(..., description="ISO 8601 local timestamp")
