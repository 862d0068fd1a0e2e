"""
The whole application state, owned by a single controller.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from models.health_record import HealthRecord
from models.medication import Medication
from models.profile import PatientProfile


class NotificationPermission(str, Enum):
    """
    Whether reminder notifications may be delivered.

    DEFAULT means the patient has not been asked yet.
    """
    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"


@dataclass
class AppState:
    """Everything that lives in the local store."""
    records: List[HealthRecord] = field(default_factory=list)
    medications: List[Medication] = field(default_factory=list)
    profile: Optional[PatientProfile] = None
    notification_permission: NotificationPermission = NotificationPermission.DEFAULT
