"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Optional


class AppointmentStatus(str, Enum):
    """Lifecycle of an appointment. Stored as text."""

    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list:
        return [status.value for status in cls]


@dataclass
class Appointment:
    """Domain entity for a booked service at one date/time slot.

    This is the pure business representation, independent of:
    - Database implementation (SQLAlchemy)
    - HTTP frameworks (Flask)
    """

    client_name: str
    phone: str
    date: date
    time: time
    service: str
    status: str = AppointmentStatus.PENDING.value
    amount: Decimal = Decimal("0")
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if self.status not in AppointmentStatus.values():
            raise ValueError(f"Invalid status: {self.status}")
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    @property
    def slot(self) -> tuple:
        """The (date, time) pair no other appointment may share."""
        return self.date, self.time

    @property
    def is_completed(self) -> bool:
        return self.status == AppointmentStatus.COMPLETED.value
