"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from datetime import date, time
from typing import List, Optional, Sequence

from app.utils.calendar_buckets import DateRange

from .entities import Appointment


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def get_by_id(self, appointment_id: int) -> Optional[Appointment]:
        """Get appointment by ID."""
        pass

    @abstractmethod
    def find_conflict(
        self, day: date, at: time, exclude_id: Optional[int] = None
    ) -> bool:
        """Whether another appointment already occupies the (day, at) slot."""
        pass

    @abstractmethod
    def list_appointments(
        self, ranges: Optional[Sequence[DateRange]] = None
    ) -> List[Appointment]:
        """List appointments ordered by (date, time).

        When ``ranges`` is non-empty only dates inside one of them are
        returned; otherwise every appointment is.
        """
        pass


class IAppointmentWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def insert(self, appointment: Appointment) -> Appointment:
        """Persist a new appointment and return it with its id."""
        pass

    @abstractmethod
    def update(
        self, appointment_id: int, appointment: Appointment
    ) -> Optional[Appointment]:
        """Overwrite every field of an appointment. None if it does not exist."""
        pass

    @abstractmethod
    def mark_completed(self, appointment_id: int) -> Optional[Appointment]:
        """Set status to completed. None if the appointment does not exist."""
        pass

    @abstractmethod
    def delete(self, appointment_id: int) -> Optional[Appointment]:
        """Remove an appointment, returning the deleted record or None."""
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass
