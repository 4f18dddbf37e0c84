"""
Appointment service following SOLID principles.

Owns the scheduling invariant: at most one appointment per (date, time)
slot for the whole shop. The check here is a fast-path rejection; the
store's unique constraint on the slot is what makes the rule hold under
concurrent requests.
"""

import logging
from datetime import date, time
from typing import List, Optional

from app.core.exceptions import ConflictError, NotFoundError
from app.domain.interfaces import IAppointmentRepository
from app.schemas.dtos import (
    AppointmentCreateRequest,
    AppointmentResponse,
    AppointmentUpdateRequest,
)
from app.utils.calendar_buckets import format_time

logger = logging.getLogger(__name__)


class AppointmentService:
    """Application service for appointment-related use-cases.

    This service demonstrates:
    - Single Responsibility: Handles only appointment business logic
    - Dependency Inversion: Depends on interfaces, not concrete implementations
    """

    def __init__(self, appointment_repo: IAppointmentRepository):
        self.appointment_repo = appointment_repo

    def check_conflict(
        self, day: date, at: time, exclude_id: Optional[int] = None
    ) -> bool:
        """Return True when another appointment already holds the slot."""
        return self.appointment_repo.find_conflict(day, at, exclude_id=exclude_id)

    def create_appointment(
        self, request: AppointmentCreateRequest
    ) -> AppointmentResponse:
        """Book a new appointment.

        Business Rules:
        - client name, phone, date, time and service are required
        - No double booking for the same date/time slot
        - Status defaults to pending; the amount is normalized to a Decimal
        """
        request.validate()
        appointment = request.to_domain()

        self._ensure_slot_free(appointment.date, appointment.time)

        created = self.appointment_repo.insert(appointment)
        logger.info(
            "Appointment created",
            extra={
                "context": {
                    "appointment_id": created.id,
                    "date": str(created.date),
                    "time": format_time(created.time),
                    "service": created.service,
                }
            },
        )
        return AppointmentResponse.from_domain(created)

    def update_appointment(
        self, appointment_id: int, request: AppointmentUpdateRequest
    ) -> AppointmentResponse:
        """Replace every field of an existing appointment.

        The slot check excludes the appointment itself, so saving it back at
        its own date/time never conflicts.
        """
        request.validate()
        appointment = request.to_domain()

        self._ensure_slot_free(
            appointment.date, appointment.time, exclude_id=appointment_id
        )

        updated = self.appointment_repo.update(appointment_id, appointment)
        if updated is None:
            raise NotFoundError(
                "Appointment not found", details={"appointment_id": appointment_id}
            )

        logger.info(
            "Appointment updated",
            extra={"context": {"appointment_id": appointment_id}},
        )
        return AppointmentResponse.from_domain(updated)

    def complete_appointment(self, appointment_id: int) -> AppointmentResponse:
        """Mark an appointment as completed. Other fields stay untouched."""
        completed = self.appointment_repo.mark_completed(appointment_id)
        if completed is None:
            raise NotFoundError(
                "Appointment not found", details={"appointment_id": appointment_id}
            )

        logger.info(
            "Appointment completed",
            extra={
                "context": {
                    "appointment_id": appointment_id,
                    "amount": str(completed.amount),
                }
            },
        )
        return AppointmentResponse.from_domain(completed)

    def delete_appointment(self, appointment_id: int) -> AppointmentResponse:
        """Delete an appointment permanently, whatever its status."""
        deleted = self.appointment_repo.delete(appointment_id)
        if deleted is None:
            raise NotFoundError(
                "Appointment not found", details={"appointment_id": appointment_id}
            )

        logger.info(
            "Appointment deleted",
            extra={"context": {"appointment_id": appointment_id}},
        )
        return AppointmentResponse.from_domain(deleted)

    def get_appointment(self, appointment_id: int) -> AppointmentResponse:
        appointment = self.appointment_repo.get_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError(
                "Appointment not found", details={"appointment_id": appointment_id}
            )
        return AppointmentResponse.from_domain(appointment)

    def list_appointments(self) -> List[AppointmentResponse]:
        """All appointments ordered by date, then time."""
        appointments = self.appointment_repo.list_appointments()
        return [AppointmentResponse.from_domain(apt) for apt in appointments]

    def _ensure_slot_free(
        self, day: date, at: time, exclude_id: Optional[int] = None
    ) -> None:
        if self.check_conflict(day, at, exclude_id=exclude_id):
            logger.info(
                "Slot already booked",
                extra={"context": {"date": str(day), "time": str(at)}},
            )
            raise ConflictError(
                "Time slot is already booked",
                details={"date": day.isoformat(), "time": format_time(at)},
            )
