"""
Appointment repository implementation following SOLID principles.
"""

import logging
from datetime import date, time
from typing import List, Optional, Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, StoreError
from app.db.base import Appointment as DbAppointment
from app.domain.entities import Appointment as DomainAppointment
from app.domain.entities import AppointmentStatus
from app.domain.interfaces import IAppointmentRepository
from app.utils.calendar_buckets import DateRange, format_time

logger = logging.getLogger(__name__)


class AppointmentRepository(IAppointmentRepository):
    """Repository for Appointment persistence operations.

    This implementation:
    - Implements IAppointmentRepository interface (Dependency Inversion)
    - Handles data access only (Single Responsibility)
    - Maps between domain entities and database models
    - Translates the slot unique constraint into ConflictError, so the
      invariant holds even when two requests pass the pre-check together
    """

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_by_id(self, appointment_id: int) -> Optional[DomainAppointment]:
        """Get appointment by ID."""
        db_appointment = self._get_db(appointment_id)
        return self._to_domain(db_appointment) if db_appointment else None

    def find_conflict(
        self, day: date, at: time, exclude_id: Optional[int] = None
    ) -> bool:
        """Whether another appointment already occupies the slot."""
        query = select(DbAppointment.id).where(
            DbAppointment.date == day, DbAppointment.time == at
        )
        if exclude_id is not None:
            query = query.where(DbAppointment.id != exclude_id)

        try:
            return self.db.execute(query.limit(1)).first() is not None
        except SQLAlchemyError as e:
            raise self._store_error("checking slot conflict", e)

    def list_appointments(
        self, ranges: Optional[Sequence[DateRange]] = None
    ) -> List[DomainAppointment]:
        """List appointments ordered by (date, time), optionally by date range."""
        query = select(DbAppointment)
        if ranges:
            query = query.where(
                or_(
                    *(
                        and_(DbAppointment.date >= r.start, DbAppointment.date <= r.end)
                        for r in ranges
                    )
                )
            )
        query = query.order_by(DbAppointment.date.asc(), DbAppointment.time.asc())

        try:
            rows = self.db.execute(query).scalars().all()
        except SQLAlchemyError as e:
            raise self._store_error("listing appointments", e)
        return [self._to_domain(row) for row in rows]

    def insert(self, appointment: DomainAppointment) -> DomainAppointment:
        """Create a new appointment."""
        db_appointment = DbAppointment()
        self._apply(db_appointment, appointment)
        self.db.add(db_appointment)
        self._commit("creating appointment", appointment)
        self.db.refresh(db_appointment)
        return self._to_domain(db_appointment)

    def update(
        self, appointment_id: int, appointment: DomainAppointment
    ) -> Optional[DomainAppointment]:
        """Overwrite every field of an existing appointment."""
        db_appointment = self._get_db(appointment_id)
        if not db_appointment:
            return None

        self._apply(db_appointment, appointment)
        self._commit("updating appointment", appointment)
        self.db.refresh(db_appointment)
        return self._to_domain(db_appointment)

    def mark_completed(self, appointment_id: int) -> Optional[DomainAppointment]:
        """Set the status to completed, leaving every other field untouched."""
        db_appointment = self._get_db(appointment_id)
        if not db_appointment:
            return None

        db_appointment.status = AppointmentStatus.COMPLETED.value
        self._commit("completing appointment")
        self.db.refresh(db_appointment)
        return self._to_domain(db_appointment)

    def delete(self, appointment_id: int) -> Optional[DomainAppointment]:
        """Delete an appointment permanently."""
        db_appointment = self._get_db(appointment_id)
        if not db_appointment:
            return None

        deleted = self._to_domain(db_appointment)
        self.db.delete(db_appointment)
        self._commit("deleting appointment")
        return deleted

    def _get_db(self, appointment_id: int) -> Optional[DbAppointment]:
        try:
            return self.db.get(DbAppointment, appointment_id)
        except SQLAlchemyError as e:
            raise self._store_error("loading appointment", e)

    def _commit(
        self, action: str, appointment: Optional[DomainAppointment] = None
    ) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if appointment is None:
                raise self._store_error(action, e)
            logger.warning(
                "Slot uniqueness constraint rejected write",
                extra={
                    "context": {
                        "action": action,
                        "date": str(appointment.date),
                        "time": format_time(appointment.time),
                    }
                },
            )
            raise ConflictError(
                "Time slot is already booked",
                details={
                    "date": appointment.date.isoformat(),
                    "time": format_time(appointment.time),
                },
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise self._store_error(action, e)

    def _store_error(self, action: str, error: Exception) -> StoreError:
        logger.error(
            f"Error {action}",
            extra={"context": {"error": str(error)}},
            exc_info=True,
        )
        return StoreError(f"Error {action}")

    @staticmethod
    def _apply(db_appointment: DbAppointment, appointment: DomainAppointment) -> None:
        db_appointment.client_name = appointment.client_name
        db_appointment.phone = appointment.phone
        db_appointment.date = appointment.date
        db_appointment.time = appointment.time
        db_appointment.service = appointment.service
        db_appointment.status = appointment.status
        db_appointment.amount = appointment.amount

    @staticmethod
    def _to_domain(db_appointment: DbAppointment) -> DomainAppointment:
        """Convert database model to domain entity."""
        return DomainAppointment(
            id=db_appointment.id,
            client_name=db_appointment.client_name,
            phone=db_appointment.phone,
            date=db_appointment.date,
            time=db_appointment.time,
            service=db_appointment.service,
            status=db_appointment.status,
            amount=db_appointment.amount,
            created_at=db_appointment.created_at,
            updated_at=db_appointment.updated_at,
        )
