"""
Appointment controller.

Handles only HTTP concerns for appointments: each request opens its own
session, delegates to AppointmentService and renders the result. Core
failures (validation, conflict, not found, store) propagate to the error
handler registered in create_app().
"""

from contextlib import contextmanager
from typing import Iterator

from flask import Blueprint, request

from app.core.api_utils import api_response
from app.db.session import SessionLocal
from app.repositories.appointment_repo import AppointmentRepository
from app.schemas.dtos import AppointmentCreateRequest, AppointmentUpdateRequest
from app.services.appointment_service import AppointmentService

appointment_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


@contextmanager
def _appointment_service() -> Iterator[AppointmentService]:
    """Dependency injection factory for AppointmentService."""
    db = SessionLocal()
    try:
        yield AppointmentService(AppointmentRepository(db))
    finally:
        db.close()


@appointment_bp.route("", methods=["GET"])
def list_appointments():
    with _appointment_service() as service:
        appointments = service.list_appointments()
    return api_response(
        True,
        f"{len(appointments)} appointment(s)",
        [apt.to_dict() for apt in appointments],
    )


@appointment_bp.route("/<int:appointment_id>", methods=["GET"])
def get_appointment(appointment_id: int):
    with _appointment_service() as service:
        appointment = service.get_appointment(appointment_id)
    return api_response(True, "Appointment found", appointment.to_dict())


@appointment_bp.route("", methods=["POST"])
def create_appointment():
    create_request = AppointmentCreateRequest.from_payload(request.get_json(silent=True))
    with _appointment_service() as service:
        created = service.create_appointment(create_request)
    return api_response(True, "Appointment booked", created.to_dict(), 201)


@appointment_bp.route("/<int:appointment_id>", methods=["PUT"])
def update_appointment(appointment_id: int):
    update_request = AppointmentUpdateRequest.from_payload(request.get_json(silent=True))
    with _appointment_service() as service:
        updated = service.update_appointment(appointment_id, update_request)
    return api_response(True, "Appointment updated", updated.to_dict())


@appointment_bp.route("/<int:appointment_id>/complete", methods=["PATCH"])
def complete_appointment(appointment_id: int):
    with _appointment_service() as service:
        completed = service.complete_appointment(appointment_id)
    return api_response(True, "Appointment completed", completed.to_dict())


@appointment_bp.route("/<int:appointment_id>", methods=["DELETE"])
def delete_appointment(appointment_id: int):
    with _appointment_service() as service:
        deleted = service.delete_appointment(appointment_id)
    return api_response(True, "Appointment deleted", deleted.to_dict())
