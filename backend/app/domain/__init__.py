"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- interfaces.py: Repository contracts
"""

from .entities import Appointment, AppointmentStatus
from .interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
)

__all__ = [
    # Domain entities
    "Appointment",
    "AppointmentStatus",
    # Repository interfaces
    "IAppointmentRepository",
    # Segregated interfaces
    "IAppointmentReader",
    "IAppointmentWriter",
]
