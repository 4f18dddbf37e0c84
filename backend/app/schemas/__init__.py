"""
Schemas package - Data Transfer Objects and validation.

This package contains DTOs that define the API contracts
and handle validation following SOLID principles.
"""

from .dtos import (
    AppointmentCreateRequest,
    AppointmentResponse,
    AppointmentUpdateRequest,
    PeriodSummaryResponse,
    WeekdayHistogramResponse,
)

__all__ = [
    # Appointment DTOs
    "AppointmentCreateRequest",
    "AppointmentUpdateRequest",
    "AppointmentResponse",
    # Statistics DTOs
    "PeriodSummaryResponse",
    "WeekdayHistogramResponse",
]
