"""
Data Transfer Objects (DTOs) and validation schemas.

Following SOLID principles:
- Single Responsibility: Each schema validates one specific data contract
- Open/Closed: Schemas can be extended without modification

Request DTOs accept both the English field names and the Portuguese keys
sent by the mobile client (cliente_nome, telefone, data, horario, servico,
valor).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from app.core.exceptions import ValidationError
from app.domain.entities import Appointment, AppointmentStatus
from app.utils.calendar_buckets import format_time, parse_date, parse_time
from app.utils.money import MAX_AMOUNT, format_amount, normalize_amount

FIELD_ALIASES = {
    "client_name": ("client_name", "clientName", "cliente_nome"),
    "phone": ("phone", "telefone"),
    "date": ("date", "data"),
    "time": ("time", "horario", "hora"),
    "service": ("service", "servico"),
    "status": ("status",),
    "amount": ("amount", "valor"),
}

REQUIRED_FIELDS = ("client_name", "phone", "date", "time", "service")


def _pick(payload: Dict[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in payload:
            return payload[key]
    return None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


@dataclass
class AppointmentCreateRequest:
    """DTO for appointment creation requests."""

    client_name: Any = None
    phone: Any = None
    date: Any = None
    time: Any = None
    service: Any = None
    status: Any = None
    amount: Any = None

    required_fields = REQUIRED_FIELDS

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]):
        """Build the request from a decoded JSON body.

        Raises:
            ValidationError: if the body is present but not a JSON object
        """
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationError(
                "Request body must be a JSON object",
                details={"received": type(payload).__name__},
            )
        return cls(**{field: _pick(payload, field) for field in FIELD_ALIASES})

    def validate(self) -> None:
        """Validate the request data.

        Raises:
            ValidationError: on a missing/empty required field, a malformed
                date or time, an unknown status or an amount the store
                cannot hold
        """
        missing = [f for f in self.required_fields if _is_blank(getattr(self, f))]
        if missing:
            raise ValidationError(
                "Missing required fields: " + ", ".join(missing),
                details={"missing": missing},
            )

        for field in ("client_name", "phone", "service"):
            if not isinstance(getattr(self, field), str):
                raise ValidationError(f"{field} must be text")

        self.parsed_date()
        self.parsed_time()

        if not _is_blank(self.status) and (
            _clean(self.status) not in AppointmentStatus.values()
        ):
            raise ValidationError(
                f"Invalid status: {self.status}",
                details={"allowed": AppointmentStatus.values()},
            )

        if normalize_amount(self.amount) > MAX_AMOUNT:
            raise ValidationError(
                "amount is out of range",
                details={"field": "amount", "max": str(MAX_AMOUNT)},
            )

    def parsed_date(self) -> date:
        try:
            return parse_date(self.date)
        except ValueError as e:
            raise ValidationError(str(e), details={"field": "date"}) from e

    def parsed_time(self) -> time:
        try:
            return parse_time(self.time)
        except ValueError as e:
            raise ValidationError(str(e), details={"field": "time"}) from e

    def to_domain(self) -> Appointment:
        """Build the domain entity. The amount is normalized here, once."""
        status = _clean(self.status) or AppointmentStatus.PENDING.value
        return Appointment(
            client_name=_clean(self.client_name),
            phone=_clean(self.phone),
            date=self.parsed_date(),
            time=self.parsed_time(),
            service=_clean(self.service),
            status=status,
            amount=normalize_amount(self.amount),
        )


@dataclass
class AppointmentUpdateRequest(AppointmentCreateRequest):
    """DTO for full-replacement updates. Status is required as well."""

    required_fields = REQUIRED_FIELDS + ("status",)


@dataclass
class AppointmentResponse:
    """DTO for appointment API responses."""

    id: int
    client_name: str
    phone: str
    date: date
    time: time
    service: str
    status: str
    amount: Decimal
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, appointment: Appointment) -> "AppointmentResponse":
        """Create response from domain entity."""
        return cls(
            id=appointment.id,
            client_name=appointment.client_name,
            phone=appointment.phone,
            date=appointment.date,
            time=appointment.time,
            service=appointment.service,
            status=appointment.status,
            amount=appointment.amount,
            created_at=appointment.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "client_name": self.client_name,
            "phone": self.phone,
            "date": self.date.isoformat(),
            "time": format_time(self.time),
            "service": self.service,
            "status": self.status,
            "amount": format_amount(self.amount),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class PeriodSummaryResponse:
    """DTO for one aggregated period."""

    period: str
    count: int
    completed_count: int
    revenue: Decimal
    top_service: str
    top_client: str

    @classmethod
    def from_summary(cls, summary) -> "PeriodSummaryResponse":
        return cls(
            period=summary.period.value,
            count=summary.count,
            completed_count=summary.completed_count,
            revenue=summary.revenue,
            top_service=summary.top_service,
            top_client=summary.top_client,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "count": self.count,
            "completed_count": self.completed_count,
            "revenue": format_amount(self.revenue),
            "top_service": self.top_service,
            "top_client": self.top_client,
        }


@dataclass
class WeekdayHistogramResponse:
    """DTO for the appointments-per-weekday histogram (Sunday first)."""

    labels: List[str]
    counts: List[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": [
                {"weekday": index, "label": label, "count": count}
                for index, (label, count) in enumerate(zip(self.labels, self.counts))
            ],
            "total": sum(self.counts),
        }
