"""
Repository tests against the in-memory SQLite store.
"""

from datetime import date, time
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.exceptions import ConflictError
from app.db.base import Appointment as AppointmentModel
from app.utils.calendar_buckets import DateRange
from tests.factories.repository_factories import make_appointment


def count_rows(db_session) -> int:
    return db_session.execute(
        select(func.count()).select_from(AppointmentModel)
    ).scalar_one()


def test_insert_persists_and_returns_domain(appointment_repo, db_session):
    returned = appointment_repo.insert(make_appointment(amount="35.00"))

    assert returned.id is not None
    assert returned.created_at is not None

    persisted = db_session.get(AppointmentModel, returned.id)
    assert persisted.client_name == "João Silva"
    assert persisted.date == date(2024, 3, 10)
    assert persisted.time == time(14, 0)
    assert persisted.status == "pending"
    assert Decimal(persisted.amount) == Decimal("35.00")


def test_double_booking_same_slot_raises_conflict(appointment_repo, db_session):
    appointment_repo.insert(make_appointment(client_name="Ana"))

    with pytest.raises(ConflictError):
        appointment_repo.insert(make_appointment(client_name="Bruno"))

    assert count_rows(db_session) == 1
    assert appointment_repo.list_appointments()[0].client_name == "Ana"


def test_same_date_different_time_is_allowed(appointment_repo, db_session):
    appointment_repo.insert(make_appointment(at=time(14, 0)))
    appointment_repo.insert(make_appointment(at=time(15, 0)))

    assert count_rows(db_session) == 2


def test_find_conflict(appointment_repo):
    created = appointment_repo.insert(make_appointment())

    assert appointment_repo.find_conflict(date(2024, 3, 10), time(14, 0))
    assert not appointment_repo.find_conflict(date(2024, 3, 10), time(15, 0))
    assert not appointment_repo.find_conflict(date(2024, 3, 11), time(14, 0))
    assert not appointment_repo.find_conflict(
        date(2024, 3, 10), time(14, 0), exclude_id=created.id
    )


def test_get_by_id_returns_none_when_missing(appointment_repo):
    assert appointment_repo.get_by_id(99999) is None


def test_list_is_ordered_by_date_then_time(appointment_repo):
    appointment_repo.insert(make_appointment(day=date(2024, 3, 11), at=time(9, 0)))
    appointment_repo.insert(make_appointment(day=date(2024, 3, 10), at=time(16, 0)))
    appointment_repo.insert(make_appointment(day=date(2024, 3, 10), at=time(8, 30)))

    slots = [apt.slot for apt in appointment_repo.list_appointments()]

    assert slots == [
        (date(2024, 3, 10), time(8, 30)),
        (date(2024, 3, 10), time(16, 0)),
        (date(2024, 3, 11), time(9, 0)),
    ]


def test_list_filters_by_ranges(appointment_repo):
    for day in (date(2023, 1, 1), date(2023, 6, 1), date(2023, 12, 26), date(2024, 1, 1)):
        appointment_repo.insert(make_appointment(day=day))

    ranges = [
        DateRange(date(2023, 1, 1), date(2023, 1, 1)),
        DateRange(date(2023, 12, 25), date(2023, 12, 31)),
    ]
    days = [apt.date for apt in appointment_repo.list_appointments(ranges)]

    assert days == [date(2023, 1, 1), date(2023, 12, 26)]


def test_update_overwrites_fields(appointment_repo):
    created = appointment_repo.insert(make_appointment())

    updated = appointment_repo.update(
        created.id,
        make_appointment(at=time(16, 0), service="Barba", status="completed", amount="20"),
    )

    assert updated.id == created.id
    assert updated.time == time(16, 0)
    assert updated.service == "Barba"
    assert updated.status == "completed"


def test_update_into_occupied_slot_raises_conflict(appointment_repo):
    appointment_repo.insert(make_appointment(at=time(14, 0)))
    other = appointment_repo.insert(make_appointment(at=time(15, 0)))

    with pytest.raises(ConflictError):
        appointment_repo.update(other.id, make_appointment(at=time(14, 0)))

    assert appointment_repo.get_by_id(other.id).time == time(15, 0)


def test_update_missing_returns_none(appointment_repo):
    assert appointment_repo.update(99999, make_appointment()) is None


def test_mark_completed_keeps_other_fields(appointment_repo):
    created = appointment_repo.insert(make_appointment(amount="35"))

    completed = appointment_repo.mark_completed(created.id)

    assert completed.status == "completed"
    assert completed.amount == Decimal("35")
    assert completed.slot == created.slot
    assert appointment_repo.mark_completed(99999) is None


def test_delete_removes_row(appointment_repo, db_session):
    created = appointment_repo.insert(make_appointment())

    deleted = appointment_repo.delete(created.id)

    assert deleted.id == created.id
    assert count_rows(db_session) == 0
    assert appointment_repo.delete(created.id) is None


def test_deleted_slot_can_be_booked_again(appointment_repo):
    created = appointment_repo.insert(make_appointment())
    appointment_repo.delete(created.id)

    assert appointment_repo.insert(make_appointment()).id is not None


def test_completing_missing_id_leaves_store_unchanged(appointment_repo):
    created = appointment_repo.insert(make_appointment())

    assert appointment_repo.mark_completed(99999) is None

    listed = appointment_repo.list_appointments()
    assert [apt.id for apt in listed] == [created.id]
    assert listed[0].status == "pending"


def test_seconds_are_part_of_the_slot(appointment_repo):
    appointment_repo.insert(make_appointment(at=time(14, 0)))
    with_seconds = appointment_repo.insert(make_appointment(at=time(14, 0, 30)))

    assert appointment_repo.get_by_id(with_seconds.id).time == time(14, 0, 30)
    assert not appointment_repo.find_conflict(
        date(2024, 3, 10), time(14, 0, 30), exclude_id=with_seconds.id
    )
