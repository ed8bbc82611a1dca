"""
Canonical in-memory records for the dashboard entities.

Every store backend (database, hosted table API, in-memory mock) converts
its own representation into these dataclasses, so the aggregation code
only ever sees one field naming.  Records are immutable; an update
replaces the whole record (see :func:`dataclasses.replace`).
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Iterable, Optional, Union

from .constants import APPOINTMENT_SCHEDULED, PATIENT_WAITING


def normalize_allergies(value: Union[str, Iterable[str], None]) -> tuple[str, ...]:
    """Return allergies as trimmed, non-empty, de-duplicated strings.

    Accepts either an iterable of strings or a comma separated string
    (the form used by the registration screen).  Order of first
    appearance is preserved.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(',')
    seen: dict[str, None] = {}
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text and text not in seen:
            seen[text] = None
    return tuple(seen)


@dataclass(frozen=True)
class PatientRecord:
    key: int
    name: str = ''
    age: Optional[int] = None
    gender: str = ''
    phone: str = ''
    emergency_contact: str = ''
    blood_group: str = ''
    allergies: tuple[str, ...] = ()
    current_department: str = ''
    status: str = PATIENT_WAITING
    admission_date: Optional[datetime] = None

    display_prefix = 'PAT'

    def __post_init__(self):
        # allergies may arrive as a list or a comma separated string
        object.__setattr__(self, 'allergies', normalize_allergies(self.allergies))

    @property
    def display_id(self) -> str:
        return f"{self.display_prefix}-{self.key:05d}"


@dataclass(frozen=True)
class AppointmentRecord:
    key: int
    patient_id: Optional[int] = None
    doctor_id: str = ''
    department: str = ''
    date: Optional[date] = None
    time_slot: str = ''
    status: str = APPOINTMENT_SCHEDULED
    notes: str = ''

    display_prefix = 'APT'

    @property
    def display_id(self) -> str:
        return f"{self.display_prefix}-{self.key:05d}"


@dataclass(frozen=True)
class DepartmentRecord:
    key: int
    name: str = ''
    current_queue: int = 0
    average_wait_time: int = 0
    active_staff: int = 0

    @property
    def slug(self) -> str:
        return (self.name or '').strip().lower()


@dataclass(frozen=True)
class BedRecord:
    key: int
    ward_name: str = ''
    bed_number: str = ''
    is_occupied: bool = False
    patient_id: Optional[int] = None
    admitted_date: Optional[datetime] = None


def record_field_names(record_type) -> list[str]:
    """Names of the data fields of ``record_type`` excluding ``key``."""
    return [f.name for f in fields(record_type) if f.name != 'key']
