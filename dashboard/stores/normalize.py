"""
Translation between hosted-backend rows and canonical records.

The hosted table backend names every custom column with a ``_c`` suffix
(``age_c``, ``ward_name_c`` ...), uses ``Id`` for the key and ``Name`` for
the display name, and stores allergies as one comma separated string.
This module is the only place that knows those names; everything past
the store sees :mod:`dashboard.records`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..records import AppointmentRecord, BedRecord, DepartmentRecord, PatientRecord
from ..services.calendar import as_date, as_datetime


def _int(value, default=None):
    if value is None or value == '':
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {'1', 'true', 'yes'}
    return bool(value)


def _iso(value):
    return value.isoformat() if value is not None else None


def _lookup_id(value):
    # lookup columns come back either as a bare id or as {"Id": .., "Name": ..}
    if isinstance(value, dict):
        value = value.get('Id')
    return _int(value)


# ---------------------------------------------------------------------------
# Patient
# ---------------------------------------------------------------------------

def patient_from_row(row: dict) -> PatientRecord:
    return PatientRecord(
        key=_int(row.get('Id')),
        name=row.get('Name') or '',
        age=_int(row.get('age_c')),
        gender=row.get('gender_c') or '',
        phone=row.get('phone_c') or '',
        emergency_contact=row.get('emergency_contact_c') or '',
        blood_group=row.get('blood_group_c') or '',
        allergies=row.get('allergies_c') or (),
        current_department=(row.get('current_department_c') or '').lower(),
        status=row.get('status_c') or '',
        admission_date=as_datetime(row.get('admission_date_c')),
    )


def patient_to_row(record: PatientRecord) -> dict:
    return {
        'Name': record.name,
        'age_c': record.age,
        'gender_c': record.gender,
        'phone_c': record.phone,
        'emergency_contact_c': record.emergency_contact,
        'blood_group_c': record.blood_group,
        'allergies_c': ','.join(record.allergies),
        'current_department_c': record.current_department,
        'status_c': record.status,
        'admission_date_c': _iso(record.admission_date),
    }


# ---------------------------------------------------------------------------
# Appointment
# ---------------------------------------------------------------------------

def appointment_from_row(row: dict) -> AppointmentRecord:
    return AppointmentRecord(
        key=_int(row.get('Id')),
        patient_id=_lookup_id(row.get('patient_id_c')),
        doctor_id=row.get('doctor_id_c') or '',
        department=(row.get('department_c') or '').lower(),
        date=as_date(row.get('date_c')),
        time_slot=row.get('time_slot_c') or '',
        status=row.get('status_c') or '',
        notes=row.get('notes_c') or '',
    )


def appointment_to_row(record: AppointmentRecord) -> dict:
    return {
        'Name': f"Appointment - {record.time_slot}",
        'patient_id_c': record.patient_id,
        'doctor_id_c': record.doctor_id,
        'department_c': record.department,
        'date_c': _iso(record.date),
        'time_slot_c': record.time_slot,
        'status_c': record.status,
        'notes_c': record.notes,
    }


# ---------------------------------------------------------------------------
# Department
# ---------------------------------------------------------------------------

def department_from_row(row: dict) -> DepartmentRecord:
    return DepartmentRecord(
        key=_int(row.get('Id')),
        name=row.get('Name') or '',
        current_queue=_int(row.get('current_queue_c'), 0),
        average_wait_time=_int(row.get('average_wait_time_c'), 0),
        active_staff=_int(row.get('active_staff_c'), 0),
    )


def department_to_row(record: DepartmentRecord) -> dict:
    return {
        'Name': record.name,
        'current_queue_c': record.current_queue,
        'average_wait_time_c': record.average_wait_time,
        'active_staff_c': record.active_staff,
    }


# ---------------------------------------------------------------------------
# Bed
# ---------------------------------------------------------------------------

def bed_from_row(row: dict) -> BedRecord:
    occupied = _bool(row.get('is_occupied_c'))
    # a free bed never carries a patient or an admission time
    return BedRecord(
        key=_int(row.get('Id')),
        ward_name=row.get('ward_name_c') or '',
        bed_number=str(row.get('bed_number_c') or ''),
        is_occupied=occupied,
        patient_id=_lookup_id(row.get('patient_id_c')) if occupied else None,
        admitted_date=as_datetime(row.get('admitted_date_c')) if occupied else None,
    )


def bed_to_row(record: BedRecord) -> dict:
    return {
        'Name': f"Bed {record.bed_number}",
        'ward_name_c': record.ward_name,
        'bed_number_c': record.bed_number,
        'is_occupied_c': record.is_occupied,
        'patient_id_c': record.patient_id,
        'admitted_date_c': _iso(record.admitted_date),
    }


@dataclass(frozen=True)
class TableCodec:
    table: str
    columns: tuple[str, ...]
    order_by: tuple[tuple[str, str], ...]
    from_row: Callable[[dict], object]
    to_row: Callable[[object], dict]


CODECS = {
    'patient': TableCodec(
        table='patient_c',
        columns=('Name', 'age_c', 'gender_c', 'phone_c', 'emergency_contact_c', 'blood_group_c',
                 'allergies_c', 'current_department_c', 'status_c', 'admission_date_c'),
        order_by=(('CreatedOn', 'DESC'),),
        from_row=patient_from_row,
        to_row=patient_to_row,
    ),
    'appointment': TableCodec(
        table='appointment_c',
        columns=('Name', 'patient_id_c', 'doctor_id_c', 'department_c', 'date_c', 'time_slot_c',
                 'status_c', 'notes_c'),
        order_by=(('date_c', 'DESC'),),
        from_row=appointment_from_row,
        to_row=appointment_to_row,
    ),
    'department': TableCodec(
        table='department_c',
        columns=('Name', 'current_queue_c', 'average_wait_time_c', 'active_staff_c'),
        order_by=(('Name', 'ASC'),),
        from_row=department_from_row,
        to_row=department_to_row,
    ),
    'bed': TableCodec(
        table='bed_c',
        columns=('Name', 'ward_name_c', 'bed_number_c', 'is_occupied_c', 'patient_id_c', 'admitted_date_c'),
        order_by=(('ward_name_c', 'ASC'), ('bed_number_c', 'ASC')),
        from_row=bed_from_row,
        to_row=bed_to_row,
    ),
}
