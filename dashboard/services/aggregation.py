"""
Dashboard aggregation functions.

Pure functions turning entity collections (lists of records from
:mod:`dashboard.records`) into the view models the dashboard screens
render: headline stats, per-ward bed occupancy, day and week appointment
views and department queues.

None of these functions mutate their inputs or touch a store.  A missing
collection (``None``) is treated as empty and rates over an empty set are
0, so a partially loaded dashboard still renders.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..constants import ALL_WARDS, PATIENT_ADMITTED, PATIENT_WAITING, UNKNOWN_PATIENT
from .calendar import EARLIEST, SUNDAY, as_date, as_datetime, is_same_day, week_days


def _items(collection: Optional[Iterable]) -> list:
    return list(collection or [])


def occupancy_rate(occupied: int, total: int) -> int:
    """Percentage of ``occupied`` over ``total`` rounded to an integer (0 when empty)."""
    if not total:
        return 0
    # half up, not banker's rounding: 12.5 -> 13
    return int(100 * occupied / total + 0.5)


def occupancy_level(rate: int) -> str:
    if rate > 80:
        return 'danger'
    if rate > 60:
        return 'warning'
    return 'success'


def wait_time_level(minutes: int) -> str:
    if (minutes or 0) > 60:
        return 'danger'
    if (minutes or 0) > 30:
        return 'warning'
    return 'success'


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def compute_dashboard_stats(patients, appointments, beds, today) -> dict:
    """Headline numbers for the dashboard cards.

    ``today`` is supplied by the caller so results do not depend on the
    wall clock.
    """
    patients = _items(patients)
    beds = _items(beds)
    total_beds = len(beds)
    occupied_beds = sum(1 for bed in beds if bed.is_occupied)
    return {
        'totalPatients': len(patients),
        'admittedPatients': sum(1 for p in patients if p.status == PATIENT_ADMITTED),
        'todayAppointments': len(filtered_appointments_for_date(appointments, today)),
        'availableBeds': total_beds - occupied_beds,
        'bedOccupancyRate': occupancy_rate(occupied_beds, total_beds),
    }


def recent_patients(patients, limit: int = 5) -> list:
    """The ``limit`` most recently admitted patients, newest first.

    The sort is stable so patients sharing an admission time keep their
    input order; patients without an admission date sort last.
    """
    def admitted_at(patient):
        moment = as_datetime(patient.admission_date)
        return (moment is not None, moment or EARLIEST)

    ordered = sorted(_items(patients), key=admitted_at, reverse=True)
    return ordered[:max(limit, 0)]


# ---------------------------------------------------------------------------
# Beds
# ---------------------------------------------------------------------------

def bed_occupancy_by_ward(beds) -> dict[str, dict[str, int]]:
    """Map each ward name to ``{'total': n, 'occupied': m}`` in one pass."""
    wards: dict[str, dict[str, int]] = {}
    for bed in _items(beds):
        entry = wards.setdefault(bed.ward_name, {'total': 0, 'occupied': 0})
        entry['total'] += 1
        if bed.is_occupied:
            entry['occupied'] += 1
    return wards


def list_wards(beds) -> list[str]:
    """Distinct ward names in the order they first appear."""
    return list(dict.fromkeys(bed.ward_name for bed in _items(beds)))


def filter_beds_by_ward(beds, ward_name: Optional[str]) -> list:
    beds = _items(beds)
    if not ward_name or ward_name == ALL_WARDS:
        return beds
    return [bed for bed in beds if bed.ward_name == ward_name]


def ward_stats(beds, ward_name: str) -> dict[str, int]:
    ward_beds = [bed for bed in _items(beds) if bed.ward_name == ward_name]
    total = len(ward_beds)
    occupied = sum(1 for bed in ward_beds if bed.is_occupied)
    return {
        'occupied': occupied,
        'total': total,
        'available': total - occupied,
        'occupancyRate': occupancy_rate(occupied, total),
    }


def ward_overview(beds) -> list[dict]:
    """Stats for every ward, with the colour level the bed screen uses."""
    occupancy = bed_occupancy_by_ward(beds)
    overview = []
    for ward_name in list_wards(beds):
        counts = occupancy[ward_name]
        rate = occupancy_rate(counts['occupied'], counts['total'])
        overview.append({
            'wardName': ward_name,
            'occupied': counts['occupied'],
            'total': counts['total'],
            'available': counts['total'] - counts['occupied'],
            'occupancyRate': rate,
            'level': occupancy_level(rate),
        })
    return overview


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------

def filtered_appointments_for_date(appointments, day) -> list:
    """Appointments falling on the calendar date of ``day``."""
    target = as_date(day)
    if target is None:
        return []
    return [apt for apt in _items(appointments) if is_same_day(apt.date, target)]


def week_appointments(appointments, reference_date, week_starts_on: int = SUNDAY) -> list[dict]:
    """Seven ``{'date', 'appointments'}`` entries for the week of ``reference_date``.

    Days without appointments are kept with an empty list.
    """
    by_day: dict[date, list] = {}
    for apt in _items(appointments):
        day = as_date(apt.date)
        if day is not None:
            by_day.setdefault(day, []).append(apt)
    return [
        {'date': day, 'appointments': by_day.get(day, [])}
        for day in week_days(reference_date, week_starts_on)
    ]


# ---------------------------------------------------------------------------
# Patients & department queues
# ---------------------------------------------------------------------------

def department_patients(patients, department_name: Optional[str]) -> list:
    slug = (department_name or '').strip().lower()
    return [
        p for p in _items(patients)
        if (p.current_department or '').strip().lower() == slug
    ]


def patients_by_status(patients, status: str) -> list:
    return [p for p in _items(patients) if p.status == status]


def queue_positions(patients) -> list[dict]:
    """Attach 1-based queue positions, keeping input order."""
    return [
        {'position': index, 'patient': patient}
        for index, patient in enumerate(_items(patients), start=1)
    ]


def department_queue(patients, department_name: str) -> dict:
    members = department_patients(patients, department_name)
    return {
        'total': len(members),
        'waiting': queue_positions(patients_by_status(members, PATIENT_WAITING)),
        'admitted': queue_positions(patients_by_status(members, PATIENT_ADMITTED)),
    }


def search_patients(patients, term: Optional[str] = None, department: Optional[str] = None) -> list:
    """Name / display id substring search plus an optional department filter."""
    result = _items(patients)
    needle = (term or '').strip().lower()
    if needle:
        result = [
            p for p in result
            if needle in (p.name or '').lower() or needle in p.display_id.lower()
        ]
    slug = (department or '').strip().lower()
    if slug:
        result = [p for p in result if (p.current_department or '').strip().lower() == slug]
    return result


def find_record(records, key):
    for record in _items(records):
        if record.key == key:
            return record
    return None


def patient_name(patients, key) -> str:
    patient = find_record(patients, key)
    return patient.name if patient else UNKNOWN_PATIENT
