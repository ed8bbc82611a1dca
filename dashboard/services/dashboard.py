"""
Dashboard composition: load every collection, then derive the summary.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.cache import cache

from .aggregation import (
    bed_occupancy_by_ward,
    compute_dashboard_stats,
    filtered_appointments_for_date,
    occupancy_rate,
    patient_name,
    recent_patients,
    wait_time_level,
)
from .broadcast import summary_cache_key
from ..serializers import AppointmentSerializer, DepartmentSerializer, PatientSerializer

logger = logging.getLogger(__name__)

RECENT_PATIENT_LIMIT = 5


@dataclass
class Collections:
    patients: list
    appointments: list
    beds: list
    departments: list


async def load_collections(stores) -> Collections:
    """Fetch the four collections concurrently."""
    patients, appointments, beds, departments = await asyncio.gather(
        stores.patients.get_all(),
        stores.appointments.get_all(),
        stores.beds.get_all(),
        stores.departments.get_all(),
    )
    logger.debug(
        "loaded %d patients, %d appointments, %d beds, %d departments",
        len(patients), len(appointments), len(beds), len(departments),
    )
    return Collections(patients, appointments, beds, departments)


def build_summary(collections: Collections, today) -> dict:
    """Everything the dashboard page shows, still holding records.

    Serialisation to JSON is left to the view.
    """
    occupancy = bed_occupancy_by_ward(collections.beds)
    return {
        'stats': compute_dashboard_stats(
            collections.patients, collections.appointments, collections.beds, today,
        ),
        'recentPatients': recent_patients(collections.patients, RECENT_PATIENT_LIMIT),
        'todayAppointments': filtered_appointments_for_date(collections.appointments, today),
        'departmentStatus': [
            {'department': dept, 'waitLevel': wait_time_level(dept.average_wait_time)}
            for dept in collections.departments
        ],
        'bedOccupancy': {
            ward: {**counts, 'occupancyRate': occupancy_rate(counts['occupied'], counts['total'])}
            for ward, counts in occupancy.items()
        },
    }


def appointment_payload(appointment, patients) -> dict:
    return {
        **AppointmentSerializer(appointment).data,
        'patientName': patient_name(patients, appointment.patient_id),
    }


def render_summary(summary: dict, collections: Collections, today) -> dict:
    """JSON-ready form of :func:`build_summary`."""
    return {
        'date': today.isoformat(),
        'stats': summary['stats'],
        'recentPatients': list(PatientSerializer(summary['recentPatients'], many=True).data),
        'todayAppointments': [
            appointment_payload(apt, collections.patients) for apt in summary['todayAppointments']
        ],
        'departmentStatus': [
            {**DepartmentSerializer(entry['department']).data, 'waitLevel': entry['waitLevel']}
            for entry in summary['departmentStatus']
        ],
        'bedOccupancy': summary['bedOccupancy'],
    }


def cached_summary(context, today, refresh: bool = False) -> dict:
    """Rendered dashboard summary for ``today``, served from the cache when possible."""
    key = summary_cache_key(today)
    data = None if refresh else cache.get(key)
    if data is None:
        logger.debug("dashboard summary cache miss for %s", today)
        collections = async_to_sync(load_collections)(context.stores)
        data = render_summary(build_summary(collections, today), collections, today)
        cache.set(key, data, settings.DASHBOARD_CACHE_SECONDS)
    return data
