"""
Department endpoints.

Departments are listed with a wait level derived from their average
wait time; the queue endpoint lists the department's waiting and
admitted patients with their positions.  Renaming a department moves
the patients and appointments filed under its old slug to the new one.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from ..records import DepartmentRecord
from ..serializers import DepartmentSerializer, PatientSerializer
from ..services.aggregation import department_patients, department_queue, wait_time_level
from ..services.broadcast import notify_change
from .common import stores

logger = logging.getLogger(__name__)


def _department_payload(department) -> dict:
    return {
        **DepartmentSerializer(department).data,
        'waitLevel': wait_time_level(department.average_wait_time),
    }


async def _move_department_members(context_stores, old_slug: str, new_slug: str) -> int:
    """Point patients and appointments filed under ``old_slug`` at ``new_slug``."""
    patients, appointments = await asyncio.gather(
        context_stores.patients.get_all(), context_stores.appointments.get_all(),
    )
    moved_patients = department_patients(patients, old_slug)
    moved_appointments = [apt for apt in appointments if (apt.department or '').strip().lower() == old_slug]
    await asyncio.gather(
        *(context_stores.patients.update(p.key, replace(p, current_department=new_slug)) for p in moved_patients),
        *(context_stores.appointments.update(a.key, replace(a, department=new_slug)) for a in moved_appointments),
    )
    return len(moved_patients) + len(moved_appointments)


def _ensure_unique_name(existing, name: str, exclude=None):
    slug = name.strip().lower()
    for dept in existing:
        if dept.key != exclude and dept.slug == slug:
            raise ValidationError({'name': [f"Department {name} already exists."]})


@api_view(['GET', 'POST'])
def departments(request):
    store = stores().departments
    records = async_to_sync(store.get_all)()
    if request.method == 'GET':
        return Response([_department_payload(dept) for dept in records])

    s = DepartmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    _ensure_unique_name(records, s.validated_data['name'])
    record = async_to_sync(store.create)(dict(s.validated_data))
    notify_change('department', 'created', record.key)
    return Response(_department_payload(record), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
def department_detail(request, department_id: int):
    store = stores().departments
    current = async_to_sync(store.get_by_id)(department_id)
    if request.method == 'GET':
        return Response(_department_payload(current))

    if request.method == 'DELETE':
        async_to_sync(store.delete)(department_id)
        notify_change('department', 'deleted', department_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = DepartmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    _ensure_unique_name(async_to_sync(store.get_all)(), s.validated_data['name'], exclude=department_id)
    record = async_to_sync(store.update)(department_id, DepartmentRecord(key=department_id, **s.validated_data))
    if record.slug != current.slug:
        moved = async_to_sync(_move_department_members)(stores(), current.slug, record.slug)
        logger.info("department %s renamed %s -> %s, moved %d records", department_id, current.slug, record.slug, moved)
    notify_change('department', 'updated', department_id)
    return Response(_department_payload(record))


@api_view(['GET'])
def department_queue_view(request, department_id: int):
    context_stores = stores()
    department = async_to_sync(context_stores.departments.get_by_id)(department_id)
    patients = async_to_sync(context_stores.patients.get_all)()
    queue = department_queue(patients, department.name)

    def positions(entries):
        return [
            {'position': entry['position'], 'patient': PatientSerializer(entry['patient']).data}
            for entry in entries
        ]

    return Response({
        'department': _department_payload(department),
        'total': queue['total'],
        'waiting': positions(queue['waiting']),
        'admitted': positions(queue['admitted']),
    })
