"""
Appointment endpoints.

Listings carry the patient's name next to each appointment; an
appointment whose patient has gone away shows ``Unknown Patient``.
"""
from __future__ import annotations

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from ..context import get_context
from ..records import AppointmentRecord
from ..serializers import (
    AppointmentSerializer,
    AppointmentStatusSerializer,
    DateQuerySerializer,
    WeekQuerySerializer,
)
from ..services.aggregation import filtered_appointments_for_date, week_appointments
from ..services.broadcast import notify_change
from ..services.calendar import start_of_week
from ..services.dashboard import appointment_payload
from ..services.transitions import set_appointment_status
from .common import fetch_all, require_patient, stores


@api_view(['GET', 'POST'])
def appointments(request):
    store = stores().appointments
    if request.method == 'GET':
        q = DateQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        records, patients = fetch_all(store, stores().patients)
        if q.validated_data.get('date'):
            records = filtered_appointments_for_date(records, q.validated_data['date'])
        return Response([appointment_payload(apt, patients) for apt in records])

    s = AppointmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = require_patient(s.validated_data['patient_id'])
    record = async_to_sync(store.create)(dict(s.validated_data))
    notify_change('appointment', 'created', record.key)
    return Response(appointment_payload(record, [patient]), status=status.HTTP_201_CREATED)


@api_view(['GET'])
def appointment_week(request):
    q = WeekQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    context = get_context()
    reference = q.validated_data.get('date') or context.today()
    week_starts_on = q.validated_data.get('weekStartsOn', context.week_starts_on)
    records, patients = fetch_all(context.stores.appointments, context.stores.patients)
    days = week_appointments(records, reference, week_starts_on)
    return Response({
        'weekStart': start_of_week(reference, week_starts_on).isoformat(),
        'weekStartsOn': week_starts_on,
        'days': [
            {
                'date': day['date'].isoformat(),
                'appointments': [appointment_payload(apt, patients) for apt in day['appointments']],
            }
            for day in days
        ],
    })


@api_view(['GET', 'PUT', 'DELETE'])
def appointment_detail(request, appointment_id: int):
    store = stores().appointments
    current = async_to_sync(store.get_by_id)(appointment_id)
    if request.method == 'GET':
        patients = async_to_sync(stores().patients.get_all)()
        return Response(appointment_payload(current, patients))

    if request.method == 'DELETE':
        async_to_sync(store.delete)(appointment_id)
        notify_change('appointment', 'deleted', appointment_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = AppointmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = require_patient(s.validated_data['patient_id'])
    record = async_to_sync(store.update)(
        appointment_id, AppointmentRecord(key=appointment_id, **s.validated_data),
    )
    notify_change('appointment', 'updated', appointment_id)
    return Response(appointment_payload(record, [patient]))


@api_view(['POST'])
def appointment_status(request, appointment_id: int):
    s = AppointmentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    store = stores().appointments
    current = async_to_sync(store.get_by_id)(appointment_id)
    try:
        changed = set_appointment_status(current, s.validated_data['status'])
    except ValueError as exc:
        raise ValidationError({'status': [str(exc)]}) from exc
    record = async_to_sync(store.update)(appointment_id, changed)
    notify_change('appointment', 'updated', appointment_id)
    patients = async_to_sync(stores().patients.get_all)()
    return Response(appointment_payload(record, patients))
