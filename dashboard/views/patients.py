"""
Patient endpoints: listing with search, registration, full replacement
and the waiting -> admitted -> discharged progression.
"""
from __future__ import annotations

from asgiref.sync import async_to_sync
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..records import PatientRecord
from ..serializers import PatientListQuerySerializer, PatientSerializer
from ..services.aggregation import patients_by_status, search_patients
from ..services.broadcast import notify_change
from ..services.transitions import advance_patient
from .common import stores


@api_view(['GET', 'POST'])
def patients(request):
    store = stores().patients
    if request.method == 'GET':
        q = PatientListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        records = search_patients(
            async_to_sync(store.get_all)(), q.validated_data.get('search'), q.validated_data.get('department'),
        )
        if q.validated_data.get('status'):
            records = patients_by_status(records, q.validated_data['status'])
        return Response(PatientSerializer(records, many=True).data)

    s = PatientSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    if data.get('admission_date') is None:
        data['admission_date'] = timezone.now()
    record = async_to_sync(store.create)(data)
    notify_change('patient', 'created', record.key)
    return Response(PatientSerializer(record).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
def patient_detail(request, patient_id: int):
    store = stores().patients
    current = async_to_sync(store.get_by_id)(patient_id)
    if request.method == 'GET':
        return Response(PatientSerializer(current).data)

    if request.method == 'DELETE':
        async_to_sync(store.delete)(patient_id)
        notify_change('patient', 'deleted', patient_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = PatientSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = dict(s.validated_data)
    if data.get('admission_date') is None:
        data['admission_date'] = current.admission_date
    record = async_to_sync(store.update)(patient_id, PatientRecord(key=patient_id, **data))
    notify_change('patient', 'updated', patient_id)
    return Response(PatientSerializer(record).data)


@api_view(['POST'])
def patient_advance(request, patient_id: int):
    """Move a patient one step along waiting -> admitted -> discharged."""
    store = stores().patients
    current = async_to_sync(store.get_by_id)(patient_id)
    record = async_to_sync(store.update)(patient_id, advance_patient(current))
    notify_change('patient', 'updated', patient_id)
    return Response(PatientSerializer(record).data)
