"""
Bed and ward endpoints.

A bed is either free or occupied by exactly one patient; occupying and
discharging go through dedicated actions so the patient and admission
time stay consistent with ``isOccupied``.
"""
from __future__ import annotations

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from ..records import BedRecord
from ..serializers import BedQuerySerializer, BedSerializer, OccupyBedSerializer
from ..services.aggregation import filter_beds_by_ward, ward_overview
from ..services.broadcast import notify_change
from ..services.transitions import occupy_bed, release_bed
from .common import require_patient, stores


def _ensure_unique_bed(existing, ward_name: str, bed_number: str, exclude=None):
    for bed in existing:
        if bed.key != exclude and bed.ward_name == ward_name and bed.bed_number == bed_number:
            raise ValidationError({'bedNumber': [f"Bed {bed_number} already exists in {ward_name}."]})


@api_view(['GET', 'POST'])
def beds(request):
    store = stores().beds
    if request.method == 'GET':
        q = BedQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        records = filter_beds_by_ward(async_to_sync(store.get_all)(), q.validated_data.get('ward'))
        return Response(BedSerializer(records, many=True).data)

    s = BedSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    _ensure_unique_bed(async_to_sync(store.get_all)(), s.validated_data['ward_name'], s.validated_data['bed_number'])
    if s.validated_data.get('patient_id') is not None:
        require_patient(s.validated_data['patient_id'])
    record = async_to_sync(store.create)(dict(s.validated_data))
    notify_change('bed', 'created', record.key)
    return Response(BedSerializer(record).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def ward_list(request):
    return Response(ward_overview(async_to_sync(stores().beds.get_all)()))


@api_view(['GET', 'PUT', 'DELETE'])
def bed_detail(request, bed_id: int):
    store = stores().beds
    current = async_to_sync(store.get_by_id)(bed_id)
    if request.method == 'GET':
        return Response(BedSerializer(current).data)

    if request.method == 'DELETE':
        async_to_sync(store.delete)(bed_id)
        notify_change('bed', 'deleted', bed_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = BedSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    _ensure_unique_bed(
        async_to_sync(store.get_all)(), s.validated_data['ward_name'], s.validated_data['bed_number'], exclude=bed_id,
    )
    if s.validated_data.get('patient_id') is not None:
        require_patient(s.validated_data['patient_id'])
    record = async_to_sync(store.update)(bed_id, BedRecord(key=bed_id, **s.validated_data))
    notify_change('bed', 'updated', bed_id)
    return Response(BedSerializer(record).data)


@api_view(['POST'])
def bed_occupy(request, bed_id: int):
    s = OccupyBedSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    store = stores().beds
    current = async_to_sync(store.get_by_id)(bed_id)
    patient = require_patient(s.validated_data['patientId'])
    try:
        occupied = occupy_bed(current, patient.key)
    except ValueError as exc:
        raise ValidationError({'isOccupied': [str(exc)]}) from exc
    record = async_to_sync(store.update)(bed_id, occupied)
    notify_change('bed', 'updated', bed_id)
    return Response(BedSerializer(record).data)


@api_view(['POST'])
def bed_discharge(request, bed_id: int):
    store = stores().beds
    current = async_to_sync(store.get_by_id)(bed_id)
    record = async_to_sync(store.update)(bed_id, release_bed(current))
    notify_change('bed', 'updated', bed_id)
    return Response(BedSerializer(record).data)
