"""
Full-record builders for the page actions.

Stores only accept complete replacement records, so every action (admit,
discharge, occupy a bed ...) is expressed as "old record in, new record
out".  The caller persists the result with ``store.update``.
"""
from __future__ import annotations

from dataclasses import replace

from django.utils import timezone

from ..constants import (
    APPOINTMENT_STATUS_CHOICES,
    PATIENT_ADMITTED,
    PATIENT_DISCHARGED,
    PATIENT_WAITING,
)


def next_patient_status(status: str) -> str:
    """waiting -> admitted; anything else -> discharged."""
    return PATIENT_ADMITTED if status == PATIENT_WAITING else PATIENT_DISCHARGED


def advance_patient(patient):
    return replace(patient, status=next_patient_status(patient.status))


def occupy_bed(bed, patient_id: int, admitted_at=None):
    if bed.is_occupied:
        raise ValueError(f"bed {bed.bed_number} in {bed.ward_name} is already occupied")
    return replace(
        bed,
        is_occupied=True,
        patient_id=patient_id,
        admitted_date=admitted_at or timezone.now(),
    )


def release_bed(bed):
    return replace(bed, is_occupied=False, patient_id=None, admitted_date=None)


def set_appointment_status(appointment, status: str):
    if status not in dict(APPOINTMENT_STATUS_CHOICES):
        raise ValueError(f"invalid appointment status: {status}")
    return replace(appointment, status=status)
