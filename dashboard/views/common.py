"""Helpers shared by the API views for reaching the async stores."""
from __future__ import annotations

import asyncio

from asgiref.sync import async_to_sync
from rest_framework.exceptions import ValidationError

from ..context import get_context
from ..exceptions import RecordNotFound


def stores():
    return get_context().stores


async def _gather_all(entity_stores):
    return await asyncio.gather(*(store.get_all() for store in entity_stores))


def fetch_all(*entity_stores) -> list[list]:
    """``get_all`` on several stores concurrently, results in argument order."""
    return async_to_sync(_gather_all)(entity_stores)


def require_patient(patient_id: int):
    """Return the patient or fail validation on ``patientId``."""
    try:
        return async_to_sync(stores().patients.get_by_id)(patient_id)
    except RecordNotFound:
        raise ValidationError({'patientId': [f"Patient {patient_id} does not exist."]}) from None
