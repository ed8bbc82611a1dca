"""Database-backed stores built on the Django async ORM API."""
from __future__ import annotations

import logging
from dataclasses import asdict

from ..exceptions import RecordNotFound
from ..models import Appointment, Bed, Department, Patient
from ..records import (
    AppointmentRecord,
    BedRecord,
    DepartmentRecord,
    PatientRecord,
    record_field_names,
)
from .base import EntityStore

logger = logging.getLogger(__name__)


class ModelStore(EntityStore):
    model = None
    ordering: tuple[str, ...] = ('id',)

    def __init__(self):
        self.field_names = record_field_names(self.record_type)

    def to_record(self, obj):
        return self.record_type(key=obj.pk, **{name: getattr(obj, name) for name in self.field_names})

    def to_fields(self, data) -> dict:
        if not isinstance(data, dict):
            data = asdict(data)
        values = {name: data[name] for name in self.field_names if name in data}
        if 'allergies' in values:
            values['allergies'] = list(values['allergies'] or [])
        return values

    async def _get(self, key):
        try:
            return await self.model.objects.aget(pk=key)
        except self.model.DoesNotExist:
            raise RecordNotFound(self.entity, key) from None

    async def get_all(self) -> list:
        return [self.to_record(obj) async for obj in self.model.objects.order_by(*self.ordering)]

    async def get_by_id(self, key):
        return self.to_record(await self._get(key))

    async def create(self, data: dict):
        obj = await self.model.objects.acreate(**self.to_fields(data))
        logger.info("created %s %s", self.entity, obj.pk)
        return self.to_record(obj)

    async def update(self, key, record):
        obj = await self._get(key)
        for name, value in self.to_fields(record).items():
            setattr(obj, name, value)
        await obj.asave()
        logger.info("updated %s %s", self.entity, key)
        return self.to_record(obj)

    async def delete(self, key) -> bool:
        obj = await self._get(key)
        await obj.adelete()
        logger.info("deleted %s %s", self.entity, key)
        return True


class PatientStore(ModelStore):
    entity = 'patient'
    model = Patient
    record_type = PatientRecord
    # newest registrations first
    ordering = ('-id',)


class AppointmentStore(ModelStore):
    entity = 'appointment'
    model = Appointment
    record_type = AppointmentRecord
    ordering = ('-date', 'id')


class DepartmentStore(ModelStore):
    entity = 'department'
    model = Department
    record_type = DepartmentRecord
    ordering = ('name',)


class BedStore(ModelStore):
    entity = 'bed'
    model = Bed
    record_type = BedRecord
    ordering = ('ward_name', 'bed_number')
