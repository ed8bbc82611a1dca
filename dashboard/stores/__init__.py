"""Entity stores and the factory that wires one backend for all entities."""
from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from ..records import AppointmentRecord, BedRecord, DepartmentRecord, PatientRecord
from .base import EntityStore, StoreSet
from .memory import MemoryStore

RECORD_TYPES = {
    'patient': PatientRecord,
    'appointment': AppointmentRecord,
    'department': DepartmentRecord,
    'bed': BedRecord,
}


def memory_stores(latency: float = 0.0, seed: dict | None = None) -> StoreSet:
    seed = seed or {}
    stores = {
        entity: MemoryStore(entity, record_type, seed.get(entity, ()), latency=latency)
        for entity, record_type in RECORD_TYPES.items()
    }
    return StoreSet(
        patients=stores['patient'],
        appointments=stores['appointment'],
        departments=stores['department'],
        beds=stores['bed'],
    )


def orm_stores() -> StoreSet:
    from .orm import AppointmentStore, BedStore, DepartmentStore, PatientStore

    return StoreSet(
        patients=PatientStore(),
        appointments=AppointmentStore(),
        departments=DepartmentStore(),
        beds=BedStore(),
    )


def hosted_stores(client=None) -> StoreSet:
    from .hosted import HostedStore, HostedTableClient

    client = client or HostedTableClient.from_settings()
    stores = {
        entity: HostedStore(entity, record_type, client)
        for entity, record_type in RECORD_TYPES.items()
    }
    return StoreSet(
        patients=stores['patient'],
        appointments=stores['appointment'],
        departments=stores['department'],
        beds=stores['bed'],
    )


def build_stores(backend: str | None = None) -> StoreSet:
    backend = backend or settings.DASHBOARD_STORE_BACKEND
    if backend == 'orm':
        return orm_stores()
    if backend == 'memory':
        return memory_stores(latency=settings.DASHBOARD_MOCK_LATENCY_MS / 1000)
    if backend == 'hosted':
        return hosted_stores()
    raise ImproperlyConfigured(f"Unknown DASHBOARD_STORE_BACKEND: {backend!r}")


__all__ = [
    'EntityStore',
    'StoreSet',
    'MemoryStore',
    'RECORD_TYPES',
    'build_stores',
    'memory_stores',
    'orm_stores',
    'hosted_stores',
]
