"""
Entity store contract.

A store owns one entity collection and exposes five coroutines.  The
dashboard only depends on this contract, never on how a backend keeps its
records.
"""
from __future__ import annotations

from dataclasses import dataclass


class EntityStore:
    """Base class for all store backends.

    ``get_by_id``, ``update`` and ``delete`` raise
    :class:`dashboard.exceptions.RecordNotFound` for an unknown key.
    ``update`` replaces the whole record; there is no partial patch.
    """

    entity = 'record'
    record_type = None

    async def get_all(self) -> list:
        raise NotImplementedError

    async def get_by_id(self, key):
        raise NotImplementedError

    async def create(self, data: dict):
        raise NotImplementedError

    async def update(self, key, record):
        raise NotImplementedError

    async def delete(self, key) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.entity}>"


@dataclass
class StoreSet:
    patients: EntityStore
    appointments: EntityStore
    departments: EntityStore
    beds: EntityStore

    def by_entity(self) -> dict[str, EntityStore]:
        return {
            'patient': self.patients,
            'appointment': self.appointments,
            'department': self.departments,
            'bed': self.beds,
        }
