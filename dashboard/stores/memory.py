"""In-memory mock store with simulated latency, used for demos and tests."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from ..exceptions import RecordNotFound
from .base import EntityStore

logger = logging.getLogger(__name__)


class MemoryStore(EntityStore):
    def __init__(self, entity: str, record_type, records=(), latency: float = 0.0):
        self.entity = entity
        self.record_type = record_type
        self.latency = latency
        self._records = list(records)
        self._next_key = max((r.key for r in self._records), default=0) + 1

    async def _pause(self):
        if self.latency:
            await asyncio.sleep(self.latency)

    def _index(self, key) -> int:
        for index, record in enumerate(self._records):
            if record.key == key:
                return index
        raise RecordNotFound(self.entity, key)

    async def get_all(self) -> list:
        await self._pause()
        return list(self._records)

    async def get_by_id(self, key):
        await self._pause()
        return self._records[self._index(key)]

    async def create(self, data: dict):
        await self._pause()
        fields = {k: v for k, v in data.items() if k != 'key'}
        record = self.record_type(key=self._next_key, **fields)
        self._next_key += 1
        self._records.append(record)
        logger.info("created %s %s", self.entity, record.key)
        return record

    async def update(self, key, record):
        await self._pause()
        index = self._index(key)
        updated = replace(record, key=key)
        self._records[index] = updated
        logger.info("updated %s %s", self.entity, key)
        return updated

    async def delete(self, key) -> bool:
        await self._pause()
        del self._records[self._index(key)]
        logger.info("deleted %s %s", self.entity, key)
        return True
