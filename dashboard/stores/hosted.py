"""
Stores backed by the hosted table backend.

The backend exposes one table per entity and wraps every answer in
``{"success": bool, "message": str, "data" | "results": ...}``; write
calls return one result per submitted record.  HTTP is done with
``requests`` in a worker thread so store calls stay awaitable.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests
from asgiref.sync import sync_to_async
from django.conf import settings

from ..exceptions import RecordNotFound, StoreUnavailable
from .base import EntityStore
from .normalize import CODECS, TableCodec

logger = logging.getLogger(__name__)


class HostedTableClient:
    def __init__(self, base_url: str, project_id: str, public_key: str = '', timeout: int = 5,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.project_id = project_id
        self.public_key = public_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls) -> 'HostedTableClient':
        return cls(
            base_url=settings.HOSTED_BACKEND_URL,
            project_id=settings.HOSTED_PROJECT_ID,
            public_key=settings.HOSTED_PUBLIC_KEY,
            timeout=settings.HOSTED_TIMEOUT,
        )

    def _headers(self) -> dict:
        headers = {'X-Project-Id': self.project_id, 'Content-Type': 'application/json'}
        if self.public_key:
            headers['Authorization'] = f"Bearer {self.public_key}"
        return headers

    def _call(self, method: str, table: str, suffix: str = '', payload: Optional[dict] = None) -> dict:
        url = f"{self.base_url}/tables/{table}/records{suffix}"
        try:
            r = self.session.request(method, url, json=payload, headers=self._headers(), timeout=self.timeout)
            r.raise_for_status()
            body = r.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("hosted backend %s %s failed: %s", method, url, exc)
            raise StoreUnavailable(f"hosted backend unreachable: {exc}") from exc
        if not body.get('success'):
            message = body.get('message') or 'request rejected'
            logger.error("hosted backend %s %s rejected: %s", method, url, message)
            raise StoreUnavailable(message)
        return body

    @staticmethod
    def _first_result(body: dict, table: str) -> Optional[dict]:
        results = body.get('results') or []
        failed = [r for r in results if not r.get('success')]
        if failed:
            logger.error("hosted backend: %d failed record(s) on %s: %s", len(failed), table, failed)
            raise StoreUnavailable(failed[0].get('message') or f"write to {table} failed")
        return results[0].get('data') if results else None

    def fetch_records(self, table: str, params: dict) -> list[dict]:
        return self._call('POST', table, '/query', params).get('data') or []

    def get_record_by_id(self, table: str, record_id: int, params: dict) -> Optional[dict]:
        return self._call('POST', table, f"/{record_id}", params).get('data')

    def create_record(self, table: str, row: dict) -> Optional[dict]:
        body = self._call('POST', table, '', {'records': [row]})
        return self._first_result(body, table)

    def update_record(self, table: str, row: dict) -> Optional[dict]:
        body = self._call('PUT', table, '', {'records': [row]})
        return self._first_result(body, table)

    def delete_record(self, table: str, record_id: int) -> bool:
        body = self._call('DELETE', table, '', {'RecordIds': [record_id]})
        self._first_result(body, table)
        return True


class HostedStore(EntityStore):
    def __init__(self, entity: str, record_type, client: HostedTableClient, codec: Optional[TableCodec] = None):
        self.entity = entity
        self.record_type = record_type
        self.client = client
        self.codec = codec or CODECS[entity]

    def _params(self, ordered: bool = False) -> dict:
        params = {'fields': [{'field': {'Name': name}} for name in self.codec.columns]}
        if ordered:
            params['orderBy'] = [
                {'fieldName': name, 'sorttype': direction} for name, direction in self.codec.order_by
            ]
        return params

    def _fetch_all(self) -> list:
        rows = self.client.fetch_records(self.codec.table, self._params(ordered=True))
        return [self.codec.from_row(row) for row in rows]

    def _fetch_one(self, key):
        row = self.client.get_record_by_id(self.codec.table, key, self._params())
        if not row:
            raise RecordNotFound(self.entity, key)
        return self.codec.from_row(row)

    def _create(self, data: dict):
        fields = {k: v for k, v in data.items() if k != 'key'}
        row = self.codec.to_row(self.record_type(key=0, **fields))
        created = self.client.create_record(self.codec.table, row)
        if not created:
            raise StoreUnavailable(f"{self.entity} was not created")
        logger.info("created %s %s", self.entity, created.get('Id'))
        return self.codec.from_row(created)

    def _update(self, key, record):
        self._fetch_one(key)
        row = {'Id': key, **self.codec.to_row(record)}
        updated = self.client.update_record(self.codec.table, row)
        logger.info("updated %s %s", self.entity, key)
        return self.codec.from_row(updated) if updated else self._fetch_one(key)

    def _delete(self, key) -> bool:
        self._fetch_one(key)
        self.client.delete_record(self.codec.table, key)
        logger.info("deleted %s %s", self.entity, key)
        return True

    async def get_all(self) -> list:
        return await sync_to_async(self._fetch_all, thread_sensitive=False)()

    async def get_by_id(self, key):
        return await sync_to_async(self._fetch_one, thread_sensitive=False)(key)

    async def create(self, data: dict):
        return await sync_to_async(self._create, thread_sensitive=False)(data)

    async def update(self, key, record):
        return await sync_to_async(self._update, thread_sensitive=False)(key, record)

    async def delete(self, key) -> bool:
        return await sync_to_async(self._delete, thread_sensitive=False)(key)
