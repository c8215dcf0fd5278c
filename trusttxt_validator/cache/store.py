"""
Result cache and the key/value stores behind it.

Stores mimic a browser extension's storage areas: async get(key) -> {key: value}
(missing keys read as {}) and set(mapping). MemoryStore is session-scoped;
JsonFileStore persists flags across runs.

ResultCache keeps {page_url: {trust_uri: result}} under the "trustResults"
key. put() is an atomic merge: the read-modify-write over the whole object
runs under one asyncio.Lock, so concurrent puts for different keys on the
same page never lose updates. Same key: last writer wins.
"""

from __future__ import annotations

import asyncio
import copy
import json
from pathlib import Path
from typing import Any, Protocol

from trusttxt_validator.engine.models import ResolutionResult, result_from_dict
from trusttxt_validator.validator_logging import get_logger

logger = get_logger(__name__)

TRUST_RESULTS_KEY = "trustResults"


class KeyValueStore(Protocol):
    async def has(self, key: str) -> bool: ...

    async def get(self, key: str) -> dict[str, Any]: ...

    async def set(self, values: dict[str, Any]) -> None: ...


class MemoryStore:
    """In-process store; cleared when the process (session) ends."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    async def has(self, key: str) -> bool:
        return key in self._data

    async def get(self, key: str) -> dict[str, Any]:
        return {key: copy.deepcopy(self._data.get(key, {}))}

    async def set(self, values: dict[str, Any]) -> None:
        for key, value in values.items():
            self._data[key] = copy.deepcopy(value)

    async def clear(self) -> None:
        self._data.clear()


class JsonFileStore:
    """
    Persistent store backed by one JSON object on disk.

    Disk I/O runs in a worker thread. set() merges under an asyncio.Lock so
    concurrent writers of different keys all land in the file.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.is_file():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("json_store_unreadable", path=str(self._path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self._path)

    def _merge(self, values: dict[str, Any]) -> None:
        data = self._load()
        data.update(values)
        self._write(data)

    async def has(self, key: str) -> bool:
        return key in await asyncio.to_thread(self._load)

    async def get(self, key: str) -> dict[str, Any]:
        data = await asyncio.to_thread(self._load)
        return {key: data.get(key, {})}

    async def set(self, values: dict[str, Any]) -> None:
        async with self._lock:
            await asyncio.to_thread(self._merge, dict(values))


class ResultCache:
    """Session-scoped (page_url, trust_uri) -> ResolutionResult map shared by all callers."""

    def __init__(self, store: KeyValueStore | None = None, *, key: str = TRUST_RESULTS_KEY) -> None:
        self._store = store if store is not None else MemoryStore()
        self._key = key
        self._lock = asyncio.Lock()

    async def _load_all(self) -> dict[str, dict[str, Any]]:
        data = await self._store.get(self._key)
        raw = data.get(self._key)
        return raw if isinstance(raw, dict) else {}

    async def get(self, page_url: str) -> dict[str, ResolutionResult]:
        """All stored results for a page, keyed by Trust URI (insertion order)."""
        entries = (await self._load_all()).get(page_url) or {}
        out: dict[str, ResolutionResult] = {}
        for trust_uri, raw in entries.items():
            try:
                out[trust_uri] = result_from_dict(raw)
            except (ValueError, AttributeError) as e:
                logger.warning("cache_entry_invalid", page_url=page_url, trust_uri=trust_uri, error=str(e))
        return out

    async def has(self, page_url: str, trust_uri: str) -> bool:
        entries = (await self._load_all()).get(page_url) or {}
        return trust_uri in entries

    async def first(self, page_url: str) -> ResolutionResult | None:
        """First result stored for a page, or None when the page has none."""
        results = await self.get(page_url)
        return next(iter(results.values()), None)

    async def put(self, page_url: str, trust_uri: str, result: ResolutionResult) -> None:
        """Atomically merge one result into the stored map."""
        async with self._lock:
            all_results = await self._load_all()
            page_results = dict(all_results.get(page_url) or {})
            page_results[trust_uri] = result.to_dict()
            all_results[page_url] = page_results
            await self._store.set({self._key: all_results})
        logger.debug("cache_put", page_url=page_url, trust_uri=trust_uri, result_type=result.type)

    upsert = put

    async def clear(self) -> None:
        async with self._lock:
            await self._store.set({self._key: {}})
