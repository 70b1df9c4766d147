"""Batched delivery of log entries to an HTTPS ingestion endpoint."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from .config import LogShippingConfig
from .logger import LEVELS


class LogShipper:
    """Buffers log entries and posts them in batches

    Entries below the configured ``log_level`` are ignored. A batch is sent
    as soon as ``batch_size`` entries are queued, and a background task
    flushes whatever is buffered every ``flush_interval`` milliseconds.
    """

    def __init__(self, config: LogShippingConfig, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self.threshold = LEVELS.get(config.log_level.upper(), logging.ERROR)
        self._buffer: List[Dict[str, Any]] = []
        self._session = session
        self._owns_session = session is None
        self._task: Optional[asyncio.Task] = None
        self._pending: set = set()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def enqueue(self, entry: Dict[str, Any]) -> None:
        if LEVELS.get(entry.get("level", "INFO"), logging.INFO) < self.threshold:
            return
        self._buffer.append(entry)
        if len(self._buffer) >= self.config.batch_size:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # No loop yet; the periodic flush or stop() will pick it up
                return
            task = loop.create_task(self.flush())
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def _run(self) -> None:
        interval = self.config.flush_interval / 1000
        while True:
            await asyncio.sleep(interval)
            await self.flush()

    async def flush(self) -> bool:
        """Send everything currently buffered; returns False if the batch was dropped"""
        if not self._buffer:
            return True
        batch = self._buffer[:self.config.batch_size]
        del self._buffer[:len(batch)]
        if self._session is None:
            self._session = aiohttp.ClientSession()

        for attempt in range(self.config.max_retries + 1):
            try:
                async with self._session.post(
                    self.config.endpoint,
                    json={"logs": batch},
                    headers=self._headers(),
                    timeout=aiohttp.ClientTimeout(total=10),
                ) as response:
                    if response.status < 400:
                        return True
                    logging.warning(f"[LogShipper] Ingestion endpoint returned {response.status}")
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logging.warning(f"[LogShipper] Failed to ship {len(batch)} log entries: {e}")
            if attempt < self.config.max_retries:
                await asyncio.sleep(2 ** attempt * 0.5)

        logging.warning(f"[LogShipper] Dropping {len(batch)} log entries after {self.config.max_retries} retries")
        return False

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        while self._buffer:
            await self.flush()
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None


__all__ = [
    "LogShipper",
]
