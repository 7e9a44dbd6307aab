"""QR code records, read through a request cache.

The service owns its :class:`RequestCache`; list and single-record reads are
cached under the ``qrcodes:`` prefix and every write drops that whole family
so the next read goes back to the backend.

The backend is any object exposing these coroutines::

    async def list_qr_codes() -> list[dict]
    async def get_qr_code(qr_id) -> dict | None
    async def insert_qr_code(row: dict) -> dict
    async def update_qr_code(qr_id, row: dict) -> dict

Backend errors propagate unchanged.
"""

import logging
from dataclasses import fields

from sams.cache.request_cache import RequestCache
from sams.config import Config
from sams.services.models import QRCode
from sams.utils.constants import QR_CACHE_PREFIX

logger = logging.getLogger(__name__)

_LIST_KEY = f"{QR_CACHE_PREFIX}list"

# Fields a caller may change through update_qr_code; asset_name is joined
_EDITABLE = (
    {f.name for f in fields(QRCode)} - {"id", "created_at", "asset_name"}
)


class QRCodeService:
    """Cached access to the ``qr_codes`` table."""

    def __init__(self, backend, cache: RequestCache | None = None,
                 ttl_ms: int | None = None):
        self.backend = backend
        self.cache = cache or RequestCache(ttl_ms or Config.CACHE_TTL_MS)

    async def list_qr_codes(self, force: bool = False) -> list[QRCode]:
        async def fetch():
            rows = await self.backend.list_qr_codes()
            return [QRCode.from_row(r) for r in rows or []]

        return await self.cache.get_cached_value(_LIST_KEY, fetch,
                                                 force=force)

    async def get_qr_code(self, qr_id: str,
                          force: bool = False) -> QRCode | None:
        async def fetch():
            row = await self.backend.get_qr_code(qr_id)
            return QRCode.from_row(row) if row else None

        return await self.cache.get_cached_value(
            f"{QR_CACHE_PREFIX}{qr_id}", fetch, force=force
        )

    async def create_qr_code(self, qr: QRCode) -> QRCode:
        row = await self.backend.insert_qr_code(qr.to_row())
        self._invalidate()
        return QRCode.from_row(row)

    async def update_qr_code(self, qr_id: str, **changes) -> QRCode:
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValueError(f"Unknown QR code field(s): {sorted(unknown)}")
        row = await self.backend.update_qr_code(qr_id, changes)
        self._invalidate()
        return QRCode.from_row(row)

    async def mark_printed(self, qr_ids: list[str]) -> int:
        """Flag each record as printed.  Returns the number updated."""
        updated = 0
        try:
            for qr_id in qr_ids:
                await self.backend.update_qr_code(qr_id, {"printed": True})
                updated += 1
        finally:
            # Partial success still changes what the backend holds
            if updated:
                self._invalidate()
        return updated

    def _invalidate(self):
        removed = self.cache.invalidate_cache_by_prefix(QR_CACHE_PREFIX)
        logger.debug("Dropped %d cached QR code read(s)", removed)
