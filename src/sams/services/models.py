"""Data models for records returned by the hosted backend."""

from dataclasses import dataclass
from typing import Optional

from sams.utils.constants import QR_CODE_DEFAULT_STATUS


@dataclass
class QRCode:
    id: str = ""
    asset_id: str = ""
    asset_name: Optional[str] = None
    property: Optional[str] = None
    generated_date: str = ""  # YYYY-MM-DD
    status: str = QR_CODE_DEFAULT_STATUS
    printed: bool = False
    image_url: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "QRCode":
        """Build from a ``qr_codes`` row, flattening the ``assets`` join."""
        asset = row.get("assets") or {}
        return cls(
            id=row.get("id", ""),
            asset_id=row.get("asset_id", ""),
            asset_name=asset.get("name"),
            property=row.get("property"),
            generated_date=row.get("generated_date", ""),
            status=row.get("status") or QR_CODE_DEFAULT_STATUS,
            printed=bool(row.get("printed", False)),
            image_url=row.get("image_url"),
            created_at=row.get("created_at"),
        )

    def to_row(self) -> dict:
        """Columns written back to the ``qr_codes`` table."""
        return {
            "id": self.id,
            "asset_id": self.asset_id,
            "property": self.property,
            "generated_date": self.generated_date,
            "status": self.status,
            "printed": self.printed,
            "image_url": self.image_url,
        }
