from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class Admin:
    """Domain entity: the admin account that owns a company (tenant).

    The company id handed to teachers and QR sessions is ``str(admin_id)``.
    """

    admin_id: int
    email: str
    password_hash: str
    name: str
    company_name: str
    preferences: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def company_id(self) -> str:
        return str(self.admin_id)

    def to_dict(self) -> dict:
        return {
            "id": self.admin_id,
            "email": self.email,
            "name": self.name,
            "companyName": self.company_name,
            "companyId": self.company_id,
            "role": "admin",
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }
