from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, validator

from storefront_core.data_model.util import ensure_utc


class MembershipLevel(str, Enum):
    SILVER = "silver"
    GOLD = "gold"
    DIAMOND = "diamond"


class User(BaseModel):
    id: str
    name: str
    email: str
    membership_level: Optional[MembershipLevel] = None
    loyalty_points: int = 0
    last_membership_update: Optional[datetime] = None

    _ensure_utc = validator("last_membership_update", allow_reuse=True)(ensure_utc)

    def __str__(self):
        return f"User[{self.id}, {self.email}]"
