from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args


OwnerType = Literal["user", "guest"]

OWNER_TYPES: tuple[OwnerType, ...] = get_args(OwnerType)


@dataclass(frozen=True)
class Owner:
    owner_type: OwnerType
    owner_id: str

    @property
    def is_guest(self) -> bool:
        return self.owner_type == "guest"

    @property
    def masked_id(self) -> str:
        if len(self.owner_id) <= 4:
            return "***"
        return "***" + self.owner_id[-4:]
