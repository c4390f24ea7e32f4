"""The order record exchanged between services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

BID = "bid"
ASK = "ask"


@dataclass
class Order:
    """A bid or ask for one team's shares in a match."""

    id: str = ""
    match_id: str = ""
    team_id: str = ""
    user_id: str = ""
    side: str = ""
    price: float = 0.0
    quantity: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "match_id": self.match_id,
            "team_id": self.team_id,
            "user_id": self.user_id,
            "side": self.side,
            "price": self.price,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Order":
        """Build an order from decoded JSON; absent or null fields keep their defaults."""
        if not isinstance(data, Mapping):
            raise ValueError("order must be a JSON object")
        fields: dict[str, Any] = {}
        for name in ("id", "match_id", "team_id", "user_id", "side"):
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"field {name!r} must be a string")
            fields[name] = value
        for name in ("price", "quantity"):
            value = data.get(name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"field {name!r} must be a number")
            fields[name] = float(value)
        return cls(**fields)