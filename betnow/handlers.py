"""HTTP request handlers for placing orders and registering matches."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping, Union

from betnow.engine import Engine
from betnow.order import Order

logger = logging.getLogger(__name__)

INVALID_INPUT = "invalid input\n"

Body = Union[bytes, bytearray, str]


@dataclass(frozen=True)
class Match:
    """A match between two teams."""

    match_id: str = ""
    team_a: str = ""
    team_b: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Match":
        """Build a match from decoded JSON; absent or null fields stay empty."""
        if not isinstance(data, Mapping):
            raise ValueError("match must be a JSON object")
        fields: dict[str, str] = {}
        for name in ("match_id", "team_a", "team_b"):
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"field {name!r} must be a string")
            fields[name] = value
        return cls(**fields)


def _decode_body(body: Body) -> Mapping[str, Any]:
    """Decode the first JSON value of ``body``; ``null`` decodes to an empty object."""
    text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
    value, _ = json.JSONDecoder().raw_decode(text.lstrip())
    return {} if value is None else value


def handle_place_order(engine: Engine, body: Body) -> tuple[HTTPStatus, str]:
    """Decode an order from ``body`` and hand it to the engine."""
    try:
        order = Order.from_dict(_decode_body(body))
    except ValueError as exc:
        logger.info("rejected order: %s", exc)
        return HTTPStatus.BAD_REQUEST, INVALID_INPUT
    engine.place_order(order)
    return HTTPStatus.ACCEPTED, ""


def handle_register_match(engine: Engine, body: Body) -> tuple[HTTPStatus, str]:
    """Decode a match from ``body`` and register it with the engine."""
    try:
        match = Match.from_dict(_decode_body(body))
    except ValueError as exc:
        logger.info("rejected match: %s", exc)
        return HTTPStatus.BAD_REQUEST, INVALID_INPUT
    engine.register_match(match.match_id, match.team_a, match.team_b)
    return HTTPStatus.ACCEPTED, ""