from http import HTTPStatus

import pytest

from betnow.engine import Engine
from betnow.handlers import Match, handle_place_order, handle_register_match


@pytest.fixture
def engine():
    eng = Engine()
    eng.register_match("m1", "CSK", "MI")
    return eng


def test_match_from_dict_reads_fields():
    match = Match.from_dict({"match_id": "m9", "team_a": "CSK", "team_b": "MI"})
    assert match == Match("m9", "CSK", "MI")


def test_match_from_dict_missing_fields_are_empty():
    assert Match.from_dict({"team_a": "CSK"}) == Match("", "CSK", "")


def test_match_from_dict_rejects_non_string():
    with pytest.raises(ValueError):
        Match.from_dict({"match_id": 7})


def test_match_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        Match.from_dict(["m1"])


def test_place_order_accepted_and_rests(engine):
    body = b'{"id": "o1", "match_id": "m1", "team_id": "CSK", "user_id": "u1", "side": "bid", "price": 2.5, "quantity": 10}'
    status, text = handle_place_order(engine, body)
    assert status == HTTPStatus.ACCEPTED
    assert text == ""
    bids = engine.get_order_book("m1", "CSK").bids.items()
    assert [(o.user_id, o.price, o.quantity) for o in bids] == [("u1", 2.5, 10.0)]


def test_place_order_accepts_str_body(engine):
    body = '{"match_id": "m1", "team_id": "MI", "user_id": "u2", "side": "ask", "price": 3, "quantity": 4}'
    status, _ = handle_place_order(engine, body)
    assert status == HTTPStatus.ACCEPTED
    asks = engine.get_order_book("m1", "MI").asks.items()
    assert [o.user_id for o in asks] == ["u2"]


def test_place_order_matches_resting_order(engine):
    handle_place_order(engine, b'{"match_id": "m1", "team_id": "CSK", "user_id": "s", "side": "ask", "price": 2.0, "quantity": 5}')
    handle_place_order(engine, b'{"match_id": "m1", "team_id": "CSK", "user_id": "b", "side": "bid", "price": 2.0, "quantity": 5}')
    book = engine.get_order_book("m1", "CSK")
    assert len(book.asks) == 0
    assert len(book.bids) == 0


@pytest.mark.parametrize("body", [b"", b"not json", b'{"price": "high"}', b"[1, 2]", b"\xff\xfe"])
def test_place_order_invalid_input(engine, body):
    assert handle_place_order(engine, body) == (HTTPStatus.BAD_REQUEST, "invalid input\n")


def test_place_order_ignores_trailing_data(engine):
    body = b'{"match_id": "m1", "team_id": "CSK", "side": "bid", "price": 2, "quantity": 1} trailing'
    status, _ = handle_place_order(engine, body)
    assert status == HTTPStatus.ACCEPTED
    assert len(engine.get_order_book("m1", "CSK").bids) == 1


def test_register_match_registers_teams():
    eng = Engine()
    status, _ = handle_register_match(eng, b'{"match_id": "m2", "team_a": "RCB", "team_b": "KKR"}')
    assert status == HTTPStatus.ACCEPTED
    assert eng.opposing_team("m2", "RCB") == "KKR"
    assert eng.opposing_team("m2", "KKR") == "RCB"


def test_register_match_invalid_input():
    eng = Engine()
    assert handle_register_match(eng, b"{bad") == (HTTPStatus.BAD_REQUEST, "invalid input\n")
    assert eng.opposing_team("m2", "RCB") == ""