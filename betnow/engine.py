"""Matching engine for two-team betting markets."""

from __future__ import annotations

import dataclasses
import logging
import math
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from betnow.heap import Heap
from betnow.order import ASK, BID, Order
from betnow.producer import EventPublisher

logger = logging.getLogger(__name__)

DEFAULT_ODDS = 2.0

SAME_TEAM_BID_ASK = "SAME_TEAM_BID_ASK"
SAME_TEAM_ASK_BID = "SAME_TEAM_ASK_BID"
CROSS_TEAM_BID_BID = "CROSS_TEAM_BID_BID"
CROSS_TEAM_ASK_ASK = "CROSS_TEAM_ASK_ASK"


@dataclass(frozen=True)
class Trade:
    """An executed fill.

    For same-team trades ``buyer_id`` holds the bid side and ``seller_id`` the
    ask side. For cross-team trades ``buyer_id`` is the incoming order's user on
    ``team_id`` and ``seller_id`` the resting order's user on ``counter_team_id``.
    """

    kind: str
    buyer_id: str
    seller_id: str
    team_id: str
    quantity: float
    price: float
    counter_team_id: Optional[str] = None

    @property
    def value(self) -> float:
        return self.price * self.quantity


class OrderBook:
    """Resting bids (highest price first) and asks (lowest price first)."""

    def __init__(self) -> None:
        self.bids: Heap[Order] = Heap(lambda a, b: a.price > b.price)
        self.asks: Heap[Order] = Heap(lambda a, b: a.price < b.price)


def _implied_probability(odds: float) -> float:
    return 1.0 / odds if odds else math.copysign(math.inf, odds)


def odds_compatible(odds1: float, odds2: float) -> bool:
    """True when the implied probabilities sum to between 95% and 105%."""
    total = _implied_probability(odds1) + _implied_probability(odds2)
    return 0.95 <= total <= 1.05


def cross_trade_price(odds1: float, odds2: float) -> float:
    return (odds1 + odds2) / 2


def market_price(book: OrderBook) -> float:
    """Mid price of the best bid and ask, whichever exists, else default odds."""
    if book.bids and book.asks:
        return (book.bids.peek().price + book.asks.peek().price) / 2
    if book.bids:
        return book.bids.peek().price
    if book.asks:
        return book.asks.peek().price
    return DEFAULT_ODDS


def _format_side(title: str, empty: str, orders: list[Order]) -> list[str]:
    lines = [f"  {title}:"]
    if orders:
        lines.extend(
            f"    Price: {o.price:.2f}, Quantity: {o.quantity:.2f}, User: {o.user_id}"
            for o in orders
        )
    else:
        lines.append(f"    {empty}")
    return lines


def _format_book(team_id: str, book: OrderBook) -> list[str]:
    return [
        f"Team {team_id}:",
        *_format_side("Bids (Buy Orders)", "No bids", book.bids.items()),
        *_format_side("Asks (Sell Orders)", "No asks", book.asks.items()),
    ]


def format_order_books(
    match_id: str,
    team_id: str,
    book: OrderBook,
    opposing_team_id: str,
    opposing_book: OrderBook,
) -> str:
    """Render both teams' books of a match as text."""
    lines = [
        "",
        f"=== Match {match_id} Order Books ===",
        *_format_book(team_id, book),
        "",
        *_format_book(opposing_team_id, opposing_book),
        "=====================================",
    ]
    return "\n".join(lines) + "\n"


def _sweep(
    heap: Heap[Order],
    remaining: float,
    acceptable: Callable[[Order], bool],
    make_trade: Callable[[Order, float], Trade],
) -> tuple[float, list[Trade]]:
    trades: list[Trade] = []
    while remaining > 0 and heap:
        resting = heap.peek()
        if not acceptable(resting):
            break
        qty = min(remaining, resting.quantity)
        trade = make_trade(resting, qty)
        _log_trade(trade)
        trades.append(trade)
        resting.quantity -= qty
        remaining -= qty
        if resting.quantity <= 0:
            heap.pop()
    return remaining, trades


def _log_trade(trade: Trade) -> None:
    if trade.counter_team_id is None:
        logger.info(
            "TRADE EXECUTED [%s]: Buyer: %s, Seller: %s, Team: %s, Qty: %.2f, Price: %.2f, Value: ₹%.2f",
            trade.kind, trade.buyer_id, trade.seller_id, trade.team_id,
            trade.quantity, trade.price, trade.value,
        )
    else:
        logger.info(
            "CROSS-TRADE EXECUTED [%s]: User1: %s (%s), User2: %s (%s), Qty: %.2f, Price: %.2f, Value: ₹%.2f",
            trade.kind, trade.buyer_id, trade.team_id, trade.seller_id,
            trade.counter_team_id, trade.quantity, trade.price, trade.value,
        )


class Engine:
    """Holds the order books of every match and matches incoming orders."""

    def __init__(self, publisher: Optional[EventPublisher] = None) -> None:
        self.publisher = publisher if publisher is not None else EventPublisher()
        self._books: dict[str, dict[str, OrderBook]] = {}
        self._teams: dict[str, tuple[str, str]] = {}
        self._lock = threading.RLock()

    def register_match(self, match_id: str, team_a: str, team_b: str) -> None:
        """Register a match, replacing any books it already had."""
        with self._lock:
            self._teams[match_id] = (team_a, team_b)
            self._books[match_id] = {}

    def get_order_book(self, match_id: str, team_id: str) -> OrderBook:
        """Return the team's book in the match, creating it if needed."""
        with self._lock:
            return self._books.setdefault(match_id, {}).setdefault(team_id, OrderBook())

    def opposing_team(self, match_id: str, team_id: str) -> str:
        """The other team of the match; empty string for an unknown match."""
        with self._lock:
            first, second = self._teams.get(match_id, ("", ""))
            return second if first == team_id else first

    def place_order(self, order: Order) -> list[Trade]:
        """Match ``order`` against the books, rest any remainder, return the fills."""
        order = dataclasses.replace(order)
        with self._lock:
            book = self.get_order_book(order.match_id, order.team_id)
            opposing_id = self.opposing_team(order.match_id, order.team_id)
            opposing_book = self.get_order_book(order.match_id, opposing_id)
            trades: list[Trade] = []

            if order.side == BID:
                remaining, fills = _sweep(
                    book.asks, order.quantity,
                    lambda ask: ask.price <= order.price,
                    lambda ask, qty: Trade(SAME_TEAM_BID_ASK, order.user_id, ask.user_id,
                                           order.team_id, qty, ask.price),
                )
                trades += fills
                if remaining > 0:
                    remaining, fills = _sweep(
                        opposing_book.bids, remaining,
                        lambda bid: odds_compatible(order.price, bid.price),
                        lambda bid, qty: Trade(CROSS_TEAM_BID_BID, order.user_id, bid.user_id,
                                               order.team_id, qty,
                                               cross_trade_price(order.price, bid.price),
                                               opposing_id),
                    )
                    trades += fills
                if remaining > 0:
                    order.quantity = remaining
                    book.bids.push(order)
                    logger.info("Added remaining bid to orderbook: %.2f units at %.2f",
                                remaining, order.price)

            elif order.side == ASK:
                remaining, fills = _sweep(
                    book.bids, order.quantity,
                    lambda bid: bid.price >= order.price,
                    lambda bid, qty: Trade(SAME_TEAM_ASK_BID, bid.user_id, order.user_id,
                                           order.team_id, qty, bid.price),
                )
                trades += fills
                if remaining > 0:
                    remaining, fills = _sweep(
                        opposing_book.asks, remaining,
                        lambda ask: odds_compatible(order.price, ask.price),
                        lambda ask, qty: Trade(CROSS_TEAM_ASK_ASK, order.user_id, ask.user_id,
                                               order.team_id, qty,
                                               cross_trade_price(order.price, ask.price),
                                               opposing_id),
                    )
                    trades += fills
                if remaining > 0:
                    order.quantity = remaining
                    book.asks.push(order)
                    logger.info("Added remaining ask to orderbook: %.2f units at %.2f",
                                remaining, order.price)

            self.match_prices(order.match_id)
            logger.info("%s", format_order_books(order.match_id, order.team_id, book,
                                                 opposing_id, opposing_book))
        self.publisher.publish(order)
        return trades

    def match_prices(self, match_id: str) -> Optional[dict[str, float]]:
        """Current market price per team, or None while either book is missing."""
        with self._lock:
            first, second = self._teams.get(match_id, ("", ""))
            books = self._books.get(match_id, {})
            book_a, book_b = books.get(first), books.get(second)
            if book_a is None or book_b is None:
                return None
            price_a, price_b = market_price(book_a), market_price(book_b)
            logger.info("Market Update - Match %s: %s=%.2f, %s=%.2f",
                        match_id, first, price_a, second, price_b)
            return {first: price_a, second: price_b}