# betnow

An in-memory order book for betting on two-team matches. Every match has
one order book per team. Each book holds bids (orders to back a team) and
asks (orders to lay it). Incoming orders are matched in two stages:

1. **Same-team matching.** A bid fills against the team's cheapest asks while
   the ask price is at or below the bid price, at the ask's price. An ask fills
   against the team's highest bids while the bid price is at or above the ask
   price, at the bid's price.
2. **Cross-team matching.** Backing one team is the same as laying the other.
   So a remaining bid can fill against the opposing team's bids, and a
   remaining ask against the opposing team's asks. This happens only when the
   two implied probabilities (`1/odds`) together come to between 95% and
   105%. Such trades fill at the average of the two odds.

Whatever is still unfilled rests in the book. After each order the engine
logs the market price of both teams and a text dump of both books, then
hands the order to its event publisher.

The market price of a book is the mid-point of the best bid and best ask,
or whichever of the two exists, or 2.0 when the book is empty.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using the engine

```python
from betnow.engine import Engine, odds_compatible, cross_trade_price
from betnow.order import Order

engine = Engine(None)
engine.register_match("m1", "CSK", "MI")

engine.place_order(Order.from_dict({
    "id": "o1", "match_id": "m1", "team_id": "CSK",
    "user_id": "alice", "side": "ask", "price": 1.9, "quantity": 10,
}))
trades = engine.place_order(Order.from_dict({
    "id": "o2", "match_id": "m1", "team_id": "CSK",
    "user_id": "bob", "side": "bid", "price": 2.0, "quantity": 4,
}))

for trade in trades:
    print(trade.kind, trade.buyer_id, trade.seller_id, trade.quantity, trade.price, trade.value)

print(engine.match_prices("m1"))                 # {'CSK': ..., 'MI': 2.0}
print(odds_compatible(2.0, 2.0), cross_trade_price(1.8, 2.2))
```

- `Engine.place_order(order)` works on a copy of the order and returns the
  list of `Trade` fills it produced. `Trade.kind` is one of
  `SAME_TEAM_BID_ASK`, `SAME_TEAM_ASK_BID`, `CROSS_TEAM_BID_BID` or
  `CROSS_TEAM_ASK_ASK`. Cross-team trades also carry `counter_team_id`.
- `Engine.register_match(match_id, team_a, team_b)` registers a match and
  clears any books it already had.
- `Engine.get_order_book(match_id, team_id)` returns (creating if needed) an
  `OrderBook` with `bids` and `asks` heaps.
- `Engine.opposing_team(match_id, team_id)` returns the other team, or an
  empty string for an unknown match.
- `Engine.match_prices(match_id)` returns each team's market price, or
  `None` while either team's book does not exist yet.
- `market_price(book)` and `format_order_books(...)` work on single books.

`Order` has the fields `id`, `match_id`, `team_id`, `user_id`, `side`
(`"bid"` or `"ask"`), `price` (decimal odds) and `quantity`. It converts to
and from the JSON field names with `Order.to_dict()` and `Order.from_dict()`.
`from_dict` leaves absent or null fields at their defaults and raises
`ValueError` for fields of the wrong type.

`betnow.heap.Heap` is the binary heap the books are built on. It takes a
`less(a, b)` ordering function and supports `push`, `pop`, `peek`, `remove`,
`items()` and `len()`. `pop` and `peek` raise `IndexError` on an empty heap;
`remove` raises `ValueError` for an item that is not stored.

## Publishing events

To pass placed orders on to another system, give the engine a
`betnow.producer.EventPublisher(send, topic)`. Each order is serialised to
JSON and passed to `send(topic, payload)`. `send` must return a
`(partition, offset)` pair. The default topic is `match.events`. When
`send` fails, or when no sender was given, the failure is logged and
`publish` returns `None`. `close()` calls the sender's `close` method if it
has one.

## Services

Two commands are installed. Both take `--host` and `--port`.

```
betnow-orderbook
```

This starts the order book HTTP service on port 8081 by default. It serves
two endpoints:

- `/place-order` takes an order as JSON and answers `202 Accepted`, or
  `400` with `invalid input` for a bad body. See
  `betnow.handlers.handle_place_order`.
- `/register-match` takes `{"match_id", "team_a", "team_b"}` and answers
  `{"status": "Match registered successfully"}`.

Any other path answers `404`.

```
betnow-web
```

This starts the front web application on port 8080 by default.
`GET /about` returns an about text. Any other `GET` path returns the
welcome text. Methods other than `GET` and `HEAD` get `405`.

Both services can also be embedded with `betnow.orderbook_service.make_server`
and `betnow.web.make_server`. These return a server that has not been
started yet. `betnow.handlers` also offers `handle_register_match`, which
does the same work as `handle_place_order` but for matches.

## What it does not do

- Everything is kept in memory. Books and matches are lost when the process
  stops.
- Trades are reported and logged, but no money or positions are moved
  between users.
- No message-broker client is included. Events only go wherever the `send`
  callable you supply delivers them.
- Matches are only registered when a client asks. Nothing creates matches
  on a schedule.