import json
import logging

from betnow.order import Order
from betnow.producer import EventPublisher


class RecordingSender:
    def __init__(self):
        self.sent = []
        self.closed = False

    def __call__(self, topic, payload):
        self.sent.append((topic, payload))
        return 0, len(self.sent) - 1

    def close(self):
        self.closed = True


def sample_order():
    return Order(id="o1", match_id="m1", team_id="MI", user_id="u1",
                 side="ask", price=1.9, quantity=3.0)


def test_publish_sends_json_to_default_topic():
    sender = RecordingSender()
    publisher = EventPublisher(sender)
    order = sample_order()
    result = publisher.publish(order)
    assert result == (0, 0)
    topic, payload = sender.sent[0]
    assert topic == "match.events"
    assert Order.from_dict(json.loads(payload)) == order


def test_custom_topic():
    sender = RecordingSender()
    EventPublisher(sender, topic="other").publish(sample_order())
    assert sender.sent[0][0] == "other"


def test_without_sender_logs_and_returns_none(caplog):
    with caplog.at_level(logging.WARNING):
        result = EventPublisher().publish(sample_order())
    assert result is None
    assert "not initialized" in caplog.text


def test_send_failure_is_logged(caplog):
    def failing(topic, payload):
        raise ConnectionError("broker down")

    with caplog.at_level(logging.ERROR):
        result = EventPublisher(failing).publish(sample_order())
    assert result is None
    assert "broker down" in caplog.text


def test_close_closes_sender_and_stops_publishing():
    sender = RecordingSender()
    publisher = EventPublisher(sender)
    publisher.close()
    assert sender.closed
    assert publisher.publish(sample_order()) is None
    assert sender.sent == []