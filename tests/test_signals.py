"""Unit tests for SignalBus."""
from __future__ import annotations

from beast_blitz import signals
from beast_blitz.signals import SignalBus


def test_publish_dispatches_immediately():
    bus = SignalBus()
    received = []

    def handler(signal_name: str, data: dict) -> None:
        received.append((signal_name, data))

    bus.subscribe("test_signal", handler)
    bus.publish("test_signal", value=42)

    assert received == [("test_signal", {"value": 42})]


def test_publish_without_subscribe():
    bus = SignalBus()
    bus.publish("no_subscribers", value=123)  # Should not raise


def test_handlers_called_in_registration_order():
    bus = SignalBus()
    order = []
    bus.subscribe("event", lambda n, d: order.append("a"))
    bus.subscribe("event", lambda n, d: order.append("b"))
    bus.subscribe("event", lambda n, d: order.append("c"))
    bus.publish("event")
    assert order == ["a", "b", "c"]


def test_signals_route_by_name():
    bus = SignalBus()
    alpha, beta = [], []
    bus.subscribe("alpha", lambda n, d: alpha.append(d))
    bus.subscribe("beta", lambda n, d: beta.append(d))
    bus.publish("alpha", x=1)
    bus.publish("beta", y=2)
    assert alpha == [{"x": 1}]
    assert beta == [{"y": 2}]


def test_unsubscribe():
    bus = SignalBus()
    received = []

    def handler(name, data):
        received.append(data)

    bus.subscribe("event", handler)
    bus.unsubscribe("event", handler)
    bus.unsubscribe("event", handler)  # no-op
    bus.unsubscribe("never_subscribed", handler)  # no-op
    bus.publish("event", x=1)
    assert received == []
    assert bus.subscribers("event") == []


def test_handler_may_unsubscribe_itself_during_dispatch():
    bus = SignalBus()
    calls = []

    def once(name, data):
        calls.append("once")
        bus.unsubscribe("event", once)

    bus.subscribe("event", once)
    bus.subscribe("event", lambda n, d: calls.append("other"))
    bus.publish("event")
    bus.publish("event")
    assert calls == ["once", "other", "other"]


def test_subscribe_all_covers_every_session_signal():
    bus = SignalBus()
    names = []
    bus.subscribe_all(lambda n, d: names.append(n))
    for name in signals.ALL_SIGNALS:
        bus.publish(name)
    assert names == list(signals.ALL_SIGNALS)
    assert len(signals.ALL_SIGNALS) == 8
