from __future__ import annotations

from threading import Thread

from evolution_hub.domain.entities.usage import UsageCounter
from evolution_hub.infrastructure.usage.in_memory_usage_store import InMemoryUsageStore


class FakeClock:
    def __init__(self, value: float = 1_000.0):
        self.value = value

    def __call__(self) -> float:
        return self.value


def test_increment_rolling_counts_within_window():
    store = InMemoryUsageStore(clock=FakeClock())

    store.increment_rolling(key="k", now_ts=100, window_seconds=60, limit=10_000)
    result = store.increment_rolling(key="k", now_ts=110, window_seconds=60, limit=10_000)

    assert result.allowed is True
    assert result.usage == UsageCounter(count=2, reset_at=160)
    assert store.get_counter(key="k", now_ts=120) == result.usage


def test_get_counter_hides_expired_window():
    store = InMemoryUsageStore(clock=FakeClock())
    store.increment_rolling(key="k", now_ts=100, window_seconds=60, limit=10_000)

    assert store.get_counter(key="k", now_ts=160) is None


def test_entries_expire_by_store_clock():
    clock = FakeClock(1_000.0)
    store = InMemoryUsageStore(clock=clock)
    store.add_amount(key="q", amount=5, limit=10, tx_key="tx-1", ttl_seconds=30)

    assert store.get_amount(key="q") == 5
    clock.value = 1_030.0
    assert store.get_amount(key="q") == 0


def test_add_amount_respects_limit():
    store = InMemoryUsageStore(clock=FakeClock())

    first = store.add_amount(key="q", amount=6, limit=10, tx_key="tx-1")
    second = store.add_amount(key="q", amount=6, limit=10, tx_key="tx-2")

    assert first.applied is True
    assert first.total == 6
    assert second.applied is False
    assert second.total == 6
    assert store.get_amount(key="q") == 6


def test_add_amount_is_idempotent_per_tx_key():
    store = InMemoryUsageStore(clock=FakeClock())

    store.add_amount(key="q", amount=4, limit=10, tx_key="tx-1")
    again = store.add_amount(key="q", amount=4, limit=10, tx_key="tx-1")

    assert again.applied is True
    assert again.idempotent is True
    assert store.get_amount(key="q") == 4


def test_withdraw_amount_checks_balance_and_is_idempotent():
    store = InMemoryUsageStore(clock=FakeClock())
    store.deposit_amount(key="b", amount=100)

    first = store.withdraw_amount(key="b", amount=80, tx_key="job-1")
    replay = store.withdraw_amount(key="b", amount=80, tx_key="job-1")
    short = store.withdraw_amount(key="b", amount=80, tx_key="job-2")

    assert first.applied is True
    assert first.total == 20
    assert replay.idempotent is True
    assert short.applied is False
    assert store.get_amount(key="b") == 20


def test_concurrent_increments_are_not_lost():
    store = InMemoryUsageStore(clock=FakeClock())

    def worker():
        for _ in range(200):
            store.increment_rolling(key="k", now_ts=100, window_seconds=600, limit=10_000)

    threads = [Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    counter = store.get_counter(key="k", now_ts=100)
    assert counter is not None
    assert counter.count == 1600


def test_refused_increment_is_not_stored():
    store = InMemoryUsageStore(clock=FakeClock())
    store.increment_rolling(key="k", now_ts=100, window_seconds=60, limit=2)
    store.increment_rolling(key="k", now_ts=101, window_seconds=60, limit=2)

    result = store.increment_rolling(key="k", now_ts=102, window_seconds=60, limit=2)

    assert result.allowed is False
    assert result.usage == UsageCounter(count=2, reset_at=160)
    assert store.get_counter(key="k", now_ts=103) == UsageCounter(count=2, reset_at=160)


def test_concurrent_increments_stop_at_the_cap():
    store = InMemoryUsageStore(clock=FakeClock())
    allowed: list[bool] = []

    def worker():
        for _ in range(50):
            allowed.append(store.increment_rolling(key="k", now_ts=100, window_seconds=600, limit=120).allowed)

    threads = [Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert allowed.count(True) == 120
    assert store.get_counter(key="k", now_ts=100) == UsageCounter(count=120, reset_at=700)


def test_has_key_sees_transaction_records():
    store = InMemoryUsageStore(clock=FakeClock())

    assert store.has_key(key="tx-1") is False
    store.add_amount(key="q", amount=1, limit=10, tx_key="tx-1")
    assert store.has_key(key="tx-1") is True
