#!/usr/bin/env python3
"""
Tests for the token bucket rate limiter.
"""

import sys
import threading
import time
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from aiyou.api.context import Context  # noqa: E402
from aiyou.api.ratelimit import RateLimiter  # noqa: E402
from aiyou.errors import DeadlineExceededError, RequestCancelledError  # noqa: E402
from aiyou.models.ratelimit import RateLimiterConfig  # noqa: E402


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestRateLimiterConfig(unittest.TestCase):
    def test_rejects_non_positive_rate(self):
        with self.assertRaises(ValueError):
            RateLimiterConfig(requests_per_second=0)

    def test_rejects_zero_burst(self):
        with self.assertRaises(ValueError):
            RateLimiterConfig(requests_per_second=1, burst_size=0)


class TestRateLimiterBucket(unittest.TestCase):
    def test_starts_full(self):
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=1, burst_size=5), clock=FakeClock())
        self.assertEqual(limiter.tokens, 5)
        self.assertEqual(limiter.get_wait_time(), 0.0)

    def test_wait_time_after_burst(self):
        clock = FakeClock()
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=4, burst_size=2), clock=clock)
        limiter.wait()
        limiter.wait()

        self.assertAlmostEqual(limiter.get_wait_time(), 0.25)
        clock.advance(0.125)
        self.assertAlmostEqual(limiter.get_wait_time(), 0.125)

    def test_get_wait_time_does_not_consume(self):
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=1, burst_size=1), clock=FakeClock())
        limiter.get_wait_time()
        limiter.get_wait_time()
        self.assertEqual(limiter.tokens, 1)

    def test_refill_saturates_at_capacity(self):
        clock = FakeClock()
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=10, burst_size=3), clock=clock)
        limiter.wait()
        clock.advance(3600)
        self.assertEqual(limiter.tokens, 3)

        for _ in range(3):
            limiter.wait()
        self.assertLess(limiter.tokens, 1)

    def test_tokens_never_negative(self):
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=1000, burst_size=1))
        for _ in range(5):
            limiter.wait()
            self.assertGreaterEqual(limiter.tokens, 0)

    def test_wait_timeout_shorter_than_wait_raises(self):
        limiter = RateLimiter(
            RateLimiterConfig(requests_per_second=0.5, burst_size=1, wait_timeout=0.1),
            clock=FakeClock(),
        )
        limiter.wait()
        with self.assertRaises(TimeoutError):
            limiter.wait()


class TestRateLimiterTiming(unittest.TestCase):
    def test_burst_then_block(self):
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=2, burst_size=3))

        start = time.monotonic()
        for _ in range(3):
            limiter.wait()
        burst_elapsed = time.monotonic() - start
        self.assertLess(burst_elapsed, 0.05)

        start = time.monotonic()
        limiter.wait()
        self.assertGreaterEqual(time.monotonic() - start, 0.45)

    def test_blocks_for_one_over_rate_after_capacity(self):
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=5, burst_size=2))
        limiter.wait()
        limiter.wait()

        start = time.monotonic()
        limiter.wait()
        self.assertGreaterEqual(time.monotonic() - start, 0.19)

    def test_cancel_aborts_wait(self):
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=0.1, burst_size=1))
        limiter.wait()
        ctx = Context()
        timer = threading.Timer(0.05, ctx.cancel)
        timer.start()
        try:
            start = time.monotonic()
            with self.assertRaises(RequestCancelledError):
                limiter.wait(ctx)
            self.assertLess(time.monotonic() - start, 1.0)
        finally:
            timer.cancel()

    def test_deadline_aborts_wait(self):
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=0.1, burst_size=1))
        limiter.wait()
        with self.assertRaises(DeadlineExceededError):
            limiter.wait(Context.with_timeout(0.05))

    def test_cancelled_wait_hands_slot_back(self):
        clock = FakeClock()
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=2, burst_size=1), clock=clock)
        limiter.wait()

        ctx = Context()
        ctx.cancel()
        with self.assertRaises(RequestCancelledError):
            limiter.wait(ctx)

        self.assertAlmostEqual(limiter.get_wait_time(), 0.5)
        clock.advance(0.5)
        self.assertAlmostEqual(limiter.tokens, 1.0)


class TestRateLimiterConcurrency(unittest.TestCase):
    def test_queued_waiter_cancels_promptly(self):
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=0.5, burst_size=1))
        limiter.wait()

        a_ctx = Context()
        b_ctx = Context()
        outcomes = {}

        def waiter(name, ctx):
            start = time.monotonic()
            try:
                limiter.wait(ctx)
                outcomes[name] = ("admitted", time.monotonic() - start)
            except RequestCancelledError:
                outcomes[name] = ("cancelled", time.monotonic() - start)

        thread_a = threading.Thread(target=waiter, args=("a", a_ctx))
        thread_b = threading.Thread(target=waiter, args=("b", b_ctx))
        thread_a.start()
        time.sleep(0.02)
        thread_b.start()
        timer = threading.Timer(0.05, b_ctx.cancel)
        timer.start()
        try:
            thread_b.join(timeout=1.0)
            self.assertFalse(thread_b.is_alive())
            self.assertEqual(outcomes["b"][0], "cancelled")
            self.assertLess(outcomes["b"][1], 0.5)

            # The limiter stays usable while a waiter is still queued
            start = time.monotonic()
            limiter.get_wait_time()
            self.assertLess(time.monotonic() - start, 0.1)
        finally:
            timer.cancel()
            a_ctx.cancel()
            thread_a.join(timeout=1.0)

        self.assertEqual(outcomes["a"][0], "cancelled")

    def test_burst_admitted_at_once_then_paced_in_call_order(self):
        rate, burst, callers = 5.0, 2, 5
        limiter = RateLimiter(RateLimiterConfig(requests_per_second=rate, burst_size=burst))
        admitted = {}
        lock = threading.Lock()
        start = time.monotonic()

        def caller(index):
            limiter.wait()
            with lock:
                admitted[index] = time.monotonic() - start

        threads = []
        for index in range(callers):
            thread = threading.Thread(target=caller, args=(index,))
            thread.start()
            threads.append(thread)
            time.sleep(0.01)

        samples = []
        while any(t.is_alive() for t in threads):
            samples.append(limiter.tokens)
            time.sleep(0.005)
        for thread in threads:
            thread.join(timeout=2.0)

        self.assertEqual(len(admitted), callers)
        self.assertGreaterEqual(min(samples), 0.0)

        immediate = [i for i, at in admitted.items() if at < 0.1]
        self.assertEqual(sorted(immediate), list(range(burst)))

        order = sorted(admitted, key=admitted.get)
        self.assertEqual(order, list(range(callers)))

        paced = [admitted[i] for i in range(burst, callers)]
        gaps = [later - earlier for earlier, later in zip(paced, paced[1:])]
        for gap in gaps:
            self.assertGreater(gap, 0.75 / rate)
            self.assertLess(gap, 1.5 / rate)


if __name__ == "__main__":
    unittest.main()
