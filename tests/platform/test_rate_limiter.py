from app.platform.utils.rate_limit import RateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allows_requests_up_to_the_limit():
    limiter = RateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())

    assert [limiter.hit("1.2.3.4") for _ in range(4)] == [True, True, True, False]


def test_identifiers_are_counted_separately():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert limiter.hit("a") is True
    assert limiter.hit("b") is True
    assert limiter.hit("a") is False


def test_new_window_resets_the_count():
    clock = FakeClock(now=1200.0)
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

    assert limiter.hit("a") is True
    assert limiter.hit("a") is False

    clock.now += 60
    assert limiter.hit("a") is True


def test_retry_after_counts_down_to_window_end():
    clock = FakeClock(now=1210.0)
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

    assert limiter.retry_after("a") == 50


def test_old_windows_are_cleaned_up():
    clock = FakeClock(now=0.0)
    limiter = RateLimiter(max_requests=5, window_seconds=60, clock=clock)
    limiter.hit("a")

    clock.now = 600.0
    limiter.hit("a")

    assert list(limiter._counts) == ["a:10"]


def test_ipv6_identifiers():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert limiter.hit("::1") is True
    assert limiter.hit("::1") is False
