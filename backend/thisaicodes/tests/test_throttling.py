import pytest

from thisaicodes.interfaces.api.throttling import WindowedScopedRateThrottle


@pytest.mark.parametrize(
    "rate,expected",
    [
        ("5/15m", (5, 900)),
        ("10/15m", (10, 900)),
        ("100/hour", (100, 3600)),
        ("3/s", (3, 1)),
        (None, (None, None)),
    ],
)
def test_windowed_throttle_parses_rates(rate, expected):
    assert WindowedScopedRateThrottle().parse_rate(rate) == expected
