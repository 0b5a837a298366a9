from __future__ import annotations

import re

from rest_framework.throttling import ScopedRateThrottle

_RATE = re.compile(r"^(?P<count>\d+)/(?P<multiplier>\d*)(?P<unit>[smhd])")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class WindowedScopedRateThrottle(ScopedRateThrottle):
    """Scoped throttle that also accepts windows such as ``5/15m``."""

    def parse_rate(self, rate):
        if rate is None:
            return (None, None)
        match = _RATE.match(rate)
        if match is None:
            return super().parse_rate(rate)
        multiplier = int(match.group("multiplier") or 1)
        duration = multiplier * _UNIT_SECONDS[match.group("unit")]
        return (int(match.group("count")), duration)
