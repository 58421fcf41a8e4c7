"""Injectable clock for code that depends on "now"."""

from collections.abc import Callable
from datetime import datetime, tzinfo

Clock = Callable[[], datetime]


def system_clock(tz: tzinfo) -> Clock:
    """Build a clock returning the current aware time in ``tz``."""

    def now() -> datetime:
        return datetime.now(tz)

    return now


def fixed_clock(instant: datetime) -> Clock:
    """Build a clock frozen at ``instant``."""
    return lambda: instant


def default_clock() -> Clock:
    """Clock in the configured renewal timezone."""
    from licenze_api.config import get_settings

    return system_clock(get_settings().renewal_tzinfo)
