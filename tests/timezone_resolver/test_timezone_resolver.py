from datetime import date

from src.attendance_engine.attendance_engine.system_config.model import SystemConfig
from src.attendance_engine.attendance_engine.system_config.provider import StaticConfigProvider
from src.attendance_engine.attendance_engine.timezone.resolver import TimezoneResolver
from tests.fakes import FixedClock, utc


class BrokenConfig:
    def get(self):
        raise OSError("config unreadable")


def test_manila_date_differs_from_utc_date():
    # 2026-02-09 20:00 UTC is already 2026-02-10 04:00 in Manila
    resolver = TimezoneResolver(
        StaticConfigProvider(SystemConfig(timezone="Asia/Manila")),
        clock=FixedClock(utc(2026, 2, 9, 20, 0)),
    )

    assert resolver.current_date() == date(2026, 2, 10)
    assert resolver.current_time() == "04:00"
    assert resolver.current_weekday_name() == "Tuesday"


def test_date_of_uses_configured_zone():
    resolver = TimezoneResolver(StaticConfigProvider(SystemConfig(timezone="Asia/Manila")))

    assert resolver.date_of(utc(2026, 2, 10, 1, 0)) == date(2026, 2, 10)
    assert resolver.date_of(utc(2026, 2, 10, 16, 30)) == date(2026, 2, 11)


def test_unknown_zone_falls_back_to_utc():
    resolver = TimezoneResolver(
        StaticConfigProvider(SystemConfig(timezone="Mars/Olympus_Mons")),
        clock=FixedClock(utc(2026, 2, 9, 20, 0)),
    )

    assert resolver.current_date() == date(2026, 2, 9)
    assert resolver.current_time() == "20:00"


def test_unreadable_config_falls_back_to_utc():
    resolver = TimezoneResolver(BrokenConfig(), clock=FixedClock(utc(2026, 2, 9, 23, 59)))

    assert resolver.current_date() == date(2026, 2, 9)
    assert resolver.current_weekday_name() == "Monday"


def test_weekday_name_is_english_full_name():
    assert TimezoneResolver.weekday_name(date(2026, 2, 15)) == "Sunday"
