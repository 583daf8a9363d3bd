from datetime import datetime, timedelta, timezone

from lexiflow_api.services.clock import as_utc, today, utc_now


def test_today_rolls_over_at_turkish_midnight():
    assert today(datetime(2026, 10, 18, 20, 59, tzinfo=timezone.utc)) == "2026-10-18"
    assert today(datetime(2026, 10, 18, 21, 0, tzinfo=timezone.utc)) == "2026-10-19"


def test_today_ignores_caller_timezone():
    # 01:00 UTC+5 == 20:00 UTC (önceki gün) == 23:00 Türkiye
    plus_five = timezone(timedelta(hours=5))
    assert today(datetime(2026, 10, 19, 1, 0, tzinfo=plus_five)) == "2026-10-18"


def test_today_treats_naive_instant_as_utc():
    assert today(datetime(2026, 12, 31, 22, 30)) == "2027-01-01"


def test_today_offset_override():
    now = datetime(2026, 10, 18, 22, 0, tzinfo=timezone.utc)
    assert today(now, utc_offset_hours=0) == "2026-10-18"
    assert today(now, utc_offset_hours=3) == "2026-10-19"


def test_today_defaults_to_wall_clock():
    assert len(today()) == 10


def test_utc_helpers():
    now = utc_now()
    assert now.tzinfo is not None
    assert as_utc(datetime(2026, 1, 1)) == datetime(2026, 1, 1, tzinfo=timezone.utc)
