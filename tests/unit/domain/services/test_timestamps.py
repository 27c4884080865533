from datetime import UTC, datetime, timedelta, timezone

from collectionstore.domain.services.timestamps import utc_timestamp


def test_format_is_fixed_width_iso_utc():
    stamp = utc_timestamp(datetime(2026, 10, 19, 4, 30, 0, tzinfo=UTC))

    assert stamp == "2026-10-19T04:30:00.000000Z"


def test_converts_offsets_to_utc():
    moment = datetime(2026, 10, 19, 6, 30, 0, 5, tzinfo=timezone(timedelta(hours=2)))

    assert utc_timestamp(moment) == "2026-10-19T04:30:00.000005Z"


def test_naive_datetimes_are_treated_as_utc():
    assert utc_timestamp(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05.000000Z"


def test_string_order_matches_time_order():
    earlier = utc_timestamp(datetime(2026, 10, 19, 4, 30, 0, 999999, tzinfo=UTC))
    later = utc_timestamp(datetime(2026, 10, 19, 4, 30, 1, tzinfo=UTC))

    assert earlier < later


def test_default_is_now():
    before = utc_timestamp()
    stamp = utc_timestamp()

    assert before <= stamp
    assert stamp.endswith("Z")
    assert len(stamp) == 27
