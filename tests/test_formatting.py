from release_dashboard.visual.formatting import display_or_dash, format_size, format_timestamp


def test_format_timestamp_converts_to_dashboard_timezone():
    assert format_timestamp("2024-01-05T10:00:00.000+0000") == "2024-01-05 12:00"
    assert format_timestamp("2024-07-05T10:00:00.000+0000", "UTC") == "2024-07-05 10:00"


def test_format_timestamp_fallbacks():
    assert format_timestamp(None) == "—"
    assert format_timestamp("not a date") == "not a date"


def test_format_size():
    assert format_size(2048) == "2 KB"
    assert format_size(None) == ""
    assert display_or_dash(None) == "—"
    assert display_or_dash("Done") == "Done"
