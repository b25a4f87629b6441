from datetime import datetime, timezone

import pytest
from bson import ObjectId

from WarmHome.app.utils import parse_number, to_json_safe


def test_to_json_safe_nested():
    oid = ObjectId()
    when = datetime(2025, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert to_json_safe({"_id": oid, "items": [{"date": when}], "n": 3}) == {
        "_id": str(oid),
        "items": [{"date": "2025-05-01T12:30:00+00:00"}],
        "n": 3,
    }


@pytest.mark.parametrize("raw, expected", [
    (None, 5), ("", 5), ("  ", 5), ("12", 12), ("12.0", 12), ("12.5", 12.5),
])
def test_parse_number(raw, expected):
    assert parse_number(raw, 5) == expected


def test_parse_number_rejects_text():
    with pytest.raises(ValueError):
        parse_number("cheap")
