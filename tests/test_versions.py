from __future__ import annotations

import pytest

from office_versions import format_version, parse_version, try_parse_version, version_key


@pytest.mark.parametrize("text,expected", [
    ("16.0.14701.20164", (16, 0, 14701, 20164)),
    (" 14701.20164 ", (14701, 20164)),
    ("2110", (2110,)),
])
def test_parse_version(text, expected) -> None:
    assert parse_version(text) == expected


@pytest.mark.parametrize("text", ["", "20H2", "1.2.3.4.5", "1..2", None])
def test_parse_version_rejects(text) -> None:
    with pytest.raises(ValueError):
        parse_version(text)
    assert try_parse_version(text) is None


def test_version_key_pads_and_orders_numerically() -> None:
    assert version_key("14701.20164") == (14701, 20164, 0, 0)
    assert version_key("16.0.10.0") > version_key("16.0.9.0")


def test_format_version() -> None:
    assert format_version((15, 0, 4885, 1001)) == "15.0.4885.1001"
    assert format_version(None) is None
