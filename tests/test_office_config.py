from __future__ import annotations

import pytest

from office_config import int_env


@pytest.mark.parametrize("raw,expected", [
    ("abc", 30),
    ("", 30),
    ('"45"', 45),
    ("'7'", 7),
    (" 12 ", 12),
])
def test_int_env(monkeypatch, raw, expected) -> None:
    monkeypatch.setenv("OFFICE_TEST_INT", raw)
    assert int_env("OFFICE_TEST_INT", 30) == expected


def test_int_env_unset(monkeypatch) -> None:
    monkeypatch.delenv("OFFICE_TEST_INT", raising=False)
    assert int_env("OFFICE_TEST_INT", 30) == 30
