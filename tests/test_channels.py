"""
tests/test_channels.py

ChannelDirectory lookups over the fixed eight-entry table.
"""

from __future__ import annotations

import uuid

import pytest

from channels import CHANNELS, ChannelInfo, lookup_channels, resolve_channel_name


def test_no_selector_returns_all_eight() -> None:
    assert lookup_channels() == list(CHANNELS)
    assert len(CHANNELS) == 8


def test_two_placeholder_entries() -> None:
    assert [c.parameter for c in CHANNELS if c.name == "N/A"] == ["PerpetualVL2019", "PerpetualVL2021"]


def test_lookup_by_name_is_exact() -> None:
    (info,) = lookup_channels(name="Monthly Enterprise Channel")
    assert info.parameter == "MonthlyEnterprise"
    assert info.id == uuid.UUID("55336b82-a18d-4dd6-b5f6-9e5095c314a6")
    assert lookup_channels(name="monthly enterprise channel") == []


@pytest.mark.parametrize("guid", [
    "5440fd1f-7ecb-4221-8110-145efaa6372f",
    "{5440FD1F-7ECB-4221-8110-145EFAA6372F}",
    uuid.UUID("5440fd1f-7ecb-4221-8110-145efaa6372f"),
])
def test_lookup_by_id(guid) -> None:
    (info,) = lookup_channels(id=guid)
    assert info.name == "Beta Channel"


def test_unknown_id_and_garbage_give_empty() -> None:
    assert lookup_channels(id=uuid.uuid4()) == []
    assert lookup_channels(id="not-a-guid") == []


def test_name_and_id_together_rejected() -> None:
    with pytest.raises(ValueError):
        lookup_channels(name="Beta Channel", id="5440fd1f-7ecb-4221-8110-145efaa6372f")


def test_entries_are_immutable() -> None:
    with pytest.raises(AttributeError):
        CHANNELS[0].name = "changed"  # type: ignore[misc]
    assert isinstance(CHANNELS[0], ChannelInfo)


def test_resolve_channel_name() -> None:
    assert resolve_channel_name("492350f6-3a01-4f97-b9c0-c7c6ddf67d60") == "Current Channel"
    assert resolve_channel_name("Beta Channel") == "Beta Channel"
