"""Shared test fixtures for the Nielsen DCR destination."""

import logging

import pytest

from nielsen_dcr.metrics import get_metrics_store
from nielsen_dcr.testing import (  # noqa: F401
    destination,
    recording_sdk,
    virtual_scheduler,
)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Clear the global metrics store between tests."""
    get_metrics_store().clear()
    yield
    get_metrics_store().clear()


@pytest.fixture
def reset_root_logger():
    """Save and restore root logger state around a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def content_properties() -> dict:
    """Properties of a typical episode playback event."""
    return {
        "asset_id": "ep-1001",
        "title": "Pilot",
        "program": "The Show",
        "full_episode": True,
        "airdate": "2019-08-30T21:00:00Z",
        "total_length": "1800",
        "position": 0,
    }


@pytest.fixture
def content_options() -> dict:
    """Nielsen DCR integration options for a typical event."""
    return {
        "segB": "season-1",
        "segC": "drama",
        "crossId1": "EP0001",
        "crossId2": "network",
        "hasAds": True,
        "adLoadType": "dynamic",
        "channelName": "Channel 7",
        "mediaUrl": "https://cdn.example.com/ep-1001.m3u8",
    }
