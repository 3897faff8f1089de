"""Nielsen metadata records.

Each record holds the values resolved by the mapper and renders the
camelCase map the SDK expects via ``to_dict()``. Pass-through fields keep
whatever type the event carried until ``to_dict()`` coerces them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nielsen_dcr.metadata.values import coerce_to_string

DEFAULT_CHANNEL_NAME = "defaultChannelName"
DEFAULT_AD_TYPE = "ad"
UNKNOWN_SECTION = "Unknown"


@dataclass(frozen=True)
class ContentMetadata:
    """Content (program/episode) metadata."""

    assetid: str = ""
    title: Any = ""
    program: Any = ""
    pipmode: Any = "false"
    adloadtype: str = "1"
    seg_b: Any = ""
    seg_c: Any = ""
    isfullepisode: str = "n"
    has_ads: str = "0"
    airdate: str = ""
    length: str = ""
    cross_id1: Any = ""
    cross_id2: Any = ""
    subbrand: Any = None  # None: not configured or not present
    clientid: Any = None  # None: not configured or not present

    def to_dict(self) -> dict[str, str]:
        """Render the SDK metadata map (string values only)."""
        record: dict[str, Any] = {
            "pipmode": self.pipmode,
            "adloadtype": self.adloadtype,
            "assetid": self.assetid,
            "type": "content",
            "segB": self.seg_b,
            "segC": self.seg_c,
            "title": self.title,
            "program": self.program,
            "isfullepisode": self.isfullepisode,
            "hasAds": self.has_ads,
            "airdate": self.airdate,
            "length": self.length,
            "crossId1": self.cross_id1,
            "crossId2": self.cross_id2,
        }
        if self.subbrand is not None:
            record["subbrand"] = self.subbrand
        if self.clientid is not None:
            record["clientid"] = self.clientid
        return coerce_to_string(record)


@dataclass(frozen=True)
class AdMetadata:
    """Ad metadata."""

    assetid: str = ""
    type: str = DEFAULT_AD_TYPE
    title: str = ""

    def to_dict(self) -> dict[str, str]:
        """Render the SDK metadata map (string values only)."""
        return coerce_to_string(
            {"assetid": self.assetid, "type": self.type, "title": self.title}
        )


@dataclass(frozen=True)
class StaticMetadata:
    """Static (screen view) metadata."""

    assetid: str = ""
    section: str = UNKNOWN_SECTION
    seg_a: Any = ""
    seg_b: Any = ""
    seg_c: Any = ""
    cross_id1: Any = ""

    def to_dict(self) -> dict[str, str]:
        """Render the SDK metadata map (string values only)."""
        return coerce_to_string(
            {
                "type": "static",
                "assetid": self.assetid,
                "section": self.section,
                "segA": self.seg_a,
                "segB": self.seg_b,
                "segC": self.seg_c,
                "crossId1": self.cross_id1,
            }
        )


@dataclass(frozen=True)
class ChannelInfo:
    """Channel info passed to ``play``."""

    channel_name: str = DEFAULT_CHANNEL_NAME
    media_url: str = ""

    def to_dict(self) -> dict[str, str]:
        """Render the SDK channel info map."""
        return coerce_to_string(
            {"channelName": self.channel_name, "mediaURL": self.media_url}
        )
