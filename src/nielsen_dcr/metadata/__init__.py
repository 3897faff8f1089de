"""Metadata mapping from analytics events to Nielsen DCR records."""

from nielsen_dcr.metadata.mapper import (
    AD_TYPE_MAP,
    MetadataMapper,
    ad_load_type,
    channel_info,
    full_episode_status,
    has_ads_status,
    is_pre_roll,
    normalize_ad_type,
    resolve_property,
)
from nielsen_dcr.metadata.models import (
    AdMetadata,
    ChannelInfo,
    ContentMetadata,
    StaticMetadata,
)
from nielsen_dcr.metadata.values import (
    PropertyMap,
    PropertyValue,
    coerce_to_string,
    get_bool,
    get_int,
    get_map,
    get_number,
    get_str,
    get_text,
    has_value,
    stringify,
)

__all__ = [
    "AD_TYPE_MAP",
    "AdMetadata",
    "ChannelInfo",
    "ContentMetadata",
    "MetadataMapper",
    "PropertyMap",
    "PropertyValue",
    "StaticMetadata",
    "ad_load_type",
    "channel_info",
    "coerce_to_string",
    "full_episode_status",
    "get_bool",
    "get_int",
    "get_map",
    "get_number",
    "get_str",
    "get_text",
    "has_ads_status",
    "has_value",
    "is_pre_roll",
    "normalize_ad_type",
    "resolve_property",
    "stringify",
]
