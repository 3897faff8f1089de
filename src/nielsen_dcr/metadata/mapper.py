"""Event property mapping to Nielsen metadata records.

Each field is resolved with the same precedence:

1. A custom property name from settings, if set and present in the event
2. The fixed default property name
3. An empty string or the field's type-specific default

Functions here are pure; the only state is the immutable settings.
"""

from __future__ import annotations

from nielsen_dcr.config.models import NielsenSettings
from nielsen_dcr.core.datetime_utils import format_airdate
from nielsen_dcr.metadata.models import (
    DEFAULT_AD_TYPE,
    DEFAULT_CHANNEL_NAME,
    UNKNOWN_SECTION,
    AdMetadata,
    ChannelInfo,
    ContentMetadata,
    StaticMetadata,
)
from nielsen_dcr.metadata.values import (
    PropertyMap,
    get_bool,
    get_str,
    get_text,
    has_value,
)

# Default property names
ASSET_ID_KEY = "asset_id"
CONTENT_LENGTH_KEY = "total_length"
FULL_EPISODE_KEY = "full_episode"
AIRDATE_KEY = "airdate"
HAS_ADS_KEY = "hasAds"

# Ad load type sources, checked in order: (source, key)
AD_LOAD_TYPE_SOURCES: tuple[tuple[str, str], ...] = (
    ("options", "adLoadType"),
    ("properties", "loadType"),
    ("properties", "load_type"),
)
DYNAMIC_AD_LOAD = "dynamic"

# Video spec ad positions to Nielsen ad types
AD_TYPE_MAP: dict[str, str] = {
    "pre-roll": "preroll",
    "mid-roll": "midroll",
    "post-roll": "postroll",
}
PRE_ROLL = "pre-roll"


def resolve_property(
    properties: PropertyMap,
    custom_key: str,
    default_key: str,
) -> str:
    """Resolve a field using the custom-then-default precedence.

    Args:
        properties: Event properties.
        custom_key: Property name configured in settings ("" if unset).
        default_key: Fixed fallback property name.

    Returns:
        The resolved value as a string, or "" if neither is present.
    """
    if custom_key:
        value = get_text(properties, custom_key)
        if value is not None:
            return value
    value = get_text(properties, default_key)
    return value if value is not None else ""


def full_episode_status(src: PropertyMap, key: str = FULL_EPISODE_KEY) -> str:
    """Map a boolean full-episode flag to "y"/"n"."""
    return "y" if get_bool(src, key) is True else "n"


def has_ads_status(src: PropertyMap, key: str = HAS_ADS_KEY) -> str:
    """Map a boolean has-ads flag to "1"/"0"."""
    return "1" if get_bool(src, key) is True else "0"


def ad_load_type(options: PropertyMap, properties: PropertyMap) -> str:
    """Resolve the Nielsen ad load type.

    The first source that is present wins, even if its value is not
    "dynamic". Dynamic ad insertion maps to "2", everything else
    (linear, absent, unexpected types) to "1".

    Args:
        options: Integration options for the event.
        properties: Event properties.

    Returns:
        "2" for dynamic ad load, "1" otherwise.
    """
    sources = {"options": options, "properties": properties}
    value = ""
    for source, key in AD_LOAD_TYPE_SOURCES:
        src = sources[source]
        if has_value(src, key):
            value = get_str(src, key) or ""
            break
    return "2" if value == DYNAMIC_AD_LOAD else "1"


def normalize_ad_type(ad_type: str | None) -> str:
    """Map a video spec ad position to the Nielsen ad type.

    Examples:
        >>> normalize_ad_type("pre-roll")
        'preroll'
        >>> normalize_ad_type("explainer")
        'explainer'
        >>> normalize_ad_type(None)
        'ad'
    """
    if ad_type is None:
        return DEFAULT_AD_TYPE
    return AD_TYPE_MAP.get(ad_type, ad_type)


def is_pre_roll(properties: PropertyMap) -> bool:
    """True if an ad event describes a pre-roll ad."""
    return get_str(properties, "type") == PRE_ROLL


def channel_info(options: PropertyMap) -> ChannelInfo:
    """Build channel info from integration options.

    channelName is optional for DCR and falls back to a default name;
    a missing mediaUrl is sent as an empty string.
    """
    return ChannelInfo(
        channel_name=get_text(options, "channelName") or DEFAULT_CHANNEL_NAME,
        media_url=get_text(options, "mediaUrl") or "",
    )


class MetadataMapper:
    """Builds Nielsen metadata records from event maps.

    Custom property names come from the integration settings; without
    settings only the default property names are used.
    """

    def __init__(self, settings: NielsenSettings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> NielsenSettings | None:
        return self._settings

    def _setting(self, name: str) -> str:
        if self._settings is None:
            return ""
        return getattr(self._settings, name)

    def content_asset_id(self, properties: PropertyMap) -> str:
        return resolve_property(
            properties, self._setting("content_asset_id_key"), ASSET_ID_KEY
        )

    def ad_asset_id(self, properties: PropertyMap) -> str:
        return resolve_property(
            properties, self._setting("ad_asset_id_property_name"), ASSET_ID_KEY
        )

    def content_length(self, properties: PropertyMap) -> str:
        return resolve_property(
            properties,
            self._setting("content_length_property_name"),
            CONTENT_LENGTH_KEY,
        )

    def section(self, properties: PropertyMap, event_name: str | None) -> str:
        """Resolve the screen section.

        Custom section property, then the screen name, then "Unknown".
        """
        custom_key = self._setting("custom_section_property")
        if custom_key:
            value = get_text(properties, custom_key)
            if value is not None:
                return value
        if event_name:
            return event_name
        return UNKNOWN_SECTION

    def content_metadata(
        self,
        properties: PropertyMap,
        options: PropertyMap,
    ) -> ContentMetadata:
        """Build content metadata from event properties and options."""
        subbrand = None
        subbrand_key = self._setting("subbrand_property_name")
        if subbrand_key:
            subbrand = properties.get(subbrand_key)

        clientid = None
        client_id_key = self._setting("client_id_property_name")
        if client_id_key:
            clientid = properties.get(client_id_key)

        return ContentMetadata(
            assetid=self.content_asset_id(properties),
            title=properties.get("title", ""),
            program=properties.get("program", ""),
            pipmode=options.get("pipmode", "false"),
            adloadtype=ad_load_type(options, properties),
            seg_b=options.get("segB", ""),
            seg_c=options.get("segC", ""),
            isfullepisode=full_episode_status(properties),
            has_ads=has_ads_status(options),
            airdate=format_airdate(get_text(properties, AIRDATE_KEY)),
            length=self.content_length(properties),
            cross_id1=options.get("crossId1", ""),
            cross_id2=options.get("crossId2", ""),
            subbrand=subbrand,
            clientid=clientid,
        )

    def ad_metadata(self, properties: PropertyMap) -> AdMetadata:
        """Build ad metadata from ad event properties."""
        return AdMetadata(
            assetid=self.ad_asset_id(properties),
            type=normalize_ad_type(get_str(properties, "type")),
            title=get_text(properties, "title") or "",
        )

    def static_metadata(
        self,
        properties: PropertyMap,
        options: PropertyMap,
        event_name: str | None,
    ) -> StaticMetadata:
        """Build static metadata for a screen view."""
        return StaticMetadata(
            assetid=self.content_asset_id(properties),
            section=self.section(properties, event_name),
            seg_a=options.get("segA", ""),
            seg_b=options.get("segB", ""),
            seg_c=options.get("segC", ""),
            cross_id1=options.get("crossId1", ""),
        )
