"""
Projection of the typed device snapshot into the flat statistics map.

Every key produced here maps to a string. Values that are unavailable are
rendered as ``const.NOT_AVAILABLE`` rather than being left out.
"""

import re
import time
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from . import const
from .logging import get_logger
from .models.capabilities import DeviceCapabilities
from .models.device_info import DeviceInfo
from .models.display import DeviceDisplay
from .models.network import NetworkAdapters
from .models.system_version import SystemVersion
from .properties import (
    AdapterMetadata,
    Capabilities,
    Display,
    General,
    Network,
    SystemVersions,
)

logger = get_logger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")

# Keys of the adapter metadata mapping built by the communicator
ADAPTER_VERSION_KEY = "adapter.version"
ADAPTER_BUILD_DATE_KEY = "adapter.build.date"
ADAPTER_UPTIME_KEY = "adapter.uptime"
ACTIVE_PROPERTY_GROUPS_KEY = "adapter.active.property.groups"


def to_title_case(value: Optional[str]) -> Optional[str]:
    """Upper-case the first character. ``"true"``/``"false"`` are returned unchanged."""
    if not value or value == "null":
        return None
    if value in ("true", "false"):
        return value
    return value[0].upper() + value[1:]


def map_to_value(value: Any, title_case: bool = True) -> Optional[str]:
    """
    Format a raw JSON value for the statistics map.

    Strings are title-cased unless ``title_case`` is False, boolean-like strings are
    lower-cased, booleans become ``true``/``false`` and integers their decimal form.
    Empty strings, None and any other type map to None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value:
            return None
        if value.lower() in ("true", "false"):
            return value.lower()
        return to_title_case(value) if title_case else value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return None


def map_bool_to_value(value: Optional[bool], true_value: str, false_value: str) -> Optional[str]:
    """Map a boolean to one of two labels; None counts as False."""
    return map_to_value(true_value if value is True else false_value)


def format_property_name(group: Optional[str], name: str) -> str:
    return name if group is None else const.PROPERTY_FORMAT.format(group, name)


def generate_properties(
    properties: Iterable[Enum],
    group: Optional[str],
    mapper: Callable[[Enum], Optional[str]],
) -> Dict[str, str]:
    """
    Build statistics entries for every property of a vocabulary.

    Args:
        properties: Enum members whose values are the property display names
        group: Group name used as ``Group#`` prefix, or None for ungrouped properties
        mapper: Returns the formatted value of a property, or None when unavailable

    Returns:
        Mapping of property key to value, with ``N/A`` for unavailable values
    """
    result = {}
    for prop in properties:
        value = mapper(prop)
        result[format_property_name(group, prop.value)] = (
            value if value is not None else const.NOT_AVAILABLE)
    return result


_GENERAL_MAPPERS: Dict[General, Callable[[DeviceInfo], Optional[str]]] = {
    General.BUILD_DATE: lambda info: map_to_value(info.build_date),
    General.CATEGORY: lambda info: map_to_value(info.category),
    General.DEVICE_ID: lambda info: map_to_value(info.device_id),
    General.FIRMWARE_VERSION: lambda info: map_to_value(info.device_version),
    General.MAC_ADDRESS: lambda info: map_to_value(info.mac_address),
    General.MANUFACTURER: lambda info: map_to_value(info.manufacturer),
    General.MODEL: lambda info: map_to_value(info.model),
    General.NAME: lambda info: map_to_value(info.name),
    General.PRODUCT_ID: lambda info: map_to_value(info.model_id),
    General.PUF_VERSION: lambda info: map_to_value(info.puf_version),
    General.REBOOT_REASON: lambda info: map_to_value(info.reboot_reason),
    General.SERIAL_NUMBER: lambda info: map_to_value(info.serial_number),
}

_CAPABILITIES_MAPPERS: Dict[Capabilities, Callable[[DeviceCapabilities], Optional[str]]] = {
    Capabilities.CONFIG_FILE_UPLOAD_SUPPORTED: lambda caps: map_to_value(caps.is_config_file_upload_supported),
    Capabilities.LOG_FILE_UPLOAD_SUPPORTED: lambda caps: map_to_value(caps.is_log_file_upload_supported),
    Capabilities.PC_NUMBER_OF_DM_INPUTS: lambda caps: map_to_value(caps.get_port_config().number_of_dm_inputs),
    Capabilities.PC_NUMBER_OF_ETHERNET_ADAPTERS: lambda caps: map_to_value(
        caps.get_port_config().number_of_ethernet_adapters),
    Capabilities.PC_NUMBER_OF_HDMI_INPUTS: lambda caps: map_to_value(caps.get_port_config().number_of_hdmi_inputs),
    Capabilities.PC_NUMBER_OF_HDMI_OUTPUTS: lambda caps: map_to_value(caps.get_port_config().number_of_hdmi_outputs),
}


def _join_dns_servers(network: NetworkAdapters) -> Optional[str]:
    servers = [server for server in network.get_dns_ipv4().dns_servers or [] if server]
    return map_to_value(",".join(servers))


_NETWORK_MAPPERS: Dict[Network, Callable[[NetworkAdapters], Optional[str]]] = {
    Network.DNS_SERVERS: _join_dns_servers,
    Network.HOSTNAME: lambda net: map_to_value(net.host_name),
    Network.IPV6_ENABLED: lambda net: map_bool_to_value(net.get_ipv6().is_supported, const.YES, const.NO),
    Network.LAN_DEFAULT_GATEWAY: lambda net: map_to_value(net.get_lan_ipv4().default_gateway),
    Network.LAN_DHCP_ENABLED: lambda net: map_bool_to_value(
        net.get_lan_ipv4().is_dhcp_enabled, const.ON, const.OFF),
    Network.LAN_DOMAIN_NAME: lambda net: map_to_value(net.get_ethernet_lan().domain_name, title_case=False),
    Network.LAN_IP_ADDRESS: lambda net: map_to_value(net.get_lan_ipv4().get_first_address().address),
    Network.LAN_LINK_ACTIVE: lambda net: map_to_value(net.get_ethernet_lan().link_status),
    Network.LAN_SUBNET_MASK: lambda net: map_to_value(net.get_lan_ipv4().get_first_address().subnet_mask),
    Network.WIFI_DOMAIN_NAME: lambda net: map_to_value(net.get_wifi().domain_name, title_case=False),
    Network.WIFI_LINK_ACTIVE: lambda net: map_to_value(net.get_wifi().link_status),
    Network.WIFI_MAC_ADDRESS: lambda net: map_to_value(net.get_wifi().mac_address),
}

_SYSTEM_VERSION_MAPPERS: Dict[SystemVersions, Callable[[SystemVersion], Optional[str]]] = {
    SystemVersions.CATEGORY: lambda version: map_to_value(version.category),
    SystemVersions.VERSION: lambda version: map_to_value(version.version),
}


def map_to_general(device_info: Optional[DeviceInfo], prop: General) -> Optional[str]:
    if device_info is None:
        return None
    return _GENERAL_MAPPERS[prop](device_info)


def map_to_capabilities(capabilities: Optional[DeviceCapabilities], prop: Capabilities) -> Optional[str]:
    if capabilities is None:
        return None
    return _CAPABILITIES_MAPPERS[prop](capabilities)


def map_to_network(network: Optional[NetworkAdapters], prop: Network) -> Optional[str]:
    if network is None:
        return None
    return _NETWORK_MAPPERS[prop](network)


def map_to_system_version(version: Optional[SystemVersion], prop: SystemVersions) -> Optional[str]:
    if version is None:
        return None
    return _SYSTEM_VERSION_MAPPERS[prop](version)


def generate_general_properties(device_info: Optional[DeviceInfo]) -> Dict[str, str]:
    if device_info is None:
        logger.debug("Device info is unavailable, General properties reported as N/A")
    return generate_properties(General, None, lambda prop: map_to_general(device_info, prop))


def generate_capabilities_properties(capabilities: Optional[DeviceCapabilities]) -> Dict[str, str]:
    return generate_properties(
        Capabilities, const.CAPABILITIES_GROUP, lambda prop: map_to_capabilities(capabilities, prop))


def generate_network_properties(network: Optional[NetworkAdapters]) -> Dict[str, str]:
    return generate_properties(
        Network, const.NETWORK_GROUP, lambda prop: map_to_network(network, prop))


def generate_system_version_properties(system_versions: Optional[List[SystemVersion]]) -> Dict[str, str]:
    """
    Build ``SystemVersions#<Component><Property>`` entries for every firmware component.

    The component name is stripped of non-alphanumeric characters and title-cased,
    so ``"touch-screen fw"`` becomes ``Touchscreenfw``.
    """
    if not system_versions:
        return {}

    properties = {}
    for version in system_versions:
        prefix = to_title_case(_NON_ALPHANUMERIC.sub("", version.name or "")) or ""
        for prop in SystemVersions:
            value = map_to_system_version(version, prop)
            properties[format_property_name(const.SYSTEM_VERSIONS_GROUP, prefix + prop.value)] = (
                value if value is not None else const.NOT_AVAILABLE)
    return properties


def generate_display_properties(display: Optional[DeviceDisplay]) -> Dict[str, str]:
    """
    Build ``Display#...`` entries.

    ``*CurrentValue`` read-outs are only present in the mode where the matching
    control is active: volumes while unmuted, beep volume while beeping is enabled,
    brightness while auto-brightness is off and the ALS threshold while it is on.
    """
    if display is None:
        logger.warning("The display is unavailable, returning no Display properties")
        return {}

    audio = display.get_audio()
    lcd = display.get_lcd()
    auto_brightness = display.get_auto_brightness()
    presets = display.get_presets()
    toolbar = display.get_button_toolbar()

    values: Dict[Display, Optional[str]] = {
        Display.STATUS: map_to_value(display.current_state),
        Display.LOCAL_SETUP_SEQUENCE: map_bool_to_value(
            display.is_local_setup_access_enabled, const.ON, const.OFF),
        # Audio
        Display.AUDIO_PANEL_MUTE: map_bool_to_value(audio.is_muted, const.ON, const.OFF),
        Display.AUDIO_PANEL_VOLUME: map_to_value(audio.volume),
        Display.AUDIO_MEDIA_MUTE: map_bool_to_value(audio.is_media_muted, const.ON, const.OFF),
        Display.AUDIO_MEDIA_VOLUME: map_to_value(audio.media_volume),
        Display.AUDIO_BEEP_ENABLED: map_bool_to_value(audio.is_beep_enabled, const.ON, const.OFF),
        Display.AUDIO_BEEP_VOLUME: map_to_value(audio.beep_volume),
        # LCD
        Display.LCD_AUTO_BRIGHTNESS: map_bool_to_value(auto_brightness.is_enabled, const.ON, const.OFF),
        Display.LCD_BRIGHTNESS: map_to_value(lcd.brightness),
        Display.LCD_ALS_THRESHOLD: map_to_value(auto_brightness.threshold_value),
        Display.LCD_BRIGHTNESS_HIGH_PRESET: map_to_value(presets.high_level),
        Display.LCD_BRIGHTNESS_HIGH_PRESET_VALUE: map_to_value(presets.high_level),
        Display.LCD_BRIGHTNESS_LOW_PRESET: map_to_value(presets.low_level),
        Display.LCD_BRIGHTNESS_LOW_PRESET_VALUE: map_to_value(presets.low_level),
        Display.LCD_STANDBY_TIMEOUT: map_to_value(lcd.standby_timeout_minutes),
        Display.LCD_STANDBY_TIMEOUT_VALUE: map_to_value(lcd.standby_timeout_minutes),
        # Button toolbar
        Display.BUTTON_TOOLBAR_SHOW_ON_WAKE: map_bool_to_value(
            toolbar.is_show_on_wake_enabled, const.ON, const.OFF),
        Display.BUTTON_TOOLBAR_SHOW_DURING_STANDBY: map_bool_to_value(
            toolbar.is_show_during_standby_enabled, const.ON, const.OFF),
        Display.BUTTON_TOOLBAR_DISPLAY_EDGE: map_to_value(toolbar.display_edge),
        Display.BUTTON_TOOLBAR_AUTO_HIDE_TIMEOUT: map_to_value(toolbar.auto_hide_time_out_seconds),
        Display.BUTTON_TOOLBAR_AUTO_HIDE_TIMEOUT_VALUE: map_to_value(toolbar.auto_hide_time_out_seconds),
    }
    if audio.is_muted is False:
        values[Display.AUDIO_PANEL_VOLUME_VALUE] = map_to_value(audio.volume)
    if audio.is_media_muted is False:
        values[Display.AUDIO_MEDIA_VOLUME_VALUE] = map_to_value(audio.media_volume)
    if audio.is_beep_enabled is True:
        values[Display.AUDIO_BEEP_VOLUME_VALUE] = map_to_value(audio.beep_volume)
    if auto_brightness.is_enabled is True:
        values[Display.LCD_ALS_THRESHOLD_VALUE] = map_to_value(auto_brightness.threshold_value)
    else:
        values[Display.LCD_BRIGHTNESS_VALUE] = map_to_value(lcd.brightness)

    return {
        format_property_name(const.DISPLAY_GROUP, prop.value): (
            value if value is not None else const.NOT_AVAILABLE)
        for prop, value in values.items()
    }


def format_uptime(started_at_ms: Optional[int], now_ms: Optional[int] = None) -> Optional[str]:
    """
    Format the time elapsed since ``started_at_ms``.

    Returns a string like ``"2 day(s) 3 hour(s) 15 minute(s) 42 second(s)"`` where
    zero-valued units other than seconds are omitted.
    """
    if started_at_ms is None:
        return None
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    uptime_seconds = abs(now_ms - started_at_ms) // 1000
    seconds = uptime_seconds % 60
    minutes = uptime_seconds % 3600 // 60
    hours = uptime_seconds % 86400 // 3600
    days = uptime_seconds // 86400

    parts = []
    if days > 0:
        parts.append(f"{days} day(s)")
    if hours > 0:
        parts.append(f"{hours} hour(s)")
    if minutes > 0:
        parts.append(f"{minutes} minute(s)")
    parts.append(f"{seconds} second(s)")
    return " ".join(parts)


def format_uptime_minutes(started_at_ms: Optional[int], now_ms: Optional[int] = None) -> Optional[str]:
    """Whole minutes elapsed since ``started_at_ms``."""
    if started_at_ms is None:
        return None
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return str(abs(now_ms - started_at_ms) // 1000 // 60)


def _parse_timestamp(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.error(f"Invalid adapter start timestamp: {value}")
        return None


def map_to_adapter_metadata(
    metadata: Mapping[str, Optional[str]], prop: AdapterMetadata, now_ms: Optional[int] = None
) -> Optional[str]:
    """
    Format one adapter metadata property.

    Args:
        metadata: Mapping with the ``adapter.*`` keys defined in this module
        prop: The property to format
        now_ms: Current time in milliseconds, defaults to the wall clock
    """
    if prop is AdapterMetadata.ADAPTER_UPTIME:
        return format_uptime(_parse_timestamp(metadata.get(ADAPTER_UPTIME_KEY)), now_ms)
    if prop is AdapterMetadata.ADAPTER_UPTIME_MIN:
        return format_uptime_minutes(_parse_timestamp(metadata.get(ADAPTER_UPTIME_KEY)), now_ms)
    if prop is AdapterMetadata.ADAPTER_VERSION:
        return map_to_value(metadata.get(ADAPTER_VERSION_KEY))
    if prop is AdapterMetadata.ADAPTER_BUILD_DATE:
        return map_to_value(metadata.get(ADAPTER_BUILD_DATE_KEY))
    return map_to_value(metadata.get(ACTIVE_PROPERTY_GROUPS_KEY))


def generate_adapter_metadata_properties(
    metadata: Mapping[str, Optional[str]], now_ms: Optional[int] = None
) -> Dict[str, str]:
    return generate_properties(
        AdapterMetadata, const.ADAPTER_METADATA_GROUP,
        lambda prop: map_to_adapter_metadata(metadata, prop, now_ms))
