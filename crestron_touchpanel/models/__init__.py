"""
Data models for Crestron touch panel API responses and adapter output.

.. warning::
    The dataclasses in this module describe the fields commonly returned by the
    panel's embedded JSON API. Firmware revisions differ: fields may be missing
    (the attribute stays ``None``) and unknown keys are kept in ``_extra_fields``
    on the top-level models.
"""

from .auth import AuthCookie
from .device_info import DeviceInfo
from .capabilities import DeviceCapabilities, PortConfig
from .system_version import SystemVersion
from .network import (
    NetworkAdapters,
    Adapters,
    BaseAdapter,
    LanAdapter,
    WifiAdapter,
    IPv4,
    IPv6,
    DnsSettings,
    AddressConfig,
)
from .display import DeviceDisplay, Audio, Lcd, AutoBrightness, Presets, VirtualButtons
from .statistics import ControllableProperty, ControlCommand, ExtendedStatistics

__all__ = [
    "AuthCookie",
    "DeviceInfo",
    "DeviceCapabilities",
    "PortConfig",
    "SystemVersion",
    "NetworkAdapters",
    "Adapters",
    "BaseAdapter",
    "LanAdapter",
    "WifiAdapter",
    "IPv4",
    "IPv6",
    "DnsSettings",
    "AddressConfig",
    "DeviceDisplay",
    "Audio",
    "Lcd",
    "AutoBrightness",
    "Presets",
    "VirtualButtons",
    "ControllableProperty",
    "ControlCommand",
    "ExtendedStatistics",
]
