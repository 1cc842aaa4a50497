"""
Models for the display state returned by, and written to, ``/Device/Display``.

The same classes serve as partial-update bodies: only the fields that are set
(not None) are serialized when a control command is sent.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class AutoBrightness:
    is_enabled: Optional[bool] = None
    threshold_value: Optional[int] = None


@dataclass
class Presets:
    high_level: Optional[int] = None
    low_level: Optional[int] = None


@dataclass
class Lcd:
    auto_brightness: Optional[AutoBrightness] = None
    brightness: Optional[int] = None
    presets: Optional[Presets] = None
    standby_timeout_minutes: Optional[int] = None


@dataclass
class Audio:
    beep_volume: Optional[int] = None
    is_beep_enabled: Optional[bool] = None
    is_media_muted: Optional[bool] = None
    is_muted: Optional[bool] = None
    media_volume: Optional[int] = None
    volume: Optional[int] = None


@dataclass
class VirtualButtons:
    """Settings of the on-screen button toolbar."""
    auto_hide_time_out_seconds: Optional[int] = None
    display_edge: Optional[str] = None
    is_show_during_standby_enabled: Optional[bool] = None
    is_show_on_wake_enabled: Optional[bool] = None


@dataclass
class DeviceDisplay:
    """Display, audio and toolbar state of a touch panel."""
    audio: Optional[Audio] = None
    current_state: Optional[str] = None
    is_local_setup_access_enabled: Optional[bool] = None
    lcd: Optional[Lcd] = None
    virtual_buttons: Optional[VirtualButtons] = None

    _extra_fields: Dict[str, Any] = field(default_factory=dict, repr=False)

    def get_audio(self) -> Audio:
        return self.audio or Audio()

    def get_lcd(self) -> Lcd:
        return self.lcd or Lcd()

    def get_auto_brightness(self) -> AutoBrightness:
        return self.get_lcd().auto_brightness or AutoBrightness()

    def get_presets(self) -> Presets:
        return self.get_lcd().presets or Presets()

    def get_button_toolbar(self) -> VirtualButtons:
        return self.virtual_buttons or VirtualButtons()
