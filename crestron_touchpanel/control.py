"""
Controllable properties of the Display group and translation of control commands
into partial-update requests for ``/Device/Display``.
"""

from collections import namedtuple
from typing import Any, Callable, Dict, List, Optional

from . import const
from .exceptions import ValidationError
from .logging import get_logger
from .models.display import AutoBrightness, Audio, DeviceDisplay, Lcd, Presets, VirtualButtons
from .models.statistics import ControllableProperty
from .properties import Display, DisplayEdge
from .utils import model_to_api_dict

logger = get_logger(__name__)

SWITCH = "switch"
SLIDER = "slider"
DROPDOWN = "dropdown"
TEXT = "text"

_DisplayControl = namedtuple("_DisplayControl", ["kind", "build"])

# Each builder returns a DeviceDisplay with only the targeted leaf set.
_DISPLAY_CONTROLS: Dict[Display, _DisplayControl] = {
    Display.LOCAL_SETUP_SEQUENCE: _DisplayControl(
        SWITCH, lambda v: DeviceDisplay(is_local_setup_access_enabled=v)),
    # LCD
    Display.LCD_AUTO_BRIGHTNESS: _DisplayControl(
        SWITCH, lambda v: DeviceDisplay(lcd=Lcd(auto_brightness=AutoBrightness(is_enabled=v)))),
    Display.LCD_ALS_THRESHOLD: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(lcd=Lcd(auto_brightness=AutoBrightness(threshold_value=v)))),
    Display.LCD_BRIGHTNESS: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(lcd=Lcd(brightness=v))),
    Display.LCD_BRIGHTNESS_HIGH_PRESET: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(lcd=Lcd(presets=Presets(high_level=v)))),
    Display.LCD_BRIGHTNESS_LOW_PRESET: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(lcd=Lcd(presets=Presets(low_level=v)))),
    Display.LCD_STANDBY_TIMEOUT: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(lcd=Lcd(standby_timeout_minutes=v))),
    # Audio
    Display.AUDIO_PANEL_MUTE: _DisplayControl(
        SWITCH, lambda v: DeviceDisplay(audio=Audio(is_muted=v))),
    Display.AUDIO_PANEL_VOLUME: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(audio=Audio(volume=v))),
    Display.AUDIO_MEDIA_MUTE: _DisplayControl(
        SWITCH, lambda v: DeviceDisplay(audio=Audio(is_media_muted=v))),
    Display.AUDIO_MEDIA_VOLUME: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(audio=Audio(media_volume=v))),
    Display.AUDIO_BEEP_ENABLED: _DisplayControl(
        SWITCH, lambda v: DeviceDisplay(audio=Audio(is_beep_enabled=v))),
    Display.AUDIO_BEEP_VOLUME: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(audio=Audio(beep_volume=v))),
    # Button toolbar
    Display.BUTTON_TOOLBAR_SHOW_ON_WAKE: _DisplayControl(
        SWITCH, lambda v: DeviceDisplay(virtual_buttons=VirtualButtons(is_show_on_wake_enabled=v))),
    Display.BUTTON_TOOLBAR_SHOW_DURING_STANDBY: _DisplayControl(
        SWITCH, lambda v: DeviceDisplay(virtual_buttons=VirtualButtons(is_show_during_standby_enabled=v))),
    Display.BUTTON_TOOLBAR_DISPLAY_EDGE: _DisplayControl(
        DROPDOWN, lambda v: DeviceDisplay(virtual_buttons=VirtualButtons(display_edge=v))),
    Display.BUTTON_TOOLBAR_AUTO_HIDE_TIMEOUT: _DisplayControl(
        SLIDER, lambda v: DeviceDisplay(virtual_buttons=VirtualButtons(auto_hide_time_out_seconds=v))),
}


def display_property_name(prop: Display) -> str:
    return const.PROPERTY_FORMAT.format(const.DISPLAY_GROUP, prop.value)


def create_switch(name: str, value: Optional[bool]) -> ControllableProperty:
    return ControllableProperty(name=name, value=1 if value is True else 0, type=SWITCH)


def create_slider(name: str, range_end: int, initial_value: Optional[int]) -> ControllableProperty:
    return ControllableProperty(
        name=name,
        value=float(initial_value) if initial_value is not None else None,
        type=SLIDER,
        range_start=0.0,
        range_end=float(range_end),
        label_start="0",
        label_end=str(range_end),
    )


def create_dropdown(name: str, options: List[str], value: Optional[str]) -> ControllableProperty:
    return ControllableProperty(name=name, value=value, type=DROPDOWN, options=list(options))


def placeholder_controls() -> List[ControllableProperty]:
    """The inert control reported when no real control applies."""
    return [ControllableProperty(name=None, value=None, type=TEXT)]


def generate_display_controllers(display: Optional[DeviceDisplay]) -> List[ControllableProperty]:
    """
    Build the controls for the current display state.

    Sliders whose setting has no effect in the current mode are left out: the
    brightness slider is replaced by the ALS threshold while auto-brightness is on,
    volume sliders are hidden while muted and the beep volume while beeping is off.
    """
    if display is None:
        logger.warning("The display is unavailable, returning no controls")
        return []

    lcd = display.get_lcd()
    auto_brightness = display.get_auto_brightness()
    presets = display.get_presets()
    audio = display.get_audio()
    toolbar = display.get_button_toolbar()

    controls = [
        create_switch(display_property_name(Display.LOCAL_SETUP_SEQUENCE),
                      display.is_local_setup_access_enabled),
        # LCD
        create_switch(display_property_name(Display.LCD_AUTO_BRIGHTNESS), auto_brightness.is_enabled),
    ]
    if auto_brightness.is_enabled is True:
        controls.append(create_slider(
            display_property_name(Display.LCD_ALS_THRESHOLD), 100, auto_brightness.threshold_value))
    else:
        controls.append(create_slider(display_property_name(Display.LCD_BRIGHTNESS), 100, lcd.brightness))
    controls.append(create_slider(
        display_property_name(Display.LCD_BRIGHTNESS_HIGH_PRESET), 100, presets.high_level))
    controls.append(create_slider(
        display_property_name(Display.LCD_BRIGHTNESS_LOW_PRESET), 100, presets.low_level))
    controls.append(create_slider(
        display_property_name(Display.LCD_STANDBY_TIMEOUT), 120, lcd.standby_timeout_minutes))

    # Audio
    controls.append(create_switch(display_property_name(Display.AUDIO_PANEL_MUTE), audio.is_muted))
    if audio.is_muted is False:
        controls.append(create_slider(display_property_name(Display.AUDIO_PANEL_VOLUME), 100, audio.volume))
    controls.append(create_switch(display_property_name(Display.AUDIO_MEDIA_MUTE), audio.is_media_muted))
    if audio.is_media_muted is False:
        controls.append(create_slider(
            display_property_name(Display.AUDIO_MEDIA_VOLUME), 100, audio.media_volume))
    controls.append(create_switch(display_property_name(Display.AUDIO_BEEP_ENABLED), audio.is_beep_enabled))
    if audio.is_beep_enabled is True:
        controls.append(create_slider(
            display_property_name(Display.AUDIO_BEEP_VOLUME), 100, audio.beep_volume))

    # Button toolbar
    controls.append(create_switch(
        display_property_name(Display.BUTTON_TOOLBAR_SHOW_ON_WAKE), toolbar.is_show_on_wake_enabled))
    controls.append(create_switch(
        display_property_name(Display.BUTTON_TOOLBAR_SHOW_DURING_STANDBY),
        toolbar.is_show_during_standby_enabled))
    controls.append(create_dropdown(
        display_property_name(Display.BUTTON_TOOLBAR_DISPLAY_EDGE),
        DisplayEdge.get_values(), toolbar.display_edge))
    controls.append(create_slider(
        display_property_name(Display.BUTTON_TOOLBAR_AUTO_HIDE_TIMEOUT), 600,
        toolbar.auto_hide_time_out_seconds))
    return controls


def parse_control_property(property_key: str) -> Display:
    """
    Resolve a ``Display#<PropertyName>`` key to a controllable display property.

    Raises:
        ValidationError: If the key is malformed, names another group or a
                         property that cannot be controlled.
    """
    if not property_key or "#" not in property_key:
        raise ValidationError(f"Malformed control property {property_key!r}, expected Group#Property")

    group, name = property_key.split("#", 1)
    if group != const.DISPLAY_GROUP:
        raise ValidationError(f"Unsupported group {group} to control")

    prop = Display.get_by_name(name)
    if prop is None or prop not in _DISPLAY_CONTROLS:
        raise ValidationError(f"Unsupported property {property_key} to control")
    return prop


def _to_switch_value(value: Any) -> bool:
    return str(value) == "1"


def _to_slider_value(prop: Display, value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError) as e:
        raise ValidationError(f"Invalid numeric value {value!r} for {prop.value}") from e


def _to_dropdown_value(prop: Display, value: Any) -> str:
    edge = DisplayEdge.get_by_value(str(value)) if value is not None else None
    if edge is None:
        raise ValidationError(
            f"Invalid value {value!r} for {prop.value}, expected one of {', '.join(DisplayEdge.get_values())}")
    return edge.value


_VALUE_CONVERTERS: Dict[str, Callable[[Display, Any], Any]] = {
    SWITCH: lambda prop, value: _to_switch_value(value),
    SLIDER: _to_slider_value,
    DROPDOWN: _to_dropdown_value,
}


def build_display_request(prop: Display, value: Any) -> Dict[str, Any]:
    """
    Build the partial-update body for one display property.

    Returns:
        ``{"Device": {"Display": {...}}}`` with only the targeted field populated.

    Raises:
        ValidationError: If ``prop`` is not controllable or ``value`` is invalid for it.
    """
    control = _DISPLAY_CONTROLS.get(prop)
    if control is None:
        raise ValidationError(f"Unsupported property {prop.value} to control")

    converted = _VALUE_CONVERTERS[control.kind](prop, value)
    return {"Device": {"Display": model_to_api_dict(control.build(converted))}}
