"""
Models for the flattened output handed to the polling host.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ControllableProperty:
    """
    A control exposed to the host, with its current value and widget description.

    ``type`` is one of ``switch``, ``slider``, ``dropdown`` or ``text``.
    """
    name: Optional[str]
    value: Any = None
    type: str = "text"

    # Slider range
    range_start: Optional[float] = None
    range_end: Optional[float] = None
    label_start: Optional[str] = None
    label_end: Optional[str] = None

    # Dropdown options
    options: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values and empty options."""
        return {k: v for k, v in self.__dict__.items() if v is not None and v != []}


@dataclass
class ControlCommand:
    """An inbound control request, e.g. ``ControlCommand("Display#AudioPanelMute", "1")``."""
    property: str
    value: Any = None


@dataclass
class ExtendedStatistics:
    """Result of one polling cycle."""
    statistics: Dict[str, str] = field(default_factory=dict)
    controllable_properties: List[ControllableProperty] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statistics": dict(self.statistics),
            "controllable_properties": [p.to_dict() for p in self.controllable_properties],
        }
