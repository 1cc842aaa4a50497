"""
Models for the device identity returned by ``/Device/DeviceInfo``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class DeviceInfo:
    """
    Identity and firmware information of a touch panel.

    All fields are optional; firmware revisions differ in which keys they return.
    """
    # Identification
    name: Optional[str] = None
    model: Optional[str] = None
    model_id: Optional[str] = None
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    serial_number: Optional[str] = None
    mac_address: Optional[str] = None
    device_id: Optional[str] = None
    device_key: Optional[str] = None

    # Firmware
    device_version: Optional[str] = None
    puf_version: Optional[str] = None
    build_date: Optional[str] = None
    version: Optional[str] = None
    reboot_reason: Optional[str] = None

    _extra_fields: Dict[str, Any] = field(default_factory=dict, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values and internal fields."""
        return {k: v for k, v in self.__dict__.items()
                if not k.startswith('_') and v is not None}
