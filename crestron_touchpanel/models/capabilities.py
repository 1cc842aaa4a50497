"""
Models for ``/Device/DeviceCapabilities``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class PortConfig:
    """Number of physical ports of each kind on the panel."""
    number_of_dm_inputs: Optional[int] = None
    number_of_ethernet_adapters: Optional[int] = None
    number_of_hdmi_inputs: Optional[int] = None
    number_of_hdmi_outputs: Optional[int] = None


@dataclass
class DeviceCapabilities:
    """Feature flags and port layout advertised by the panel."""
    is_config_file_upload_supported: Optional[bool] = None
    is_log_file_upload_supported: Optional[bool] = None
    port_config: Optional[PortConfig] = None

    _extra_fields: Dict[str, Any] = field(default_factory=dict, repr=False)

    def get_port_config(self) -> PortConfig:
        """Return the port configuration, or an empty one when the panel omits it."""
        return self.port_config or PortConfig()
