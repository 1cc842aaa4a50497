"""
Property vocabularies exposed in the statistics map, and the response descriptors
used to extract typed models from endpoint payloads.
"""

from enum import Enum
from typing import Any, List, Optional, Tuple, Type

from . import const
from .models.capabilities import DeviceCapabilities
from .models.device_info import DeviceInfo
from .models.display import DeviceDisplay
from .models.network import NetworkAdapters
from .models.system_version import SystemVersion


class General(Enum):
    """Ungrouped device identity properties."""
    BUILD_DATE = "BuildDate"
    CATEGORY = "Category"
    DEVICE_ID = "DeviceID"
    FIRMWARE_VERSION = "FirmwareVersion"
    MAC_ADDRESS = "MACAddress"
    MANUFACTURER = "Manufacturer"
    MODEL = "Model"
    NAME = "Name"
    PRODUCT_ID = "ProductID"
    PUF_VERSION = "PUFVersion"
    REBOOT_REASON = "RebootReason"
    SERIAL_NUMBER = "SerialNumber"


class Capabilities(Enum):
    CONFIG_FILE_UPLOAD_SUPPORTED = "ConfigFileUploadSupported"
    LOG_FILE_UPLOAD_SUPPORTED = "LogFileUploadSupported"
    # Port config
    PC_NUMBER_OF_DM_INPUTS = "PortDMInputCount"
    PC_NUMBER_OF_ETHERNET_ADAPTERS = "PortEthernetAdapterCount"
    PC_NUMBER_OF_HDMI_INPUTS = "PortHDMIInputCount"
    PC_NUMBER_OF_HDMI_OUTPUTS = "PortHDMIOutputCount"


class Network(Enum):
    DNS_SERVERS = "DNSServers"
    HOSTNAME = "Hostname"
    IPV6_ENABLED = "IPv6Enabled"
    # LAN
    LAN_DEFAULT_GATEWAY = "LANDefaultGateway"
    LAN_DHCP_ENABLED = "LANDHCPEnabled"
    LAN_DOMAIN_NAME = "LANDomainName"
    LAN_IP_ADDRESS = "LANIPAddress"
    LAN_LINK_ACTIVE = "LANLinkActive"
    LAN_SUBNET_MASK = "LANSubnetMask"
    # WiFi
    WIFI_DOMAIN_NAME = "WiFiDomainName"
    WIFI_LINK_ACTIVE = "WiFiLinkActive"
    WIFI_MAC_ADDRESS = "WiFiMACAddress"


class SystemVersions(Enum):
    """Properties emitted once per firmware component."""
    CATEGORY = "Category"
    VERSION = "Version"


class AdapterMetadata(Enum):
    """Always-on properties describing the adapter itself."""
    ADAPTER_BUILD_DATE = "AdapterBuildDate"
    ADAPTER_UPTIME = "AdapterUptime"
    ADAPTER_UPTIME_MIN = "AdapterUptime(min)"
    ADAPTER_VERSION = "AdapterVersion"
    ACTIVE_PROPERTY_GROUPS = "ActivePropertyGroups"


class Display(Enum):
    STATUS = "Status"
    LOCAL_SETUP_SEQUENCE = "LocalSetupSequence"
    # LCD
    LCD_AUTO_BRIGHTNESS = const.LCD_DISPLAY_GROUP + "AutoBrightness"
    LCD_ALS_THRESHOLD = const.LCD_DISPLAY_GROUP + "ALSThreshold(%)"
    LCD_ALS_THRESHOLD_VALUE = const.LCD_DISPLAY_GROUP + "ALSThresholdCurrentValue(%)"
    LCD_BRIGHTNESS = const.LCD_DISPLAY_GROUP + "Brightness(%)"
    LCD_BRIGHTNESS_VALUE = const.LCD_DISPLAY_GROUP + "BrightnessCurrentValue(%)"
    LCD_BRIGHTNESS_HIGH_PRESET = const.LCD_DISPLAY_GROUP + "BrightnessHighPreset(%)"
    LCD_BRIGHTNESS_HIGH_PRESET_VALUE = const.LCD_DISPLAY_GROUP + "BrightnessHighPresetCurrentValue(%)"
    LCD_BRIGHTNESS_LOW_PRESET = const.LCD_DISPLAY_GROUP + "BrightnessLowPreset(%)"
    LCD_BRIGHTNESS_LOW_PRESET_VALUE = const.LCD_DISPLAY_GROUP + "BrightnessLowPresetCurrentValue(%)"
    LCD_STANDBY_TIMEOUT = const.LCD_DISPLAY_GROUP + "StandbyTimeout(min)"
    LCD_STANDBY_TIMEOUT_VALUE = const.LCD_DISPLAY_GROUP + "StandbyTimeoutCurrentValue(min)"
    # Audio
    AUDIO_PANEL_MUTE = const.AUDIO_DISPLAY_GROUP + "PanelMute"
    AUDIO_PANEL_VOLUME = const.AUDIO_DISPLAY_GROUP + "PanelVolume(%)"
    AUDIO_PANEL_VOLUME_VALUE = const.AUDIO_DISPLAY_GROUP + "PanelVolumeCurrentValue(%)"
    AUDIO_MEDIA_MUTE = const.AUDIO_DISPLAY_GROUP + "MediaMute"
    AUDIO_MEDIA_VOLUME = const.AUDIO_DISPLAY_GROUP + "MediaVolume(%)"
    AUDIO_MEDIA_VOLUME_VALUE = const.AUDIO_DISPLAY_GROUP + "MediaVolumeCurrentValue(%)"
    AUDIO_BEEP_ENABLED = const.AUDIO_DISPLAY_GROUP + "BeepEnabled"
    AUDIO_BEEP_VOLUME = const.AUDIO_DISPLAY_GROUP + "BeepVolume(%)"
    AUDIO_BEEP_VOLUME_VALUE = const.AUDIO_DISPLAY_GROUP + "BeepVolumeCurrentValue(%)"
    # Button toolbar
    BUTTON_TOOLBAR_SHOW_ON_WAKE = const.BUTTON_TOOLBAR_DISPLAY_GROUP + "ShowOnWake"
    BUTTON_TOOLBAR_SHOW_DURING_STANDBY = const.BUTTON_TOOLBAR_DISPLAY_GROUP + "ShowDuringStandby"
    BUTTON_TOOLBAR_DISPLAY_EDGE = const.BUTTON_TOOLBAR_DISPLAY_GROUP + "DisplayEdge"
    BUTTON_TOOLBAR_AUTO_HIDE_TIMEOUT = const.BUTTON_TOOLBAR_DISPLAY_GROUP + "AutoHideTimeout(s)"
    BUTTON_TOOLBAR_AUTO_HIDE_TIMEOUT_VALUE = const.BUTTON_TOOLBAR_DISPLAY_GROUP + "AutoHideTimeoutCurrentValue(s)"

    @classmethod
    def get_by_name(cls, name: str) -> Optional["Display"]:
        """Look up a display property by its display name, ignoring case."""
        for display in cls:
            if display.value.lower() == name.lower():
                return display
        return None


class DisplayEdge(Enum):
    """Screen edge the button toolbar is docked to."""
    TOP = "Top"
    BOTTOM = "Bottom"
    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def get_values(cls) -> List[str]:
        return [edge.value for edge in cls]

    @classmethod
    def get_by_value(cls, value: str) -> Optional["DisplayEdge"]:
        for edge in cls:
            if edge.value.lower() == value.strip().lower():
                return edge
        return None


class RetrievalType(Enum):
    """Independently fetched property groups, each with its own poll interval."""
    GENERAL = const.GENERAL_GROUP
    CAPABILITIES = const.CAPABILITIES_GROUP
    DISPLAY = const.DISPLAY_GROUP
    NETWORK = const.NETWORK_GROUP
    SYSTEM_VERSIONS = const.SYSTEM_VERSIONS_GROUP


class ResponseType(Enum):
    """
    Describes where a model lives inside an endpoint payload.

    Each member carries the key path below the response root, the model class
    and whether the node is an array of models.
    """
    DEVICE_INFO = (("Device", "DeviceInfo"), DeviceInfo, False)
    DEVICE_CAPABILITIES = (("Device", "DeviceCapabilities"), DeviceCapabilities, False)
    SYSTEM_VERSIONS = (("Device", "SystemVersions", "Components"), SystemVersion, True)
    NETWORK_ADAPTERS = (("Device", "NetworkAdapters"), NetworkAdapters, False)
    DISPLAY = (("Device", "Display"), DeviceDisplay, False)

    def __init__(self, path: Tuple[str, ...], model_class: Type, is_collection: bool):
        self.path = path
        self.model_class = model_class
        self.is_collection = is_collection

    def extract_node(self, payload: Any) -> Any:
        """
        Walk ``path`` from the payload root.

        Returns None when any key along the path is missing.
        """
        node = payload
        for key in self.path:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
            if node is None:
                return None
        return node
