"""Tests for the statistics projection."""

import pytest

from crestron_touchpanel import monitoring
from crestron_touchpanel.models import (
    DeviceCapabilities,
    DeviceDisplay,
    DeviceInfo,
    NetworkAdapters,
    SystemVersion,
)
from crestron_touchpanel.utils import build_model, build_model_list

from .conftest import (
    CAPABILITIES_PAYLOAD,
    DEVICE_INFO_PAYLOAD,
    DISPLAY_PAYLOAD,
    NETWORK_PAYLOAD,
    SYSTEM_VERSIONS_PAYLOAD,
)


@pytest.fixture
def device_info():
    return build_model(DEVICE_INFO_PAYLOAD["Device"]["DeviceInfo"], DeviceInfo)


@pytest.fixture
def display():
    return build_model(DISPLAY_PAYLOAD["Device"]["Display"], DeviceDisplay)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("poweron", "Poweron"),
        ("TSW-770", "TSW-770"),
        ("True", "true"),
        ("FALSE", "false"),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        ("", None),
        ("null", None),
        (None, None),
        (1.5, None),
        (["a"], None),
    ],
)
def test_map_to_value(value, expected):
    assert monitoring.map_to_value(value) == expected


def test_map_to_value_keeps_raw_case():
    assert monitoring.map_to_value("av.example.local", title_case=False) == "av.example.local"


def test_general_properties(device_info):
    stats = monitoring.generate_general_properties(device_info)

    assert stats == {
        "BuildDate": "Jan 10 2024 (478917)",
        "Category": "TouchPanel",
        "DeviceID": "@E-00107fe8ad4e",
        "FirmwareVersion": "3.002.1061",
        "MACAddress": "00.10.7f.e8.ad.4e",
        "Manufacturer": "Crestron",
        "Model": "TSW-770",
        "Name": "Tsw-770-lobby",
        "ProductID": "0x7700",
        "PUFVersion": "3.002.1061",
        "RebootReason": "Poweron",
        "SerialNumber": "2118NEJ03553",
    }


def test_unavailable_values_render_as_not_available():
    stats = monitoring.generate_general_properties(None)

    assert len(stats) == 12
    assert set(stats.values()) == {"N/A"}


def test_capabilities_properties():
    capabilities = build_model(CAPABILITIES_PAYLOAD["Device"]["DeviceCapabilities"], DeviceCapabilities)

    stats = monitoring.generate_capabilities_properties(capabilities)

    assert stats == {
        "Capabilities#ConfigFileUploadSupported": "true",
        "Capabilities#LogFileUploadSupported": "false",
        "Capabilities#PortDMInputCount": "0",
        "Capabilities#PortEthernetAdapterCount": "1",
        "Capabilities#PortHDMIInputCount": "1",
        "Capabilities#PortHDMIOutputCount": "0",
    }


def test_capabilities_without_port_config():
    stats = monitoring.generate_capabilities_properties(DeviceCapabilities(is_config_file_upload_supported=False))

    assert stats["Capabilities#ConfigFileUploadSupported"] == "false"
    assert stats["Capabilities#PortHDMIInputCount"] == "N/A"


def test_network_properties():
    network = build_model(NETWORK_PAYLOAD["Device"]["NetworkAdapters"], NetworkAdapters)

    stats = monitoring.generate_network_properties(network)

    assert stats == {
        "Network#DNSServers": "192.168.1.2,8.8.8.8",
        "Network#Hostname": "Tsw-770-lobby",
        "Network#IPv6Enabled": "No",
        "Network#LANDefaultGateway": "192.168.1.1",
        "Network#LANDHCPEnabled": "On",
        "Network#LANDomainName": "av.example.local",
        "Network#LANIPAddress": "192.168.1.50",
        "Network#LANLinkActive": "true",
        "Network#LANSubnetMask": "255.255.255.0",
        "Network#WiFiDomainName": "wlan.example.local",
        "Network#WiFiLinkActive": "false",
        "Network#WiFiMACAddress": "00.10.7f.e8.ad.4f",
    }


def test_network_properties_with_sparse_payload():
    network = build_model({"HostName": "panel", "DnsSettings": {"IPv4": {"DnsServers": None}}}, NetworkAdapters)

    stats = monitoring.generate_network_properties(network)

    assert stats["Network#Hostname"] == "Panel"
    assert stats["Network#DNSServers"] == "N/A"
    assert stats["Network#LANIPAddress"] == "N/A"
    assert stats["Network#LANDHCPEnabled"] == "Off"
    assert stats["Network#IPv6Enabled"] == "No"


def test_system_version_properties():
    versions = build_model_list(
        SYSTEM_VERSIONS_PAYLOAD["Device"]["SystemVersions"]["Components"], SystemVersion)

    stats = monitoring.generate_system_version_properties(versions)

    assert stats == {
        "SystemVersions#FirmwareCategory": "Os",
        "SystemVersions#FirmwareVersion": "3.002.1061",
        "SystemVersions#TouchscreenfwCategory": "Touchscreen",
        "SystemVersions#TouchscreenfwVersion": "1.0.12",
    }


@pytest.mark.parametrize("versions", [None, []])
def test_no_system_versions(versions):
    assert monitoring.generate_system_version_properties(versions) == {}


def test_display_properties(display):
    stats = monitoring.generate_display_properties(display)

    assert stats["Display#Status"] == "On"
    assert stats["Display#LocalSetupSequence"] == "On"
    assert stats["Display#LCDAutoBrightness"] == "Off"
    assert stats["Display#LCDBrightness(%)"] == "80"
    assert stats["Display#LCDBrightnessCurrentValue(%)"] == "80"
    assert stats["Display#LCDBrightnessHighPreset(%)"] == "90"
    assert stats["Display#LCDBrightnessLowPresetCurrentValue(%)"] == "20"
    assert stats["Display#LCDStandbyTimeout(min)"] == "15"
    assert stats["Display#AudioPanelMute"] == "Off"
    assert stats["Display#AudioPanelVolumeCurrentValue(%)"] == "70"
    assert stats["Display#AudioMediaMute"] == "On"
    assert stats["Display#AudioBeepEnabled"] == "On"
    assert stats["Display#AudioBeepVolumeCurrentValue(%)"] == "40"
    assert stats["Display#ButtonToolbarShowOnWake"] == "On"
    assert stats["Display#ButtonToolbarShowDuringStandby"] == "Off"
    assert stats["Display#ButtonToolbarDisplayEdge"] == "Left"
    assert stats["Display#ButtonToolbarAutoHideTimeout(s)"] == "10"


def test_display_current_values_follow_active_mode(display):
    """Test that read-outs are only present for the controls active in the current mode."""
    stats = monitoring.generate_display_properties(display)

    assert "Display#AudioMediaVolumeCurrentValue(%)" not in stats
    assert "Display#LCDALSThresholdCurrentValue(%)" not in stats

    display.audio.is_muted = True
    display.audio.is_beep_enabled = False
    display.lcd.auto_brightness.is_enabled = True
    stats = monitoring.generate_display_properties(display)

    assert "Display#AudioPanelVolumeCurrentValue(%)" not in stats
    assert "Display#AudioBeepVolumeCurrentValue(%)" not in stats
    assert "Display#LCDBrightnessCurrentValue(%)" not in stats
    assert stats["Display#LCDALSThresholdCurrentValue(%)"] == "30"


def test_no_display_properties_without_display():
    assert monitoring.generate_display_properties(None) == {}


@pytest.mark.parametrize(
    "elapsed_seconds,expected",
    [
        (0, "0 second(s)"),
        (5, "5 second(s)"),
        (3600, "1 hour(s) 0 second(s)"),
        (2 * 86400 + 3 * 3600 + 15 * 60 + 42, "2 day(s) 3 hour(s) 15 minute(s) 42 second(s)"),
        (86400 + 61, "1 day(s) 1 minute(s) 1 second(s)"),
    ],
)
def test_format_uptime(elapsed_seconds, expected):
    started_at = 1_700_000_000_000
    assert monitoring.format_uptime(started_at, started_at + elapsed_seconds * 1000) == expected


def test_format_uptime_minutes():
    assert monitoring.format_uptime_minutes(0, 125_999) == "2"
    assert monitoring.format_uptime_minutes(None) is None


def test_adapter_metadata_properties():
    metadata = {
        monitoring.ADAPTER_VERSION_KEY: "1.2.0",
        monitoring.ADAPTER_BUILD_DATE_KEY: "2026-10-19T00:00:00Z",
        monitoring.ADAPTER_UPTIME_KEY: "0",
        monitoring.ACTIVE_PROPERTY_GROUPS_KEY: "General,Display",
    }

    stats = monitoring.generate_adapter_metadata_properties(metadata, now_ms=90_000)

    assert stats == {
        "AdapterMetadata#AdapterBuildDate": "2026-10-19T00:00:00Z",
        "AdapterMetadata#AdapterUptime": "1 minute(s) 30 second(s)",
        "AdapterMetadata#AdapterUptime(min)": "1",
        "AdapterMetadata#AdapterVersion": "1.2.0",
        "AdapterMetadata#ActivePropertyGroups": "General,Display",
    }


def test_adapter_metadata_without_version_file():
    stats = monitoring.generate_adapter_metadata_properties({})

    assert set(stats.values()) == {"N/A"}
