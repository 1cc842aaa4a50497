"""Tests for the JSON to dataclass mapping helpers and debug logging."""

import logging

import pytest

from crestron_touchpanel.exceptions import CrestronDataError
from crestron_touchpanel.logging import get_logger, log_api_response, log_extra_fields
from crestron_touchpanel.models import (
    Audio,
    DeviceDisplay,
    DeviceInfo,
    DnsSettings,
    IPv4,
    NetworkAdapters,
)
from crestron_touchpanel.utils import (
    build_model,
    build_model_list,
    get_api_field_mapping,
    model_to_api_dict,
    to_api_field_name,
)


@pytest.mark.parametrize(
    "attribute,expected",
    [
        ("is_muted", "IsMuted"),
        ("standby_timeout_minutes", "StandbyTimeoutMinutes"),
        ("auto_hide_time_out_seconds", "AutoHideTimeOutSeconds"),
        ("lcd", "Lcd"),
    ],
)
def test_to_api_field_name(attribute, expected):
    assert to_api_field_name(attribute) == expected


def test_field_mapping_honours_declared_keys():
    mapping = get_api_field_mapping(NetworkAdapters)

    assert mapping["IPv6"] == "ipv6"
    assert mapping["HostName"] == "host_name"
    assert "_extra_fields" not in mapping.values()


def test_build_model_keeps_unknown_keys():
    info = build_model({"Model": "TSW-1070", "NewFirmwareKey": {"a": 1}}, DeviceInfo)

    assert info.model == "TSW-1070"
    assert info._extra_fields == {"NewFirmwareKey": {"a": 1}}


def test_build_model_accepts_attribute_names():
    info = build_model({"serial_number": "ABC"}, DeviceInfo)

    assert info.serial_number == "ABC"


@pytest.mark.parametrize("data", [None, [], "Display", 3])
def test_build_model_requires_an_object(data):
    with pytest.raises(CrestronDataError):
        build_model(data, DeviceDisplay)


def test_nested_type_mismatch_reports_location():
    with pytest.raises(CrestronDataError) as exc_info:
        build_model({"IPv4": {"Addresses": "192.168.1.50"}}, DnsSettings, "Device.NetworkAdapters.DnsSettings")

    assert "Device.NetworkAdapters.DnsSettings.IPv4.Addresses" in str(exc_info.value)


def test_build_model_list_requires_an_array():
    with pytest.raises(CrestronDataError):
        build_model_list({"Name": "Firmware"}, DeviceInfo)


def test_model_to_api_dict_omits_unset_fields():
    display = DeviceDisplay(audio=Audio(volume=35))

    assert model_to_api_dict(display) == {"Audio": {"Volume": 35}}


def test_model_to_api_dict_uses_declared_keys_and_lists():
    settings = DnsSettings(ipv4=IPv4(dns_servers=["1.1.1.1"]))

    assert model_to_api_dict(settings) == {
        "IPv4": {"Addresses": [], "DnsServers": ["1.1.1.1"], "StaticDns": []}
    }


def test_get_logger_namespacing():
    assert get_logger().name == "crestron_touchpanel"
    assert get_logger("crestron_touchpanel.api_client").name == "crestron_touchpanel.api_client"
    assert get_logger("tests").name == "crestron_touchpanel.tests"


def test_log_extra_fields_truncates_long_values(caplog):
    logger = get_logger("tests")

    with caplog.at_level(logging.DEBUG, logger="crestron_touchpanel"):
        log_extra_fields(logger, "DeviceInfo", {"Blob": "x" * 50}, max_length=10)

    assert "Unmapped fields for DeviceInfo" in caplog.text
    assert "... [truncated]" in caplog.text


def test_log_api_response_skipped_above_debug(caplog):
    logger = get_logger("tests")

    with caplog.at_level(logging.INFO, logger="crestron_touchpanel"):
        log_api_response(logger, "GET", "https://panel/Device/Display", "{}", 200)

    assert caplog.records == []
