"""Shared fixtures: a simulated touch panel behind a mocked requests session."""

import copy
import json
from unittest.mock import MagicMock
from urllib.parse import urlparse

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from urllib3 import HTTPResponse
from urllib3._collections import HTTPHeaderDict

from crestron_touchpanel import const
from crestron_touchpanel.api_client import CrestronTouchPanelClient
from crestron_touchpanel.communicator import CrestronTouchPanelCommunicator

HOST = "192.168.1.50"
LOGIN = "admin"
PASSWORD = "secret"

TRACK_COOKIE = "TRACKID=7f3b2c; Path=/; Secure; HttpOnly"
SESSION_COOKIES = [
    "userstr=admin; Path=/; Secure; HttpOnly",
    "userid=a1b2c3d4; Path=/; Secure; HttpOnly",
    "iv=99887766; Path=/; Secure; HttpOnly",
]
CSRF_TOKEN = "b2b9c7a3-token"

DEVICE_INFO_PAYLOAD = {
    "Device": {
        "DeviceInfo": {
            "BuildDate": "Jan 10 2024 (478917)",
            "Category": "TouchPanel",
            "DeviceId": "@E-00107fe8ad4e",
            "DeviceKey": "No SystemKey Server",
            "DeviceVersion": "3.002.1061",
            "Devid": "7700",
            "MacAddress": "00.10.7f.e8.ad.4e",
            "Manufacturer": "Crestron",
            "Model": "TSW-770",
            "ModelId": "0x7700",
            "Name": "tsw-770-lobby",
            "PufVersion": "3.002.1061",
            "RebootReason": "poweron",
            "SerialNumber": "2118NEJ03553",
            "Version": "2.1.0",
        }
    }
}

CAPABILITIES_PAYLOAD = {
    "Device": {
        "DeviceCapabilities": {
            "IsConfigFileUploadSupported": True,
            "IsLogFileUploadSupported": False,
            "PortConfig": {
                "NumberOfDmInputs": 0,
                "NumberOfEthernetAdapters": 1,
                "NumberOfHdmiInputs": 1,
                "NumberOfHdmiOutputs": 0,
            },
        }
    }
}

SYSTEM_VERSIONS_PAYLOAD = {
    "Device": {
        "SystemVersions": {
            "Components": [
                {"Name": "Firmware", "Category": "os", "Version": "3.002.1061"},
                {"Name": "touch-screen fw", "Category": "touchscreen", "Version": "1.0.12"},
            ]
        }
    }
}

NETWORK_PAYLOAD = {
    "Device": {
        "NetworkAdapters": {
            "Adapters": {
                "EthernetLan": {
                    "DomainName": "av.example.local",
                    "IPv4": {
                        "Addresses": [{"Address": "192.168.1.50", "SubnetMask": "255.255.255.0"}],
                        "DefaultGateway": "192.168.1.1",
                        "IsDhcpEnabled": True,
                    },
                    "LinkStatus": True,
                    "MacAddress": "00.10.7f.e8.ad.4e",
                },
                "Wifi": {
                    "DomainName": "wlan.example.local",
                    "LinkStatus": False,
                    "MacAddress": "00.10.7f.e8.ad.4f",
                },
            },
            "DnsSettings": {"IPv4": {"DnsServers": ["192.168.1.2", "8.8.8.8"]}},
            "HostName": "tsw-770-lobby",
            "IPv6": {"IsSupported": False},
        }
    }
}

DISPLAY_PAYLOAD = {
    "Device": {
        "Display": {
            "Audio": {
                "BeepVolume": 40,
                "IsBeepEnabled": True,
                "IsMediaMuted": True,
                "IsMuted": False,
                "MediaVolume": 55,
                "Volume": 70,
            },
            "CurrentState": "on",
            "IsLocalSetupAccessEnabled": True,
            "Lcd": {
                "AutoBrightness": {"IsEnabled": False, "ThresholdValue": 30},
                "Brightness": 80,
                "Presets": {"HighLevel": 90, "LowLevel": 20},
                "StandbyTimeoutMinutes": 15,
            },
            "VirtualButtons": {
                "AutoHideTimeOutSeconds": 10,
                "DisplayEdge": "Left",
                "IsShowDuringStandbyEnabled": False,
                "IsShowOnWakeEnabled": True,
            },
        }
    }
}

DEFAULT_PAYLOADS = {
    const.DEVICE_INFO: DEVICE_INFO_PAYLOAD,
    const.DEVICE_CAPABILITIES: CAPABILITIES_PAYLOAD,
    const.SYSTEM_VERSIONS: SYSTEM_VERSIONS_PAYLOAD,
    const.NETWORK_ADAPTERS: NETWORK_PAYLOAD,
    const.DISPLAY: DISPLAY_PAYLOAD,
}

FETCHED_ENDPOINTS = [
    const.DEVICE_INFO,
    const.DEVICE_CAPABILITIES,
    const.SYSTEM_VERSIONS,
    const.NETWORK_ADAPTERS,
    const.DISPLAY,
]


def make_response(url, status_code=200, body=None, headers=None, set_cookies=()):
    """Build a real requests.Response, keeping repeated Set-Cookie headers in ``raw``."""
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")

    header_dict = HTTPHeaderDict()
    for key, value in (headers or {}).items():
        header_dict.add(key, value)
    for cookie in set_cookies:
        header_dict.add("Set-Cookie", cookie)

    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.url = url
    response.encoding = "utf-8"
    response._content = content
    response.raw = HTTPResponse(body=b"", headers=header_dict, status=status_code, preload_content=False)
    response.headers = CaseInsensitiveDict(header_dict)
    return response


def _deep_merge(target, update):
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


class FakeCrestronDevice:
    """
    In-memory touch panel answering the requests of a mocked ``requests.Session``.

    Attributes:
        calls: Every request as ``(method, path, kwargs)``.
        payloads: GET payload per endpoint path. POSTs to ``/Device/Display`` are
                  merged into the display payload so later polls read them back.
        failures: Path to an HTTP status code or an exception raised instead of answering.
        login_status: Status code of the POST login.
        rejected_cookies: Session cookies answered with 401.
    """

    def __init__(self):
        self.calls = []
        self.payloads = copy.deepcopy(DEFAULT_PAYLOADS)
        self.failures = {}
        self.login_status = 200
        self.track_cookie = TRACK_COOKIE
        self.session_cookies = list(SESSION_COOKIES)
        self.csrf_token = CSRF_TOKEN
        self.rejected_cookies = set()

    def install(self, client):
        client.session = MagicMock()
        client.session.request.side_effect = self.handle
        return client

    def requests_to(self, path, method=None):
        return [call for call in self.calls
                if call[1] == path and (method is None or call[0] == method)]

    @property
    def session_cookie(self):
        return ",".join(self.session_cookies)

    def handle(self, method, url, **kwargs):
        path = urlparse(url).path
        self.calls.append((method, path, kwargs))

        failure = self.failures.get(path)
        if isinstance(failure, BaseException):
            raise failure
        if failure is not None:
            return make_response(url, failure, "Internal error")

        if path == const.LOGIN and method == "GET":
            cookies = [self.track_cookie] if self.track_cookie else []
            return make_response(url, 200, "<html></html>", set_cookies=cookies)
        if path == const.LOGIN and method == "POST":
            if self.login_status != 200:
                return make_response(url, self.login_status, "Invalid username or password")
            return make_response(
                url, 200, "",
                headers={const.CREST_XSRF_TOKEN_HEADER: self.csrf_token},
                set_cookies=self.session_cookies,
            )
        if path == const.LOGOUT:
            return make_response(url, 200, "")

        headers = kwargs.get("headers") or {}
        if headers.get("Cookie") in self.rejected_cookies:
            return make_response(url, 401, "Session expired")

        if method == "POST" and path == const.DISPLAY:
            update = kwargs["json"]["Device"]["Display"]
            _deep_merge(self.payloads[const.DISPLAY]["Device"]["Display"], update)
            return make_response(url, 200, {"Actions": [{"Operation": "SetPartial", "Results": []}]})

        if method == "GET" and path in self.payloads:
            return make_response(url, 200, self.payloads[path])
        return make_response(url, 404, "Not found")


@pytest.fixture
def device():
    return FakeCrestronDevice()


@pytest.fixture
def client(device):
    """A client wired to the fake panel."""
    return device.install(CrestronTouchPanelClient(HOST, LOGIN, PASSWORD))


@pytest.fixture
def make_communicator(device):
    """Factory for communicators wired to the fake panel."""
    def factory(**kwargs):
        kwargs.setdefault("host", HOST)
        kwargs.setdefault("login", LOGIN)
        kwargs.setdefault("password", PASSWORD)
        communicator = CrestronTouchPanelCommunicator(**kwargs)
        device.install(communicator.client)
        return communicator
    return factory
