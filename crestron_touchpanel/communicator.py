import json
import os
import threading
import time
from typing import Any, Dict, Iterable, List, Optional, Union

from . import const
from .api_client import CrestronTouchPanelClient
from .control import (
    build_display_request,
    generate_display_controllers,
    parse_control_property,
    placeholder_controls,
)
from .groups import PropertyGroupSelection
from .logging import get_logger
from .models.capabilities import DeviceCapabilities
from .models.device_info import DeviceInfo
from .models.display import DeviceDisplay
from .models.network import NetworkAdapters
from .models.statistics import ControlCommand, ExtendedStatistics
from .models.system_version import SystemVersion
from .monitoring import (
    ACTIVE_PROPERTY_GROUPS_KEY,
    ADAPTER_BUILD_DATE_KEY,
    ADAPTER_UPTIME_KEY,
    ADAPTER_VERSION_KEY,
    generate_adapter_metadata_properties,
    generate_capabilities_properties,
    generate_display_properties,
    generate_general_properties,
    generate_network_properties,
    generate_system_version_properties,
)
from .properties import ResponseType, RetrievalType

logger = get_logger(__name__)

DEFAULT_VERSION_PATH = os.path.join(os.path.dirname(__file__), "version.json")

# Fetched in this order every cycle: (group, snapshot attribute, endpoint, response type)
FETCH_PLAN = (
    (const.GENERAL_GROUP, "device_info", const.DEVICE_INFO, ResponseType.DEVICE_INFO),
    (const.CAPABILITIES_GROUP, "device_capabilities", const.DEVICE_CAPABILITIES,
     ResponseType.DEVICE_CAPABILITIES),
    (const.SYSTEM_VERSIONS_GROUP, "system_versions", const.SYSTEM_VERSIONS, ResponseType.SYSTEM_VERSIONS),
    (const.NETWORK_GROUP, "network_adapters", const.NETWORK_ADAPTERS, ResponseType.NETWORK_ADAPTERS),
    (const.DISPLAY_GROUP, "device_display", const.DISPLAY, ResponseType.DISPLAY),
)


def load_version_properties(path: Optional[str] = None) -> Dict[str, Optional[str]]:
    """
    Load the adapter version and build date from ``version.json``.

    A missing or unreadable file is logged and yields an empty mapping, so the
    metadata properties report ``N/A``.
    """
    path = path or DEFAULT_VERSION_PATH
    try:
        with open(path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except (json.JSONDecodeError, IOError) as e:
        logger.error(f"Failed to load version properties from {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"Version properties in {path} are not a JSON object")
        return {}
    return {
        ADAPTER_VERSION_KEY: data.get(ADAPTER_VERSION_KEY),
        ADAPTER_BUILD_DATE_KEY: data.get(ADAPTER_BUILD_DATE_KEY),
    }


def _validate_interval(retrieval_type: RetrievalType, interval_ms: Any) -> int:
    try:
        value = int(interval_ms)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{retrieval_type.value} interval must be an integer, got {interval_ms!r}") from e
    if value <= 0:
        raise ValueError(f"{retrieval_type.value} interval must be positive, got {value}")
    return value


def _interval_property(retrieval_type: RetrievalType, doc: str) -> property:
    def getter(self) -> int:
        return self.get_interval(retrieval_type)

    def setter(self, interval_ms: int) -> None:
        self.set_interval(retrieval_type, interval_ms)

    return property(getter, setter, doc=doc)


class CrestronTouchPanelCommunicator:
    """
    Polling and control adapter for a single Crestron touch panel.

    Each :meth:`poll` authenticates if needed, fetches the enabled property groups,
    and returns the flattened statistics with the display controls. Commands are
    translated into partial updates of ``/Device/Display``. Polls and commands are
    serialized by one re-entrant lock.

    Example:
        >>> communicator = CrestronTouchPanelCommunicator(
        ...     host="192.168.1.50", login="admin", password="secret",
        ...     display_property_groups="General,Display")
        >>> stats = communicator.poll()
        >>> communicator.apply_command("Display#AudioPanelMute", "1")
    """

    general_interval = _interval_property(
        RetrievalType.GENERAL, "Retrieval interval of the General group, in milliseconds.")
    capabilities_interval = _interval_property(
        RetrievalType.CAPABILITIES, "Retrieval interval of the Capabilities group, in milliseconds.")
    display_interval = _interval_property(
        RetrievalType.DISPLAY, "Retrieval interval of the Display group, in milliseconds.")
    network_interval = _interval_property(
        RetrievalType.NETWORK, "Retrieval interval of the Network group, in milliseconds.")
    system_versions_interval = _interval_property(
        RetrievalType.SYSTEM_VERSIONS, "Retrieval interval of the SystemVersions group, in milliseconds.")

    def __init__(
        self,
        host: str,
        login: Optional[str],
        password: Optional[str],
        port: int = 443,
        protocol: str = "https",
        trust_all_certificates: bool = True,
        display_property_groups: Optional[Union[str, Iterable[str]]] = None,
        general_interval: int = const.DEFAULT_INTERVAL_MS,
        capabilities_interval: int = const.DEFAULT_INTERVAL_MS,
        display_interval: int = const.DEFAULT_INTERVAL_MS,
        network_interval: int = const.DEFAULT_INTERVAL_MS,
        system_versions_interval: int = const.DEFAULT_INTERVAL_MS,
        timeout: Optional[float] = None,
        auth_retry_enabled: bool = False,
        version_path: Optional[str] = None,
    ):
        """
        Initialize the adapter. No request is sent until the first poll or command.

        Args:
            host: Host name or IP address of the panel.
            login: Username of a local panel account.
            password: Password of that account.
            port: HTTP(S) port. Defaults to 443.
            protocol: ``https`` or ``http``. Defaults to ``https``.
            trust_all_certificates: Accept any TLS certificate. Defaults to True.
            display_property_groups: Enabled groups, either a comma-separated string
                                     (``"All"`` selects every group) or an iterable of
                                     group names. Defaults to ``General``.
            general_interval: Interval of the General group in ms (stored only).
            capabilities_interval: Interval of the Capabilities group in ms (stored only).
            display_interval: Interval of the Display group in ms (stored only).
            network_interval: Interval of the Network group in ms (stored only).
            system_versions_interval: Interval of the SystemVersions group in ms (stored only).
            timeout: Optional request timeout in seconds.
            auth_retry_enabled: Renew the session once when a request is rejected.
            version_path: Optional path to a custom ``version.json``.
        """
        self._lock = threading.RLock()
        self.client = CrestronTouchPanelClient(
            host,
            login,
            password,
            port=port,
            protocol=protocol,
            trust_all_certificates=trust_all_certificates,
            timeout=timeout,
            auth_retry_enabled=auth_retry_enabled,
        )

        if display_property_groups is None or isinstance(display_property_groups, str):
            self.selection = PropertyGroupSelection()
            self.selection.update(display_property_groups)
        else:
            self.selection = PropertyGroupSelection(display_property_groups)

        self._intervals: Dict[RetrievalType, int] = {}
        self.general_interval = general_interval
        self.capabilities_interval = capabilities_interval
        self.display_interval = display_interval
        self.network_interval = network_interval
        self.system_versions_interval = system_versions_interval

        self.device_info: Optional[DeviceInfo] = None
        self.device_capabilities: Optional[DeviceCapabilities] = None
        self.system_versions: Optional[List[SystemVersion]] = None
        self.network_adapters: Optional[NetworkAdapters] = None
        self.device_display: Optional[DeviceDisplay] = None
        self.local_extended_statistics: Optional[ExtendedStatistics] = None

        self.adapter_initialization_timestamp = int(time.time() * 1000)
        self.version_properties = load_version_properties(version_path)

    @property
    def request_state(self):
        return self.client.request_state

    @property
    def display_property_groups(self) -> str:
        """Comma-separated list of the enabled property groups."""
        return str(self.selection)

    @display_property_groups.setter
    def display_property_groups(self, value: str) -> None:
        with self._lock:
            self.selection.update(value)

    def get_interval(self, retrieval_type: RetrievalType) -> int:
        return self._intervals.get(retrieval_type, const.DEFAULT_INTERVAL_MS)

    def set_interval(self, retrieval_type: RetrievalType, interval_ms: int) -> None:
        """
        Store the retrieval interval of a group.

        Raises:
            ValueError: If ``interval_ms`` is not a positive integer.
        """
        self._intervals[retrieval_type] = _validate_interval(retrieval_type, interval_ms)

    def _adapter_metadata(self) -> Dict[str, Optional[str]]:
        metadata = dict(self.version_properties)
        metadata[ADAPTER_UPTIME_KEY] = str(self.adapter_initialization_timestamp)
        metadata[ACTIVE_PROPERTY_GROUPS_KEY] = self.display_property_groups
        return metadata

    def _setup_data(self) -> None:
        """
        Authenticate and fetch every enabled group.

        A snapshot field is only replaced by a successful fetch, so a failed
        endpoint keeps its previous value. Disabled groups are not fetched.

        Raises:
            AggregateFetchError: If every endpoint requested this cycle failed.
        """
        self.client.authenticate()
        self.request_state.clear()
        for group, attribute, endpoint, response_type in FETCH_PLAN:
            if not self.selection.is_group_enabled(group):
                continue
            result = self.client.fetch_result(endpoint, response_type)
            if result.ok:
                setattr(self, attribute, result.value)
        self.request_state.verify()

    def _build_statistics(self) -> Dict[str, str]:
        statistics = {}
        if self.selection.is_group_enabled(const.GENERAL_GROUP):
            statistics.update(generate_general_properties(self.device_info))
        statistics.update(generate_adapter_metadata_properties(self._adapter_metadata()))
        if self.selection.is_group_enabled(const.CAPABILITIES_GROUP):
            statistics.update(generate_capabilities_properties(self.device_capabilities))
        if self.selection.is_group_enabled(const.SYSTEM_VERSIONS_GROUP):
            statistics.update(generate_system_version_properties(self.system_versions))
        if self.selection.is_group_enabled(const.NETWORK_GROUP):
            statistics.update(generate_network_properties(self.network_adapters))
        if self.selection.is_group_enabled(const.DISPLAY_GROUP):
            statistics.update(generate_display_properties(self.device_display))
        return statistics

    def poll(self) -> ExtendedStatistics:
        """
        Run one polling cycle.

        Returns:
            ExtendedStatistics: The statistics map and the controllable properties.
            The controls list is never empty.

        Raises:
            CredentialError: If login or password is blank.
            AuthenticationError: If the panel rejects the login or the session.
            ConnectivityError: If the panel cannot be reached.
            AggregateFetchError: If every endpoint requested this cycle failed.
        """
        with self._lock:
            self._setup_data()
            statistics = self._build_statistics()

            controls = []
            if self.selection.is_group_enabled(const.DISPLAY_GROUP):
                controls = generate_display_controllers(self.device_display)
            if not controls:
                controls = placeholder_controls()

            self.local_extended_statistics = ExtendedStatistics(statistics, controls)
            logger.debug(
                f"Polling cycle produced {len(statistics)} statistics and {len(controls)} controls")
            return self.local_extended_statistics

    def get_multiple_statistics(self) -> List[ExtendedStatistics]:
        return [self.poll()]

    def apply_command(self, property_name: str, value: Any) -> None:
        """
        Apply one control command, e.g. ``apply_command("Display#AudioPanelMute", "1")``.

        Raises:
            ValidationError: If the property is not controllable or the value is invalid.
            AuthenticationError: If the panel rejects the session.
            ConnectivityError: If the panel cannot be reached.
            CrestronAPIError: If the panel rejects the update.
        """
        with self._lock:
            display_prop = parse_control_property(property_name)
            body = build_display_request(display_prop, value)
            self.client.authenticate()
            self.client.invoke_post(const.DISPLAY, body)
            logger.info(f"Applied {property_name} = {value}")

    def control_property(self, command: ControlCommand) -> None:
        self.apply_command(command.property, command.value)

    def apply_commands(self, commands: Optional[Iterable[Union[ControlCommand, tuple]]]) -> None:
        """
        Apply several commands in order under one lock acquisition.

        Commands are :class:`ControlCommand` objects or ``(property, value)`` pairs.
        The first failing command aborts the rest of the batch.
        """
        commands = list(commands or [])
        if not commands:
            logger.warning("Control commands list is empty, skipping control operation")
            return

        with self._lock:
            for command in commands:
                if isinstance(command, ControlCommand):
                    self.control_property(command)
                else:
                    property_name, value = command
                    self.apply_command(property_name, value)

    def control_properties(self, commands: Optional[List[ControlCommand]]) -> None:
        self.apply_commands(commands)

    def reset_session(self) -> None:
        """Force a full login on the next poll or command."""
        with self._lock:
            self.client.reset_session()

    def destroy(self) -> None:
        """Release the HTTP session and drop all cached state."""
        with self._lock:
            self.client.close()
            self.request_state.reset()
            self.device_info = None
            self.device_capabilities = None
            self.system_versions = None
            self.network_adapters = None
            self.device_display = None
            self.local_extended_statistics = None
            self.version_properties = {}
            self._intervals.clear()
            self.selection = PropertyGroupSelection()
