"""
Models for the network configuration returned by ``/Device/NetworkAdapters``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class AddressConfig:
    """A single IPv4 address assignment."""
    address: Optional[str] = None
    subnet_mask: Optional[str] = None


@dataclass
class IPv4:
    """IPv4 settings of an adapter, also used for the global DNS settings."""
    addresses: List[AddressConfig] = field(default_factory=list)
    default_gateway: Optional[str] = None
    is_dhcp_enabled: Optional[bool] = None
    dns_servers: List[str] = field(default_factory=list)
    static_dns: List[str] = field(default_factory=list)

    def get_first_address(self) -> AddressConfig:
        """Return the first configured address, or an empty one."""
        return self.addresses[0] if self.addresses else AddressConfig()


@dataclass
class IPv6:
    is_supported: Optional[bool] = None


@dataclass
class DnsSettings:
    ipv4: Optional[IPv4] = field(default=None, metadata={"crestron_api_field": "IPv4"})


@dataclass
class BaseAdapter:
    """Fields shared by the wired and wireless adapters."""
    domain_name: Optional[str] = None
    link_status: Optional[bool] = None
    mac_address: Optional[str] = None


@dataclass
class LanAdapter(BaseAdapter):
    ipv4: Optional[IPv4] = field(default=None, metadata={"crestron_api_field": "IPv4"})


@dataclass
class WifiAdapter(BaseAdapter):
    pass


@dataclass
class Adapters:
    ethernet_lan: Optional[LanAdapter] = None
    wifi: Optional[WifiAdapter] = None


@dataclass
class NetworkAdapters:
    """
    Network configuration of a touch panel.

    Accessors return empty sub-objects instead of None so that the statistics
    projection can read nested values without guarding every level.
    """
    adapters: Optional[Adapters] = None
    dns_settings: Optional[DnsSettings] = None
    host_name: Optional[str] = None
    ipv6: Optional[IPv6] = field(default=None, metadata={"crestron_api_field": "IPv6"})

    _extra_fields: Dict[str, Any] = field(default_factory=dict, repr=False)

    def get_ethernet_lan(self) -> LanAdapter:
        if self.adapters is None or self.adapters.ethernet_lan is None:
            return LanAdapter()
        return self.adapters.ethernet_lan

    def get_wifi(self) -> WifiAdapter:
        if self.adapters is None or self.adapters.wifi is None:
            return WifiAdapter()
        return self.adapters.wifi

    def get_lan_ipv4(self) -> IPv4:
        return self.get_ethernet_lan().ipv4 or IPv4()

    def get_dns_ipv4(self) -> IPv4:
        if self.dns_settings is None or self.dns_settings.ipv4 is None:
            return IPv4()
        return self.dns_settings.ipv4

    def get_ipv6(self) -> IPv6:
        return self.ipv6 or IPv6()
