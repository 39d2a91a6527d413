from __future__ import annotations
import ipaddress
import json
import logging
import subprocess
from typing import Any, Callable, FrozenSet, Iterable, Tuple, Union

from .models import IPAddress, canonical_ip

logger = logging.getLogger(__name__)

IP_ADDR_COMMAND = ["ip", "-json", "address", "show"]


class ConfigurationError(RuntimeError):
    """Raised when the local address snapshot cannot be taken from the host."""

    pass


class LocalAddressSet:
    """
    Snapshot of the addresses bound to local interfaces.

    Built once and never refreshed. If interfaces change afterwards the
    snapshot is stale, callers that care must build a new one.

    Entries may carry a prefix ("192.168.1.5/24"), only the address part is
    kept. Membership is exact address equality, never subnet containment.
    """

    def __init__(self, addresses: Iterable[Union[str, IPAddress]] = (), available: bool = True):
        parsed = set()
        for a in addresses:
            if isinstance(a, str) and "/" in a:
                a = ipaddress.ip_interface(a.strip()).ip
            parsed.add(canonical_ip(a))

        self._addresses: FrozenSet[IPAddress] = frozenset(parsed)
        self._available = bool(available)

    @classmethod
    def unavailable(cls) -> "LocalAddressSet":
        """
        Placeholder used when the host snapshot failed and the caller chose
        to continue. Local and routed classification both report False.
        """
        return cls((), available=False)

    @property
    def available(self) -> bool:
        return self._available

    def contains(self, ip: Union[str, IPAddress]) -> bool:
        return canonical_ip(ip) in self._addresses

    def __contains__(self, ip: object) -> bool:
        if not isinstance(ip, (str, ipaddress.IPv4Address, ipaddress.IPv6Address)):
            return False
        try:
            return self.contains(ip)
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._addresses)

    def addresses(self) -> Tuple[IPAddress, ...]:
        # IPv4 sorts before IPv6, mixed versions do not compare directly.
        return tuple(sorted(self._addresses, key=lambda ip: (ip.version, ip)))

    def __repr__(self) -> str:
        return f"LocalAddressSet({[str(a) for a in self.addresses()]!r}, available={self._available})"


def parse_ip_json(output: str) -> Tuple[str, ...]:
    """
    Extract every local address from `ip -json address show` output.

    The output is a list of interfaces, each with an addr_info list whose
    entries carry the bound address in "local".
    """
    interfaces: Any = json.loads(output)
    if not isinstance(interfaces, list):
        raise ValueError("expected a list of interfaces")

    found = []
    for iface in interfaces:
        for info in iface.get("addr_info", []) or []:
            local = info.get("local")
            if local:
                found.append(str(local))
    return tuple(found)


def build_from_host_interfaces(
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> LocalAddressSet:
    """
    Snapshot the host's interface addresses, loopback included.

    Any failure to enumerate is a ConfigurationError. There is no retry,
    the caller decides whether to abort or run degraded.
    """
    try:
        result = runner(IP_ADDR_COMMAND, capture_output=True, text=True, check=True)
        raw = parse_ip_json(result.stdout)
        addrs = LocalAddressSet(raw)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ConfigurationError(f"cannot enumerate local addresses: {exc}") from exc
    except (ValueError, TypeError, AttributeError) as exc:
        raise ConfigurationError(f"cannot parse local address listing: {exc}") from exc

    logger.info("captured %d local addresses", len(addrs))
    return addrs
