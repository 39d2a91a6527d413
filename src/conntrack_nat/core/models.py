from __future__ import annotations
import enum
import ipaddress
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def canonical_ip(value: Union[str, IPAddress]) -> IPAddress:
    """
    Parse an address and fold IPv4 mapped IPv6 addresses to plain IPv4.

    ::ffff:192.0.2.1 and 192.0.2.1 are the same endpoint as far as
    conntrack is concerned, so they must compare equal.
    """
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        ip = value
    else:
        ip = ipaddress.ip_address(str(value).strip())

    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


@dataclass(frozen=True)
class AddressTuple:
    """
    One direction of a tracked connection.

    Fields:
      source, destination
        Canonical ipaddress objects, see canonical_ip.

      ports
        Optional (source_port, destination_port). Carried for reporting only,
        classification never looks at ports.
    """

    source: IPAddress
    destination: IPAddress
    ports: Optional[Tuple[int, int]] = None

    def label(self) -> str:
        if self.ports is None:
            return f"{self.source}->{self.destination}"
        return f"{self.source}:{self.ports[0]}->{self.destination}:{self.ports[1]}"


@dataclass(frozen=True)
class Flow:
    """
    Normalized connection tracking entry.

    original is the tuple as the connection was initiated, reply is the tuple
    the return traffic is expected to carry. Both are always populated.
    """

    original: AddressTuple
    reply: AddressTuple
    proto: str = ""

    def addresses(self) -> Tuple[IPAddress, IPAddress, IPAddress, IPAddress]:
        return (
            self.original.source,
            self.original.destination,
            self.reply.source,
            self.reply.destination,
        )

    def key(self) -> str:
        """
        Human readable identifier of both directions, used in reports and logs.
        """
        prefix = f"{self.proto} " if self.proto else ""
        return f"{prefix}{self.original.label()} | {self.reply.label()}"


def make_flow(
    orig_src: str,
    orig_dst: str,
    reply_src: str,
    reply_dst: str,
    proto: str = "",
) -> Flow:
    """
    Convenience constructor from four address strings.
    """
    return Flow(
        original=AddressTuple(canonical_ip(orig_src), canonical_ip(orig_dst)),
        reply=AddressTuple(canonical_ip(reply_src), canonical_ip(reply_dst)),
        proto=proto,
    )


class NATCategory(enum.IntFlag):
    """
    Flow categories, combinable with |.

    Bit values keep the conntrack filter order: SNAT, DNAT, ROUTED, LOCAL.
    """

    NONE = 0
    SNAT = 1
    DNAT = 2
    ROUTED = 4
    LOCAL = 8
    ALL = SNAT | DNAT | ROUTED | LOCAL

    @classmethod
    def parse(cls, names: Iterable[str]) -> "NATCategory":
        """
        Build a mask from category names, for example ["snat", "dnat"].

        Unknown names raise ValueError rather than being ignored, a typo
        would otherwise silently filter everything out.
        """
        mask = cls.NONE
        for name in names:
            key = str(name).strip().lower()
            if key not in _CATEGORY_ALIASES:
                raise ValueError(f"unknown NAT category {name!r}")
            mask |= _CATEGORY_ALIASES[key]
        return mask

    def names(self) -> List[str]:
        """
        Lower case names of the single bits set, in bit order.
        """
        return [c.name.lower() for c in SINGLE_CATEGORIES if c & self]


SINGLE_CATEGORIES = (NATCategory.SNAT, NATCategory.DNAT, NATCategory.ROUTED, NATCategory.LOCAL)

_CATEGORY_ALIASES = {
    "snat": NATCategory.SNAT,
    "source_nat": NATCategory.SNAT,
    "dnat": NATCategory.DNAT,
    "destination_nat": NATCategory.DNAT,
    "routed": NATCategory.ROUTED,
    "local": NATCategory.LOCAL,
    "all": NATCategory.ALL,
}
