from __future__ import annotations

from .local_addrs import LocalAddressSet
from .models import Flow, NATCategory


def _no_rewrite(flow: Flow) -> bool:
    """
    Reply mirrors the original exactly, nothing was translated.
    """
    return (
        flow.original.source == flow.reply.destination
        and flow.original.destination == flow.reply.source
    )


class FlowClassifier:
    """
    Decides which NAT categories a single flow belongs to.

    All predicates compare addresses by exact value. They never mutate the
    flow or the classifier, so one instance can be shared freely.

    local_addrs
      Snapshot used by is_local and is_routed. When the snapshot is
      unavailable both predicates return False.
    """

    def __init__(self, local_addrs: LocalAddressSet):
        self.local_addrs = local_addrs

    def _any_local(self, flow: Flow) -> bool:
        return any(self.local_addrs.contains(ip) for ip in flow.addresses())

    def is_snat(self, flow: Flow) -> bool:
        # SNATed flows reply to our WAN address, not the LAN address that initiated.
        if flow.original.source == flow.reply.destination:
            return False

        if flow.original.destination != flow.reply.source:
            return False

        return True

    def is_dnat(self, flow: Flow) -> bool:
        o, r = flow.original, flow.reply

        # Reply goes back to the initiator but comes from a rewritten address.
        if o.source == r.destination and o.destination != r.source:
            return True

        # netstat-nat "DNAT (1 interface)" pattern. Kept literally, do not simplify.
        if (
            o.source != r.source
            and o.source != r.destination
            and o.destination != r.source
            and o.destination == r.destination
        ):
            return True

        return False

    def is_local(self, flow: Flow) -> bool:
        if not self.local_addrs.available:
            return False
        return _no_rewrite(flow) and self._any_local(flow)

    def is_routed(self, flow: Flow) -> bool:
        if not self.local_addrs.available:
            return False
        return _no_rewrite(flow) and not self._any_local(flow)

    def categories(self, flow: Flow) -> NATCategory:
        """
        Every category whose predicate holds, OR-ed together.
        """
        found = NATCategory.NONE
        if self.is_snat(flow):
            found |= NATCategory.SNAT
        if self.is_dnat(flow):
            found |= NATCategory.DNAT
        if self.is_routed(flow):
            found |= NATCategory.ROUTED
        if self.is_local(flow):
            found |= NATCategory.LOCAL
        return found
