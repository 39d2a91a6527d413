import pytest

from conntrack_nat.core.classifier import FlowClassifier
from conntrack_nat.core.filter import FlowFilter
from conntrack_nat.core.local_addrs import LocalAddressSet
from conntrack_nat.core.models import make_flow


@pytest.fixture
def local_addrs():
    return LocalAddressSet(["192.168.1.5", "127.0.0.1", "::1"])


@pytest.fixture
def classifier(local_addrs):
    return FlowClassifier(local_addrs)


@pytest.fixture
def flow_filter(classifier):
    return FlowFilter(classifier)


@pytest.fixture
def snat_flow():
    # LAN host behind SNAT, reply goes to the WAN address
    return make_flow("192.168.1.5", "93.184.216.34", "93.184.216.34", "203.0.113.10")


@pytest.fixture
def dnat_flow():
    # published service forwarded to an inside host
    return make_flow("203.0.113.10", "192.168.1.100", "192.168.1.200", "203.0.113.10")


@pytest.fixture
def local_flow():
    return make_flow("192.168.1.5", "192.168.1.10", "192.168.1.10", "192.168.1.5")


@pytest.fixture
def routed_flow():
    return make_flow("192.168.1.20", "192.168.1.10", "192.168.1.10", "192.168.1.20")


@pytest.fixture
def scenario_flows(snat_flow, dnat_flow, local_flow, routed_flow):
    return [snat_flow, dnat_flow, local_flow, routed_flow]
