"""
Core modules: flow model, local address snapshot, classifier and filter.

Keep flow capture and presentation out of this package.
"""

from .models import AddressTuple, Flow, NATCategory
from .local_addrs import ConfigurationError, LocalAddressSet, build_from_host_interfaces
from .classifier import FlowClassifier
from .filter import FlowFilter
from .server import NatFlowMCPServer

__all__ = [
    "AddressTuple",
    "Flow",
    "NATCategory",
    "ConfigurationError",
    "LocalAddressSet",
    "build_from_host_interfaces",
    "FlowClassifier",
    "FlowFilter",
    "NatFlowMCPServer",
]
