from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .classifier import FlowClassifier
from .decoder import decode_records, flow_to_dict
from .filter import FlowFilter
from .local_addrs import LocalAddressSet
from .models import NATCategory, SINGLE_CATEGORIES

logger = logging.getLogger(__name__)


class NatFlowMCPServer:
    """
    MCP server that a reporting layer uses to classify conntrack flows.

    Responsibilities:
      Own the local address snapshot, classifier and filter
      Decode flow dicts handed in by the caller
      Expose filtering and classification as MCP tools

    Flows arrive already parsed. Capturing them from the kernel is the
    caller's job.
    """

    def __init__(self, local_addrs: LocalAddressSet, name: str = "conntrack_nat"):
        self.local_addrs = local_addrs
        self.classifier = FlowClassifier(local_addrs)
        self.filter = FlowFilter(self.classifier)
        self.mcp = FastMCP(name)

        if not local_addrs.available:
            logger.warning("local address snapshot unavailable, local and routed categories disabled")

        self._register_tools()

    def filter_records(self, records: List[Dict[str, Any]], categories: List[str]) -> Dict[str, Any]:
        """
        Keep the records matching any of the named categories.
        """
        mask = NATCategory.parse(categories)
        flows, dropped = decode_records(records)
        matched = self.filter.filter(flows, mask)

        logger.debug("filter %s: %d of %d flows matched", mask.names(), len(matched), len(flows))
        return {
            "categories": mask.names(),
            "flows": [flow_to_dict(f, self.classifier.categories(f)) for f in matched],
            "matched": len(matched),
            "total": len(flows),
            "dropped": dropped,
        }

    def classify_records(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Label every record with all categories it matches.
        """
        flows, dropped = decode_records(records)
        return {
            "flows": [flow_to_dict(f, self.classifier.categories(f)) for f in flows],
            "counts": self.filter.count_by_category(flows),
            "total": len(flows),
            "dropped": dropped,
        }

    def _register_tools(self) -> None:
        @self.mcp.tool()
        def list_categories() -> List[str]:
            return [c.name.lower() for c in SINGLE_CATEGORIES]

        @self.mcp.tool()
        def local_addresses() -> Dict[str, Any]:
            return {
                "available": self.local_addrs.available,
                "addresses": [str(a) for a in self.local_addrs.addresses()],
            }

        @self.mcp.tool()
        def filter_flows(
            flows: List[Dict[str, Any]],
            categories: Optional[List[str]] = None,
        ) -> Dict[str, Any]:
            return self.filter_records(flows, ["all"] if categories is None else categories)

        @self.mcp.tool()
        def classify_flows(flows: List[Dict[str, Any]]) -> Dict[str, Any]:
            return self.classify_records(flows)

    def run(self) -> None:
        logger.info("serving NAT classification with %d local addresses", len(self.local_addrs))
        self.mcp.run()
