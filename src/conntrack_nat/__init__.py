"""
conntrack_nat

NAT classification of connection tracking flows, served over MCP.

Core ideas
1. A flow capture collaborator hands us Flow objects (original and reply tuples)
2. The classifier compares the two tuples to decide SNAT, DNAT, local or routed
3. The filter keeps the flows that match any requested category, in input order
"""

__all__ = ["core", "cli", "logging_config"]
