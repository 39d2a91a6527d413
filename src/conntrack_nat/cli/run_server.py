from __future__ import annotations
import logging
import sys
from typing import Optional

from conntrack_nat.core.config import Settings
from conntrack_nat.core.local_addrs import ConfigurationError, LocalAddressSet, build_from_host_interfaces
from conntrack_nat.core.server import NatFlowMCPServer
from conntrack_nat.logging_config import setup_logging

logger = logging.getLogger(__name__)


def load_local_addresses(settings: Settings) -> LocalAddressSet:
    """
    Address snapshot per settings: explicit override, host, or degraded.

    Raises ConfigurationError when the host query fails and degraded mode
    is not allowed.
    """
    if settings.local_addresses is not None:
        logger.info("using %d local addresses from NAT_LOCAL_ADDRESSES", len(settings.local_addresses))
        return LocalAddressSet(settings.local_addresses)

    try:
        return build_from_host_interfaces()
    except ConfigurationError as exc:
        if not settings.allow_degraded:
            raise
        logger.warning("continuing without local addresses: %s", exc)
        return LocalAddressSet.unavailable()


def main(settings: Optional[Settings] = None) -> None:
    """
    Start the NAT classification MCP server.

    Example:
      export NAT_LOCAL_ADDRESSES='["192.168.1.1", "203.0.113.10"]'
      export NAT_LOG_LEVEL=DEBUG
      python -m conntrack_nat.cli.run_server
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    try:
        local_addrs = load_local_addresses(settings)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    server = NatFlowMCPServer(local_addrs=local_addrs, name=settings.server_name)
    server.run()


if __name__ == "__main__":
    main()
