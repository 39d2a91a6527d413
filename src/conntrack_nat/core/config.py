from __future__ import annotations
import json
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"", "0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass
class Settings:
    """
    Runtime settings, read from the environment.

    local_addresses
      NAT_LOCAL_ADDRESSES, JSON list of addresses. When set the host is not
      queried, handy in containers and tests.

    log_level
      NAT_LOG_LEVEL, default INFO.

    allow_degraded
      NAT_ALLOW_DEGRADED. If the host snapshot fails, keep running with local
      and routed classification disabled instead of aborting.

    server_name
      NAT_SERVER_NAME, name announced by the MCP server.
    """

    local_addresses: Optional[List[str]] = None
    log_level: str = "INFO"
    allow_degraded: bool = False
    server_name: str = "conntrack_nat"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        local_addresses = None
        raw = env.get("NAT_LOCAL_ADDRESSES")
        if raw:
            parsed = json.loads(raw)
            if not isinstance(parsed, list):
                raise ValueError("NAT_LOCAL_ADDRESSES must be a JSON list")
            local_addresses = [str(a) for a in parsed]

        return cls(
            local_addresses=local_addresses,
            log_level=env.get("NAT_LOG_LEVEL", "INFO").strip() or "INFO",
            allow_degraded=_parse_bool("NAT_ALLOW_DEGRADED", env.get("NAT_ALLOW_DEGRADED", "")),
            server_name=env.get("NAT_SERVER_NAME", "conntrack_nat").strip() or "conntrack_nat",
        )
