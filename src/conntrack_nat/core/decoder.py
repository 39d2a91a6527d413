from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from .models import AddressTuple, Flow, NATCategory, canonical_ip

logger = logging.getLogger(__name__)

_SRC_KEYS = ("src", "source")
_DST_KEYS = ("dst", "destination")


def _pick(d: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for k in keys:
        if d.get(k) is not None:
            return d[k]
    raise ValueError(f"missing field, expected one of {', '.join(keys)}")


def _ports(d: Dict[str, Any]) -> Optional[Tuple[int, int]]:
    sport = d.get("sport", d.get("src_port"))
    dport = d.get("dport", d.get("dst_port"))
    if sport is None or dport is None:
        return None
    return int(sport), int(dport)


def _tuple_from_dict(d: Any) -> AddressTuple:
    if not isinstance(d, dict):
        raise ValueError("address tuple must be an object")
    return AddressTuple(
        source=canonical_ip(_pick(d, _SRC_KEYS)),
        destination=canonical_ip(_pick(d, _DST_KEYS)),
        ports=_ports(d),
    )


def flow_from_dict(d: Dict[str, Any]) -> Flow:
    """
    Build a Flow from an already parsed conntrack entry.

    Expected shape:
      {"original": {"src": ..., "dst": ..., "sport": 1, "dport": 2},
       "reply": {"src": ..., "dst": ...},
       "proto": "tcp"}

    Ports and proto are optional. Missing or invalid addresses raise ValueError.
    """
    if "original" not in d or "reply" not in d:
        raise ValueError("flow needs both original and reply tuples")
    return Flow(
        original=_tuple_from_dict(d["original"]),
        reply=_tuple_from_dict(d["reply"]),
        proto=str(d.get("proto") or ""),
    )


def flow_to_dict(flow: Flow, categories: Optional[NATCategory] = None) -> Dict[str, Any]:
    """
    Inverse of flow_from_dict, used by the reporting tools.
    """

    def tup(t: AddressTuple) -> Dict[str, Any]:
        out: Dict[str, Any] = {"src": str(t.source), "dst": str(t.destination)}
        if t.ports is not None:
            out["sport"], out["dport"] = t.ports
        return out

    out: Dict[str, Any] = {"original": tup(flow.original), "reply": tup(flow.reply)}
    if flow.proto:
        out["proto"] = flow.proto
    if categories is not None:
        out["categories"] = categories.names()
    return out


def decode_records(items: List[Any]) -> Tuple[List[Flow], int]:
    """
    Convert a list of dicts into flows.

    Returns (flows, dropped). Items that are not dicts or fail validation
    are dropped and counted, one bad entry does not reject the batch.
    """
    flows: List[Flow] = []
    dropped = 0

    for item in items:
        if not isinstance(item, dict):
            dropped += 1
            continue
        try:
            flows.append(flow_from_dict(item))
        except (ValueError, TypeError) as exc:
            logger.debug("dropping flow record %r: %s", item, exc)
            dropped += 1

    return flows, dropped


def decode_flows(data: Union[bytes, str]) -> List[Flow]:
    """
    Decode a JSON object or list of objects into flows.

    Invalid JSON gives an empty list.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="ignore")

    try:
        obj = json.loads(data.strip())
    except ValueError:
        logger.debug("ignoring payload that is not valid JSON")
        return []

    if isinstance(obj, dict):
        obj = [obj]
    if not isinstance(obj, list):
        return []

    flows, _ = decode_records(obj)
    return flows
