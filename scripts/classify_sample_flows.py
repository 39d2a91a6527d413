import json
import sys

from conntrack_nat.core.classifier import FlowClassifier
from conntrack_nat.core.decoder import decode_flows, flow_to_dict
from conntrack_nat.core.filter import FlowFilter
from conntrack_nat.core.local_addrs import LocalAddressSet
from conntrack_nat.core.models import NATCategory

SAMPLES = [
    {"proto": "tcp",
     "original": {"src": "192.168.1.5", "dst": "93.184.216.34", "sport": 51514, "dport": 443},
     "reply": {"src": "93.184.216.34", "dst": "203.0.113.10", "sport": 443, "dport": 61001}},
    {"proto": "tcp",
     "original": {"src": "198.51.100.7", "dst": "203.0.113.10", "sport": 40222, "dport": 80},
     "reply": {"src": "192.168.1.200", "dst": "198.51.100.7", "sport": 8080, "dport": 40222}},
    {"proto": "udp",
     "original": {"src": "192.168.1.5", "dst": "192.168.1.1", "sport": 53000, "dport": 53},
     "reply": {"src": "192.168.1.1", "dst": "192.168.1.5", "sport": 53, "dport": 53000}},
    {"proto": "icmp",
     "original": {"src": "10.8.0.2", "dst": "10.9.0.3"},
     "reply": {"src": "10.9.0.3", "dst": "10.8.0.2"}},
]


def main():
    """
    Classify a JSON file of flows (or the built in samples) against a
    fixed local address set and print the labelled result.

      python scripts/classify_sample_flows.py flows.json snat dnat
    """
    if len(sys.argv) > 1:
        with open(sys.argv[1], "rb") as fh:
            flows = decode_flows(fh.read())
    else:
        flows = decode_flows(json.dumps(SAMPLES))

    mask = NATCategory.parse(sys.argv[2:] or ["all"])
    classifier = FlowClassifier(LocalAddressSet(["192.168.1.1", "192.168.1.5", "203.0.113.10"]))
    matched = FlowFilter(classifier).filter(flows, mask)

    for f in matched:
        print(json.dumps(flow_to_dict(f, classifier.categories(f))))


if __name__ == "__main__":
    main()
