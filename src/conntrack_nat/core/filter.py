from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Optional

from .classifier import FlowClassifier
from .models import Flow, NATCategory, SINGLE_CATEGORIES


class FlowFilter:
    """
    Applies a NATCategory mask across a list of flows.

    A flow is kept when any requested predicate matches. Output keeps input
    order and never deduplicates. Empty input or an empty mask gives [].
    """

    def __init__(self, classifier: FlowClassifier):
        self.classifier = classifier
        self._predicates: Dict[NATCategory, Callable[[Flow], bool]] = {
            NATCategory.SNAT: classifier.is_snat,
            NATCategory.DNAT: classifier.is_dnat,
            NATCategory.ROUTED: classifier.is_routed,
            NATCategory.LOCAL: classifier.is_local,
        }

    def filter(self, flows: Optional[Iterable[Flow]], mask: NATCategory) -> List[Flow]:
        if not flows or not mask:
            return []

        wanted = [self._predicates[c] for c in SINGLE_CATEGORIES if c & mask]
        return [f for f in flows if any(pred(f) for pred in wanted)]

    def filter_snat(self, flows: Optional[Iterable[Flow]]) -> List[Flow]:
        return self.filter(flows, NATCategory.SNAT)

    def filter_dnat(self, flows: Optional[Iterable[Flow]]) -> List[Flow]:
        return self.filter(flows, NATCategory.DNAT)

    def filter_routed(self, flows: Optional[Iterable[Flow]]) -> List[Flow]:
        return self.filter(flows, NATCategory.ROUTED)

    def filter_local(self, flows: Optional[Iterable[Flow]]) -> List[Flow]:
        return self.filter(flows, NATCategory.LOCAL)

    def count_by_category(self, flows: Optional[Iterable[Flow]]) -> Dict[str, int]:
        """
        Number of flows matching each single category. A flow can count
        towards more than one category.
        """
        counts = {c.name.lower(): 0 for c in SINGLE_CATEGORIES}
        for f in flows or []:
            for c, pred in self._predicates.items():
                if pred(f):
                    counts[c.name.lower()] += 1
        return counts
