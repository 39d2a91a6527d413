import pytest

from conntrack_nat.core.models import NATCategory, make_flow


def test_snat_or_dnat_returns_scenarios_in_order(flow_filter, scenario_flows, snat_flow, dnat_flow):
    out = flow_filter.filter(scenario_flows, NATCategory.SNAT | NATCategory.DNAT)
    assert out == [snat_flow, dnat_flow]


def test_single_category_wrappers(flow_filter, scenario_flows, snat_flow, dnat_flow, local_flow, routed_flow):
    assert flow_filter.filter_snat(scenario_flows) == [snat_flow]
    assert flow_filter.filter_dnat(scenario_flows) == [dnat_flow]
    assert flow_filter.filter_local(scenario_flows) == [local_flow]
    assert flow_filter.filter_routed(scenario_flows) == [routed_flow]


def test_wrapper_matches_general_filter(flow_filter, scenario_flows):
    assert flow_filter.filter_routed(scenario_flows) == flow_filter.filter(scenario_flows, NATCategory.ROUTED)


def test_empty_mask_returns_empty(flow_filter, scenario_flows):
    assert flow_filter.filter(scenario_flows, NATCategory.NONE) == []


@pytest.mark.parametrize("flows", [[], None])
def test_empty_input_returns_empty(flow_filter, flows):
    assert flow_filter.filter(flows, NATCategory.ALL) == []


def test_all_mask_keeps_every_scenario(flow_filter, scenario_flows):
    assert flow_filter.filter(scenario_flows, NATCategory.ALL) == scenario_flows


def test_output_is_ordered_subsequence_and_keeps_duplicates(flow_filter, snat_flow, local_flow):
    flows = [local_flow, snat_flow, local_flow]
    out = flow_filter.filter(flows, NATCategory.LOCAL)
    assert out == [local_flow, local_flow]


def test_filter_is_idempotent(flow_filter, scenario_flows):
    mask = NATCategory.DNAT | NATCategory.LOCAL
    once = flow_filter.filter(scenario_flows, mask)
    assert flow_filter.filter(once, mask) == once


def test_unmatched_flow_dropped(flow_filter):
    flow = make_flow("10.0.0.1", "10.0.0.2", "10.0.0.3", "10.0.0.4")
    assert flow_filter.filter([flow], NATCategory.ALL) == []


def test_count_by_category(flow_filter, scenario_flows):
    counts = flow_filter.count_by_category(scenario_flows)
    assert counts == {"snat": 1, "dnat": 1, "routed": 1, "local": 1}


def test_parse_category_names():
    assert NATCategory.parse(["SNAT", "destination_nat"]) == NATCategory.SNAT | NATCategory.DNAT
    assert NATCategory.parse([]) == NATCategory.NONE
    assert NATCategory.parse(["all"]) == NATCategory.ALL


def test_parse_unknown_category_raises():
    with pytest.raises(ValueError):
        NATCategory.parse(["masquerade"])


def test_category_names_in_bit_order():
    assert (NATCategory.LOCAL | NATCategory.SNAT).names() == ["snat", "local"]
    assert NATCategory.ALL.names() == ["snat", "dnat", "routed", "local"]
