import pytest

from conntrack_nat.core.config import Settings


def test_defaults():
    s = Settings.from_env({})
    assert s.local_addresses is None
    assert s.log_level == "INFO"
    assert s.allow_degraded is False
    assert s.server_name == "conntrack_nat"


def test_reads_environment():
    s = Settings.from_env(
        {
            "NAT_LOCAL_ADDRESSES": '["192.168.1.1", "::1"]',
            "NAT_LOG_LEVEL": "debug",
            "NAT_ALLOW_DEGRADED": "yes",
            "NAT_SERVER_NAME": "edge-gw",
        }
    )
    assert s.local_addresses == ["192.168.1.1", "::1"]
    assert s.log_level == "debug"
    assert s.allow_degraded is True
    assert s.server_name == "edge-gw"


@pytest.mark.parametrize(
    "env",
    [
        {"NAT_LOCAL_ADDRESSES": '{"a": 1}'},
        {"NAT_LOCAL_ADDRESSES": "[not json"},
        {"NAT_ALLOW_DEGRADED": "maybe"},
    ],
)
def test_malformed_values_raise(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)
