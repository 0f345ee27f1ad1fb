# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

import pytest
from pydantic import ValidationError

from core.config import InstallerConfig, InstanceConfig, validate_port

SECRET = "s" * 32


@pytest.mark.parametrize("port", ["1", "80", "8888", "65535", "00080"])
def test_validate_port_accepts_numbers_in_range(port: str):
    assert validate_port(port)


@pytest.mark.parametrize(
    "port", ["", "0", "65536", "-1", "80a", " 80", "8.8", "port", "٣", "000080", "1" * 5000]
)
def test_validate_port_rejects_invalid_input(port: str):
    assert not validate_port(port)


def test_instance_config_defaults():
    config = InstanceConfig(secret_key=SECRET)
    assert config.bind_address == "0.0.0.0"
    assert config.port == 8888
    assert config.redis_url == "redis://127.0.0.1:6379/0"
    assert config.debug is False


def test_instance_config_rejects_short_secret_key():
    with pytest.raises(ValidationError):
        InstanceConfig(secret_key="s" * 31)


def test_instance_config_port_from_text():
    assert InstanceConfig(secret_key=SECRET, port="8080").port == 8080


@pytest.mark.parametrize("port", [0, 70000, "abc", True, 8.5, "9" * 5000])
def test_instance_config_rejects_invalid_port(port):
    with pytest.raises(ValidationError):
        InstanceConfig(secret_key=SECRET, port=port)


def test_instance_config_accepts_unchecked_addresses():
    config = InstanceConfig(secret_key=SECRET, bind_address="not an ip", redis_url="whatever")
    assert config.bind_address == "not an ip"
    assert config.redis_url == "whatever"


def test_installer_config_rejects_empty_user():
    with pytest.raises(ValidationError):
        InstallerConfig(service_user="")


def test_installer_config_rejects_negative_delay():
    with pytest.raises(ValidationError):
        InstallerConfig(recovery_delay=-1)
