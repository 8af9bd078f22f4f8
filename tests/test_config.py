"""
Tests for configuration and logging setup
"""

import dataclasses

import pytest
from loguru import logger

from osmclient import APIConfig, ClientConfig, ValidationError, get_config, setup_logging, validate_config


def test_default_config_is_valid():
    validate_config(get_config())


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        get_config().api.base_url = "https://example.org/api/"


def test_validate_config_collects_errors():
    config = ClientConfig(api=APIConfig(base_url="", user_agent="", request_timeout=-1))

    with pytest.raises(ValidationError) as excinfo:
        validate_config(config)

    message = str(excinfo.value)
    assert "api.base_url" in message
    assert "api.user_agent" in message
    assert "api.request_timeout" in message


def test_setup_logging_verbose(capsys):
    setup_logging(verbose=True)
    logger.debug("resolver ready")

    assert "resolver ready" in capsys.readouterr().err

    setup_logging()
    logger.debug("hidden")

    assert "hidden" not in capsys.readouterr().err
    logger.remove()


def test_bbox_precision_is_not_configurable():
    with pytest.raises(TypeError):
        ClientConfig(bbox_precision=0)
