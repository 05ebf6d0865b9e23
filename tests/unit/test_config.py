"""Unit tests for BloomConfig."""

import dataclasses

import pytest

from guava_bloom.core.config import BloomConfig
from guava_bloom.core.errors import InvalidParameterError


def test_config_defaults():
    """Defaults follow Guava: 3% fpp and the 64-bit strategy."""
    config = BloomConfig(expected_insertions=1000)
    assert config.error_rate == 0.03
    assert config.strategy == "mitz64"
    assert config.strict_keys is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"expected_insertions": -1},
        {"expected_insertions": 10, "error_rate": 0.0},
        {"expected_insertions": 10, "error_rate": 1.0},
        {"expected_insertions": 10, "strategy": "crc32"},
        {"expected_insertions": 10, "strategy": 7},
    ],
)
def test_config_validates(kwargs):
    """Invalid configurations fail at construction."""
    with pytest.raises(InvalidParameterError):
        BloomConfig(**kwargs)


def test_config_is_frozen():
    """Configs are immutable once validated."""
    config = BloomConfig(expected_insertions=10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.error_rate = 0.5


def test_config_accepts_ordinal_strategy():
    """Strategies may be given by ordinal."""
    assert BloomConfig(expected_insertions=10, strategy=0).strategy == 0
