"""Unit tests for the package's import surface."""

import importlib
import sys

import pytest


@pytest.mark.parametrize(
    "module",
    [
        "guava_bloom",
        "guava_bloom.components.keys",
        "guava_bloom.components.strategy",
        "guava_bloom.core.filter",
        "guava_bloom.cli.main",
    ],
)
def test_fresh_import(module, monkeypatch):
    """Each entry point imports cleanly with no modules preloaded."""
    for name in list(sys.modules):
        if name == "guava_bloom" or name.startswith("guava_bloom."):
            monkeypatch.delitem(sys.modules, name)
    assert importlib.import_module(module) is not None


def test_public_names():
    """The top-level package re-exports the public API."""
    import guava_bloom

    for name in guava_bloom.__all__:
        assert hasattr(guava_bloom, name), f"Missing export {name}"
    assert guava_bloom.BloomFilter.create(10).bit_size % 64 == 0
