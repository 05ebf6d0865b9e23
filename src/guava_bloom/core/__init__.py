"""Bloom filter core: the filter object, its config, errors and shared types."""
