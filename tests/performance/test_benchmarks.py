"""Performance benchmarks for the Bloom filter."""

import time

import pytest

from guava_bloom import BloomFilter


@pytest.fixture
def benchmark_filter():
    """Create a filter sized for the benchmark workload."""
    return BloomFilter.create(100_000, 0.01)


def test_insertion_performance(benchmark_filter):
    """Benchmark put throughput."""
    num_keys = 50_000
    keys = [f"key{i:08d}" for i in range(num_keys)]

    start_time = time.time()
    for key in keys:
        benchmark_filter.put(key)
    duration = time.time() - start_time

    puts_per_second = num_keys / duration if duration > 0 else float("inf")
    print(f"\nInsertions: {puts_per_second:.0f} ops/sec")

    # Should achieve reasonable throughput
    assert puts_per_second > 5_000


def test_query_performance(benchmark_filter):
    """Benchmark might_contain throughput over hits and misses."""
    num_keys = 20_000
    for i in range(num_keys):
        benchmark_filter.put(i)

    start_time = time.time()
    hits = sum(1 for i in range(2 * num_keys) if benchmark_filter.might_contain(i))
    duration = time.time() - start_time

    queries_per_second = 2 * num_keys / duration if duration > 0 else float("inf")
    print(f"\nQueries: {queries_per_second:.0f} ops/sec")

    assert hits >= num_keys
    assert queries_per_second > 5_000


def test_serialization_performance(benchmark_filter):
    """Benchmark a full serialize/deserialize cycle."""
    for i in range(10_000):
        benchmark_filter.put(i)

    start_time = time.time()
    for _ in range(20):
        BloomFilter.from_bytes(benchmark_filter.to_bytes())
    duration = time.time() - start_time

    print(f"\nRound trips: {20 / duration if duration > 0 else float('inf'):.1f}/sec")
    assert duration < 20
