# Minimal CLI using argparse to inspect, query and build serialized filters.
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from guava_bloom.components.keys import Int64
from guava_bloom.core.errors import BloomFilterError
from guava_bloom.core.filter import BloomFilter


def _add_key_type(p: argparse.ArgumentParser) -> None:
    group = p.add_mutually_exclusive_group()
    group.add_argument(
        "--int",
        dest="key_type",
        action="store_const",
        const="int",
        help="Parse keys as integers (4 bytes, or 8 if outside int32 range)",
    )
    group.add_argument(
        "--long",
        dest="key_type",
        action="store_const",
        const="long",
        help="Parse keys as 64-bit integers, matching Guava's longFunnel()",
    )
    p.set_defaults(key_type="str")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="guava-bloom", description="Inspect and build Guava-compatible Bloom filters"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log filter activity to stderr")
    sub = p.add_subparsers(dest="command", required=True)

    inspect = sub.add_parser("inspect", help="Print a serialized filter's parameters")
    inspect.add_argument("input", type=Path, help="Serialized filter file")

    query = sub.add_parser("query", help="Test keys against a serialized filter")
    query.add_argument("input", type=Path, help="Serialized filter file")
    query.add_argument("keys", nargs="+", help="Keys to test")
    _add_key_type(query)

    create = sub.add_parser("create", help="Build a filter from keys and write it out")
    create.add_argument("--expected", type=int, required=True, help="Expected insertions")
    create.add_argument(
        "--error-rate", type=float, default=0.03, help="False-positive rate (default: 0.03)"
    )
    create.add_argument(
        "--strategy",
        choices=["mitz32", "mitz64"],
        default="mitz64",
        help="Hash strategy (default: mitz64)",
    )
    create.add_argument("--out", type=Path, required=True, help="Output file")
    create.add_argument("keys", nargs="*", help="Keys to insert")
    _add_key_type(create)

    return p


def setup_logging(verbose: bool) -> None:
    """Send library logs to stderr; stdout carries command output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _parse_key(raw: str, key_type: str):
    if key_type == "int":
        return int(raw)
    if key_type == "long":
        return Int64(int(raw))
    return raw


def _load(path: Path) -> BloomFilter:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return BloomFilter.from_bytes(path.read_bytes())


def _inspect(args: argparse.Namespace) -> int:
    bf = _load(args.input)
    print(f"strategy: {bf.strategy.name}")
    print(f"hash functions: {bf.num_hash_functions}")
    print(f"bit size: {bf.bit_size}")
    print(f"set bits: {bf.bit_count()}")
    print(f"expected fpp: {bf.expected_fpp():.6g}")
    print(f"approximate elements: {bf.approximate_element_count()}")
    return 0


def _query(args: argparse.Namespace) -> int:
    bf = _load(args.input)
    keys = [_parse_key(raw, args.key_type) for raw in args.keys]
    for raw, key in zip(args.keys, keys, strict=True):
        print(f"{raw}\t{'true' if bf.might_contain(key) else 'false'}")
    return 0


def _create(args: argparse.Namespace) -> int:
    keys = [_parse_key(raw, args.key_type) for raw in args.keys]
    bf = BloomFilter.create(args.expected, args.error_rate, strategy=args.strategy)
    for key in keys:
        bf.put(key)
    with open(args.out, "wb") as f:
        written = bf.write_to(f)
    print(f"Wrote {written} bytes to {args.out}")
    return 0


COMMANDS = {"inspect": _inspect, "query": _query, "create": _create}


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return COMMANDS[args.command](args)
    except (BloomFilterError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
