"""
Entry point for the prng-mini command line tool.

Examples:
    prng-mini guid --count 3
    prng-mini int 1 6 --count 10
    prng-mini license generate --signature 210 --count 100 --out list.txt
    prng-mini license validate --signature 210 --in list.txt
    prng-mini histogram --samples 100000 --min 0 --max 19
"""

import argparse
import logging
import sys

from .config import configure_logging, load_settings
from .core import (
    PrngMiniError,
    generate_guid_v4,
    generate_hex_id,
    generate_license_key,
    get_alphabet,
    get_random_bytes,
    get_random_integers,
    validate_license_key,
)
from .core.license_keys import ALPHABETS
from .utils.histogram import DEFAULT_MAX, DEFAULT_MIN, DEFAULT_SAMPLES, sample_histogram
from .utils.key_list import validate_key_list, write_key_list
from .utils.signatures import derive_signature

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def resolve_signature(args, alphabet) -> int:
    """--product wins over --signature; the configured default is the fallback."""
    if args.product:
        return derive_signature(args.product, alphabet)
    if args.signature is not None:
        return args.signature
    return load_settings().default_signature


def cmd_bytes(args) -> int:
    with get_random_bytes(args.length) as buf:
        print(buf.hex())
    return 0


def cmd_int(args) -> int:
    for value in get_random_integers(args.count, args.min, args.max, unbiased=args.unbiased or None):
        print(value)
    return 0


def cmd_guid(args) -> int:
    for _ in range(args.count):
        print(generate_guid_v4())
    return 0


def cmd_hex_id(args) -> int:
    for _ in range(args.count):
        print(generate_hex_id(args.size))
    return 0


def cmd_license_generate(args) -> int:
    alphabet = get_alphabet(args.alphabet)
    signature = resolve_signature(args, alphabet)

    keys = [generate_license_key(signature, alphabet) for _ in range(args.count)]
    logger.info("Generated %d keys for signature %d", len(keys), signature)

    if args.out:
        write_key_list(args.out, keys)
        print(f"[OK] Wrote {len(keys)} keys (signature {signature}) to {args.out}")
    else:
        for key in keys:
            print(key)
    return 0


def cmd_license_validate(args) -> int:
    alphabet = get_alphabet(args.alphabet)
    signature = resolve_signature(args, alphabet)

    if args.input:
        results = validate_key_list(args.input, signature, alphabet)
    else:
        results = [(key, validate_license_key(key, signature, alphabet)) for key in args.keys]

    if not results:
        print("[ERROR] No keys to validate!", file=sys.stderr)
        return 1

    for key, is_valid in results:
        print(f"{'[OK]   ' if is_valid else '[ERROR]'} {key}")

    valid = sum(1 for _, is_valid in results if is_valid)
    print(f"\n{valid}/{len(results)} keys valid for signature {signature}")
    return 0 if valid == len(results) else 1


def cmd_histogram(args) -> int:
    report = sample_histogram(args.samples, args.min, args.max, unbiased=args.unbiased)
    print(report.render())
    return 0


def cmd_demo(args) -> int:
    """Run one pass through every feature."""
    print("\n" + "=" * 60)
    print("PRNG MINI DEMONSTRATION")
    print("=" * 60)

    print("\n1. SECURE RANDOM BYTES")
    print("-" * 60)
    with get_random_bytes(16) as buf:
        print(f"  16 bytes: {buf.hex()}")
    print("  [OK] Entropy source works!")

    print("\n2. BOUNDED INTEGERS")
    print("-" * 60)
    rolls = get_random_integers(10, 1, 6)
    print(f"  Ten dice rolls: {rolls}")
    print("  [OK] Bounded integers work!")

    print("\n3. IDENTIFIERS")
    print("-" * 60)
    print(f"  GUID v4: {generate_guid_v4()}")
    print(f"  Hex ID (24): {generate_hex_id(24)}")
    print("  [OK] Identifiers work!")

    print("\n4. LICENSE KEYS")
    print("-" * 60)
    signature = load_settings().default_signature
    for _ in range(3):
        key = generate_license_key(signature)
        print(f"  {key}  valid: {validate_license_key(key, signature)}")
    print(f"  Same key against signature {signature + 1}: {validate_license_key(key, signature + 1)}")
    print("  [OK] License keys work!")

    print("\n" + "=" * 60)
    print("DEMONSTRATION COMPLETE!")
    print("=" * 60)
    return 0


def _add_signature_options(parser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--signature", type=int, help="Target checksum (default: PRNG_MINI_DEFAULT_SIGNATURE or 210)")
    group.add_argument("--product", help="Derive the signature from a product name")
    parser.add_argument("--alphabet", choices=sorted(ALPHABETS), default="alnum",
                        help="Key alphabet (default: alnum)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prng-mini",
        description="Secure random bytes, integers, identifiers and license keys",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None,
                        help="Logging level (default: PRNG_MINI_LOG_LEVEL or WARNING)")
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("bytes", help="Print random bytes as hex")
    p.add_argument("length", type=int)
    p.set_defaults(handler=cmd_bytes)

    p = commands.add_parser("int", help="Print random integers in [MIN, MAX]")
    p.add_argument("min", type=int)
    p.add_argument("max", type=int)
    p.add_argument("--count", type=int, default=1)
    p.add_argument("--unbiased", action="store_true", help="Use rejection sampling")
    p.set_defaults(handler=cmd_int)

    p = commands.add_parser("guid", help="Print version 4 GUIDs")
    p.add_argument("--count", type=int, default=1)
    p.set_defaults(handler=cmd_guid)

    p = commands.add_parser("hex-id", help="Print lowercase hex IDs")
    p.add_argument("size", type=int)
    p.add_argument("--count", type=int, default=1)
    p.set_defaults(handler=cmd_hex_id)

    license_parser = commands.add_parser("license", help="Generate or validate license keys")
    license_commands = license_parser.add_subparsers(dest="license_command", required=True)

    p = license_commands.add_parser("generate", help="Generate license keys")
    _add_signature_options(p)
    p.add_argument("--count", type=int, default=3)
    p.add_argument("--out", help="Write the keys to this file, one per line")
    p.set_defaults(handler=cmd_license_generate)

    p = license_commands.add_parser("validate", help="Validate license keys")
    _add_signature_options(p)
    p.add_argument("--in", dest="input", help="Key list file, one key per line")
    p.add_argument("keys", nargs="*", help="Keys to validate")
    p.set_defaults(handler=cmd_license_validate)

    p = commands.add_parser("histogram", help="Print a randomness histogram")
    p.add_argument("--samples", type=int, default=DEFAULT_SAMPLES)
    p.add_argument("--min", type=int, default=DEFAULT_MIN)
    p.add_argument("--max", type=int, default=DEFAULT_MAX)
    p.add_argument("--unbiased", action="store_true")
    p.set_defaults(handler=cmd_histogram)

    p = commands.add_parser("demo", help="Run the full demonstration")
    p.set_defaults(handler=cmd_demo)

    return parser


def main(argv=None) -> int:
    """Parse arguments, run the command and turn errors into exit codes."""
    args = build_parser().parse_args(argv)

    try:
        configure_logging(args.log_level)
        return args.handler(args)
    except PrngMiniError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return abs(exc.code)
    except OSError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
