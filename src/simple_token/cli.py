# src/simple_token/cli.py

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from .domain.constants import AES_LEGAL_KEY_SIZES, DEFAULT_KEY_SIZE
from .domain.exceptions import SecureTokenError
from .domain.value_objects import EncryptionConfiguration
from .integrations.common.provider_factory import create_provider_from_env


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="simple-token",
        description="Generate keys, issue and validate secure tokens "
                    "(settings from SIMPLE_TOKEN_* environment variables)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate-key", help="Print a new random base64 encryption key.")
    gen.add_argument(
        "--key-size",
        type=int,
        default=DEFAULT_KEY_SIZE,
        choices=AES_LEGAL_KEY_SIZES,
        help=f"Key size in bits (default: {DEFAULT_KEY_SIZE}).",
    )

    issue = sub.add_parser("issue", help="Issue a token carrying KEY=VALUE pairs.")
    issue.add_argument(
        "data",
        nargs="*",
        metavar="KEY=VALUE",
        help="Payload entries.",
    )
    issue.add_argument(
        "--ttl",
        type=int,
        help="Time to live in seconds (default: SIMPLE_TOKEN_DEFAULT_TTL or 60).",
    )

    validate = sub.add_parser("validate", help="Validate a token and print its contents.")
    validate.add_argument("token", help="Token string as returned by 'issue'.")

    return parser.parse_args(args=argv)


def _parse_pairs(pairs: Sequence[str]) -> dict[str, str]:
    data: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        data[key] = value
    return data


def _run(args: argparse.Namespace) -> dict[str, Any]:
    if args.command == "generate-key":
        return {
            "key": EncryptionConfiguration.generate_key(args.key_size),
            "key_size": args.key_size,
        }

    provider = create_provider_from_env()

    if args.command == "issue":
        return {"token": provider.issue(_parse_pairs(args.data), args.ttl)}

    token = provider.validate(args.token)
    return {
        "issued": token.issued.isoformat(),
        "expires": token.expires.isoformat(),
        "data": dict(token.data),
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        summary = _run(args)
    except (SecureTokenError, ValueError, RuntimeError) as exc:
        json.dump({"ok": False, "error": type(exc).__name__, "detail": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 1

    json.dump({"ok": True, **summary}, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
