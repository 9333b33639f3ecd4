from __future__ import annotations

"""
Off-chain helpers for preparing and inspecting installation buffers.

WHY THIS FILE EXISTS:
Tooling that proposes an installation needs to build the exact buffer the setup
will decode, and reviewers need to read one back. The rendering lives here so it
is testable; scripts/params_tool.py is only the argv shim.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from vetogov.core.errors import MalformedParameters
from vetogov.core.params.codec import decode_installation_params, encode_installation_params, parameters_fingerprint
from vetogov.core.params.models import InstallationParameters


def params_to_dict(params: InstallationParameters) -> Dict[str, Any]:
    return params.model_dump()


def params_from_dict(raw: Dict[str, Any]) -> InstallationParameters:
    return InstallationParameters.model_validate(raw)


def _parse_hex(text: str) -> bytes:
    s = text.strip()
    if s.startswith(("0x", "0X")):
        s = s[2:]
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise MalformedParameters("Input is not valid hex.") from e


def describe_lines(data: bytes) -> List[str]:
    params = decode_installation_params(data)
    v, t, m = params.as_tuple()
    lines = [
        f"fingerprint: {parameters_fingerprint(data)}",
        f"size: {len(data)} bytes",
        f"min_veto_ratio: {v.min_veto_ratio} ({v.veto_ratio_pct():g}%)",
        f"min_duration: {v.min_duration}s",
        f"min_proposer_voting_power: {v.min_proposer_voting_power}",
    ]
    if t.is_external:
        lines.append(f"token: reuse {t.addr}")
    else:
        lines.append(f"token: mint new {t.name!r} ({t.symbol})")
        for receiver, amount in m.pairs():
            lines.append(f"  {receiver} | {amount}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="params_tool", description="Encode or inspect veto plugin installation parameters.")
    sub = parser.add_subparsers(dest="command", required=True)
    enc = sub.add_parser("encode", help="JSON file (or - for stdin) -> hex buffer")
    enc.add_argument("path")
    dec = sub.add_parser("decode", help="hex buffer -> JSON")
    dec.add_argument("hex")
    desc = sub.add_parser("describe", help="hex buffer -> human-readable summary")
    desc.add_argument("hex")
    args = parser.parse_args(argv)

    try:
        if args.command == "encode":
            if args.path == "-":
                raw = json.load(sys.stdin)
            else:
                with open(args.path, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            params = params_from_dict(raw)
            print("0x" + encode_installation_params(*params.as_tuple()).hex())
        elif args.command == "decode":
            params = decode_installation_params(_parse_hex(args.hex))
            print(json.dumps(params_to_dict(params), indent=2, sort_keys=True))
        else:
            print("\n".join(describe_lines(_parse_hex(args.hex))))
    except MalformedParameters as e:
        print(f"error: {e.user_message}", file=sys.stderr)
        return 2
    except (ValidationError, json.JSONDecodeError) as e:
        print(f"error: invalid parameters: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"error: cannot read {args.path}: {e.strerror or e}", file=sys.stderr)
        return 2
    return 0
