#!/usr/bin/env python3
"""Emulate a sensor: build, sign and print one telemetry frame.

Prints the registry public key, the base64 frame and (for the revised
protocol) the detached base64 signature, then decodes the result again
with pyairq to show what the ledger would receive.

Example:
  python scripts/build_frame.py --device-id 1 --pm10 21.5 --pm25 5.6 \
      --humidity 67.8 --temperature 17.4 --time 060015 \
      --latitude 0490059560N --longitude 00082551660E
"""

from __future__ import annotations

import argparse
import base64
import json
import logging
import sys
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey  # noqa: E402

from pyairq import AirqConfig, DeviceIdentity, decode_frame, rejection_message  # noqa: E402
from pyairq._tools.frame_builder import (  # noqa: E402
    b64,
    build_detached_frame,
    build_inline_frame,
    public_key_text,
    sign_frame,
)


def _load_key(seed_b64: str | None) -> Ed25519PrivateKey:
    if seed_b64 is None:
        return Ed25519PrivateKey.generate()
    return Ed25519PrivateKey.from_private_bytes(base64.b64decode(seed_b64))


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build and sign an air-quality sensor frame")
    parser.add_argument("--seed", help="Base64 32-byte Ed25519 private seed (random if omitted)")
    parser.add_argument("--device-id", type=int, default=1)
    parser.add_argument("--pm10", type=float, default=0.0)
    parser.add_argument("--pm25", type=float, default=0.0)
    parser.add_argument("--humidity", type=float, default=0.0)
    parser.add_argument("--temperature", type=float, default=0.0)
    parser.add_argument("--time", default="000000", help="Time of day HHMMSS (UTC)")
    parser.add_argument("--latitude", default="0000000000N", help="11-character DDDMMSSSSSH block")
    parser.add_argument("--longitude", default="00000000000E", help="12-character DDDDMMSSSSSH block")
    parser.add_argument("--inline", action="store_true", help="Original revision with inline signature")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    private_key = _load_key(args.seed)
    device = DeviceIdentity(
        public_key=public_key_text(private_key),
        encoding_scheme=0,
        owner="cli",
        validation_flag=True,
    )

    signature: bytes | None
    if args.inline:
        frame = build_inline_frame(private_key, args.device_id, pm10=args.pm10, pm25=args.pm25)
        signature = None
    else:
        frame = build_detached_frame(
            args.device_id,
            pm10=args.pm10,
            pm25=args.pm25,
            humidity=args.humidity,
            temperature=args.temperature,
            time_of_day=args.time,
            latitude=args.latitude,
            longitude=args.longitude,
        )
        signature = sign_frame(private_key, frame)

    output: dict[str, object] = {
        "publicKey": device.public_key,
        "frame": b64(frame),
        "signature": b64(signature) if signature is not None else None,
    }

    result = decode_frame(frame, device, signature, config=AirqConfig.from_env(log_frames=args.debug))
    record, transaction_id = result.as_pair()
    if transaction_id:
        output["transactionId"] = transaction_id
        output["record"] = record.model_dump(mode="json", by_alias=True)
    else:
        output["error"] = rejection_message(result)

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0 if transaction_id else 1


if __name__ == "__main__":
    raise SystemExit(main())
