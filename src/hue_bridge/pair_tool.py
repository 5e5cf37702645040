from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time

from hue_bridge.client import BridgeClient, RegisteredUser
from hue_bridge.config import AppConfig
from hue_bridge.errors import BridgeError, BridgeErrorType, HueError

logger = logging.getLogger("hue_bridge")


def _mask(secret: str) -> str:
    if len(secret) <= 10:
        return "…"
    return f"{secret[:6]}…{secret[-4:]}"


async def pair(
    client: BridgeClient,
    *,
    devicetype: str,
    timeout_seconds: float,
    interval_ms: int,
    generate_client_key: bool = False,
) -> RegisteredUser | None:
    """Retry registration until the link button is pressed or the deadline passes.

    Returns None on timeout. Bridge errors other than "link button not pressed"
    are raised.
    """
    deadline = time.time() + timeout_seconds
    attempt = 0
    while time.time() < deadline:
        attempt += 1
        try:
            return await client.register_user(devicetype, generate_client_key=generate_client_key)
        except BridgeError as err:
            if err.kind is not BridgeErrorType.LINK_BUTTON_NOT_PRESSED:
                raise
        remaining = int(deadline - time.time())
        logger.info("[%d] link button not pressed yet, retrying (%ds left)", attempt, remaining)
        await asyncio.sleep(max(0.1, interval_ms / 1000.0))
    return None


def main(argv: list[str] | None = None) -> None:
    config = AppConfig.from_env()
    parser = argparse.ArgumentParser(prog="hue-bridge-pair")
    parser.add_argument("--bridge-host", default=config.bridge_host)
    parser.add_argument("--devicetype", default=config.devicetype)
    parser.add_argument("--timeout-seconds", type=int, default=60)
    parser.add_argument("--interval-ms", type=int, default=1500)
    parser.add_argument("--client-key", action="store_true", help="Also request an entertainment client key.")
    parser.add_argument("--print-key", action="store_true", help="Print the username (sensitive).")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.log_level)

    if not args.bridge_host:
        print("Missing bridge host. Provide --bridge-host (or set HUE_BRIDGE_HOST).", file=sys.stderr)
        raise SystemExit(2)

    print("Pairing requires the physical Hue Bridge button.")
    print("Press the bridge button now. Pairing attempts will run until success or timeout.")

    async def _run() -> RegisteredUser | None:
        async with BridgeClient(
            bridge_host=args.bridge_host,
            username=None,
            scheme=config.scheme,
            verify=config.verify_tls,
            timeout=config.timeout_seconds,
            connect_timeout=config.connect_timeout_seconds,
        ) as client:
            return await pair(
                client,
                devicetype=args.devicetype,
                timeout_seconds=args.timeout_seconds,
                interval_ms=args.interval_ms,
                generate_client_key=args.client_key,
            )

    try:
        user = asyncio.run(_run())
    except HueError as exc:
        print(f"Pairing failed: {exc}", file=sys.stderr)
        raise SystemExit(1)

    if user is None:
        print("Timed out waiting for the link button.", file=sys.stderr)
        raise SystemExit(1)

    print("Paired successfully. Set HUE_USERNAME to use it.")
    if args.print_key:
        print(f"Username: {user.username}")
        if user.client_key:
            print(f"Client key: {user.client_key}")
    else:
        print(f"Username (masked): {_mask(user.username)}")
    raise SystemExit(0)


if __name__ == "__main__":
    main()
