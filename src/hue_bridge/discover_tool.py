from __future__ import annotations

import argparse
import concurrent.futures
import json
import logging
import socket
import time
import urllib.parse
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from hue_bridge.config import AppConfig
from hue_bridge.errors import MalformedResponse, NetworkError
from hue_bridge.schemas import NupnpBridge

logger = logging.getLogger("hue_bridge")

SSDP_ADDR = ("239.255.255.250", 1900)
NUPNP_URL = "https://discovery.meethue.com/"

_NUPNP_REPLY = TypeAdapter(list[NupnpBridge])


@dataclass(frozen=True)
class DiscoveredBridge:
    ip: str
    source: str  # ssdp | nupnp
    bridge_id: str | None = None
    location: str | None = None
    port: int | None = None


def _parse_httpish_headers(packet: str) -> dict[str, str]:
    headers: dict[str, str] = {}
    for line in packet.splitlines():
        if ":" not in line:
            continue
        k, v = line.split(":", 1)
        headers[k.strip().lower()] = v.strip()
    return headers


def _ip_from_location(location: str) -> str | None:
    try:
        parsed = urllib.parse.urlparse(location)
    except ValueError:
        return None
    return parsed.hostname or None


def _looks_like_hue_reply(headers: dict[str, str], packet: str) -> bool:
    # Hue bridges announce themselves with an "IpBridge" server token and carry a hue-bridgeid header.
    server = headers.get("server", "").lower()
    return "ipbridge" in server or "hue-bridgeid" in headers or "ipbridge" in packet.lower()


def ssdp_discover(*, timeout_seconds: float = 3.0, st: str = "ssdp:all") -> list[DiscoveredBridge]:
    msg = "\r\n".join(
        [
            "M-SEARCH * HTTP/1.1",
            f"HOST: {SSDP_ADDR[0]}:{SSDP_ADDR[1]}",
            "MAN: ssdp:discover",
            "MX: 3",
            f"ST: {st}",
            "",
            "",
        ]
    ).encode("utf-8")

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.settimeout(0.2)
        sock.sendto(msg, SSDP_ADDR)

        deadline = time.time() + timeout_seconds
        found: dict[str, DiscoveredBridge] = {}

        while time.time() < deadline:
            try:
                data, addr = sock.recvfrom(65535)
            except socket.timeout:
                continue
            packet = data.decode("utf-8", "ignore")
            headers = _parse_httpish_headers(packet)
            if not _looks_like_hue_reply(headers, packet):
                continue

            location = headers.get("location")
            ip = (_ip_from_location(location) if location else None) or addr[0]
            found[ip] = DiscoveredBridge(
                ip=ip,
                source="ssdp",
                bridge_id=headers.get("hue-bridgeid"),
                location=location,
            )

        return list(found.values())
    finally:
        sock.close()


def parse_nupnp_reply(body: Any) -> list[DiscoveredBridge]:
    try:
        entries = _NUPNP_REPLY.validate_python(body)
    except ValidationError as exc:
        raise MalformedResponse("Unexpected discovery portal reply", body=body) from exc
    return [
        DiscoveredBridge(ip=e.internalipaddress, source="nupnp", bridge_id=e.id.lower(), port=e.port)
        for e in entries
    ]


def nupnp_discover(
    *, url: str = NUPNP_URL, timeout: float = 5.0, transport: httpx.BaseTransport | None = None
) -> list[DiscoveredBridge]:
    """Ask the vendor discovery portal which bridges share our public address."""
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as client:
            resp = client.get(url)
    except httpx.TransportError as exc:
        raise NetworkError(str(exc)) from exc
    if resp.status_code != 200:
        raise NetworkError(f"discovery portal returned HTTP {resp.status_code}")
    try:
        body = resp.json()
    except ValueError as exc:
        raise MalformedResponse("Discovery portal reply is not JSON", body=resp.text) from exc
    return parse_nupnp_reply(body)


def merge_bridges(bridges: list[DiscoveredBridge]) -> list[DiscoveredBridge]:
    # De-dupe by IP, preferring entries that know the bridge id.
    by_ip: dict[str, DiscoveredBridge] = {}
    for b in bridges:
        prev = by_ip.get(b.ip)
        if not prev or (not prev.bridge_id and b.bridge_id):
            by_ip[b.ip] = b
    return list(by_ip.values())


def _print_bridges(bridges: list[DiscoveredBridge], *, json_out: bool) -> None:
    if json_out:
        print(
            json.dumps(
                [
                    {"ip": b.ip, "source": b.source, "id": b.bridge_id, "location": b.location, "port": b.port}
                    for b in bridges
                ],
                indent=2,
            )
        )
        return

    if not bridges:
        print("No Hue bridges discovered.")
        return

    for i, b in enumerate(bridges, start=1):
        label = b.bridge_id or "Hue Bridge"
        print(f"{i}) {b.ip} - {label} ({b.source})")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="hue-bridge-discover")
    parser.add_argument("--timeout-seconds", type=float, default=3.0)
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--no-ssdp", action="store_true", help="Skip SSDP/UPnP discovery")
    parser.add_argument("--no-nupnp", action="store_true", help="Skip the discovery portal lookup")
    args = parser.parse_args(argv)

    logging.basicConfig(level=AppConfig.from_env().log_level)

    bridges: list[DiscoveredBridge] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as ex:
        futures: list[concurrent.futures.Future[list[DiscoveredBridge]]] = []
        if not args.no_ssdp:
            futures.append(ex.submit(ssdp_discover, timeout_seconds=args.timeout_seconds))
        if not args.no_nupnp:
            futures.append(ex.submit(nupnp_discover, timeout=args.timeout_seconds))
        for f in futures:
            try:
                bridges.extend(f.result())
            except (OSError, NetworkError, MalformedResponse) as exc:
                logger.warning("discovery method failed: %s", exc)

    _print_bridges(merge_bridges(bridges), json_out=args.json)


if __name__ == "__main__":
    main()
