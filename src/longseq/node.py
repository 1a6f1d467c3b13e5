"""Node id derivation from the host's network hardware addresses."""

import logging
import secrets
from collections.abc import Callable

import psutil

from longseq.exceptions import NodeIdResolutionFailure
from longseq.layout import MAX_NODE_ID

logger = logging.getLogger(__name__)

UniquenessSource = Callable[[], int]


def string_hash(text: str) -> int:
    """31-multiplier polynomial hash over UTF-16 code units, as a signed 32-bit int."""
    data = text.encode("utf-16-be")
    h = 0
    for i in range(0, len(data), 2):
        h = (31 * h + ((data[i] << 8) | data[i + 1])) & 0xFFFFFFFF
    return h - (1 << 32) if h & 0x80000000 else h


def _parse_address(address: str) -> bytes:
    # Linux and macOS report aa:bb:.., Windows reports AA-BB-..
    parts = address.replace("-", ":").split(":")
    return bytes(int(part, 16) for part in parts if part)


def hardware_addresses() -> list[bytes]:
    """Link-layer addresses of every interface, in interface name order."""
    try:
        interfaces = psutil.net_if_addrs()
    except (OSError, RuntimeError) as exc:
        raise NodeIdResolutionFailure(f"Cannot enumerate network interfaces: {exc}") from exc

    addresses = []
    for name in sorted(interfaces):
        for addr in interfaces[name]:
            if addr.family != psutil.AF_LINK or not addr.address:
                continue
            try:
                mac = _parse_address(addr.address)
            except ValueError as exc:
                raise NodeIdResolutionFailure(
                    f"Unreadable hardware address {addr.address!r} on {name}"
                ) from exc
            if mac and any(mac):
                addresses.append(mac)
    return addresses


def hardware_fingerprint() -> str:
    """All hardware addresses concatenated as uppercase hex."""
    return "".join(f"{byte:02X}" for mac in hardware_addresses() for byte in mac)


def hardware_uniqueness_source() -> int:
    return string_hash(hardware_fingerprint())


def random_uniqueness_source() -> int:
    return secrets.randbits(32)


def resolve_node_id(
    source: UniquenessSource = hardware_uniqueness_source,
    fallback: UniquenessSource = random_uniqueness_source,
) -> int:
    """Derive a node id in [0, MAX_NODE_ID].

    The uniqueness source is tried first. If it fails for any reason the
    fallback (random by default) is used instead. Two hosts sharing or lacking
    hardware addresses can end up with the same node id; deployments that need
    strict partitioning should configure an explicit node id.
    """
    try:
        value = source()
    except Exception as exc:
        logger.warning("Node id source failed (%s), falling back to a random node id", exc)
        value = fallback()

    node_id = value & MAX_NODE_ID
    logger.info("Resolved node id %d", node_id)
    return node_id
