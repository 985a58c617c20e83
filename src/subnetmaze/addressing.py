"""
SubnetMaze Addressing - IPv4 Address Codec and CIDR Mask Arithmetic

PURPOSE:
    Converts between dotted-decimal IPv4 text and 32-bit unsigned integers and
    implements the subnet membership test which decides reachability between
    two nodes.

WHO READS ME:
    - generator.py: encodes the generated node addresses
    - reachability.py: mask_for(), reachable()
    - simulation.py, render.py: decode() / mask_text() for the HUD

WHO I READ:
    - models.py: InvalidAddressFormat

DEPENDENCIES:
    - ipaddress: IPv4Address does the strict parsing and formatting
    - logging: warning when the permissive zero fallback kicks in

KEY EXPORTS:
    - encode(text): dotted decimal -> uint32, raises InvalidAddressFormat
    - encode_or_zero(text): dotted decimal -> uint32, 0 for malformed input
    - decode(value): uint32 -> dotted decimal
    - mask_for(prefix_len): CIDR prefix length -> uint32 mask word
    - reachable(ip_a, ip_b, prefix_len): same subnet test
    - mask_text(prefix_len): mask word as dotted decimal

ZERO FALLBACK POLICY:
    Node addresses have always been parsed permissively: anything which does
    not parse becomes 0.0.0.0. encode_or_zero() keeps that behavior but logs
    a warning, so a malformed seed address shows up in the log instead of
    silently collapsing the whole tree into the 0.0.0.0/0 subnet.
"""

import logging
from ipaddress import IPV4LENGTH, AddressValueError, IPv4Address

from subnetmaze.models import InvalidAddressFormat

_LOGGER = logging.getLogger(__name__)

ALL_ONES = (1 << IPV4LENGTH) - 1
MIN_PREFIX = 0
MAX_PREFIX = IPV4LENGTH


def encode(text: str) -> int:
    """parse dotted-decimal text into its 32 bit integer form"""
    if not isinstance(text, str):
        raise InvalidAddressFormat(f"address must be text, not {type(text).__name__}")
    try:
        return int(IPv4Address(text.strip()))
    except AddressValueError as exc:
        raise InvalidAddressFormat(f"invalid address {text!r}: {exc}") from exc


def encode_or_zero(text: str) -> int:
    """like encode() but substitutes 0 for malformed text"""
    try:
        return encode(text)
    except InvalidAddressFormat as exc:
        _LOGGER.warning("%s, using 0.0.0.0", exc)
        return 0


def decode(value: int) -> str:
    """format a 32 bit integer as dotted decimal, first octet is bits 31-24"""
    return str(IPv4Address(value & ALL_ONES))


def split_octets(text: str) -> list[int]:
    """the four octets of a well-formed address"""
    return list(IPv4Address(encode(text)).packed)


def join_octets(octets: list[int]) -> str:
    return ".".join(str(octet) for octet in octets)


def clamp_prefix(prefix_len: int) -> int:
    return min(max(int(prefix_len), MIN_PREFIX), MAX_PREFIX)


def mask_for(prefix_len: int) -> int:
    """mask word with the top prefix_len bits set"""
    if prefix_len <= MIN_PREFIX:
        return 0
    if prefix_len >= MAX_PREFIX:
        return ALL_ONES
    return (ALL_ONES << (IPV4LENGTH - prefix_len)) & ALL_ONES


def reachable(ip_a: int, ip_b: int, prefix_len: int) -> bool:
    """true if both addresses are in the same subnet under prefix_len"""
    mask = mask_for(prefix_len)
    return (ip_a & mask) == (ip_b & mask)


def mask_text(prefix_len: int) -> str:
    return decode(mask_for(prefix_len))
