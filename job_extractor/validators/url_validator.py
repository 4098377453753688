"""SSRF guard for URLs the extraction service is asked to open.

The browser will follow whatever URL a caller posts, so before a page is
opened the host is resolved and every address it resolves to must be
public (globally routable unicast). Both IPv4 and IPv6 results are
checked; IPv4-mapped IPv6 addresses are judged by their IPv4 form.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = {"http", "https"}


def is_private_ip(ip_str: str) -> bool:
    """Return ``True`` if *ip_str* is private, reserved or not an IP at all."""
    try:
        addr = ipaddress.ip_address(ip_str.split("%", 1)[0])
    except ValueError:
        return True
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        addr = addr.ipv4_mapped
    # is_global alone admits multicast and the deprecated IPv4-compatible ::/96
    return not addr.is_global or addr.is_multicast or addr.is_reserved


async def _resolve(hostname: str) -> list[str]:
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
    return [info[4][0] for info in infos]


async def validate_url(url: str) -> bool:
    """Return ``True`` if *url* is http(s) and its host resolves only to public IPs."""
    try:
        parsed = urlparse(url)
        if parsed.scheme not in _ALLOWED_SCHEMES or not parsed.hostname:
            return False
        addresses = await _resolve(parsed.hostname)
    except (OSError, ValueError) as exc:
        logger.info("Rejected URL %s: %s", url, exc, extra={"target_url": url})
        return False

    blocked = [ip for ip in addresses if is_private_ip(ip)]
    if not addresses or blocked:
        logger.info(
            "Rejected URL %s resolving to %s",
            url,
            blocked or "no addresses",
            extra={"target_url": url},
        )
        return False
    return True
