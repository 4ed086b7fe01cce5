# core/web/protocol.py

import asyncio
import ssl
from urllib.parse import urlsplit

from headergrade.core.logging.logger import setup_logger
from headergrade.core.web.models import ProtocolInfo

logger = setup_logger(__name__)

ALPN_PROTOCOLS = {
    "h2": "HTTP/2",
    "http/1.1": "HTTP/1.1",
}


def _alpn_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    context.set_alpn_protocols(list(ALPN_PROTOCOLS))
    return context


async def detect_protocol_version(url: str, timeout: int = 5) -> ProtocolInfo:
    """
    Best-effort lookup of the HTTP version a server negotiates.

    Uses ALPN on a TLS handshake for https URLs. Plain http URLs are
    reported as HTTP/1.1. Never raises; failures yield protocol "unknown".
    """
    parts = urlsplit(url)
    host = parts.hostname
    if not host:
        return ProtocolInfo("unknown", f"No hostname in {url}")

    if parts.scheme != "https":
        return ProtocolInfo("HTTP/1.1", "Plain HTTP connection, ALPN not available")

    port = parts.port or 443
    writer = None
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(
                host, port, ssl=_alpn_context(), server_hostname=host
            ),
            timeout=timeout,
        )
        ssl_object = writer.get_extra_info("ssl_object")
        negotiated = ssl_object.selected_alpn_protocol() if ssl_object else None
        tls_version = ssl_object.version() if ssl_object else None
    except (OSError, asyncio.TimeoutError, ssl.SSLError) as e:
        logger.warning(f"Protocol detection failed for {host}:{port}: {e}")
        return ProtocolInfo("unknown", f"Protocol detection failed: {e}")
    finally:
        if writer is not None:
            writer.close()

    if negotiated in ALPN_PROTOCOLS:
        protocol = ALPN_PROTOCOLS[negotiated]
        details = f"Negotiated {negotiated} via ALPN over {tls_version}"
    else:
        protocol = "HTTP/1.1"
        details = f"No ALPN protocol negotiated over {tls_version}, assuming HTTP/1.1"

    logger.debug(f"{host}:{port} speaks {protocol}")
    return ProtocolInfo(protocol, details)
