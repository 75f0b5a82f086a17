"""
Session utilities for vCD operations.

This module provides utilities for creating and configuring the HTTP client
shared by every request against a vCloud Director endpoint.
"""

from typing import Dict, Optional
from urllib.request import getproxies

import logging
import httpx
from httpx import HTTPTransport

from .constants import DEFAULT_API_VERSION, DEFAULT_CONNECT_TIMEOUT

# ============================================================================
# HTTP Configuration Constants
# ============================================================================

# Connection attempts retried by the transport before a request fails
MAX_RETRIES = 3


def version_accept_header(api_version: str) -> Dict[str, str]:
    """Accept header selecting the vCloud API version."""
    return {"Accept": f"application/*+xml;version={api_version}"}


def environment_proxy_mounts(verify: bool = True) -> Dict[str, Optional[HTTPTransport]]:
    """
    Build httpx mounts for the proxies named in the environment.

    ``HTTP_PROXY``, ``HTTPS_PROXY`` and ``ALL_PROXY`` get a proxy transport
    with the same retries and TLS verification as direct connections. Hosts
    listed in ``NO_PROXY`` map to None, which sends them through the
    client's own transport.
    """
    proxies = getproxies()
    mounts: Dict[str, Optional[HTTPTransport]] = {}

    for scheme in ("http", "https"):
        proxy_url = proxies.get(scheme) or proxies.get("all")
        if proxy_url:
            logging.debug("Using proxy %s for %s:// requests", proxy_url, scheme)
            mounts[f"{scheme}://"] = HTTPTransport(proxy=proxy_url, retries=MAX_RETRIES, verify=verify)

    if not mounts:
        return mounts

    for host in (h.strip() for h in proxies.get("no", "").split(",")):
        if not host:
            continue
        if host == "*":
            return {}
        if "://" in host:
            mounts[host] = None
        else:
            mounts[f"all://*{host.lstrip('.')}"] = None
    return mounts


def create_session_with_retry(
    insecure: bool = False,
    api_version: str = DEFAULT_API_VERSION,
    timeout: float = 120.0,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Client:
    """
    Create an httpx client for talking to vCloud Director.

    Args:
        insecure: Skip TLS certificate verification (self-signed vCD cells)
        api_version: vCloud API version sent in the Accept header
        timeout: Total timeout in seconds (default: 120.0)
        connect_timeout: Connect / TLS handshake timeout in seconds
        headers: Extra default headers

    Returns:
        Configured httpx.Client object with:
        - Connection retries on the transport
        - The API version Accept header on every request
        - Proxy settings taken from the environment
        - Optional TLS verification bypass

    Example:
        >>> client = create_session_with_retry()
        >>> response = client.get("https://vcd.example.com/api/versions")
        >>> # Against a lab cell with a self-signed certificate
        >>> client = create_session_with_retry(insecure=True, api_version="31.0")
    """
    if insecure:
        logging.warning("TLS certificate verification is disabled for the vCD endpoint")

    transport = HTTPTransport(
        retries=MAX_RETRIES,
        verify=not insecure,
    )

    default_headers = version_accept_header(api_version)
    if headers:
        default_headers.update(headers)

    # An explicit transport turns off httpx's own environment proxy lookup
    client = httpx.Client(
        transport=transport,
        mounts=environment_proxy_mounts(verify=not insecure),
        timeout=httpx.Timeout(timeout, connect=connect_timeout),
        follow_redirects=True,
        headers=default_headers,
    )

    return client


__all__ = ["create_session_with_retry", "environment_proxy_mounts", "version_accept_header"]
