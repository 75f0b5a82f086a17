"""
Response utilities for vCD API responses.

vCloud Director reports failures as an ``<Error>`` document carrying a
message and major/minor error codes. These helpers turn such responses into
``VcdApiError`` exceptions.
"""

import xml.etree.ElementTree as ET
from typing import Optional

import httpx

from ..errors import VcdApiError
from .xml_utils import local_name


def parse_error_body(response: httpx.Response) -> tuple[str, Optional[int], Optional[str]]:
    """
    Extract ``(message, majorErrorCode, minorErrorCode)`` from an error response.

    Falls back to the raw body (or the reason phrase) when the response is
    not a vCD ``<Error>`` document.
    """
    text = response.text
    try:
        root = ET.fromstring(text)
    except ET.ParseError:
        return (text.strip() or response.reason_phrase, None, None)

    if local_name(root.tag) != "Error":
        return (text.strip(), None, None)

    major = root.get("majorErrorCode")
    return (
        root.get("message", ""),
        int(major) if major and major.isdigit() else None,
        root.get("minorErrorCode"),
    )


def raise_for_vcd_error(response: httpx.Response, operation: str = "request") -> None:
    """
    Raise ``VcdApiError`` if the response is not a 2xx.

    Args:
        response: HTTP response to check
        operation: Description of the operation for the error message

    Raises:
        VcdApiError: If the response status is not successful
    """
    if response.is_success:
        return

    message, major, minor = parse_error_body(response)
    raise VcdApiError(
        response.status_code,
        message,
        operation=operation,
        major_error_code=major,
        minor_error_code=minor,
    )


__all__ = ["parse_error_body", "raise_for_vcd_error"]
