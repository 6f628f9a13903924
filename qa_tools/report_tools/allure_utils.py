"""
================================================================================
Allure Report Utilities
================================================================================

Thin attachment helpers shared by the HTTP client, page objects and the
performance tracker.

================================================================================
"""

import json
from pathlib import Path
from typing import Any, Union

import allure


# Attachments longer than this are truncated
MAX_ATTACHMENT_LENGTH = 3000


def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    allure.attach(
        truncate(json_str),
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        truncate(text),
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(source: Union[bytes, Path], name: str = "Screenshot"):
    """Attach PNG bytes, or the contents of a PNG file, to Allure report."""
    if isinstance(source, Path):
        source = source.read_bytes()
    allure.attach(
        source,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def truncate(content: str, limit: int = MAX_ATTACHMENT_LENGTH) -> str:
    if len(content) <= limit:
        return content
    return (
        f"{content[:limit]}\n\n"
        f"... [Truncated, full length: {len(content)} chars] ..."
    )


__all__ = [
    "attach_json",
    "attach_text",
    "attach_png",
    "truncate",
]
