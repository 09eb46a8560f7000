"""
Utility functions shared across agents.
"""

import base64
import binascii
import re


_BULLET_PREFIX = re.compile(r"^[-*]\s*")


def strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown code block from a model response."""
    if "```json" in content:
        content = content.split("```json")[1].split("```")[0]
    elif "```" in content:
        content = content.split("```")[1].split("```")[0]
    return content.strip()


def parse_bullets(text: str | None) -> list[str]:
    """
    Split a bulleted text block into items.

    Blank lines are dropped and a leading '-' or '*' marker is removed.
    """
    if not text:
        return []
    return [
        _BULLET_PREFIX.sub("", line.strip()).strip()
        for line in text.split("\n")
        if line.strip()
    ]


def decode_image(data: str) -> bytes:
    """Decode a base64 image, accepting a data URL prefix."""
    if data.startswith("data:"):
        data = data.split(",", 1)[-1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Reference image is not valid base64: {e}") from e


def encode_image(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
