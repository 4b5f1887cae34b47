"""
Identifier generation for TwinCAT project objects
"""

import re
import uuid

GUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$'
)


def generate_guid() -> str:
    """
    Random version-4 GUID, 36 characters, lower-case hex

    Example:
        generate_guid()  # "3f2b8c1e-9d4a-4e7b-a1c2-5f6e7d8c9b0a"
    """
    return str(uuid.uuid4())


def is_guid(value: str) -> bool:
    return bool(GUID_PATTERN.match(value))
