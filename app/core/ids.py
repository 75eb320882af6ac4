import uuid


def generate_uuid() -> str:
    """External identifier for stored records (UUID v4, independent of row ids)."""
    return str(uuid.uuid4())
