import uuid


def generate() -> str:
    """Return a fresh purchase key (32 hex chars from a random UUID)."""
    return uuid.uuid4().hex
