import re
from uuid import uuid4

_IDENTIFIER_CLEANUP = re.compile(r"[^a-z0-9_-]+")


def generate_id(prefix: str) -> str:
    """Generate a prefixed short UUID, e.g. 'proj-a1b2c3d4e5f6'."""
    return f"{prefix}-{uuid4().hex[:12]}"


def identifier_from_name(name: str, max_length: int = 100) -> str:
    """Derive a project identifier slug, e.g. 'Web Shop 2' -> 'web-shop-2'."""
    slug = _IDENTIFIER_CLEANUP.sub("-", name.strip().lower()).strip("-_")
    if not slug or not slug[0].isalpha():
        slug = f"project-{slug}" if slug else "project"
    return slug[:max_length].rstrip("-_")
