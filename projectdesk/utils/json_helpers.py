import json


def safe_parse_json_list(raw: str | None) -> list[str]:
    """Parse a JSON array of strings, returning an empty list on failure."""
    try:
        value = json.loads(raw or "[]")
    except (json.JSONDecodeError, TypeError):
        return []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]
