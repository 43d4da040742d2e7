import re


def _truncation_pattern(length: int) -> re.Pattern[str]:
    return re.compile(r"\A(.{%d}[^\n\r]*).*\Z" % length, re.DOTALL)


def shorten_text(text: str | None, length: int) -> str:
    """Cut after the line that contains the ``length``-th character, adding '...'."""
    return _truncation_pattern(length).sub(r"\1...", text or "").strip()


def short_project_description(description: str | None, length: int = 255) -> str:
    if not description or not description.strip():
        return ""
    return shorten_text(description, length)
