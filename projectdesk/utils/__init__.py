from projectdesk.utils.ids import generate_id, identifier_from_name
from projectdesk.utils.json_helpers import safe_parse_json_list
from projectdesk.utils.text import short_project_description, shorten_text
from projectdesk.utils.time import utc_now_iso

__all__ = [
    "generate_id",
    "identifier_from_name",
    "safe_parse_json_list",
    "short_project_description",
    "shorten_text",
    "utc_now_iso",
]
