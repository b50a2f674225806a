"""PostgreSQL unique-violation translator."""

import re

from entityhub.domain.exceptions import Conflict

UNIQUE_VIOLATION = "23505"

# Key (type, slug)=(icon, home) already exists.
# Key (type, lower(display_name::text))=(icon, home) already exists.
_DETAIL_RE = re.compile(r"Key \((?P<fields>.+?)\)=\((?P<values>.*)\) already exists")
# lower(display_name::text) -> display_name
_EXPRESSION_RE = re.compile(r"^\w+\((?P<column>\w+)(?:::[\w ]+)?\)$")
_FIELD_SPLIT_RE = re.compile(r",\s*(?![^()]*\))")


def _column_name(field: str) -> str:
    match = _EXPRESSION_RE.match(field)
    return match["column"] if match else field


class PostgresConflictTranslator:
    """Turns SQLSTATE 23505 errors into Conflict, ignores everything else."""

    def translate(self, error: BaseException, label: str) -> Conflict | None:
        if getattr(error, "sqlstate", None) != UNIQUE_VIOLATION:
            return None

        diag = getattr(error, "diag", None)
        detail = getattr(diag, "message_detail", None) or ""
        match = _DETAIL_RE.search(detail)
        if not match:
            return Conflict(f"{label} already exists")

        fields = [f.strip() for f in _FIELD_SPLIT_RE.split(match["fields"])]
        # leading key columns are the partition (type); the last one may hold commas
        values = [v.strip() for v in match["values"].split(",", len(fields) - 1)]
        field = _column_name(fields[-1])
        value = values[-1] if len(values) == len(fields) else match["values"]
        return Conflict(f"{label} with {field} '{value}' already exists")
