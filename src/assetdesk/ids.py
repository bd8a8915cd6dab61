"""Path id parsing.

Ids arrive as raw path strings. Anything that is not a plain integer
inside the primary-key range parses to None, which callers turn into a
401 (company ids) or a 404 (entity ids), never a database error.
"""

import re
from typing import Optional, Union

MAX_ID = 2**31 - 1

_INT_RE = re.compile(r"^-?\d+$")


def parse_id(raw: Union[str, int, None]) -> Optional[int]:
    """"12" -> 12; "1.5", "null", "abc", "-3", "99999999999" -> None."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        value = raw
    else:
        raw = raw.strip()
        if not _INT_RE.match(raw):
            return None
        value = int(raw)
    if value < 1 or value > MAX_ID:
        return None
    return value
