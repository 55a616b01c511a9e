"""
JSON output rendering.
"""

import json
from typing import Any


def render_json(data: Any, pretty: bool = False) -> str:
    """
    Serialize an API result for standard output.

    Compact separators by default, two-space indentation when pretty.
    Non-ASCII text is kept as-is; the caller writes it as UTF-8.
    """
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
