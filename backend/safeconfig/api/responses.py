import json
from typing import Any

from fastapi.responses import JSONResponse


class AsciiJSONResponse(JSONResponse):
    """
    JSON response escaped to ASCII.

    Config text may carry lone surrogates (e.g. a JSON-escaped "\\ud800"
    in a service name); they are echoed back as \\uXXXX escapes instead of
    failing the UTF-8 encode.
    """

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("ascii")
