from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ParseError:
    kind: Literal["syntax", "schema", "format"]
    message: str
