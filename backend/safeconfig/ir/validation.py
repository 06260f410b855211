from dataclasses import dataclass, field
from typing import List, Optional
from .config_ir import ConfigIR
from .errors import ParseError


@dataclass
class ParseResult:
    ir: Optional[ConfigIR]
    errors: List[ParseError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.ir is not None

    def error_messages(self) -> List[str]:
        return [e.message for e in self.errors]

    @classmethod
    def success(cls, ir: ConfigIR):
        return cls(ir=ir, errors=[])

    @classmethod
    def failure(cls, errors: List[ParseError]):
        return cls(ir=None, errors=errors)
