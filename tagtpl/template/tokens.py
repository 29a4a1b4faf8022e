"""
Lexical types for the tag-based template engine.

Defines token kinds and the immutable token record produced by the lexer
and consumed by the parser.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


class TokenKind(enum.Enum):
    """Kinds of tokens in a template."""

    # Literal text
    TEXT = "TEXT"

    # Variable interpolation <{ name | "default" | filter }>
    VAR = "VAR"

    # Conditional blocks
    IF = "IF"
    ELSEIF = "ELSEIF"
    ELSE = "ELSE"
    ENDIF = "ENDIF"

    # Loops
    FOR = "FOR"
    ENDFOR = "ENDFOR"

    # Switch blocks
    SWITCH = "SWITCH"
    CASE = "CASE"
    DEFAULT = "DEFAULT"
    ENDSWITCH = "ENDSWITCH"


# Separates the loop binding from the list expression inside FOR token values.
# Must not appear literally in a list expression.
FOR_SEPARATOR = ":"


@dataclass(frozen=True)
class Token:
    """
    Token with the tag text as written, for error diagnostics.
    """
    kind: TokenKind
    value: str = ""                      # variable path, condition, loop header, switch/case expression
    default: Optional[str] = None        # default literal of a variable tag
    raw: str = ""                        # tag body as written
    filters: Tuple[str, ...] = ()        # filter pipeline of a variable tag
    position: int = 0                    # offset in the source text

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, pos={self.position})"


__all__ = ["TokenKind", "Token", "FOR_SEPARATOR"]
