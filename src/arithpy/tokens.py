from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Annotated


class TokenKind(str, Enum):
    NUMBER = "NUMBER"

    # Operators / punctuation
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    LPAREN = "("
    RPAREN = ")"


@dataclass(frozen=True, slots=True)
class Token(Annotated[TokenKind]):
    # Only meaningful for NUMBER.
    number: int = 0

    @property
    def kind(self) -> TokenKind:
        return self.value

    def __str__(self) -> str:
        if self.value is TokenKind.NUMBER:
            return str(self.number)
        return self.value.value

    def __repr__(self) -> str:
        if self.value is TokenKind.NUMBER:
            return f"Token(NUMBER {self.number}, {self.span})"
        return f"Token({self.value.name}, {self.span})"
