"""
Putt Lexer - Tokenizes Putt source code into a flat token tape.

Token classes, tried in this order at every position:
- Numbers: [+-]?[0-9]+(.[0-9]+)?
- Booleans: #t and #f (read as 1 and 0)
- Compressed strings: `payload` (decoded through the codec)
- Strings: "text" (no escapes)
- Operations: single-character operators and keywords, longest first
- Roman numerals: any other run of letters (unmatched text is worth 0)
"""

import math
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, List

from .. import codec
from ..config import PuttConfig
from ..errors import DecodeError, ParseError
from ..vm.opcodes import OpcodeTable
from ..vm.values import PuttNumber, PuttOperation, PuttText, PuttValue
from .numerals import from_roman


class TokenType(Enum):
    """Putt token types."""
    NUMBER = auto()             # 42, -1.5
    BOOLEAN = auto()            # #t, #f
    STRING = auto()             # "text"
    COMPRESSED_STRING = auto()  # `payload`
    OPERATION = auto()          # + - * / ... cmp dmp Jmp
    NUMERAL = auto()            # X, MCMXCIV, anything alphabetic


@dataclass
class Token:
    """Represents a single token."""
    type: TokenType
    value: PuttValue
    line: int
    column: int
    offset: int
    text: str = ""

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


WHITESPACE = ' \t\n\r\f'


def is_letter(ch: Optional[str]) -> bool:
    """ASCII letters only; other alphabets are not numerals."""
    return ch is not None and ('a' <= ch <= 'z' or 'A' <= ch <= 'Z')


def is_digit(ch: Optional[str]) -> bool:
    return ch is not None and '0' <= ch <= '9'


class Lexer:
    """Tokenizes Putt source code."""

    def __init__(self, source: str, filename: str = "<input>",
                 config: Optional[PuttConfig] = None):
        self.source = source
        self.filename = filename
        self.config = config or PuttConfig()
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def error(self, message: str, offset: Optional[int] = None,
              line: Optional[int] = None, column: Optional[int] = None):
        """Raise a ParseError at the current position, or at the one given."""
        raise ParseError(
            message,
            self.pos if offset is None else offset,
            self.line if line is None else line,
            self.column if column is None else column,
            self.filename,
        )

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character at current position + offset."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        ch = self.source[self.pos]
        self.pos += 1

        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return ch

    def skip_whitespace(self):
        """Skip whitespace characters."""
        while self.peek() and self.peek() in WHITESPACE:
            self.advance()

    def read_number(self) -> float:
        """Read a decimal number with optional sign and fraction."""
        start = (self.pos, self.line, self.column)
        chars = []

        if self.peek() in ('-', '+'):
            chars.append(self.advance())

        while is_digit(self.peek()):
            chars.append(self.advance())

        # A period only belongs to the number when digits follow it
        if self.peek() == '.' and is_digit(self.peek(1)):
            chars.append(self.advance())
            while is_digit(self.peek()):
                chars.append(self.advance())

        num_str = ''.join(chars)
        try:
            value = float(num_str)
        except ValueError:
            self.error(f"Invalid number: {num_str}", *start)
        if math.isinf(value):
            self.error(f"Number out of range: {num_str}", *start)
        return value

    def read_boolean(self) -> bool:
        """Read #t or #f."""
        flag = self.peek(1)
        if flag not in ('t', 'f'):
            self.error(f"Invalid boolean literal: #{flag or ''}")
        self.advance()  # #
        self.advance()  # t / f
        return flag == 't'

    def read_string(self) -> str:
        """Read a double-quoted string literal. There are no escapes."""
        start = (self.pos, self.line, self.column)

        self.advance()  # opening "
        chars = []

        while self.peek() is not None and self.peek() != '"':
            chars.append(self.advance())

        if self.peek() != '"':
            self.error("Unterminated string", *start)

        self.advance()  # closing "
        return ''.join(chars)

    def read_compressed_string(self) -> str:
        """Read a backtick literal on one line and decode its payload."""
        start = (self.pos, self.line, self.column)

        self.advance()  # opening `
        chars = []

        while self.peek() is not None and self.peek() not in '`\n':
            chars.append(self.advance())

        if self.peek() != '`':
            self.error("Unterminated compressed string", *start)

        self.advance()  # closing `
        try:
            return codec.decompress_text(''.join(chars), "compressed string")
        except DecodeError as e:
            self.error(f"Undecodable compressed string: {e}", *start)

    def read_word(self) -> str:
        """Read a maximal run of letters."""
        chars = []
        while is_letter(self.peek()):
            chars.append(self.advance())
        return ''.join(chars)

    def _emit(self, token_type: TokenType, value: PuttValue, start: tuple):
        offset, line, col = start
        self.tokens.append(Token(token_type, value, line, col, offset,
                                 self.source[offset:self.pos]))

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source code."""
        while self.pos < len(self.source):
            self.skip_whitespace()

            if self.pos >= len(self.source):
                break

            ch = self.peek()
            start = (self.pos, self.line, self.column)

            # Number (a sign only when a digit follows; otherwise Add or Subtract)
            if is_digit(ch) or (ch in ('-', '+') and is_digit(self.peek(1))):
                value = self.read_number()
                self._emit(TokenType.NUMBER, PuttNumber(value), start)

            # Boolean
            elif ch == '#':
                flag = self.read_boolean()
                self._emit(TokenType.BOOLEAN, PuttNumber.from_bool(flag), start)

            # Compressed string
            elif ch == '`':
                text = self.read_compressed_string()
                self._emit(TokenType.COMPRESSED_STRING, PuttText(text), start)

            # String
            elif ch == '"':
                text = self.read_string()
                self._emit(TokenType.STRING, PuttText(text), start)

            else:
                info = OpcodeTable.match(self.source, self.pos)

                # Operation
                if info is not None:
                    for _ in info.symbol:
                        self.advance()
                    self._emit(TokenType.OPERATION, PuttOperation(info.opcode), start)

                # Roman numeral fallback
                elif is_letter(ch):
                    word = self.read_word()
                    value = from_roman(word)
                    self.config.log(f"Roman: {word} Hindu: {value}")
                    self._emit(TokenType.NUMERAL, PuttNumber(float(value)), start)

                else:
                    self.error(f"Unexpected character: {ch!r}")

        self.config.log(f"{self.filename}: {len(self.tokens)} token(s)")
        return self.tokens


def tokenize(source: str, filename: str = "<input>",
             config: Optional[PuttConfig] = None) -> List[PuttValue]:
    """Convenience function to tokenize Putt source into a tape of values."""
    lexer = Lexer(source, filename, config)
    return [token.value for token in lexer.tokenize()]
