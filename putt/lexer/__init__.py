"""Putt Lexer - Turns source text into a flat tape of values."""

from .lexer import Lexer, Token, TokenType, tokenize
from .numerals import from_roman

__all__ = ['Lexer', 'Token', 'TokenType', 'tokenize', 'from_roman']
