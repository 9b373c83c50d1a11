"""Tokenization engine for HTML parsing.

Key Components:
    HTMLTokenizer: Splits a document into tag substrings and text runs
    Token: One classified lexical unit
    TokenType: Enumeration of token kinds
    parse_attributes: Splits a raw attribute substring into ordered pairs
"""

from .attributes import parse_attributes
from .tokenizer import (
    HTMLTokenizer,
    Token,
    TokenType,
    tokenize,
)

__all__ = [
    "HTMLTokenizer",
    "Token",
    "TokenType",
    "parse_attributes",
    "tokenize",
]
