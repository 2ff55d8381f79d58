"""
godoclint.parser - Go Source Front End

Lexer and declaration-level parser for Go source files.
Converts .go files into a read-only syntax tree of packages, files,
declarations and their doc comments.
"""

from godoclint.parser.lexer import Lexer, Token, TokenType, LexerError, tokenize_file
from godoclint.parser.parser import (
    Parser,
    ParseError,
    parse_dir,
    parse_file,
    parse_source,
    # Syntax tree types
    Comment,
    CommentGroup,
    Field,
    File,
    FuncDecl,
    GenDecl,
    Ident,
    Package,
    TypeExpr,
)

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "LexerError",
    "tokenize_file",
    # Parser
    "Parser",
    "ParseError",
    "parse_dir",
    "parse_file",
    "parse_source",
    # Syntax tree
    "Comment",
    "CommentGroup",
    "Field",
    "File",
    "FuncDecl",
    "GenDecl",
    "Ident",
    "Package",
    "TypeExpr",
]
