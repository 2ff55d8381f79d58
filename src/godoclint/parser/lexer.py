"""
Go Source Lexer (Tokenizer)

Converts raw .go source files into a stream of tokens.
Handles: identifiers, keywords, literals, operators, comments, and Go's
automatic semicolon insertion at line ends.
"""

import codecs
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional


class TokenType(Enum):
    """Types of tokens in Go source."""
    IDENT = auto()       # foo, Bar, _
    KEYWORD = auto()     # func, package, return, ...
    INT = auto()         # 42, 0x2A, 1_000
    FLOAT = auto()       # 0.5, 1e9, 0x1p-2
    IMAG = auto()        # 2i
    CHAR = auto()        # 'a', '\n'
    STRING = auto()      # "quoted", `raw`
    OPERATOR = auto()    # + - ( ) { } ...
    SEMICOLON = auto()   # ; (explicit, or "\n" when inserted)
    COMMENT = auto()     # // line or /* block */
    EOF = auto()         # End of file


KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
})

# Longest first so that greedy matching picks "<<=" before "<<" before "<".
OPERATORS = (
    "<<=", ">>=", "&^=", "...",
    "&&", "||", "<-", "++", "--", "==", "!=", "<=", ">=", ":=",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<", ">>", "&^",
    "+", "-", "*", "/", "%", "&", "|", "^", "<", ">", "=", "!", "~",
    "(", ")", "[", "]", "{", "}", ",", ".", ":",
)

# Keywords after which a newline terminates the statement.
_SEMI_KEYWORDS = frozenset({"break", "continue", "fallthrough", "return"})
_SEMI_OPERATORS = frozenset({"++", "--", ")", "]", "}"})


@dataclass
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int

    @property
    def end_line(self) -> int:
        """Last line the token occupies (block comments and raw strings span lines)."""
        return self.line + self.value.count("\n")

    def is_op(self, value: str) -> bool:
        return self.type == TokenType.OPERATOR and self.value == value

    def is_keyword(self, value: str) -> bool:
        return self.type == TokenType.KEYWORD and self.value == value

    def __repr__(self):
        if self.type == TokenType.SEMICOLON and self.value == "\n":
            return f"Token(SEMICOLON, '\\n', L{self.line}:{self.column})"
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


class LexerError(Exception):
    """Error during lexical analysis."""
    def __init__(self, message: str, line: int, column: int, filename: str = "<unknown>"):
        self.line = line
        self.column = column
        self.filename = filename
        super().__init__(f"{filename}:{line}:{column}: {message}")


class Lexer:
    """
    Tokenizer for Go source files.

    Semicolons are inserted the way the Go scanner does it: a newline (or
    end of file) after an identifier, a literal, one of the keywords
    break/continue/fallthrough/return, or one of ++ -- ) ] } becomes a
    SEMICOLON token whose value is "\\n". A line comment, or a block comment
    that runs to the end of its line, also ends such a line; the semicolon
    is then emitted before the comment.

    Usage:
        lexer = Lexer(source_text, "main.go")
        tokens = list(lexer.tokenize())
    """

    @staticmethod
    def _is_ident_start(ch: str) -> bool:
        return ch == '_' or ch.isalpha()

    @staticmethod
    def _is_ident_cont(ch: str) -> bool:
        return ch == '_' or ch.isalnum()

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.length = len(source)
        self.insert_semi = False

    def _error(self, message: str, line: int, column: int) -> LexerError:
        return LexerError(message, line, column, self.filename)

    def _current(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Peek ahead by offset characters."""
        pos = self.pos + offset
        if pos >= self.length:
            return None
        return self.source[pos]

    def _advance(self) -> Optional[str]:
        """Advance one character and return it."""
        ch = self._current()
        if ch is not None:
            self.pos += 1
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                # Columns count bytes, as Go positions do
                self.column += len(ch.encode("utf-8"))
        return ch

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs and carriage returns (but not newlines)."""
        while self._current() in (' ', '\t', '\r'):
            self._advance()

    def _comment_ends_line(self) -> bool:
        """
        Check whether the comment starting at the current position is
        followed by nothing but whitespace and comments up to a newline.
        """
        pos = self.pos
        while pos < self.length:
            if self.source.startswith("//", pos):
                return True
            if self.source.startswith("/*", pos):
                end = self.source.find("*/", pos + 2)
                if end < 0 or '\n' in self.source[pos:end]:
                    return True
                pos = end + 2
                while pos < self.length and self.source[pos] in ' \t\r':
                    pos += 1
                continue
            return self.source[pos] == '\n'
        return True

    def _read_line_comment(self) -> str:
        """Read a // comment up to (not including) the newline."""
        start = self.pos
        while self._current() not in (None, '\n'):
            self._advance()
        return self.source[start:self.pos].rstrip('\r')

    def _read_block_comment(self, start_line: int, start_col: int) -> str:
        """Read a /* ... */ comment, which may span lines."""
        start = self.pos
        self._advance()
        self._advance()
        while True:
            ch = self._current()
            if ch is None:
                raise self._error("comment not terminated", start_line, start_col)
            if ch == '*' and self._peek() == '/':
                self._advance()
                self._advance()
                break
            self._advance()
        return self.source[start:self.pos].replace('\r', '')

    def _read_quoted(self, quote: str, start_line: int, start_col: int) -> str:
        """Read an interpreted string or rune literal, keeping escapes verbatim."""
        start = self.pos
        self._advance()
        kind = "string" if quote == '"' else "rune"
        while True:
            ch = self._current()
            if ch is None or ch == '\n':
                raise self._error(f"{kind} literal not terminated", start_line, start_col)
            if ch == '\\':
                self._advance()
                if self._current() in (None, '\n'):
                    raise self._error(f"{kind} literal not terminated", start_line, start_col)
                self._advance()
                continue
            self._advance()
            if ch == quote:
                break
        value = self.source[start:self.pos]
        if quote == "'" and len(value) == 2:
            raise self._error("empty rune literal or unescaped ' in rune literal", start_line, start_col)
        return value

    def _read_raw_string(self, start_line: int, start_col: int) -> str:
        """Read a `raw` string literal, which may span lines."""
        start = self.pos
        self._advance()
        while True:
            ch = self._current()
            if ch is None:
                raise self._error("raw string literal not terminated", start_line, start_col)
            self._advance()
            if ch == '`':
                break
        return self.source[start:self.pos]

    def _read_identifier(self) -> str:
        start = self.pos
        while self._current() is not None and self._is_ident_cont(self._current()):
            self._advance()
        return self.source[start:self.pos]

    def _read_number(self) -> TokenType:
        """Read a numeric literal; returns its token type. Value is sliced by the caller."""
        start = self.pos
        hex_literal = self.source.startswith(("0x", "0X"), start)
        token_type = TokenType.INT
        while True:
            ch = self._current()
            if ch is None:
                break
            if ch.isalnum() or ch == '_':
                self._advance()
                if ch in 'pP' or (ch in 'eE' and not hex_literal):
                    token_type = TokenType.FLOAT
                    if self._current() in ('+', '-'):
                        self._advance()
                continue
            if ch == '.':
                token_type = TokenType.FLOAT
                self._advance()
                continue
            break
        if self.source[self.pos - 1] == 'i':
            token_type = TokenType.IMAG
        return token_type

    def _read_operator(self, start_line: int, start_col: int) -> str:
        for op in OPERATORS:
            if self.source.startswith(op, self.pos):
                for _ in op:
                    self._advance()
                return op
        raise self._error(f"invalid character {self._current()!r}", start_line, start_col)

    def tokenize(self, include_comments: bool = True) -> Iterator[Token]:
        """
        Generate tokens from the source.

        Args:
            include_comments: If True, emit COMMENT tokens. Otherwise skip them.
        """
        while True:
            self._skip_whitespace()

            ch = self._current()
            start_line = self.line
            start_col = self.column

            if ch is None:
                if self.insert_semi:
                    self.insert_semi = False
                    yield Token(TokenType.SEMICOLON, "\n", start_line, start_col)
                yield Token(TokenType.EOF, '', start_line, start_col)
                break

            if ch == '\n':
                self._advance()
                if self.insert_semi:
                    self.insert_semi = False
                    yield Token(TokenType.SEMICOLON, "\n", start_line, start_col)
                continue

            # Comments
            if ch == '/' and self._peek() in ('/', '*'):
                if self.insert_semi and self._comment_ends_line():
                    self.insert_semi = False
                    yield Token(TokenType.SEMICOLON, "\n", start_line, start_col)
                if self._peek() == '/':
                    text = self._read_line_comment()
                else:
                    text = self._read_block_comment(start_line, start_col)
                if include_comments:
                    yield Token(TokenType.COMMENT, text, start_line, start_col)
                continue

            self.insert_semi = False

            if self._is_ident_start(ch):
                value = self._read_identifier()
                if value in KEYWORDS:
                    self.insert_semi = value in _SEMI_KEYWORDS
                    yield Token(TokenType.KEYWORD, value, start_line, start_col)
                else:
                    self.insert_semi = True
                    yield Token(TokenType.IDENT, value, start_line, start_col)
                continue

            if ch.isdigit() or (ch == '.' and (self._peek() or '').isdigit()):
                start = self.pos
                token_type = self._read_number()
                self.insert_semi = True
                yield Token(token_type, self.source[start:self.pos], start_line, start_col)
                continue

            if ch == '"' or ch == "'":
                value = self._read_quoted(ch, start_line, start_col)
                self.insert_semi = True
                token_type = TokenType.STRING if ch == '"' else TokenType.CHAR
                yield Token(token_type, value, start_line, start_col)
                continue

            if ch == '`':
                value = self._read_raw_string(start_line, start_col)
                self.insert_semi = True
                yield Token(TokenType.STRING, value, start_line, start_col)
                continue

            if ch == ';':
                self._advance()
                yield Token(TokenType.SEMICOLON, ';', start_line, start_col)
                continue

            op = self._read_operator(start_line, start_col)
            self.insert_semi = op in _SEMI_OPERATORS
            yield Token(TokenType.OPERATOR, op, start_line, start_col)

    def tokenize_all(self, include_comments: bool = True) -> List[Token]:
        """Convenience method to get all tokens as a list."""
        return list(self.tokenize(include_comments))


def read_source(filepath: str) -> str:
    """
    Read a UTF-8 source file, dropping a leading BOM.

    Raises:
        LexerError: The file is not valid UTF-8.
    """
    with open(filepath, "rb") as f:
        data = f.read()
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8):]
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        line = data.count(b"\n", 0, e.start) + 1
        column = e.start - data.rfind(b"\n", 0, e.start)
        raise LexerError("illegal UTF-8 encoding", line, column, filepath) from None


def tokenize_file(filepath: str, **kwargs) -> List[Token]:
    """Tokenize a file and return all tokens."""
    lexer = Lexer(read_source(filepath), filename=filepath)
    return lexer.tokenize_all(**kwargs)
