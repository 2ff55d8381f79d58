"""
Go Declaration Parser

Converts a token stream from the lexer into a declaration-level syntax tree.
Handles the package clause, imports, top-level declarations, function
signatures, and attachment of doc comments to the declarations they precede.

Function bodies and the bodies of const/var/type declarations are skipped by
bracket balancing; only the shape the linter needs is kept.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from godoclint.parser.lexer import Lexer, Token, TokenType, read_source

logger = logging.getLogger(__name__)


OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = frozenset(OPENERS.values())

# Tokens that can begin a type in a result position.
TYPE_KEYWORDS = frozenset({"func", "map", "chan", "struct", "interface"})
TYPE_OPERATORS = frozenset({"*", "[", "<-", "("})


# ============================================================================
# SYNTAX TREE
# ============================================================================

@dataclass
class Comment:
    """A single // line comment or /* block */ comment, markers included."""
    text: str
    line: int
    column: int

    @property
    def is_block(self) -> bool:
        return self.text.startswith("/*")

    @property
    def end_line(self) -> int:
        return self.line + self.text.count("\n")

    @property
    def physical_lines(self) -> int:
        return self.text.count("\n") + 1


@dataclass
class CommentGroup:
    """A run of comments with no blank line between them."""
    comments: List[Comment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.comments)

    def __iter__(self):
        return iter(self.comments)

    @property
    def first(self) -> Comment:
        return self.comments[0]

    @property
    def end_line(self) -> int:
        return self.comments[-1].end_line

    def line_count(self) -> int:
        """Number of physical source lines covered by the comments."""
        return sum(c.physical_lines for c in self.comments)


@dataclass
class Ident:
    """An identifier with its position."""
    name: str
    line: int = 0
    column: int = 0


@dataclass
class TypeExpr:
    """A type expression, kept as the tokens that spell it."""
    tokens: List[Token] = field(default_factory=list)

    @property
    def ident(self) -> Optional[str]:
        """The type name when the type is a bare identifier, else None."""
        if len(self.tokens) == 1 and self.tokens[0].type == TokenType.IDENT:
            return self.tokens[0].value
        return None

    @property
    def text(self) -> str:
        parts: List[str] = []
        prev: Optional[Token] = None
        for tok in self.tokens:
            if prev is not None:
                word = tok.type in (TokenType.IDENT, TokenType.KEYWORD)
                if prev.is_op(","):
                    parts.append(" ")
                elif word and (prev.type in (TokenType.IDENT, TokenType.KEYWORD) or prev.is_op(")")):
                    parts.append(" ")
            parts.append(tok.value)
            prev = tok
        return "".join(parts)


@dataclass
class Field:
    """One entry of a parameter, result or receiver list: zero or more names and a type."""
    names: List[Ident] = field(default_factory=list)
    type: TypeExpr = field(default_factory=TypeExpr)


@dataclass
class FuncDecl:
    """A top-level function or method declaration."""
    name: Ident
    params: List[Field] = field(default_factory=list)
    results: List[Field] = field(default_factory=list)
    recv: Optional[List[Field]] = None
    doc: Optional[CommentGroup] = None
    has_body: bool = False
    line: int = 0
    column: int = 0

    @property
    def is_method(self) -> bool:
        return self.recv is not None

    def __repr__(self):
        return f"FuncDecl({self.name.name}, L{self.line})"


@dataclass
class GenDecl:
    """A top-level import, const, var or type declaration (contents skipped)."""
    keyword: str
    doc: Optional[CommentGroup] = None
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"GenDecl({self.keyword}, L{self.line})"


Decl = Union[FuncDecl, GenDecl]


@dataclass
class File:
    """A parsed Go source file."""
    filename: str
    package_name: Ident
    doc: Optional[CommentGroup] = None
    decls: List[Decl] = field(default_factory=list)

    def __repr__(self):
        return f"File({self.filename}, package {self.package_name.name}, {len(self.decls)} decls)"

    def funcs(self) -> List[FuncDecl]:
        """Top-level function declarations in source order."""
        return [d for d in self.decls if isinstance(d, FuncDecl)]


@dataclass
class Package:
    """All files of one directory that share a package clause name."""
    name: str
    files: Dict[str, File] = field(default_factory=dict)

    def __repr__(self):
        return f"Package({self.name}, {len(self.files)} files)"


class ParseError(Exception):
    """Error during parsing."""
    def __init__(self, message: str, token: Token = None, filename: str = "<unknown>"):
        self.token = token
        self.filename = filename
        self.message = message
        self.line = token.line if token else 0
        self.column = token.column if token else 0
        if token:
            super().__init__(f"{filename}:{token.line}:{token.column}: {message}")
        else:
            super().__init__(f"{filename}: {message}")


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "EOF"
    if token.type == TokenType.SEMICOLON and token.value == "\n":
        return "newline"
    return repr(token.value)


# ============================================================================
# PARSER
# ============================================================================

class Parser:
    """
    Parser for Go source files.

    Comment handling mirrors the Go toolchain: comments on the line of the
    previous token form a trailing comment, and a comment group that ends on
    the line right before the next token is that token's lead comment. The
    lead comment of `package` is the package doc; the lead comment of a
    top-level `func` is the function doc.

    Usage:
        parser = Parser(tokens, "main.go")
        file = parser.parse()
    """

    def __init__(self, tokens: List[Token], filename: str = "<unknown>"):
        self.tokens = tokens
        self.filename = filename
        self.pos = 0
        self.length = len(tokens)
        self.tok: Optional[Token] = None
        self.lead_comment: Optional[CommentGroup] = None

    def _error(self, message: str, token: Token = None) -> ParseError:
        return ParseError(message, token or self.tok, self.filename)

    # ------------------------------------------------------------------
    # Token stream
    # ------------------------------------------------------------------

    def _raw_next(self) -> None:
        """Move to the next token, comments included. EOF repeats forever."""
        if self.pos < self.length:
            self.tok = self.tokens[self.pos]
            self.pos += 1
        elif self.tok is None or self.tok.type != TokenType.EOF:
            last = self.tokens[-1] if self.tokens else None
            self.tok = Token(TokenType.EOF, '', last.line if last else 1, last.column if last else 1)

    def _consume_comment(self) -> Tuple[Comment, int]:
        tok = self.tok
        comment = Comment(text=tok.value, line=tok.line, column=tok.column)
        self._raw_next()
        return comment, tok.end_line

    def _consume_comment_group(self, n: int) -> Tuple[CommentGroup, int]:
        """Consume comments that start at most n lines after the previous one ends."""
        group = CommentGroup()
        end_line = self.tok.line
        while self.tok.type == TokenType.COMMENT and self.tok.line <= end_line + n:
            comment, end_line = self._consume_comment()
            group.comments.append(comment)
        return group, end_line

    def _next(self) -> None:
        """Advance to the next non-comment token, recording the lead comment."""
        self.lead_comment = None
        prev = self.tok
        self._raw_next()

        if self.tok.type != TokenType.COMMENT:
            return

        if prev is not None and self.tok.line == prev.line:
            # Trailing comment on the line of the previous token; never a lead comment
            self._consume_comment_group(0)

        comment = None
        end_line = -1
        while self.tok.type == TokenType.COMMENT:
            comment, end_line = self._consume_comment_group(1)

        if end_line + 1 == self.tok.line:
            self.lead_comment = comment

    def _expect(self, token_type: TokenType, what: str) -> Token:
        token = self.tok
        if token.type != token_type:
            raise self._error(f"expected {what}, found {_describe(token)}")
        self._next()
        return token

    def _expect_op(self, value: str) -> Token:
        token = self.tok
        if not token.is_op(value):
            raise self._error(f"expected '{value}', found {_describe(token)}")
        self._next()
        return token

    def _expect_semi(self) -> None:
        if self.tok.type != TokenType.SEMICOLON:
            raise self._error(f"expected ';', found {_describe(self.tok)}")
        self._next()

    def _collect_group(self, keep_brackets: bool = False) -> List[Token]:
        """
        Consume a bracketed group starting at the current opener.

        Returns the tokens between the brackets (or including them with
        keep_brackets). Raises ParseError on unbalanced or mismatched brackets.
        """
        open_tok = self.tok
        stack = [OPENERS[open_tok.value]]
        collected = [open_tok] if keep_brackets else []
        self._next()
        while True:
            tok = self.tok
            if tok.type == TokenType.EOF:
                raise self._error(f"unexpected EOF, expected '{stack[-1]}'", tok)
            if tok.type == TokenType.OPERATOR:
                if tok.value in OPENERS:
                    stack.append(OPENERS[tok.value])
                elif tok.value in CLOSERS:
                    if tok.value != stack[-1]:
                        raise self._error(f"unexpected '{tok.value}', expected '{stack[-1]}'", tok)
                    stack.pop()
                    if not stack:
                        if keep_brackets:
                            collected.append(tok)
                        self._next()
                        return collected
            collected.append(tok)
            self._next()

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def parse(self) -> File:
        """Parse the token stream into a File."""
        self._next()

        doc = self.lead_comment
        if not self.tok.is_keyword("package"):
            raise self._error(f"expected 'package', found {_describe(self.tok)}")
        self._next()
        name_tok = self._expect(TokenType.IDENT, "package name")
        if name_tok.value == "_":
            raise self._error("invalid package name _", name_tok)
        self._expect_semi()

        result = File(
            filename=self.filename,
            package_name=Ident(name_tok.value, name_tok.line, name_tok.column),
            doc=doc,
        )

        while self.tok.is_keyword("import"):
            result.decls.append(self._parse_gen_decl())

        while self.tok.type != TokenType.EOF:
            tok = self.tok
            if tok.is_keyword("func"):
                result.decls.append(self._parse_func_decl())
            elif tok.type == TokenType.KEYWORD and tok.value in ("const", "var", "type"):
                result.decls.append(self._parse_gen_decl())
            elif tok.is_keyword("import"):
                raise self._error("imports must appear before other declarations")
            else:
                raise self._error(f"non-declaration statement outside function body, found {_describe(tok)}")

        return result

    def _parse_gen_decl(self) -> GenDecl:
        doc = self.lead_comment
        kw = self.tok
        self._next()

        if self.tok.is_op("("):
            self._collect_group()
        else:
            self._skip_spec()

        self._expect_semi()
        return GenDecl(keyword=kw.value, doc=doc, line=kw.line, column=kw.column)

    def _skip_spec(self) -> None:
        """Skip a single ungrouped spec up to the terminating semicolon."""
        if self.tok.type in (TokenType.SEMICOLON, TokenType.EOF):
            raise self._error(f"expected declaration, found {_describe(self.tok)}")
        while self.tok.type != TokenType.SEMICOLON:
            tok = self.tok
            if tok.type == TokenType.EOF:
                raise self._error("unexpected EOF in declaration")
            if tok.type == TokenType.OPERATOR and tok.value in OPENERS:
                self._collect_group()
                continue
            if tok.type == TokenType.OPERATOR and tok.value in CLOSERS:
                raise self._error(f"unexpected '{tok.value}'")
            self._next()

    def _parse_func_decl(self) -> FuncDecl:
        doc = self.lead_comment
        func_tok = self.tok
        self._next()

        recv = None
        if self.tok.is_op("("):
            recv = self._parse_field_list(self._collect_group())

        name_tok = self._expect(TokenType.IDENT, "function name")

        if self.tok.is_op("["):
            # Type parameters
            self._collect_group()

        if not self.tok.is_op("("):
            raise self._error(f"expected '(', found {_describe(self.tok)}")
        params = self._parse_field_list(self._collect_group())
        results = self._parse_result()

        has_body = False
        if self.tok.is_op("{"):
            self._collect_group()
            has_body = True

        self._expect_semi()

        return FuncDecl(
            name=Ident(name_tok.value, name_tok.line, name_tok.column),
            params=params,
            results=results,
            recv=recv,
            doc=doc,
            has_body=has_body,
            line=func_tok.line,
            column=func_tok.column,
        )

    # ------------------------------------------------------------------
    # Signatures
    # ------------------------------------------------------------------

    def _starts_type(self, tok: Token) -> bool:
        if tok.type == TokenType.IDENT:
            return True
        if tok.type == TokenType.KEYWORD:
            return tok.value in TYPE_KEYWORDS
        return tok.type == TokenType.OPERATOR and tok.value in TYPE_OPERATORS

    def _parse_result(self) -> List[Field]:
        if self.tok.is_op("("):
            return self._parse_field_list(self._collect_group())
        if self._starts_type(self.tok):
            return [Field(names=[], type=TypeExpr(self._collect_type()))]
        return []

    def _collect_type(self) -> List[Token]:
        """Consume one type expression and return its tokens."""
        tok = self.tok
        toks = [tok]

        if tok.type == TokenType.IDENT:
            self._next()
            if self.tok.is_op("."):
                toks.append(self.tok)
                self._next()
                toks.append(self._expect(TokenType.IDENT, "type name"))
            if self.tok.is_op("["):
                toks.extend(self._collect_group(keep_brackets=True))
            return toks

        if tok.is_op("*"):
            self._next()
            return toks + self._collect_type()

        if tok.is_op("["):
            return self._collect_group(keep_brackets=True) + self._collect_type()

        if tok.is_op("("):
            return self._collect_group(keep_brackets=True)

        if tok.is_op("<-"):
            self._next()
            toks.append(self.tok)
            if not self.tok.is_keyword("chan"):
                raise self._error(f"expected 'chan', found {_describe(self.tok)}")
            self._next()
            return toks + self._collect_type()

        if tok.is_keyword("chan"):
            self._next()
            if self.tok.is_op("<-"):
                toks.append(self.tok)
                self._next()
            return toks + self._collect_type()

        if tok.is_keyword("map"):
            self._next()
            if not self.tok.is_op("["):
                raise self._error(f"expected '[', found {_describe(self.tok)}")
            toks.extend(self._collect_group(keep_brackets=True))
            return toks + self._collect_type()

        if tok.is_keyword("func"):
            self._next()
            if not self.tok.is_op("("):
                raise self._error(f"expected '(', found {_describe(self.tok)}")
            toks.extend(self._collect_group(keep_brackets=True))
            if self.tok.is_op("("):
                toks.extend(self._collect_group(keep_brackets=True))
            elif self._starts_type(self.tok):
                toks.extend(self._collect_type())
            return toks

        if tok.type == TokenType.KEYWORD and tok.value in ("struct", "interface"):
            self._next()
            if not self.tok.is_op("{"):
                raise self._error(f"expected '{{', found {_describe(self.tok)}")
            toks.extend(self._collect_group(keep_brackets=True))
            return toks

        raise self._error(f"expected type, found {_describe(tok)}")

    def _split_fields(self, tokens: List[Token]) -> List[List[Token]]:
        """Split a parenthesized list at top-level commas."""
        segments: List[List[Token]] = [[]]
        depth = 0
        for tok in tokens:
            if tok.type == TokenType.SEMICOLON and depth == 0:
                raise self._error("missing ',' before newline in parameter list", tok)
            if tok.type == TokenType.OPERATOR:
                if tok.value in OPENERS:
                    depth += 1
                elif tok.value in CLOSERS:
                    depth -= 1
                elif tok.value == "," and depth == 0:
                    segments.append([])
                    continue
            segments[-1].append(tok)

        if len(segments) > 1 and not segments[-1]:
            segments.pop()  # trailing comma
        for seg in segments:
            if not seg:
                raise self._error("expected parameter, found ','")
        return segments

    @staticmethod
    def _is_named(seg: List[Token]) -> bool:
        """Whether a list entry has the form `name Type`."""
        if seg[0].type != TokenType.IDENT or len(seg) == 1:
            return False
        second = seg[1]
        if second.is_op("."):
            return False
        if second.is_op("["):
            # List[int] is an instantiated type; buf [4]byte is a named array
            depth = 0
            for i, tok in enumerate(seg[1:], start=1):
                if tok.is_op("[") or tok.is_op("(") or tok.is_op("{"):
                    depth += 1
                elif tok.type == TokenType.OPERATOR and tok.value in CLOSERS:
                    depth -= 1
                    if depth == 0:
                        return i != len(seg) - 1
        return True

    def _parse_field_list(self, tokens: List[Token]) -> List[Field]:
        """
        Build fields from the contents of a parameter/result/receiver list.

        Either every entry is named, in which case bare identifiers are
        grouped onto the next named entry's type (`a, b int`), or none is.
        """
        if not tokens:
            return []

        segments = self._split_fields(tokens)

        if not any(self._is_named(seg) for seg in segments):
            return [Field(names=[], type=TypeExpr(seg)) for seg in segments]

        fields: List[Field] = []
        pending: List[Ident] = []
        for seg in segments:
            if len(seg) == 1 and seg[0].type == TokenType.IDENT:
                pending.append(Ident(seg[0].value, seg[0].line, seg[0].column))
            elif self._is_named(seg):
                pending.append(Ident(seg[0].value, seg[0].line, seg[0].column))
                fields.append(Field(names=pending, type=TypeExpr(seg[1:])))
                pending = []
            else:
                raise self._error("mixed named and unnamed parameters", seg[0])
        if pending:
            raise self._error("mixed named and unnamed parameters", tokens[-1])
        return fields


# ============================================================================
# ENTRY POINTS
# ============================================================================

def parse_source(source: str, filename: str = "<unknown>") -> File:
    """Parse source code string into a File."""
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize_all()
    parser = Parser(tokens, filename)
    return parser.parse()


def parse_file(filepath: str) -> File:
    """Parse a file into a File."""
    return parse_source(read_source(filepath), filepath)


def parse_dir(path: str, include_tests: bool = True) -> Dict[str, Package]:
    """
    Parse every .go file directly inside a directory.

    Files are grouped into packages by their package clause, so a directory
    holding `foo` and `foo_test` files yields two packages. File names are
    the directory path joined with the base name.

    Raises:
        OSError: The directory or a file cannot be read.
        LexerError, ParseError: A file is not valid Go.
    """
    packages: Dict[str, Package] = {}

    for entry in sorted(os.listdir(path)):
        if not entry.endswith(".go"):
            continue
        if not include_tests and entry.endswith("_test.go"):
            continue
        filename = os.path.join(path, entry)
        if not os.path.isfile(filename):
            continue

        logger.debug(f"Parsing {filename}")
        parsed = parse_file(filename)
        name = parsed.package_name.name
        pkg = packages.setdefault(name, Package(name=name))
        pkg.files[filename] = parsed

    logger.debug(f"Found {len(packages)} package(s) in {path}: {sorted(packages)}")
    return packages
