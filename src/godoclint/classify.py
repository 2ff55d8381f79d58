"""
Declaration classification.

A predicate is a function whose signature returns exactly one named bool:

    func (s *Set) Contains(x int) (found bool)

The check is structural only; the body is never inspected.
"""

from godoclint.parser import FuncDecl

BOOL_TYPE = "bool"


def is_predicate(decl: FuncDecl) -> bool:
    """Check if a function declaration returns exactly one named bool result."""
    if len(decl.results) != 1:
        return False
    result = decl.results[0]
    if len(result.names) != 1:
        return False
    return result.type.ident == BOOL_TYPE
