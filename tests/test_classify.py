"""
Tests for predicate classification.
"""

import pytest
from godoclint.classify import is_predicate

from conftest import first_func


class TestIsPredicate:
    """Test the predicate signature check."""

    @pytest.mark.parametrize("source", [
        "func F() (ok bool) { return }\n",
        "func (s *Set) Has(x int) (found bool) { return }\n",
        "func F[T any](x T) (ok bool) { return }\n",
        "func F() (\n\tok bool,\n) { return }\n",
        "func F() (ok bool)\n",
    ])
    def test_predicates(self, source):
        assert is_predicate(first_func(source))

    @pytest.mark.parametrize("source", [
        "func F() {}\n",
        "func F() bool { return true }\n",
        "func F() (bool) { return true }\n",
        "func F() (a, b bool) { return }\n",
        "func F() (ok bool, err error) { return }\n",
        "func F() (ok Bool) { return }\n",
        "func F() (ok *bool) { return }\n",
        "func F() (ok []bool) { return }\n",
        "func F(ok bool) {}\n",
    ])
    def test_not_predicates(self, source):
        assert not is_predicate(first_func(source))
