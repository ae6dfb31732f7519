"""Tests for label permutations: PrefixCode bookkeeping and prefix_code/permutation.py"""

import numpy as np
import pytest

from prefix_code import (
    Outcome,
    PrefixCode,
    compose,
    identity,
    inverse,
    is_permutation,
    perm_to_string,
)


@pytest.fixture
def code() -> PrefixCode:
    code = PrefixCode()
    code.expand_at("1001")
    return code


class TestCodeBookkeeping:
    def test_natural_permutation(self, code):
        assert code.permutation() == identity(6)

    def test_swap_perm_at_keys(self, code):
        assert code.swap_perm_at_keys("0", "11") is Outcome.CHANGED
        assert perm_to_string(code.permutation()) == (
            "[0 5], [1 1], [2 2], [3 3], [4 4], [5 0]"
        )
        assert code.leaf_at_label(0) == "11"
        assert code.label_at_leaf("0") == 5

    def test_swap_absent_codeword(self, code):
        assert code.swap_perm_at_keys("0", "1") is Outcome.INVALID
        assert code.permutation() == identity(6)

    def test_swap_with_itself(self, code):
        assert code.swap_perm_at_keys("101", "101") is Outcome.NOOP

    def test_apply_perm(self, code):
        code.swap_perm_at_keys("0", "11")
        outcome = code.apply_perm({0: 3, 1: 5, 2: 1, 3: 0, 4: 2, 5: 4})
        assert outcome is Outcome.CHANGED
        assert perm_to_string(code.permutation()) == (
            "[0 4], [1 5], [2 1], [3 0], [4 2], [5 3]"
        )
        assert code.leaf_at_label(3) == "11"
        code.check()

    def test_apply_perm_wrong_size(self, code):
        assert code.apply_perm({0: 1, 1: 0}) is Outcome.INVALID
        assert code.permutation() == identity(6)

    def test_apply_perm_not_bijective(self):
        code = PrefixCode(expanded=True)
        assert code.apply_perm({0: 0, 1: 0}) is Outcome.INVALID
        assert code.apply_perm({0: 1, 2: 0}) is Outcome.INVALID
        assert str(code) == "[0 0], [1 1]"

    def test_apply_perm_out_of_range_images(self):
        code = PrefixCode(expanded=True)
        assert code.apply_perm({0: 2**70, 1: 0}) is Outcome.INVALID
        assert code.apply_perm({0: 1, 2**70: 0}) is Outcome.INVALID
        assert code.apply_perm({0: -1, 1: 0}) is Outcome.INVALID
        assert str(code) == "[0 0], [1 1]"

    def test_apply_perm_accepts_numpy_integers(self):
        code = PrefixCode(expanded=True)
        assert code.apply_perm({np.int64(0): np.int64(1), 1: 0}) is Outcome.CHANGED
        assert str(code) == "[0 1], [1 0]"

    def test_structure_changes_keep_swapped_labels(self, code):
        code.swap_perm_at_keys("0", "11")
        code.expand_at("00")
        assert code.label_at_leaf("000") == 5
        assert code.label_at_leaf("11") == 0
        code.check()


class TestHelpers:
    cycle = {0: 1, 1: 2, 2: 0}

    def test_is_permutation(self):
        assert is_permutation({})
        assert is_permutation(self.cycle)
        assert is_permutation(self.cycle, size=3)
        assert not is_permutation(self.cycle, size=4)
        assert not is_permutation({0: 1, 1: 1})
        assert not is_permutation({1: 0, 2: 1})
        assert not is_permutation({0: "0"})
        assert not is_permutation({0: 2**70, 1: 0})

    def test_identity(self):
        assert identity(3) == {0: 0, 1: 1, 2: 2}
        assert identity(0) == {}

    def test_compose(self):
        assert compose(self.cycle, self.cycle) == {0: 2, 1: 0, 2: 1}
        assert compose(self.cycle, identity(3)) == self.cycle

    def test_inverse(self):
        assert inverse(self.cycle) == {0: 2, 1: 0, 2: 1}
        assert compose(self.cycle, inverse(self.cycle)) == identity(3)

    def test_errors(self):
        with pytest.raises(ValueError, match="sizes"):
            compose(self.cycle, identity(2))
        with pytest.raises(ValueError, match="Not a permutation"):
            inverse({0: 0, 1: 0})

    def test_perm_to_string_uses_index_order(self):
        assert perm_to_string({2: 0, 0: 2, 1: 1}) == "[0 2], [1 1], [2 0]"
        assert perm_to_string({}) == ""
