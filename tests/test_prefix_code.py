"""
Tests for prefix_code/code.py

Covers construction, expand_at / reduce_at with their label bookkeeping,
queries, invariant checks and value semantics.
"""

import copy
import random

import pytest

from prefix_code import (
    EMPTY_WORD,
    NOT_FOUND,
    AlphabetError,
    CodeStructureError,
    Outcome,
    PrefixCode,
    as_prefix_code,
)

SCENARIO_ONE = "[0 0], [1000 1], [10010 2], [10011 3], [101 4], [11 5]"


@pytest.fixture
def expanded_1001() -> PrefixCode:
    code = PrefixCode()
    code.expand_at("1001")
    return code


class TestConstruction:
    def test_trivial_code(self):
        code = PrefixCode()
        assert str(code) == f"[{EMPTY_WORD} 0]"
        assert code.is_trivial()
        assert code.size() == 1
        assert code.depth() == 0

    def test_pre_expanded(self):
        assert str(PrefixCode(expanded=True)) == "[0 0], [1 1]"

    def test_from_symbols_keeps_order(self):
        code = PrefixCode.from_symbols("10", expanded=True)
        assert str(code) == "[1 0], [0 1]"

    def test_from_string_sorts(self):
        code = PrefixCode.from_string("ba", expanded=True)
        assert str(code) == "[a 0], [b 1]"

    def test_invalid_alphabets(self):
        with pytest.raises(AlphabetError, match="Empty"):
            PrefixCode("")
        with pytest.raises(AlphabetError, match="Forbidden"):
            PrefixCode("0" + EMPTY_WORD)
        with pytest.raises(AlphabetError, match="Duplicate"):
            PrefixCode.from_symbols("00")


class TestExpandAt:
    def test_deeper_than_code(self, expanded_1001):
        assert str(expanded_1001) == SCENARIO_ONE

    def test_unicode_alphabet(self):
        code = PrefixCode("日本語")
        assert code.expand_at("本") is Outcome.CHANGED
        assert code.size() == 5
        assert code.codewords() == ["日", "本日", "本本", "本語", "語"]

    def test_shallower_than_code_is_noop(self, expanded_1001):
        assert expanded_1001.expand_at("1") is Outcome.NOOP
        assert str(expanded_1001) == SCENARIO_ONE

    def test_expanding_twice_is_noop(self, expanded_1001):
        assert expanded_1001.expand_at("1001") is Outcome.NOOP
        assert str(expanded_1001) == SCENARIO_ONE

    def test_expand_at_codeword_adds_caret(self):
        code = PrefixCode(expanded=True)
        assert code.expand_at("0") is Outcome.CHANGED
        assert str(code) == "[00 0], [01 1], [1 2]"

    def test_root_of_trivial_code(self):
        code = PrefixCode()
        assert code.expand_at("") is Outcome.CHANGED
        assert str(code) == "[0 0], [1 1]"
        assert code.expand_at("") is Outcome.NOOP

    def test_sentinel_as_root(self):
        code = PrefixCode()
        assert code.expand_at(EMPTY_WORD) is Outcome.CHANGED
        assert str(code) == "[0 0], [1 1]"

    def test_new_codeword_count(self):
        code = PrefixCode("abc", expanded=True)
        before = code.size()
        code.expand_at("abca")
        # m = 3 steps below "a", k = 3
        assert code.size() == before - 1 + 3 * 2 + 3

    def test_labels_shift_after_expansion(self):
        code = PrefixCode(expanded=True)
        code.swap_perm_at_keys("0", "1")
        code.expand_at("00")
        assert str(code) == "[000 1], [001 2], [01 3], [1 0]"

    def test_invalid_words(self, expanded_1001):
        assert expanded_1001.expand_at("102") is Outcome.INVALID
        assert expanded_1001.expand_at(5) is Outcome.INVALID
        assert expanded_1001.expand_at("1" + EMPTY_WORD) is Outcome.INVALID
        assert str(expanded_1001) == SCENARIO_ONE

    def test_outcome_truthiness(self):
        assert Outcome.CHANGED
        assert not Outcome.NOOP
        assert not Outcome.INVALID


class TestReduceAt:
    def test_shallower_than_code(self, expanded_1001):
        assert expanded_1001.reduce_at("10") is Outcome.CHANGED
        assert str(expanded_1001) == "[0 0], [10 1], [11 2]"

    def test_deeper_than_code_is_noop(self, expanded_1001):
        assert expanded_1001.reduce_at("11101") is Outcome.NOOP
        assert str(expanded_1001) == SCENARIO_ONE

    def test_codeword_is_noop(self, expanded_1001):
        assert expanded_1001.reduce_at("101") is Outcome.NOOP
        assert str(expanded_1001) == SCENARIO_ONE

    def test_root_resets(self, expanded_1001):
        assert expanded_1001.reduce_at("") is Outcome.CHANGED
        assert expanded_1001.is_trivial()
        assert expanded_1001.reduce_at(EMPTY_WORD) is Outcome.NOOP

    def test_trivial_code_is_untouched(self):
        code = PrefixCode()
        assert code.reduce_at("0") is Outcome.NOOP
        assert code.is_trivial()

    def test_invalid_word(self, expanded_1001):
        assert expanded_1001.reduce_at("12") is Outcome.INVALID
        assert str(expanded_1001) == SCENARIO_ONE

    def test_permuted_labels_stay_a_bijection(self, expanded_1001):
        expanded_1001.swap_perm_at_keys("10010", "11")
        assert expanded_1001.reduce_at("1001") is Outcome.CHANGED
        assert str(expanded_1001) == "[0 0], [1000 1], [1001 3], [101 4], [11 2]"
        expanded_1001.check()

    def test_expand_then_reduce_restores(self, expanded_1001):
        expanded_1001.swap_perm_at_keys("0", "10011")
        for word in ["0", "011", "1000", "11", "111010"]:
            code = expanded_1001.copy()
            prefix = code.get_prefix_of(word)
            assert code.expand_at(word) is Outcome.CHANGED
            assert code.reduce_at(prefix) is Outcome.CHANGED
            assert code == expanded_1001, f"expand/reduce at {word!r} gave {code}"


class TestQueries:
    def test_get_prefix_of(self, expanded_1001):
        assert expanded_1001.get_prefix_of("10011101") == "10011"
        assert expanded_1001.get_prefix_of("0") == "0"
        assert expanded_1001.get_prefix_of("1") is None
        assert PrefixCode().get_prefix_of("0110") == EMPTY_WORD

    def test_label_lookups(self, expanded_1001):
        assert expanded_1001.label_at_leaf("101") == 4
        assert expanded_1001.label_at_leaf("1") == NOT_FOUND
        assert expanded_1001.leaf_at_label(5) == "11"
        assert expanded_1001.leaf_at_label(6) is None
        assert expanded_1001.leaf_at_label(-1) is None
        assert expanded_1001.leaf_at_label(True) is None
        assert expanded_1001.leaf_at_label(False) is None

    def test_codewords_and_size(self, expanded_1001):
        assert expanded_1001.codewords() == ["0", "1000", "10010", "10011", "101", "11"]
        assert len(expanded_1001) == expanded_1001.size() == 6
        assert "101" in expanded_1001
        assert list(expanded_1001) == expanded_1001.codewords()
        assert expanded_1001.depth() == 5

    def test_code_returns_a_copy(self, expanded_1001):
        mapping = expanded_1001.code()
        mapping["0"] = 99
        assert expanded_1001.label_at_leaf("0") == 0


class TestInvariants:
    def test_random_walk_keeps_invariants(self):
        rng = random.Random(7)
        code = PrefixCode("abc")
        for _ in range(300):
            word = "".join(rng.choice("abc") for _ in range(rng.randint(0, 5)))
            if rng.random() < 0.6:
                code.expand_at(word)
            else:
                code.reduce_at(word)
            if rng.random() < 0.2 and code.size() > 1:
                a, b = rng.sample(code.codewords(), 2)
                code.swap_perm_at_keys(a, b)
            assert code.is_prefix_free()
            assert code.is_complete()
            code.check()

    def test_set_code(self):
        code = as_prefix_code({"11": 2, "0": 1, "10": 0})
        assert str(code) == "[0 1], [10 0], [11 2]"

    def test_set_code_rejects_prefixes(self):
        with pytest.raises(CodeStructureError, match="prefix of another"):
            as_prefix_code({"0": 0, "1": 1, "10": 2})

    def test_set_code_rejects_incomplete(self):
        with pytest.raises(CodeStructureError, match="missing the child '11'"):
            as_prefix_code({"0": 0, "10": 1})

    def test_set_code_rejects_bad_labels(self):
        with pytest.raises(CodeStructureError, match="bijection"):
            as_prefix_code({"0": 0, "1": 5})

    def test_set_code_rejects_foreign_symbols(self):
        code = PrefixCode()
        with pytest.raises(CodeStructureError, match="outside the alphabet"):
            code.set_code({"0": 0, "2": 1})
        assert code.is_trivial()

    def test_set_alphabet(self):
        code = PrefixCode(expanded=True)
        code.set_alphabet(("1", "0"))
        assert str(code) == "[1 1], [0 0]"
        with pytest.raises(AlphabetError, match="does not fit"):
            code.set_alphabet("ab")
        with pytest.raises(AlphabetError, match="does not fit"):
            code.set_alphabet("012")
        assert str(code.alphabet) == "10"


class TestValueSemantics:
    def test_copy_is_independent(self, expanded_1001):
        for clone in (expanded_1001.copy(), copy.copy(expanded_1001), copy.deepcopy(expanded_1001)):
            assert clone == expanded_1001
            clone.expand_at("0")
            clone.swap_perm_at_keys("11", "101")
            assert str(expanded_1001) == SCENARIO_ONE

    def test_equality(self, expanded_1001):
        assert PrefixCode() == PrefixCode()
        assert PrefixCode() != PrefixCode("ab")
        other = expanded_1001.copy()
        other.swap_perm_at_keys("0", "11")
        assert other != expanded_1001
        assert other.same_shape(expanded_1001)

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(PrefixCode())

    def test_repr(self):
        assert repr(PrefixCode(expanded=True)) == (
            "PrefixCode(alphabet='01', code='[0 0], [1 1]')"
        )


class TestLoadDFS:
    def test_load(self):
        code = PrefixCode()
        assert code.load_dfs("10100") is Outcome.CHANGED
        assert str(code) == "[0 0], [10 1], [11 2]"
        assert code.load_dfs("10100") is Outcome.NOOP

    def test_malformed_is_rejected_without_mutation(self, expanded_1001):
        assert expanded_1001.load_dfs("1") is Outcome.INVALID
        assert expanded_1001.load_dfs("10120") is Outcome.INVALID
        assert str(expanded_1001) == SCENARIO_ONE
