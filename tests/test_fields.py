# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for key/value field pairing."""

from hypothesis import HealthCheck, given, settings, strategies as st

from logfacade.fields import pair_fields, resolve_clashes, safe_str

values = st.one_of(st.none(), st.integers(), st.text(), st.booleans(), st.floats(allow_nan=False))


class TestPairFields:
    """Tests for pair_fields."""

    def test_empty(self):
        """Test that no arguments produce no fields."""
        assert pair_fields(()) == {}

    def test_even_length(self):
        """Test pairing alternating keys and values."""
        assert pair_fields(("method", "GET", "status", 200)) == {"method": "GET", "status": 200}

    def test_trailing_key_gets_none(self):
        """Test that a lone trailing key maps to None."""
        fields = pair_fields(("method", "GET", "path"))

        assert fields == {"method": "GET", "path": None}
        assert list(fields) == ["method", "path"]

    def test_single_key(self):
        """Test a list holding only a key."""
        assert pair_fields(("verbose",)) == {"verbose": None}

    def test_keys_are_stringified(self):
        """Test that non-string keys are converted with str()."""
        assert pair_fields((1, "one", None, "none", 2.5, "x")) == {"1": "one", "None": "none", "2.5": "x"}

    def test_values_are_not_stringified(self):
        """Test that values keep their original objects."""
        payload = {"nested": [1, 2]}
        fields = pair_fields(("payload", payload))

        assert fields["payload"] is payload

    def test_duplicate_keys_last_wins_first_position_kept(self):
        """Test dict semantics for repeated keys."""
        fields = pair_fields(("a", 1, "b", 2, "a", 3))

        assert fields == {"a": 3, "b": 2}
        assert list(fields) == ["a", "b"]

    def test_duplicate_trailing_key_resets_value(self):
        """Test that a repeated trailing key resets an earlier value to None."""
        assert pair_fields(("a", 1, "a")) == {"a": None}

    def test_unprintable_key(self):
        """Test that a key whose __str__ raises becomes a marker."""
        class Unprintable:
            def __str__(self):
                raise RuntimeError("boom")

        assert pair_fields((Unprintable(), 1)) == {"%!v(PANIC=RuntimeError)": 1}


class TestSafeStr:
    """Tests for safe_str."""

    def test_plain_value(self):
        """Test ordinary conversion."""
        assert safe_str(3) == "3"

    def test_alternate_converter(self):
        """Test converting with repr."""
        assert safe_str("a", repr) == "'a'"


@given(st.lists(st.tuples(st.text(), values), unique_by=lambda kv: kv[0]))
@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_even_length_yields_n_pairs_in_order(pairs):
    """Test that 2n arguments with distinct keys produce n pairs in order, values unmodified."""
    flat = tuple(item for pair in pairs for item in pair)

    fields = pair_fields(flat)

    assert len(fields) == len(pairs)
    assert list(fields.items()) == pairs


@given(st.lists(st.tuples(st.text(), values), unique_by=lambda kv: kv[0]), st.text())
@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_odd_length_yields_trailing_none(pairs, trailing_key):
    """Test that 2n+1 arguments produce the n pairs plus the trailing key mapped to None."""
    flat = tuple(item for pair in pairs for item in pair) + (trailing_key,)

    fields = pair_fields(flat)

    assert fields[trailing_key] is None
    assert list(fields)[-1] == trailing_key or trailing_key in dict(pairs)


class TestResolveClashes:
    """Tests for resolve_clashes."""

    def test_no_clash_returns_same_dict(self):
        """Test that fields without reserved keys pass through unchanged."""
        fields = {"method": "GET"}

        assert resolve_clashes(fields, ("level", "msg")) is fields

    def test_clashing_key_is_prefixed(self):
        """Test that reserved keys are moved under fields."""
        fields = {"level": "high", "user": "bob"}

        assert resolve_clashes(fields, ("level", "msg")) == {"fields.level": "high", "user": "bob"}

    def test_order_preserved(self):
        """Test that renamed keys keep their position."""
        fields = {"a": 1, "msg": 2, "b": 3}

        assert list(resolve_clashes(fields, ("msg",))) == ["a", "fields.msg", "b"]
