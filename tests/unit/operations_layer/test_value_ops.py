"""
Unit Tests for ValueOperations

Tests value commands through a template over the in-memory store.
"""

from datetime import timedelta

import pytest

from redis_template import InvalidDataAccessUsageError, StoreCommandError


@pytest.mark.unit
class TestValueOperations:
    """Test set/get style commands with pickled values."""

    def test_set_and_get_object(self, template):
        ops = template.ops_for_value()
        ops.set("user:1", {"name": "Ada", "langs": ["analytical engine"]})

        assert ops.get("user:1") == {"name": "Ada", "langs": ["analytical engine"]}

    def test_missing_key_reads_none(self, template):
        assert template.ops_for_value().get("missing") is None

    def test_falsy_values_survive(self, template):
        ops = template.ops_for_value()
        ops.set("zero", 0)
        ops.set("empty", "")

        assert ops.get("zero") == 0
        assert ops.get("empty") == ""

    def test_set_with_timeout(self, template):
        template.ops_for_value().set("token", "abc", timeout=timedelta(seconds=30))

        assert 0 < template.get_expire("token") <= 30

    def test_set_if_absent(self, template):
        ops = template.ops_for_value()

        assert ops.set_if_absent("k", 1) is True
        assert ops.set_if_absent("k", 2) is False
        assert ops.get("k") == 1

    def test_get_and_set(self, template):
        ops = template.ops_for_value()
        ops.set("k", "old")

        assert ops.get_and_set("k", "new") == "old"
        assert ops.get("k") == "new"

    def test_multi_get_keeps_positions(self, template):
        ops = template.ops_for_value()
        ops.multi_set({"a": 1, "c": 3})

        assert ops.multi_get(["a", "b", "c"]) == [1, None, 3]

    def test_multi_get_of_nothing(self, template, memory_factory):
        assert template.ops_for_value().multi_get([]) == []
        assert memory_factory.acquired == 0

    def test_multi_set_if_absent_is_all_or_nothing(self, template):
        ops = template.ops_for_value()
        ops.set("b", "existing")

        assert ops.multi_set_if_absent({"a": 1, "b": 2}) is False
        assert ops.get("a") is None

    def test_null_key_rejected(self, template):
        with pytest.raises(InvalidDataAccessUsageError):
            template.ops_for_value().set(None, 1)


@pytest.mark.unit
class TestTextValueOperations:
    """Test the numeric and text commands, which need text values."""

    def test_increment_by_int(self, string_template):
        ops = string_template.ops_for_value()

        assert ops.increment("hits") == 1
        assert ops.increment("hits", 10) == 11

    def test_increment_by_float(self, string_template):
        ops = string_template.ops_for_value()
        ops.set("price", "10")

        assert ops.increment("price", 0.5) == pytest.approx(10.5)
        assert ops.get("price") == "10.5"

    def test_increment_of_text_fails(self, string_template):
        ops = string_template.ops_for_value()
        ops.set("name", "ada")

        with pytest.raises(StoreCommandError):
            ops.increment("name")

    def test_append_and_size(self, string_template):
        ops = string_template.ops_for_value()
        ops.set("greeting", "hello")

        assert ops.append("greeting", " world") == 11
        assert ops.size("greeting") == 11

    def test_get_range(self, string_template):
        ops = string_template.ops_for_value()
        ops.set("greeting", "hello world")

        assert ops.get_range("greeting", 0, 4) == "hello"
        assert ops.get_range("greeting", -5, -1) == "world"

    def test_set_range(self, string_template):
        ops = string_template.ops_for_value()
        ops.set("greeting", "hello world")

        ops.set_range("greeting", "there", 6)

        assert ops.get("greeting") == "hello there"

    def test_wrong_type_rejected(self, string_template):
        string_template.ops_for_list().right_push("items", "a")

        with pytest.raises(StoreCommandError, match="WRONGTYPE"):
            string_template.ops_for_value().get("items")
