"""
Unit Tests for key-bound operations
"""

import pytest

from redis_template import DataType


@pytest.mark.unit
class TestBoundOperations:
    """Test wrappers that fix the key of a facade."""

    def test_bound_value(self, template):
        greeting = template.bound_value_ops("greeting")
        greeting.set("hello")

        assert greeting.get() == "hello"
        assert greeting.set_if_absent("other") is False
        assert greeting.get_and_set("bye") == "hello"

    def test_bound_list(self, string_template):
        queue = string_template.bound_list_ops("queue")
        queue.right_push_all("a", "b", "c")

        assert queue.left_pop() == "a"
        assert queue.range(0, -1) == ["b", "c"]
        assert queue.size() == 2

    def test_bound_set(self, string_template):
        tags = string_template.bound_set_ops("tags")
        tags.add("x", "y")
        string_template.ops_for_set().add("other", "y")

        assert tags.members() == {"x", "y"}
        assert tags.intersect("other") == {"y"}

    def test_bound_zset(self, string_template):
        board = string_template.bound_zset_ops("board")
        board.add("ada", 2)
        board.add("grace", 1)

        assert board.range(0, -1) == ["grace", "ada"]
        assert board.score("ada") == 2.0

    def test_bound_hash(self, template):
        cart = template.bound_hash_ops("cart:42")
        cart.put("apples", 3)
        cart.put_all({"pears": 1})

        assert cart.entries() == {"apples": 3, "pears": 1}
        assert cart.has_key("pears") is True

    def test_key_commands(self, template):
        value = template.bound_value_ops("k")
        value.set("v")

        assert value.type() is DataType.STRING
        assert value.expire(60) is True
        assert 0 < value.get_expire() <= 60
        assert value.persist() is True

    def test_rename_follows_key(self, template):
        value = template.bound_value_ops("old")
        value.set("v")

        value.rename("new")

        assert value.key == "new"
        assert value.get() == "v"
        assert template.has_key("old") is False

    def test_uses_session_connection(self, template, memory_factory):
        def session(ops):
            bound = ops.bound_value_ops("k")
            bound.set("v")
            return bound.get()

        assert template.execute_session(session) == "v"
        assert memory_factory.acquired == 1
