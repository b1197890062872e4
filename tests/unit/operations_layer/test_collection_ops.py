"""
Unit Tests for list, set, sorted set and hash operations
"""

import pytest


@pytest.mark.unit
class TestListOperations:
    """Test list commands."""

    def test_push_and_range(self, template):
        ops = template.ops_for_list()
        ops.right_push("queue", {"job": 1})
        ops.right_push("queue", {"job": 2})
        ops.left_push("queue", {"job": 0})

        assert ops.range("queue", 0, -1) == [{"job": 0}, {"job": 1}, {"job": 2}]
        assert ops.size("queue") == 3

    def test_push_all(self, string_template):
        ops = string_template.ops_for_list()

        assert ops.right_push_all("l", "a", "b") == 2
        assert ops.left_push_all("l", "x", "y") == 4
        assert ops.range("l", 0, -1) == ["y", "x", "a", "b"]

    def test_push_if_present(self, string_template):
        ops = string_template.ops_for_list()

        assert ops.left_push_if_present("l", "a") == 0
        assert string_template.has_key("l") is False

        ops.right_push("l", "a")
        assert ops.right_push_if_present("l", "b") == 2

    def test_missing_list_reads_empty(self, template):
        assert template.ops_for_list().range("missing", 0, -1) == []

    def test_trim_index_set(self, string_template):
        ops = string_template.ops_for_list()
        ops.right_push_all("l", "a", "b", "c", "d")

        ops.trim("l", 1, 2)
        ops.set("l", 0, "B")

        assert ops.range("l", 0, -1) == ["B", "c"]
        assert ops.index("l", -1) == "c"
        assert ops.index("l", 5) is None

    def test_remove(self, string_template):
        ops = string_template.ops_for_list()
        ops.right_push_all("l", "a", "b", "a", "a")

        assert ops.remove("l", 2, "a") == 2
        assert ops.range("l", 0, -1) == ["b", "a"]

    def test_pops(self, string_template):
        ops = string_template.ops_for_list()
        ops.right_push_all("l", "a", "b", "c")

        assert ops.left_pop("l") == "a"
        assert ops.right_pop("l") == "c"
        assert ops.right_pop_and_left_push("l", "other") == "b"
        assert string_template.has_key("l") is False
        assert ops.range("other", 0, -1) == ["b"]


@pytest.mark.unit
class TestSetOperations:
    """Test set commands."""

    def test_add_and_members(self, template):
        ops = template.ops_for_set()

        assert ops.add("tags", "a", "b", "a") == 2
        assert ops.members("tags") == {"a", "b"}
        assert ops.is_member("tags", "a") is True
        assert ops.size("tags") == 2

    def test_remove_and_pop(self, string_template):
        ops = string_template.ops_for_set()
        ops.add("s", "a", "b")

        assert ops.remove("s", "a", "missing") == 1
        assert ops.pop("s") == "b"
        assert ops.pop("s") is None

    def test_move(self, string_template):
        ops = string_template.ops_for_set()
        ops.add("src", "a")

        assert ops.move("src", "a", "dst") is True
        assert ops.members("dst") == {"a"}
        assert ops.move("src", "a", "dst") is False

    def test_random_member(self, string_template):
        ops = string_template.ops_for_set()
        ops.add("s", "only")

        assert ops.random_member("s") == "only"
        assert ops.random_member("missing") is None

    def test_set_algebra(self, string_template):
        ops = string_template.ops_for_set()
        ops.add("a", "1", "2", "3")
        ops.add("b", "2", "3", "4")
        ops.add("c", "3")

        assert ops.intersect("a", "b") == {"2", "3"}
        assert ops.intersect("a", ["b", "c"]) == {"3"}
        assert ops.union("a", "b") == {"1", "2", "3", "4"}
        assert ops.difference("a", ["b"]) == {"1"}

    def test_set_algebra_and_store(self, string_template):
        ops = string_template.ops_for_set()
        ops.add("a", "1", "2")
        ops.add("b", "2", "3")

        assert ops.intersect_and_store("a", "b", "i") == 1
        assert ops.union_and_store("a", "b", "u") == 3
        assert ops.difference_and_store("a", "b", "d") == 1
        assert ops.members("u") == {"1", "2", "3"}

    def test_missing_set_reads_empty(self, template):
        assert template.ops_for_set().members("missing") == set()


@pytest.mark.unit
class TestZSetOperations:
    """Test sorted set commands."""

    @pytest.fixture
    def board(self, string_template):
        ops = string_template.ops_for_zset()
        ops.add("board", "ada", 30)
        ops.add("board", "grace", 10)
        ops.add("board", "linus", 20)
        return ops

    def test_ranges_in_score_order(self, board):
        assert board.range("board", 0, -1) == ["grace", "linus", "ada"]
        assert board.reverse_range("board", 0, 0) == ["ada"]

    def test_ranges_with_scores(self, board):
        assert board.range_with_scores("board", 0, 1) == [("grace", 10.0), ("linus", 20.0)]
        assert board.reverse_range_with_scores("board", 0, 0) == [("ada", 30.0)]

    def test_ranges_by_score(self, board):
        assert board.range_by_score("board", 15, 30) == ["linus", "ada"]
        assert board.reverse_range_by_score("board", 15, 30) == ["ada", "linus"]
        assert board.range_by_score_with_scores("board", 0, 10) == [("grace", 10.0)]
        assert board.reverse_range_by_score_with_scores("board", 20, 30) == [("ada", 30.0), ("linus", 20.0)]

    def test_rank_and_score(self, board):
        assert board.rank("board", "grace") == 0
        assert board.reverse_rank("board", "grace") == 2
        assert board.rank("board", "nobody") is None
        assert board.score("board", "linus") == 20.0
        assert board.score("board", "nobody") is None

    def test_add_existing_member_updates_score(self, board):
        assert board.add("board", "grace", 50) is False
        assert board.range("board", -1, -1) == ["grace"]

    def test_increment_score(self, board):
        assert board.increment_score("board", "grace", 25) == 35.0
        assert board.range("board", -1, -1) == ["grace"]

    def test_count_and_size(self, board):
        assert board.count("board", 10, 20) == 2
        assert board.size("board") == 3

    def test_remove_variants(self, board):
        assert board.remove("board", "ada") == 1
        assert board.remove_range("board", 0, 0) == 1
        assert board.remove_range_by_score("board", 0, 100) == 1
        assert board.size("board") == 0

    def test_union_and_intersect_store(self, board):
        board.add("other", "ada", 5)
        board.add("other", "tim", 1)

        assert board.union_and_store("board", "other", "all") == 4
        assert board.score("all", "ada") == 35.0
        assert board.intersect_and_store("board", ["other"], "both") == 1
        assert board.range("both", 0, -1) == ["ada"]

    def test_pickled_members(self, template):
        ops = template.ops_for_zset()
        ops.add("z", ("point", 1), 1.0)

        assert ops.range("z", 0, -1) == [("point", 1)]


@pytest.mark.unit
class TestHashOperations:
    """Test hash commands."""

    def test_put_and_get(self, template):
        ops = template.ops_for_hash()
        ops.put("user:1", "profile", {"name": "Ada"})

        assert ops.get("user:1", "profile") == {"name": "Ada"}
        assert ops.get("user:1", "missing") is None

    def test_put_if_absent(self, template):
        ops = template.ops_for_hash()

        assert ops.put_if_absent("h", "f", 1) is True
        assert ops.put_if_absent("h", "f", 2) is False
        assert ops.get("h", "f") == 1

    def test_put_all_and_entries(self, template):
        ops = template.ops_for_hash()
        ops.put_all("h", {"a": 1, "b": [2]})

        assert ops.entries("h") == {"a": 1, "b": [2]}
        assert ops.keys("h") == {"a", "b"}
        assert sorted(ops.values("h"), key=str) == [1, [2]]
        assert ops.size("h") == 2

    def test_put_all_of_nothing(self, template, memory_factory):
        template.ops_for_hash().put_all("h", {})

        assert memory_factory.acquired == 0

    def test_multi_get(self, template):
        ops = template.ops_for_hash()
        ops.put_all("h", {"a": 1, "c": 3})

        assert ops.multi_get("h", ["a", "b", "c"]) == [1, None, 3]
        assert ops.multi_get("h", []) == []

    def test_increment(self, string_template):
        ops = string_template.ops_for_hash()

        assert ops.increment("stats", "views") == 1
        assert ops.increment("stats", "views", 4) == 5
        assert ops.get("stats", "views") == "5"

    def test_has_key_and_delete(self, template):
        ops = template.ops_for_hash()
        ops.put_all("h", {"a": 1, "b": 2})

        assert ops.has_key("h", "a") is True
        assert ops.delete("h", "a", "missing") == 1
        assert ops.has_key("h", "a") is False

    def test_missing_hash_reads_empty(self, template):
        assert template.ops_for_hash().entries("missing") == {}
