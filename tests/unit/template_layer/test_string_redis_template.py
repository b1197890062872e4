"""
Unit Tests for StringRedisTemplate
"""

import pytest

from redis_template import StringRedisSerializer, StringRedisTemplate


@pytest.mark.unit
class TestStringRedisTemplate:
    """Test the text-only template."""

    def test_initialized_with_factory(self, memory_factory):
        assert StringRedisTemplate(memory_factory).initialized

    def test_not_initialized_without_factory(self, memory_factory):
        template = StringRedisTemplate()
        assert not template.initialized

        template.connection_factory = memory_factory
        assert template.after_properties_set().initialized

    def test_every_role_is_text(self, string_template):
        for serializer in (
            string_template.key_serializer,
            string_template.value_serializer,
            string_template.hash_key_serializer,
            string_template.hash_value_serializer,
            string_template.string_serializer,
        ):
            assert isinstance(serializer, StringRedisSerializer)

    def test_values_stored_as_plain_text(self, string_template):
        string_template.ops_for_value().set("greeting", "hello")

        raw = string_template.execute(lambda connection: connection.get(b"greeting"))

        assert raw == b"hello"

    def test_counters_read_back_as_text(self, string_template):
        string_template.ops_for_value().increment("visits")
        string_template.ops_for_value().increment("visits", 2)

        assert string_template.ops_for_value().get("visits") == "3"

    def test_custom_encoding(self, memory_factory):
        template = StringRedisTemplate(memory_factory, encoding="latin-1")
        template.ops_for_value().set("name", "José")

        assert template.execute(lambda connection: connection.get(b"name")) == "José".encode("latin-1")
