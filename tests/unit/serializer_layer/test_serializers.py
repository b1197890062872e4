"""
Unit Tests for Serializers

Tests the None contract, encodings and failure wrapping of each serializer.
"""

import datetime

import pytest

from redis_template.core.exceptions import ConfigurationError, SerializationError
from redis_template.serializer import (
    JsonRedisSerializer,
    PickleRedisSerializer,
    RawRedisSerializer,
    StringRedisSerializer,
    serializer_for,
)


@pytest.mark.unit
class TestStringRedisSerializer:
    """Test the text serializer."""

    def test_encodes_utf8_by_default(self):
        assert StringRedisSerializer().serialize("héllo") == "héllo".encode("utf-8")

    def test_custom_encoding(self):
        serializer = StringRedisSerializer("latin-1")

        assert serializer.serialize("é") == b"\xe9"
        assert serializer.deserialize(b"\xe9") == "é"

    def test_none_passes_through(self):
        serializer = StringRedisSerializer()

        assert serializer.serialize(None) is None
        assert serializer.deserialize(None) is None

    def test_empty_string_is_not_absent(self):
        assert StringRedisSerializer().deserialize(b"") == ""

    def test_non_text_rejected(self):
        with pytest.raises(SerializationError):
            StringRedisSerializer().serialize(42)

    def test_undecodable_bytes_rejected(self):
        with pytest.raises(SerializationError):
            StringRedisSerializer().deserialize(b"\xff\xfe\xfa")

    def test_unencodable_text_rejected(self):
        with pytest.raises(SerializationError):
            StringRedisSerializer("ascii").serialize("é")


@pytest.mark.unit
class TestPickleRedisSerializer:
    """Test the object-graph serializer."""

    def test_object_graph_survives(self):
        serializer = PickleRedisSerializer()
        value = {"name": "Ada", "tags": {"math", "engines"}, "born": datetime.date(1815, 12, 10)}

        assert serializer.deserialize(serializer.serialize(value)) == value

    def test_falsy_values_are_not_absent(self):
        serializer = PickleRedisSerializer()

        assert serializer.deserialize(serializer.serialize(0)) == 0
        assert serializer.deserialize(serializer.serialize("")) == ""

    def test_empty_bytes_decode_to_none(self):
        assert PickleRedisSerializer().deserialize(b"") is None

    def test_none_passes_through(self):
        assert PickleRedisSerializer().serialize(None) is None
        assert PickleRedisSerializer().deserialize(None) is None

    def test_garbage_rejected(self):
        with pytest.raises(SerializationError):
            PickleRedisSerializer().deserialize(b"not a pickle")

    def test_unpicklable_rejected(self):
        with pytest.raises(SerializationError):
            PickleRedisSerializer().serialize(lambda: None)


@pytest.mark.unit
class TestJsonRedisSerializer:
    """Test the orjson-backed serializer."""

    def test_encodes_compact_json(self):
        assert JsonRedisSerializer().serialize({"a": [1, 2]}) == b'{"a":[1,2]}'

    def test_decodes_json(self):
        assert JsonRedisSerializer().deserialize(b'{"a":[1,2]}') == {"a": [1, 2]}

    def test_empty_bytes_decode_to_none(self):
        assert JsonRedisSerializer().deserialize(b"") is None

    def test_unsupported_type_rejected(self):
        with pytest.raises(SerializationError):
            JsonRedisSerializer().serialize(object())

    def test_invalid_json_rejected(self):
        with pytest.raises(SerializationError):
            JsonRedisSerializer().deserialize(b"{not json")


@pytest.mark.unit
class TestRawRedisSerializer:
    def test_bytes_untouched(self):
        serializer = RawRedisSerializer()

        assert serializer.serialize(bytearray(b"ab")) == b"ab"
        assert serializer.deserialize(b"ab") == b"ab"


@pytest.mark.unit
class TestSerializerFor:
    """Test building serializers from configuration names."""

    @pytest.mark.parametrize(
        "name, expected",
        [("pickle", PickleRedisSerializer), ("json", JsonRedisSerializer), ("string", StringRedisSerializer)],
    )
    def test_known_names(self, name, expected):
        assert isinstance(serializer_for(name), expected)

    def test_string_serializer_gets_encoding(self):
        assert serializer_for("string", "latin-1").encoding == "latin-1"

    def test_unknown_name_rejected(self):
        with pytest.raises(ConfigurationError):
            serializer_for("xml")
