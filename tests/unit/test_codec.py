"""Tests for the value codec (exact integers, identity strings, JSON structs)."""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from keycache.domain.exceptions import SerializationError
from keycache.infrastructure.cache import codec


class Goods(BaseModel):
    id: int
    name: str
    price: float


@dataclass
class Point:
    x: int
    y: int


class TestEncode:
    def test_none_is_absent(self) -> None:
        assert codec.encode(None) is None

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0"),
            (-17, "-17"),
            (2**31 - 1, "2147483647"),
            (2**63 - 1, "9223372036854775807"),
            (-(2**63), "-9223372036854775808"),
        ],
    )
    def test_int_is_exact_decimal(self, value: int, expected: str) -> None:
        assert codec.encode(value) == expected

    def test_str_is_identity(self) -> None:
        assert codec.encode("hello") == "hello"
        assert codec.encode("") == ""

    def test_bool_is_json(self) -> None:
        assert codec.encode(True) == "true"

    def test_model_is_json(self) -> None:
        out = codec.encode(Goods(id=1, name="phone", price=9.5))
        assert out == '{"id":1,"name":"phone","price":9.5}'

    def test_dict_is_json(self) -> None:
        assert codec.encode({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_unserializable_raises(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            codec.encode({"a": object()})
        assert exc_info.value.error_code == "SERIALIZATION_ERROR"


class TestDecode:
    @pytest.mark.parametrize("raw", [None, ""])
    def test_absent(self, raw) -> None:
        assert codec.decode(raw, int) is None
        assert codec.decode(raw, Goods) is None

    def test_int_near_max(self) -> None:
        assert codec.decode("9223372036854775807", int) == 2**63 - 1
        assert codec.decode("-9223372036854775808", int) == -(2**63)

    @pytest.mark.parametrize("raw", ["abc", "1.0", "1e3", " 12", "1_000", "0x10"])
    def test_non_decimal_int_raises(self, raw: str) -> None:
        with pytest.raises(SerializationError) as exc_info:
            codec.decode(raw, int)
        assert exc_info.value.details["kind"] == "int"

    def test_int_out_of_range_raises(self) -> None:
        with pytest.raises(SerializationError, match="64-bit"):
            codec.decode(str(2**63), int)

    def test_str_identity(self) -> None:
        assert codec.decode("12", str) == "12"

    def test_model(self) -> None:
        goods = Goods(id=3, name="tv", price=100.25)
        assert codec.decode(codec.encode(goods), Goods) == goods

    def test_dataclass(self) -> None:
        assert codec.decode('{"x":1,"y":2}', Point) == Point(1, 2)

    def test_generic_kind(self) -> None:
        assert codec.decode("[1,2,3]", list[int]) == [1, 2, 3]

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(SerializationError):
            codec.decode("not json", Goods)

    def test_wrong_shape_raises(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            codec.decode('{"id": "x"}', Goods)
        assert exc_info.value.details["kind"] == "Goods"

    def test_typed_accessors(self) -> None:
        assert codec.decode_int("42") == 42
        assert codec.decode_str("42") == "42"
        assert codec.decode_struct('{"x":0,"y":0}', Point) == Point(0, 0)
