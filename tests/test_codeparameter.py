import pytest

from dsfapi.codeparameter import CodeParameter
from dsfapi.types import DriverId

BIG = 18446744073709551615


def test_parse_integer():
    p = CodeParameter.parse("P", "5")
    assert p.as_int() == 5
    assert p.as_uint() == 5
    assert p.as_float() == 5.0
    assert p.as_int_list() == [5]


def test_parse_keeps_untrimmed_text():
    p = CodeParameter.parse("P", " 5 ")
    assert p.as_int() == 5
    assert p.as_string() == " 5 "


def test_parse_negative_integer_is_not_unsigned():
    p = CodeParameter.parse("S", "-3")
    assert p.as_int() == -3
    with pytest.raises(ValueError):
        p.as_uint()
    with pytest.raises(ValueError):
        p.as_uint_list()


def test_small_integer_is_not_a_driver_id():
    p = CodeParameter.parse("P", "5")
    with pytest.raises(ValueError, match="driver ID"):
        p.as_driver_id()


def test_parse_large_unsigned_integer():
    p = CodeParameter.parse("P", str(BIG))
    assert p.as_uint() == BIG
    with pytest.raises(ValueError):
        p.as_int()
    assert p.as_driver_id() == DriverId.from_uint64(BIG)
    assert p.as_driver_id_list() == [DriverId.from_uint64(BIG)]
    assert p.as_int_list() == [-1]


def test_parse_float():
    p = CodeParameter.parse("F", "1.5")
    assert p.as_float() == 1.5
    assert p.as_float_list() == [1.5]
    with pytest.raises(ValueError, match="Cannot convert F parameter"):
        p.as_int()


def test_out_of_range_float_stays_text():
    p = CodeParameter.parse("F", "1e400")
    assert p.parsed_value == "1e400"
    with pytest.raises(ValueError):
        p.as_float()


def test_empty_value_is_zero():
    p = CodeParameter.parse("X", "")
    assert p.as_int() == 0


def test_parse_int_list():
    p = CodeParameter.parse("P", "1:-2:3")
    assert p.as_int_list() == [1, -2, 3]
    assert p.as_float_list() == [1.0, -2.0, 3.0]
    with pytest.raises(ValueError):
        p.as_uint_list()


def test_parse_float_list():
    p = CodeParameter.parse("P", "1.5:2")
    assert p.as_float_list() == [1.5, 2.0]
    assert p.as_int_list() == [1, 2]


def test_non_numeric_list_stays_text():
    p = CodeParameter.parse("P", "a:b")
    assert p.parsed_value == "a:b"
    with pytest.raises(ValueError):
        p.as_float_list()


def test_expression():
    p = CodeParameter.parse("P", "{move.axes}")
    assert p.is_expression is True
    assert str(p) == "P{move.axes}"


def test_string_parameter_quotes_are_doubled():
    p = CodeParameter.parse("P", 'say "hi"', True, False)
    assert p.parsed_value == 'say "hi"'
    assert str(p) == 'P"say ""hi"""'


def test_unprecedented_string_has_no_letter():
    p = CodeParameter.parse("@", "abc", True, False)
    assert str(p) == '"abc"'


def test_driver_id():
    p = CodeParameter.parse("E", "1.2", False, True)
    assert p.as_driver_id() == DriverId(1, 2)
    assert p.as_uint() == DriverId(1, 2).as_uint64()
    assert p.as_uint_list() == [DriverId(1, 2).as_uint64()]


def test_driver_id_list():
    p = CodeParameter.parse("E", "0.1:0.2", False, True)
    assert p.as_driver_id_list() == [DriverId(0, 1), DriverId(0, 2)]
    assert p.as_uint_list() == [DriverId(0, 1).as_uint64(), DriverId(0, 2).as_uint64()]


def test_invalid_driver_id():
    with pytest.raises(ValueError, match="Failed to parse driver number from X parameter"):
        CodeParameter.parse("X", "1.a", False, True)


def test_convert_driver_ids_after_parse():
    p = CodeParameter.parse("P", "3")
    p.convert_driver_ids()
    assert p.is_driver_id is True
    assert p.as_driver_id() == DriverId(0, 3)


@pytest.mark.parametrize("text, expected", [("true", True), ("1", True), ("F", False), ("0", False)])
def test_as_bool(text, expected):
    assert CodeParameter.parse("S", text).as_bool() is expected


def test_as_bool_invalid():
    with pytest.raises(ValueError):
        CodeParameter.parse("S", "yes").as_bool()


def test_simple_string_expression():
    p = CodeParameter.simple("P", "{var.x}")
    assert p.is_string is True
    assert p.is_expression is True
    assert str(p) == "P{var.x}"


def test_simple_float_text():
    assert CodeParameter.simple("S", 2.0).as_string() == "2"
    assert CodeParameter.simple("S", 1.5).as_string() == "1.5"
    assert CodeParameter.simple("S", 1.5).as_float() == 1.5


def test_simple_bool_text():
    p = CodeParameter.simple("S", True)
    assert p.as_string() == "true"
    assert p.as_bool() is True


def test_dict_round_trip():
    p = CodeParameter.parse("X", "12.5")
    again = CodeParameter.from_dict(p.to_dict())
    assert again == p
    assert p.to_dict() == {"letter": "X", "value": "12.5", "isDriverId": False, "isString": False}


def test_from_dict_numeric_flags():
    p = CodeParameter.from_dict({"letter": "P", "value": "12", "isString": 1, "isDriverId": 0})
    assert p.is_string is True
    assert p.parsed_value == "12"


def test_from_dict_rejects_non_string_value():
    with pytest.raises(TypeError):
        CodeParameter.from_dict({"letter": "P", "value": 12})


def test_clone_is_independent():
    p = CodeParameter.parse("X", "1")
    c = p.clone()
    c.letter = "Y"
    assert p.letter == "X"
    assert c.as_int() == p.as_int()