from datetime import datetime, timezone

from dsfapi.code import Code, CodeFlags, CodeResult, CodeType, KeywordType
from dsfapi.codeparameter import CodeParameter
from dsfapi.messages import Message, MessageType
from dsfapi.types import CodeChannel


def _gcode(major, *params, **kwargs):
    return Code(type=CodeType.GCODE, major_number=major, parameters=list(params), **kwargs)


def test_defaults_match_new_code():
    code = Code()
    assert code.command == "Code"
    assert code.type is CodeType.COMMENT
    assert code.channel is CodeChannel.SBC
    assert code.keyword is KeywordType.NONE
    assert code.flags == CodeFlags.NONE


def test_short_string_major_only():
    assert _gcode(28).short_string() == "G28"


def test_short_string_with_minor():
    code = Code(type=CodeType.GCODE, major_number=54, minor_number=3)
    assert code.short_string() == "G54.3"


def test_short_string_absolute_prefix():
    code = _gcode(1, flags=CodeFlags.ENFORCE_ABSOLUTE_POSITION)
    assert code.short_string().startswith("G53 ")
    assert code.short_string()[len("G53 "):] == _gcode(1).short_string()


def test_short_string_comment_and_keyword():
    assert Code().short_string() == "(comment)"
    assert Code(keyword=KeywordType.WHILE).short_string() == "while"


def test_str_comment():
    assert str(Code(comment=" hello")) == "; hello"


def test_str_keyword_with_and_without_argument():
    assert str(Code(keyword=KeywordType.IF, keyword_argument="x > 1")) == "if " + "x > 1"
    assert str(Code(keyword=KeywordType.ELSE)) == "else"


def test_keyword_names():
    assert Code(keyword=KeywordType.ELSE_IF).short_string() == "elif"
    assert Code(keyword=KeywordType.ABORT).short_string() == "abort"
    assert str(Code(keyword=KeywordType.CONTINUE)) == ""


def test_str_with_parameters_and_comment():
    param = CodeParameter.parse("X", "10")
    code = _gcode(1, param, comment="move")
    assert str(code) == code.short_string() + " " + str(param) + " ;move"


def test_str_with_result():
    result = CodeResult([Message(type=MessageType.ERROR, content="boom")])
    code = _gcode(28, result=result)
    assert str(code).endswith(" => " + str(result))


def test_code_result_skips_empty_messages():
    result = CodeResult(
        [
            Message(type=MessageType.WARNING, content="careful"),
            Message(content=""),
            Message(type=MessageType.ERROR, content="boom"),
        ]
    )
    assert str(result) == "Warning: careful\nError: boom\n"


def test_has_flag_and_is_major_number():
    code = _gcode(28, flags=CodeFlags.ASYNCHRONOUS | CodeFlags.IS_FROM_MACRO)
    assert code.has_flag(CodeFlags.IS_FROM_MACRO)
    assert not code.has_flag(CodeFlags.UNBUFFERED)
    assert code.is_major_number(28)
    assert not code.is_major_number(29)
    assert not Code().is_major_number(0)


def test_parameter_lookup_is_case_insensitive():
    x = CodeParameter.parse("X", "5")
    code = _gcode(1, x)
    assert code.parameter("x") is x
    assert code.has_parameter("X")
    assert code.parameter("Y") is None
    assert not code.has_parameter("y")


def test_parameter_or_default():
    x = CodeParameter.parse("X", "5")
    code = _gcode(1, x)
    assert code.parameter_or_default("X", 7) is x
    default = code.parameter_or_default("Y", 7.5)
    assert default.letter == "Y"
    assert default.as_float() == 7.5


def test_replace_parameter_is_case_sensitive():
    code = _gcode(1, CodeParameter.parse("X", "5"), CodeParameter.parse("X", "6"))
    new = CodeParameter.parse("X", "9")
    assert not code.replace_parameter("x", new)
    assert code.replace_parameter("X", new)
    assert code.parameters[0] is new
    assert code.parameters[1].as_int() == 6


def test_remove_parameter_removes_all_exact_matches():
    code = _gcode(
        1,
        CodeParameter.parse("X", "1"),
        CodeParameter.parse("Y", "3"),
        CodeParameter.parse("X", "2"),
    )
    removed = code.remove_parameter("X")
    assert removed.letter == "X"
    assert [p.letter for p in code.parameters] == ["Y"]
    assert code.remove_parameter("Z") is None


def test_remove_parameter_with_other_case_keeps_list():
    code = _gcode(1, CodeParameter.parse("X", "1"))
    removed = code.remove_parameter("x")
    assert removed.letter == "X"
    assert len(code.parameters) == 1


def test_unprecedented_string_quoting():
    code = _gcode(
        1,
        CodeParameter.parse("X", "10"),
        CodeParameter.parse("S", "abc", is_string=True),
    )
    quoted = code.unprecedented_string(True)
    assert quoted.count('"') == 2
    assert quoted.replace('"', "") == code.unprecedented_string(False)
    assert Code().unprecedented_string(True) == ""


def test_clone_copies_parameters():
    code = _gcode(1, CodeParameter.parse("X", "10"))
    copy = code.clone()
    assert copy == code
    assert copy.parameters[0] is not code.parameters[0]
    copy.parameters[0].letter = "Y"
    assert code.parameters[0].letter == "X"


def test_round_trip_through_dict():
    code = _gcode(
        106,
        CodeParameter.parse("P", "2"),
        CodeParameter.parse("S", "text", is_string=True),
        channel=CodeChannel.HTTP,
        line_number=12,
        flags=CodeFlags.IS_PRIORITIZED,
        comment="fan",
        result=CodeResult(
            [Message(time=datetime(2020, 5, 1, tzinfo=timezone.utc), content="ok")]
        ),
    )
    assert Code.from_dict(code.to_dict()) == code


def test_to_dict_uses_wire_names():
    data = _gcode(28).to_dict()
    assert data["Command"] == "Code"
    assert data["Type"] == "G"
    assert data["Channel"] == "SBC"
    assert data["Result"] is None


def test_from_dict_keys_case_insensitive():
    code = Code.from_dict(
        {"type": "M", "majorNumber": 106, "parameters": [{"letter": "P", "value": "2"}]}
    )
    assert code.type is CodeType.MCODE
    assert code.is_major_number(106)
    assert code.parameter("p").as_int() == 2


def test_from_empty_dict_gives_defaults():
    assert Code.from_dict({}) == Code()