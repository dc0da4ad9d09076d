import string

import pytest

from jagkit import ctype
from jagkit.ctype import CharClass

ASCII = range(128)


def test_classify_digit_and_letters():
    assert ctype.classify("5") == CharClass.DIGIT | CharClass.HEX
    assert ctype.classify("G") == CharClass.UPPER
    assert ctype.classify("a") == CharClass.LOWER | CharClass.HEX
    assert ctype.classify(0x7F) == CharClass.CONTROL


def test_classify_uses_low_byte():
    assert ctype.classify(0x100 + ord("A")) == ctype.classify("A")


def test_high_half_has_no_class():
    for code in range(0x80, 0x100):
        assert ctype.classify(code) == CharClass(0)
        assert not ctype.isprint(code)
        assert not ctype.isgraph(code)


@pytest.mark.parametrize(
    "predicate, members",
    [
        (ctype.isdigit, string.digits),
        (ctype.isupper, string.ascii_uppercase),
        (ctype.islower, string.ascii_lowercase),
        (ctype.isalpha, string.ascii_letters),
        (ctype.isalnum, string.ascii_letters + string.digits),
        (ctype.isxdigit, string.hexdigits),
        (ctype.ispunct, string.punctuation),
        (ctype.isspace, string.whitespace),
    ],
)
def test_predicates_match_ascii_sets(predicate, members):
    for code in ASCII:
        assert predicate(code) == (chr(code) in members), code


def test_control_characters():
    for code in ASCII:
        assert ctype.iscntrl(code) == (code < 0x20 or code == 0x7F)


def test_print_and_graph():
    for code in ASCII:
        assert ctype.isprint(code) == (0x20 <= code < 0x7F)
        assert ctype.isgraph(code) == (0x20 < code < 0x7F)


def test_isascii():
    assert ctype.isascii(0x7F)
    assert not ctype.isascii(0x80)
    assert not ctype.isascii(0x17F)


def test_case_round_trip():
    for letter in string.ascii_lowercase:
        upper = ctype.toupper(letter)
        assert upper == letter.upper()
        assert ctype.tolower(upper) == letter


def test_case_conversion_leaves_others():
    for ch in string.digits + string.punctuation:
        assert ctype.toupper(ch) == ch
        assert ctype.tolower(ch) == ch


def test_case_conversion_keeps_int_type():
    assert ctype.toupper(ord("q")) == ord("Q")
    assert ctype.tolower(ord("Q")) == ord("q")


def test_toascii():
    assert ctype.toascii(0x80 | ord("A")) == ord("A")
    assert ctype.toascii("z") == "z"


def test_toint():
    for digit in string.digits:
        assert ctype.toint(digit) == int(digit)
    assert ctype.toint("A") == 0
    assert ctype.toint("a") == ctype.toint("A")


def test_isodigit():
    for code in ASCII:
        assert ctype.isodigit(code) == (chr(code) in string.octdigits)


def test_identifier_characters():
    assert ctype.iscymf("_")
    assert ctype.iscymf("x")
    assert not ctype.iscymf("1")
    assert ctype.iscym("1")
    assert ctype.iscym("_")
    assert not ctype.iscym("-")


def test_multi_character_string_rejected():
    with pytest.raises(TypeError):
        ctype.isdigit("12")