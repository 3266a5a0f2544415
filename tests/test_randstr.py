import string

import pytest

from shopifygql.randstr import CHARSET, random_string, string_with_charset


def test_random_string_has_requested_length():
    assert len(random_string(10)) == 10


def test_random_string_uses_alphanumeric_charset():
    value = random_string(200)
    assert set(value) <= set(CHARSET)


def test_random_string_is_letters_and_digits():
    value = random_string(500)
    assert set(value) <= set(string.ascii_letters + string.digits)


def test_single_character_charset():
    value = string_with_charset(5, "a")
    assert len(value) == 5
    assert set(value) == {"a"}


def test_chars_come_from_given_charset():
    value = string_with_charset(100, "xyz")
    assert set(value) <= {"x", "y", "z"}


def test_zero_length_is_empty():
    assert string_with_charset(0, "abc") == ""


def test_strings_vary():
    values = {random_string(16) for _ in range(20)}
    assert len(values) > 1


def test_empty_charset_rejected():
    with pytest.raises(ValueError):
        string_with_charset(3, "")


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        random_string(-1)