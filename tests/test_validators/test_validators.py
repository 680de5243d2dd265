from brisk.validators import (
    GENERIC_REASON,
    contains,
    int_range,
    matches,
    not_empty,
    one_of,
    run_validator,
)


def test_run_validator_outcomes():
    assert run_validator(None, "x") is None
    assert run_validator(lambda value: None, "x") is None
    assert run_validator(lambda value: True, "x") is None
    assert run_validator(lambda value: False, "x") == GENERIC_REASON
    assert run_validator(lambda value: "too short", "x") == "too short"


def test_run_validator_exception_is_rejection():
    def broken(value):
        return value["missing"]

    assert run_validator(broken, "x") == GENERIC_REASON


def test_not_empty():
    validate = not_empty()
    assert validate("  ") == "A value is required."
    assert validate("ok") is None


def test_contains():
    validate = contains("@")
    assert validate("bob") == "Value must contain '@'."
    assert validate("bob@example.com") is None


def test_matches():
    validate = matches(r"[a-z]+-\d+", "Use name-number")
    assert validate("web-1") is None
    assert validate("web") == "Use name-number"


def test_int_range():
    validate = int_range(1, 5)
    assert validate("3") is None
    assert validate("9") is not None
    assert validate("x") is not None


def test_one_of():
    validate = one_of(["yes", "no"])
    assert validate("YES") is None
    assert validate("maybe") == "Invalid input. Choices: {yes, no}."
