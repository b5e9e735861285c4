from nomination_service.errors import ValidationError
from nomination_service.validation import validate_nomination, validate_or_raise

import pytest


def _fields(result):
    return [e.field for e in result.errors]


def test_valid_payload_is_normalized(alice_payload):
    alice_payload.update(
        name="  Alice Johnson ",
        phone_no="98765 43210",
        email=" a@x.com ",
        insta_id="",
        github_id="  alicej ",
    )
    result = validate_nomination(alice_payload)
    assert result.ok
    assert result.value == {
        "name": "Alice Johnson",
        "course": "CS",
        "phone_no": "9876543210",
        "domain": "Web Dev",
        "email": "a@x.com",
        "insta_id": None,
        "github_id": "alicej",
        "gender": "Female",
    }


def test_all_violations_reported_together():
    result = validate_nomination(
        {"name": "A", "email": "bad", "phone_no": "123", "domain": "X", "gender": "Y"}
    )
    assert not result.ok
    assert result.value is None
    # Field order follows the record layout; course is missing entirely
    assert _fields(result) == ["name", "course", "phone_no", "domain", "email", "gender"]
    messages = {e.field: e.message for e in result.errors}
    assert messages["name"] == "Name must be at least 2 characters long"
    assert messages["course"] == "Course is required"
    assert messages["phone_no"] == "Phone number must be 10-15 digits"
    assert messages["domain"].startswith("Domain must be one of: Sponsorship & Marketing")
    assert messages["email"] == "Please provide a valid email address"
    assert messages["gender"] == "Gender must be Male, Female, or Others"


def test_phone_accepts_leading_plus_and_rejects_letters(alice_payload):
    alice_payload["phone_no"] = "+919876543210"
    assert validate_nomination(alice_payload).ok

    for bad in ("98765abcde", "98765-43210", "+91", "1234567890123456", "++9876543210"):
        alice_payload["phone_no"] = bad
        assert _fields(validate_nomination(alice_payload)) == ["phone_no"], bad


def test_domain_and_gender_are_case_sensitive(alice_payload):
    alice_payload.update(domain="web dev", gender="female")
    assert _fields(validate_nomination(alice_payload)) == ["domain", "gender"]


def test_email_syntax(alice_payload):
    for good in ("first.last+tag@mail.example.org", "o'brien@example.co.uk"):
        alice_payload["email"] = good
        result = validate_nomination(alice_payload)
        assert result.ok, good
        assert result.value["email"] == good

    for bad in (".alice@example.com", "a..b@example.com", "alice.@example.com", "alice@", "alice@example"):
        alice_payload["email"] = bad
        result = validate_nomination(alice_payload)
        assert _fields(result) == ["email"], bad
        assert result.errors[0].message == "Please provide a valid email address"


def test_length_limits(alice_payload):
    alice_payload.update(name="N" * 256, course="C" * 255, insta_id="i" * 256, github_id="g" * 255)
    result = validate_nomination(alice_payload)
    assert _fields(result) == ["name", "insta_id"]
    assert result.errors[1].message == "Instagram ID cannot exceed 255 characters"


def test_whitespace_only_required_field_is_missing(alice_payload):
    alice_payload["course"] = "   "
    result = validate_nomination(alice_payload)
    assert [(e.field, e.message) for e in result.errors] == [("course", "Course is required")]


def test_non_string_values_are_field_errors(alice_payload):
    alice_payload.update(phone_no=9876543210, name=["Alice"])
    result = validate_nomination(alice_payload)
    assert [(e.field, e.message) for e in result.errors] == [
        ("name", "Name must be a string"),
        ("phone_no", "Phone number must be a string"),
    ]


def test_non_mapping_payload_does_not_raise():
    for payload in (None, [], "name=Alice", 42):
        result = validate_nomination(payload)
        assert not result.ok
        assert result.errors[0].field == "body"


def test_unknown_keys_are_ignored(alice_payload):
    alice_payload["id"] = 99
    result = validate_nomination(alice_payload)
    assert result.ok
    assert "id" not in result.value


def test_partial_only_checks_supplied_fields():
    assert validate_nomination({"name": "Bob"}, partial=True).value == {"name": "Bob"}
    assert validate_nomination({}, partial=True).value == {}
    assert validate_nomination({"unknown": "x"}, partial=True).value == {}

    result = validate_nomination({"name": None, "phone_no": "12"}, partial=True)
    assert [(e.field, e.message) for e in result.errors] == [
        ("name", "Name is required"),
        ("phone_no", "Phone number must be 10-15 digits"),
    ]


def test_partial_can_clear_optional_handles():
    result = validate_nomination({"insta_id": ""}, partial=True)
    assert result.value == {"insta_id": None}


def test_validate_or_raise_carries_errors():
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise({"name": "A"})
    assert excinfo.value.status_code == 400
    assert len(excinfo.value.errors) >= 5
