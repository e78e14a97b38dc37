import pytest

from msgbox_kit.validation import (
    FormValidator,
    ValidationError,
    is_valid_hex_color,
    normalize_hex_color,
    validate_directory_exists,
    validate_email,
    validate_file_exists,
    validate_filename,
    validate_hex_color,
    validate_length,
    validate_number_range,
    validate_path_exists,
    validate_required,
    validate_url,
)


def test_validate_required():
    assert validate_required("value", "Field") is None
    with pytest.raises(ValidationError, match="Field is required"):
        validate_required("", "Field")


def test_validate_length():
    assert validate_length("hello", 3, 10, "Field") is None
    with pytest.raises(ValidationError, match="at least 3 characters"):
        validate_length("hi", 3, 10, "Field")
    with pytest.raises(ValidationError, match="cannot exceed 10 characters"):
        validate_length("hello world!", 3, 10, "Field")


def test_validate_length_without_max():
    assert validate_length("x" * 1000, 1, None, "Field") is None


def test_validate_email():
    assert validate_email("user@example.com", "Email") is None
    with pytest.raises(ValidationError, match="not a valid email address: invalid"):
        validate_email("invalid", "Email")
    with pytest.raises(ValidationError, match="Email cannot be empty"):
        validate_email("", "Email")


def test_validate_email_rejects_trailing_newline():
    with pytest.raises(ValidationError):
        validate_email("user@example.com\n", "Email")


def test_hex_color_validation():
    assert is_valid_hex_color("#FF0000")
    assert is_valid_hex_color("#ffffff")
    assert not is_valid_hex_color("#FFF")
    assert not is_valid_hex_color("FF0000")

    assert validate_hex_color("#FF0000", "Color") is None
    with pytest.raises(ValidationError, match="must be a valid hex color"):
        validate_hex_color("#FFF", "Color")


def test_normalize_hex_color():
    assert normalize_hex_color("#ff0000") == "#FF0000"
    assert normalize_hex_color("ff0000") == "#FF0000"
    with pytest.raises(ValidationError, match="Invalid hex color: invalid"):
        normalize_hex_color("invalid")
    with pytest.raises(ValidationError, match="Color cannot be empty"):
        normalize_hex_color("")


def test_path_validators(tmp_path):
    file_path = tmp_path / "a.txt"
    file_path.write_text("x")
    assert validate_path_exists(str(tmp_path), "Dir") is None
    assert validate_directory_exists(str(tmp_path), "Dir") is None
    assert validate_file_exists(str(file_path), "File") is None
    with pytest.raises(ValidationError, match="is not a directory"):
        validate_directory_exists(str(file_path), "Dir")
    with pytest.raises(ValidationError, match="is not a file"):
        validate_file_exists(str(tmp_path), "File")
    with pytest.raises(ValidationError, match="does not exist"):
        validate_path_exists(str(tmp_path / "missing"), "Path")
    with pytest.raises(ValidationError, match="cannot be empty"):
        validate_path_exists("", "Path")


def test_number_range():
    assert validate_number_range(5, 1, 10, "N") is None
    with pytest.raises(ValidationError, match="N must be at least 1"):
        validate_number_range(0, 1, 10, "N")
    with pytest.raises(ValidationError, match="N cannot exceed 10"):
        validate_number_range(11, 1, 10, "N")
    assert validate_number_range(-100, None, None, "N") is None


def test_validate_url():
    assert validate_url("https://example.com/path", "Url", True) is None
    assert validate_url("http://example.com", "Url", False) is None
    with pytest.raises(ValidationError, match="must use HTTPS protocol"):
        validate_url("http://example.com", "Url", True)
    with pytest.raises(ValidationError, match="not a valid URL"):
        validate_url("not a url", "Url", False)
    with pytest.raises(ValidationError, match="cannot be empty"):
        validate_url("", "Url", False)


def test_validate_filename():
    assert validate_filename("report.txt", "Name") is None
    with pytest.raises(ValidationError, match="invalid character: '/'"):
        validate_filename("a/b", "Name")
    with pytest.raises(ValidationError, match="invalid character: '\\*'"):
        validate_filename("a*b", "Name")
    with pytest.raises(ValidationError, match="cannot be empty"):
        validate_filename("", "Name")


def test_form_validator():
    validator = FormValidator()
    validator.add_field("email", "user@example.com")
    assert validator.validate("email", [validate_required, validate_email])
    assert validator.is_valid()
    assert validator.error_summary() == "No validation errors"


def test_form_validator_records_first_error():
    validator = FormValidator()
    validator.add_field("email", "")
    assert not validator.validate("email", [validate_required, validate_email])
    assert not validator.is_valid()
    assert validator.error_message("email") == "email is required"
    assert validator.errors() == {"email": "email is required"}
    assert validator.error_summary() == "Validation errors:\n- email: email is required"


def test_form_validator_missing_field_and_clear():
    validator = FormValidator()
    assert not validator.validate("nope", [validate_required])
    assert validator.error_message("nope") == "Field not found"
    validator.clear()
    assert validator.is_valid()
    assert validator.error_message("nope") is None