"""Tests for the inquiry validation orchestrator."""

from nexus_site.inquiry.sanitizer import HtmlSanitizer
from nexus_site.inquiry.validation import InquiryValidator, validate_inquiry_data
from nexus_site.messages import DEFAULT_MESSAGES
from nexus_site.schemas.inquiry import InquirySubmission

V = DEFAULT_MESSAGES.validation


class BlankingSanitizer(HtmlSanitizer):
    """Sanitizer that eats everything, to simulate a markup-only payload."""

    def sanitize(self, value):
        return ""


class TestValidateInquiryData:
    """End-to-end validation of whole submissions."""

    def test_minimal_valid_submission(self, valid_submission):
        result = validate_inquiry_data(valid_submission)
        assert result.is_valid
        assert result.errors == {}
        assert result.sanitized_data.name == "Jo"
        assert result.sanitized_data.mobile == "0501234567"

    def test_accepts_submission_model(self, valid_submission):
        result = validate_inquiry_data(InquirySubmission(**valid_submission))
        assert result.is_valid

    def test_script_in_name(self, valid_submission):
        result = validate_inquiry_data(
            {**valid_submission, "name": "<script>alert(1)</script>", "message": "this is fine message"}
        )
        assert not result.is_valid
        assert result.errors == {"name": V.name_invalid_characters}
        assert "<" not in result.sanitized_data.name
        assert "alert" not in result.sanitized_data.name

    def test_invalid_mobile_prefix(self, valid_submission):
        result = validate_inquiry_data({**valid_submission, "mobile": "0491234567"})
        assert not result.is_valid
        assert result.errors == {"mobile": V.mobile_invalid}

    def test_independent_fields_fail_together(self, valid_submission):
        result = validate_inquiry_data(
            {**valid_submission, "email": "not-an-email", "message": "short"}
        )
        assert not result.is_valid
        assert result.errors == {
            "email": V.email_invalid,
            "message": V.message_min_length,
        }

    def test_empty_submission_reports_every_field(self):
        result = validate_inquiry_data({})
        assert result.errors == {
            "name": V.name_required,
            "mobile": V.mobile_required,
            "email": V.email_required,
            "message": V.message_required,
        }
        assert result.sanitized_data.model_dump() == {
            "name": "",
            "mobile": "",
            "email": "",
            "message": "",
        }

    def test_whitespace_only_is_required_not_malicious(self, valid_submission):
        result = validate_inquiry_data({**valid_submission, "name": "   ", "message": "\n\t "})
        assert result.errors == {
            "name": V.name_required,
            "message": V.message_required,
        }

    def test_malicious_error_takes_precedence_over_length(self, valid_submission):
        # Sanitizes to "J", which alone would be "too short"
        result = validate_inquiry_data({**valid_submission, "name": "<b>J</b>"})
        assert result.errors == {"name": V.name_invalid_characters}

    def test_markup_in_message(self, valid_submission):
        result = validate_inquiry_data(
            {**valid_submission, "message": "Please call me <a href='x'>here</a> today"}
        )
        assert result.errors == {"message": V.message_invalid_characters}

    def test_sanitized_values_are_echoed_even_when_invalid(self, valid_submission):
        result = validate_inquiry_data({**valid_submission, "name": "<b>John</b>"})
        assert not result.is_valid
        assert result.sanitized_data.name == "John"

    def test_markup_in_email_is_sanitized_not_flagged(self, valid_submission):
        result = validate_inquiry_data({**valid_submission, "email": "<b>a@b.com</b>"})
        assert result.is_valid
        assert result.sanitized_data.email == "a@b.com"

    def test_non_string_fields_are_treated_as_missing(self):
        result = validate_inquiry_data(
            {"name": 123, "mobile": 501234567, "email": ["a@b.com"], "message": None}
        )
        assert result.errors == {
            "name": V.name_required,
            "mobile": V.mobile_required,
            "email": V.email_required,
            "message": V.message_required,
        }

    def test_unknown_fields_are_ignored(self, valid_submission):
        result = validate_inquiry_data({**valid_submission, "website": "spam"})
        assert result.is_valid

    def test_values_are_trimmed(self, valid_submission):
        result = validate_inquiry_data(
            {**valid_submission, "name": "  Jo  ", "mobile": " 0501234567 "}
        )
        assert result.is_valid
        assert result.sanitized_data.name == "Jo"
        assert result.sanitized_data.mobile == "0501234567"

    def test_values_longer_than_storage_are_rejected(self, valid_submission):
        result = validate_inquiry_data(
            {
                **valid_submission,
                "mobile": "0501234567 " + "x" * 60,
                "email": "a" * 300 + "@b.com",
            }
        )
        assert not result.is_valid
        assert result.errors == {
            "mobile": V.mobile_max_length,
            "email": V.email_max_length,
        }


class TestInquiryValidator:
    """Test validator configuration and injected collaborators."""

    def test_content_eaten_by_sanitizer_is_invalid_characters(self, valid_submission):
        validator = InquiryValidator(sanitizer=BlankingSanitizer())
        result = validator.validate(valid_submission)
        assert result.errors["name"] == V.name_invalid_characters
        assert result.errors["message"] == V.message_invalid_characters
        # Fields without the markup rule just report what is missing
        assert result.errors["mobile"] == V.mobile_required
        assert result.errors["email"] == V.email_required

    def test_name_charset_check_enabled(self, valid_submission):
        validator = InquiryValidator(check_name_charset=True)
        result = validator.validate({**valid_submission, "name": "John 3rd"})
        assert result.errors == {"name": V.name_letters_only}

    def test_pure_and_repeatable(self, valid_submission):
        validator = InquiryValidator()
        first = validator.validate(valid_submission)
        second = validator.validate(valid_submission)
        assert first == second
