"""User-facing message catalog.

Every string shown to visitors lives here so wording can be swapped
(e.g. for a translated catalog) without touching validation or routing code.
Validators and templates receive a ``MessageCatalog`` instance;
``DEFAULT_MESSAGES`` is the English catalog.
"""

from pydantic import BaseModel


class ValidationMessages(BaseModel):
    name_required: str = "Name is required"
    name_min_length: str = "Name must be at least 2 characters long"
    name_max_length: str = "Name must be less than 100 characters"
    name_invalid_characters: str = "Name contains invalid characters"
    name_letters_only: str = "Name can only contain letters and spaces"

    mobile_required: str = "Mobile number is required"
    mobile_invalid: str = (
        "Please enter a valid UAE mobile number (e.g. 0501234567, or +971501234567)"
    )
    mobile_max_length: str = "Mobile number must be less than 50 characters"

    email_required: str = "Email is required"
    email_invalid: str = "Please enter a valid email address"
    email_max_length: str = "Email must be less than 255 characters"

    message_required: str = "Message is required"
    message_min_length: str = "Message must be at least 10 characters long"
    message_max_length: str = "Message must be less than 2000 characters"
    message_invalid_characters: str = "Message contains invalid characters"


class SuccessMessages(BaseModel):
    inquiry_submitted: str = "Inquiry submitted successfully!"
    thank_you_message: str = (
        "Thank you for reaching out to us. Your inquiry has been received "
        "and we will get back to you within 24 hours."
    )
    reference_id: str = "Reference ID"
    submitted_on: str = "Submitted"
    contact_info: str = "Need immediate assistance? Contact us at:"
    auto_redirect_message: str = "Would you like to return to the home page?"


class ErrorMessages(BaseModel):
    rate_limit_exceeded: str = (
        "You have already submitted an inquiry today. "
        "We will get back to you within 24 hours."
    )
    too_many_requests: str = "Too many requests. Please try again later."
    too_many_form_submissions: str = (
        "Too many form submissions from this IP, please try again later."
    )

    validation_failed: str = "Validation failed"
    submission_failed: str = "Submission failed"
    server_error: str = "Internal server error. Please try again later."
    network_error: str = "Network error. Please check your connection and try again."
    something_went_wrong: str = "Something went wrong!"
    unable_to_load_inquiry: str = "Unable to load inquiry details"

    page_not_found: str = "The page you are looking for does not exist."
    file_not_found: str = "File not found"

    page_not_found_title: str = "Page Not Found"
    bad_request_title: str = "Bad Request"
    too_many_requests_title: str = "Too Many Requests"
    internal_server_error_title: str = "Internal Server Error"
    generic_error_title: str = "Error"

    generic_error_message: str = "An unexpected error occurred"
    help_message: str = "Need help? Contact us at"

    error_code: str = "Error Code"
    stack_trace: str = "Stack Trace"


class NavigationMessages(BaseModel):
    back_to_home: str = "Back"
    go_back: str = "← Go Back"
    view_catalog: str = "📋 View Catalog"


class ContactInfo(BaseModel):
    email: str = "info@nexusplater.com"
    phone: str = "+971 50 123 4567"
    email_label: str = "📧"
    phone_label: str = "📱"


class FormFieldText(BaseModel):
    name: str
    mobile: str
    email: str
    message: str


class FormButtons(BaseModel):
    submit: str = "Send Inquiry"
    submitting: str = "Sending..."


class FormMessages(BaseModel):
    labels: FormFieldText = FormFieldText(
        name="Name", mobile="Mobile", email="Email", message="Message"
    )
    placeholders: FormFieldText = FormFieldText(
        name="Name",
        mobile="Mobile (e.g. 0501234567, or +971501234567)",
        email="Email",
        message="Message",
    )
    buttons: FormButtons = FormButtons()


class MessageCatalog(BaseModel):
    validation: ValidationMessages = ValidationMessages()
    success: SuccessMessages = SuccessMessages()
    error: ErrorMessages = ErrorMessages()
    navigation: NavigationMessages = NavigationMessages()
    contact: ContactInfo = ContactInfo()
    form: FormMessages = FormMessages()

    def status_title(self, status_code: int) -> str:
        """Heading for the error page of a given HTTP status."""
        titles = {
            400: self.error.bad_request_title,
            404: self.error.page_not_found_title,
            429: self.error.too_many_requests_title,
            500: self.error.internal_server_error_title,
        }
        return titles.get(status_code, self.error.generic_error_title)


DEFAULT_MESSAGES = MessageCatalog()
