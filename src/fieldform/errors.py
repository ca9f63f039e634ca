"""Exception definitions for FieldForm application"""


class FieldFormException(Exception):
    """Base exception for all FieldForm application errors.

    All custom exceptions in the FieldForm application inherit from this class.
    Use this as a catch-all for FieldForm-specific errors when you don't need
    to handle specific exception types.
    """

    pass


class ConfigException(FieldFormException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class GenerationException(FieldFormException):
    """Raised when a form schema cannot be generated from a prompt.

    Use this exception when:
    - The AI request fails or times out
    - The AI response is not valid JSON
    - The returned schema lacks a title or a fields list
    """

    pass


class ExternalServiceException(FieldFormException):
    """Raised when an outbound notification channel fails."""

    pass


class WorkflowException(FieldFormException):
    """Raised when a request breaks the submission approval workflow.

    Use this exception when:
    - A status other than approved/rejected is requested
    - A submission that was already reviewed is reviewed again
    - A form definition is rejected (duplicate field names, bad fields)
    """

    pass


class AccessDenied(FieldFormException):
    pass


class NotFound(FieldFormException):
    pass
