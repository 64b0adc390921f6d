from typing import Any


class AdoYamlError(Exception):
    """Base exception class for pipeline YAML errors with structured error information."""

    def __init__(
        self,
        message: str,
        error_code: str,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        """
        Initialize structured error.

        Args:
            message: Human-readable error message
            error_code: Structured error code for programmatic handling
            context: Additional context information about the error
            original_exception: The original exception that caused this error
        """
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}
        self.original_exception = original_exception


class AdoYamlConfigurationError(AdoYamlError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str = "Configuration error",
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            error_code="ADO_YAML_CONFIG_ERROR",
            context=context,
            original_exception=original_exception,
        )


class AdoYamlSourceError(AdoYamlError):
    """Exception for pipeline files that cannot be read as decoded text."""

    def __init__(
        self,
        message: str = "Pipeline source could not be read",
        path: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        context = context or {}
        if path:
            context["path"] = path

        super().__init__(
            message=message,
            error_code="ADO_YAML_SOURCE_ERROR",
            context=context,
            original_exception=original_exception,
        )
        self.path = path
