"""Custom exception types for the community health report generator."""


class ReportGeneratorError(Exception):
    """Base exception for all errors raised while generating a report."""


class ConfigurationError(ReportGeneratorError):
    """Raised when runtime configuration values are missing or invalid."""


class AuthenticationError(ConfigurationError):
    """Raised when the GitHub token is not available in the environment."""


class TransportError(ReportGeneratorError):
    """Raised when a GitHub API request fails or returns an unexpected response."""


class PaginationLimitError(TransportError):
    """Raised when a listing endpoint keeps returning pages past the configured limit."""
