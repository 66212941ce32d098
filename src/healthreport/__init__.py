"""Community health and team efficiency reporting for GitHub organizations."""

__version__ = "0.1.0"
