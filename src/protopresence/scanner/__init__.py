"""Scanner — the check engine."""

from protopresence.scanner.engine import CheckError, check

__all__ = ["CheckError", "check"]
