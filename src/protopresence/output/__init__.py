"""Reporters — terminal, JSON, SARIF."""
