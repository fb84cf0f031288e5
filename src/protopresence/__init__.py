"""protopresence — require explicit `optional` on new proto3 fields."""

__version__ = "0.1.0"
