"""Core value types, records and errors."""
