"""Pydantic schema models for API responses.

- **errors**: The ``ErrorResponse`` body shared by every error
"""
