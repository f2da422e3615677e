"""Verdict - declarative entity validation for FastAPI services.

Verdict validates request entities against constraints declared on their
fields and reports every violation at once, keyed by the external field path.

Architecture Overview:
- **Validation Layer**: Tag-driven struct validators built once per type
- **API Layer**: FastAPI application, route tree, error responses
- **Core Layer**: Configuration, logging, coded errors, request context
"""
