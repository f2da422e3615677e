"""HTTP layer of Verdict, built on FastAPI and Starlette.

Key components:
- **main**: Application factory
- **routing**: Declarative route trees with per-subtree middleware
- **middleware**: Request context, request logging and exception handlers
- **schemas**: The standard error response body
- **utils**: JSON responses, error responses and client address lookup

Validation failures raised by struct validators reach clients as 422
responses whose ``detail`` maps each failing field path to its violations.
"""
