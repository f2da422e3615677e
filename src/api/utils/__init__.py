"""Utility modules for API-specific functionality.

- **responses**: orjson responses, ``respond`` and ``respond_error``
- **client_ip**: Client address extraction from proxy headers
"""
