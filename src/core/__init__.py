"""Core infrastructure package for shared application functionality.

- **config**: Centralized configuration management with environment support
- **context**: Request context (correlation ID, client address)
- **exceptions**: Coded error hierarchy shared by the engine and the API
- **error_context**: Sensitive data redaction for safe logging
- **logging**: Loguru configuration
- **types**: Type aliases for better code clarity
"""
