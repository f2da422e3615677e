"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Security and redaction
REDACTED = "[REDACTED]"

# Fallback when a request has no peer address
UNKNOWN_CLIENT = "unknown"
