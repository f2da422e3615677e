"""Type aliases for dynamic data structures throughout the application."""

# JSON-compatible type that represents any valid JSON value
# Used for API responses and request bodies
type JsonValue = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)
