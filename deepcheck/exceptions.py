"""Custom exceptions for the deepcheck engine."""


class DeepCheckError(Exception):
    """Base exception for deepcheck errors."""
    pass


class ValidationError(DeepCheckError):
    """Raised when an operation receives a value it cannot work on."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnsupportedTypeError(ValidationError):
    """Raised when a list operation is given something that is not a list."""
    def __init__(self, argument: str, type_name: str):
        super().__init__(
            f"{argument} has an unsupported type {type_name}, expecting array or list",
            {"argument": argument, "type": type_name}
        )
        self.argument = argument
        self.type_name = type_name


class ConfigError(DeepCheckError):
    """Raised when engine configuration or a case file cannot be loaded."""
    def __init__(self, message: str, source: str = None, reason: str = None):
        super().__init__(message)
        self.message = message
        self.source = source
        self.reason = reason


class MaxDepthExceededError(DeepCheckError):
    """Raised when a walk nests deeper than max_depth (e.g. cyclic data)."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path
