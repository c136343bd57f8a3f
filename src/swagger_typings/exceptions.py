class SwaggerTypingsError(Exception):
    """Base exception for swagger-typings errors."""
    pass

class ConfigError(SwaggerTypingsError):
    """Raised when the configuration file is missing or invalid."""
    pass

class FetchError(SwaggerTypingsError):
    """Raised when a resource catalog or document cannot be retrieved."""
    pass

class FormatError(SwaggerTypingsError):
    """Raised when candidate declaration text is not syntactically valid."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.line = line
        self.column = column
        if line:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)

class NamespaceCollisionError(SwaggerTypingsError):
    """Raised when two resources derive the same namespace."""
    pass
