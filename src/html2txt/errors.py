from __future__ import annotations


class StructuralError(Exception):
    """Raised when open/close calls on the block builder are not balanced."""

    def __init__(self, operation: str, expected: str) -> None:
        super().__init__(f"{operation}: current scope is not {expected}.")
        self.operation = operation
        self.expected = expected
