class StridedError(Exception):
    """Base exception for py-strided library."""
    pass


class StridedIndexError(StridedError, IndexError):
    """Raised when an index falls outside an array or vector."""
    pass


class StridedTypeError(StridedError, TypeError):
    """Raised for invalid types in API calls."""
    pass


class StridedValueError(StridedError, ValueError):
    """Raised for invalid values, shapes or sizes."""
    pass


class NonConformantError(StridedValueError):
    """Raised when the shapes of two operands do not agree."""

    def __init__(self, a_shape, b_shape, message=None):
        self.a_shape = tuple(a_shape)
        self.b_shape = tuple(b_shape)
        if message is None:
            message = f"Non-conformant shapes: {self.a_shape} and {self.b_shape}"
        super().__init__(message)


class UnsupportedOperationError(StridedError, NotImplementedError):
    """Raised by entry points that are deliberately not implemented."""
    pass


class BuilderStateError(StridedError, RuntimeError):
    """Raised when a builder is used after build()."""
    pass
