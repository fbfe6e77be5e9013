"""
Slice helpers shared by arrays and vectors.
"""

def normalize_slice(s: slice, sequence_length: int):
    """
    Resolve a slice against one dimension.

    Args:
        s: The slice object.
        sequence_length: Length of the dimension being sliced.

    Returns:
        ``(start, length, step)`` where ``start`` is the first index visited.
        Zero steps are rejected by ``slice.indices`` with ValueError.
    """
    start, stop, step = s.indices(sequence_length)
    return start, len(range(start, stop, step)), step
