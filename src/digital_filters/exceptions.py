"""
Exception types raised by the digital filter toolkit.
"""


class InvalidArgumentError(ValueError):
    """Raised when an operation is called with arguments it cannot accept.

    Covers non power-of-two or out-of-range transform sizes, length
    mismatches between configured sizes and supplied data, unsupported
    polynomial section orders and out-of-range pole indices.
    """
