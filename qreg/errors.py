# qreg/errors.py
class QregError(Exception):
    """Base class for simulator errors."""


class DimensionMismatch(QregError, ValueError):
    """Operand sizes disagree (gate vs. state, or matrix vs. matrix)."""


class InvalidGateSize(QregError, ValueError):
    """A gate larger than 2x2 was used where a single-qubit gate is required."""


class ZeroNormState(QregError, ValueError):
    """An all-zero amplitude vector cannot be normalised."""
