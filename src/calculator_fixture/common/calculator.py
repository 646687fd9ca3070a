"""Four-operation arithmetic library."""

DIVISION_BY_ZERO_MESSAGE: str = "Cannot divide by zero"


class DivisionByZeroError(ArithmeticError):
    """Raised by divide() when the divisor is exactly zero."""

    def __init__(self, message: str = DIVISION_BY_ZERO_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


def add(a: float, b: float) -> float:
    """Return the sum of a and b."""
    return a + b


def subtract(a: float, b: float) -> float:
    """Return a minus b."""
    return a - b


def multiply(a: float, b: float) -> float:
    """Return the product of a and b."""
    return a * b


def divide(a: float, b: float) -> float:
    """
    Divide a by b.

    Only an exact zero divisor is rejected; very small divisors follow native
    floating-point semantics.

    :param float a: Dividend
    :param float b: Divisor

    :return: Quotient of a and b
    :rtype: float
    :raises DivisionByZeroError: If b equals zero
    """
    if b == 0:
        raise DivisionByZeroError()
    return a / b


class Calculator:
    """Class facade over the module functions, as consumed by fixtures."""

    def add(self, a: float, b: float) -> float:
        return add(a, b)

    def subtract(self, a: float, b: float) -> float:
        return subtract(a, b)

    def multiply(self, a: float, b: float) -> float:
        return multiply(a, b)

    def divide(self, a: float, b: float) -> float:
        return divide(a, b)
