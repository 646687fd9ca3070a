"""Fixture bridging decision-table rows to the arithmetic library."""
from enum import Enum
from typing import Union

from calculator_fixture.common.logger import logger
from calculator_fixture.common.operations import (
    Failure,
    OperationInput,
    OperationResult,
    evaluate,
)


class FixtureState(str, Enum):
    """Lifecycle of a fixture: inputs are pending until result() is first called."""

    INPUTS_PENDING = "inputs-pending"
    EVALUATED = "evaluated"


class CalculatorFixture:
    """
    Decision-table fixture for the calculator.

    Columns of a table row map onto this class:
        - "first number"  -> set_first_number()
        - "second number" -> set_second_number()
        - "operation"     -> set_operation()
        - "result?"       -> result()

    Fields may be set in any order and overwritten; result() evaluates the
    current values each time it is called. Operands that were never set are 0.0
    and an operation that was never set is the empty string.

    One instance per row; instances are not safe to share between threads.
    """

    def __init__(self) -> None:
        self._first: float = 0.0
        self._second: float = 0.0
        self._operation: str = ""
        self._state: FixtureState = FixtureState.INPUTS_PENDING

    @property
    def state(self) -> FixtureState:
        return self._state

    def set_first(self, value: Union[float, str]) -> None:
        """
        Store the first operand.

        :param value: Number, or its text as found in a table cell
        :raises ValueError: If the value is not numeric
        """
        self._first = float(value)

    def set_second(self, value: Union[float, str]) -> None:
        """
        Store the second operand.

        :param value: Number, or its text as found in a table cell
        :raises ValueError: If the value is not numeric
        """
        self._second = float(value)

    def set_operation(self, name: str) -> None:
        """Store the operation name verbatim; it is only resolved by result()."""
        self._operation = name

    # Column-header spellings
    set_first_number = set_first
    set_second_number = set_second

    def evaluation_input(self) -> OperationInput:
        """Snapshot the current fields as an immutable input."""
        return OperationInput(first=self._first, second=self._second, operation=self._operation)

    def outcome(self) -> OperationResult:
        """Evaluate the current fields and return the result variant."""
        outcome: OperationResult = evaluate(self.evaluation_input())
        self._state = FixtureState.EVALUATED
        if isinstance(outcome, Failure):
            logger.debug(f"🧮⚠️ {self._first} {self._operation!r} {self._second}: {outcome.message}")
        return outcome

    def result(self) -> Union[float, str]:
        """
        Compute the result of the current row.

        :return: Numeric result, or a diagnostic string such as
            "error: Cannot divide by zero" or "Unknown operation: modulo"
        :rtype: Union[float, str]
        """
        outcome: OperationResult = self.outcome()
        if isinstance(outcome, Failure):
            return outcome.message
        return outcome.value
