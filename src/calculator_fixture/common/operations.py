"""Operation selector, evaluation input and result variants."""
from collections.abc import Callable as ABCCallable
from enum import Enum
from typing import Callable, Dict, Union

from pydantic import BaseModel, ConfigDict, Field

from calculator_fixture.common.calculator import Calculator, DivisionByZeroError

# Type alias for operation functions (taking two floats, returning a float)
OperationFn: ABCCallable[[float, float], float] = Callable[[float, float], float]

ERROR_PREFIX: str = "error: "
UNKNOWN_OPERATION_PREFIX: str = "Unknown operation: "


class Operation(str, Enum):
    """Arithmetic operation kinds, with an explicit variant for unrecognized names."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: str) -> "Operation":
        """
        Resolve an operation name case-insensitively.

        :param str name: Operation name as written by the caller

        :return: Matching operation, or Operation.UNKNOWN
        :rtype: Operation
        """
        try:
            return OPERATION_NAMES[name.lower()]
        except KeyError:
            return cls.UNKNOWN


OPERATION_NAMES: Dict[str, Operation] = {
    op.value: op for op in Operation if op is not Operation.UNKNOWN
}

# Operations dispatch through one shared, stateless Calculator
CALCULATOR: Calculator = Calculator()

OPERATIONS: Dict[Operation, OperationFn] = {
    Operation.ADD: CALCULATOR.add,
    Operation.SUBTRACT: CALCULATOR.subtract,
    Operation.MULTIPLY: CALCULATOR.multiply,
    Operation.DIVIDE: CALCULATOR.divide,
}


class OperationInput(BaseModel):
    """Complete, immutable input of one evaluation."""

    model_config = ConfigDict(frozen=True)

    first: float = Field(default=0.0, description="First operand")
    second: float = Field(default=0.0, description="Second operand")
    operation: str = Field(default="", description="Operation name, kept verbatim")

    @property
    def kind(self) -> Operation:
        return Operation.from_name(self.operation)


class Success(BaseModel):
    """Numeric outcome of an evaluation."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(..., description="Computed numeric result")


class Failure(BaseModel):
    """Diagnostic outcome of an evaluation (domain error or unknown operation)."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(..., description="Displayable diagnostic")


OperationResult = Union[Success, Failure]


def evaluate(inp: OperationInput) -> OperationResult:
    """
    Evaluate an operation input.

    Division by zero is reported as a Failure, never raised.

    :param OperationInput inp: Operands and operation name

    :return: Success holding the number, or Failure holding the diagnostic
    :rtype: OperationResult
    """
    kind: Operation = inp.kind
    if kind is Operation.UNKNOWN:
        return Failure(message=f"{UNKNOWN_OPERATION_PREFIX}{inp.operation}")
    try:
        return Success(value=OPERATIONS[kind](inp.first, inp.second))
    except DivisionByZeroError as exc:
        return Failure(message=f"{ERROR_PREFIX}{exc.message}")


def render(result: OperationResult) -> str:
    """
    Render a result as table text.

    Numbers use str(float): 8.0, 1000000000000.0, 1e+16.
    """
    if isinstance(result, Success):
        return str(result.value)
    return result.message
