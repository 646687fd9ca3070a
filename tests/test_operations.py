"""Test the Operation selector, OperationInput and evaluate()."""
from pydantic import ValidationError
import pytest

from calculator_fixture.common.operations import (
    Failure,
    Operation,
    OperationInput,
    Success,
    evaluate,
    render,
)


@pytest.mark.parametrize("name,expected", [
    ("add", Operation.ADD),
    ("ADD", Operation.ADD),
    ("Add", Operation.ADD),
    ("subtract", Operation.SUBTRACT),
    ("Multiply", Operation.MULTIPLY),
    ("DIVIDE", Operation.DIVIDE),
    ("modulo", Operation.UNKNOWN),
    ("", Operation.UNKNOWN),
    (" add", Operation.UNKNOWN),
])
def test_from_name(name, expected):
    """Names resolve case-insensitively; anything else is UNKNOWN."""
    assert Operation.from_name(name) is expected


def test_operation_input_is_frozen() -> None:
    """OperationInput cannot be modified after construction."""
    inp = OperationInput(first=1, second=2, operation="add")
    with pytest.raises(ValidationError):
        inp.first = 3.0


def test_operation_input_defaults() -> None:
    """Missing fields default to zero operands and an empty operation."""
    inp = OperationInput()
    assert inp.first == 0.0
    assert inp.second == 0.0
    assert inp.operation == ""
    assert inp.kind is Operation.UNKNOWN


def test_operation_input_invalid_operand() -> None:
    """Non-numeric operands raise a validation error."""
    with pytest.raises(ValidationError):
        OperationInput(first="not a number", second=1, operation="add")


@pytest.mark.parametrize("first,second,operation,expected", [
    (5, 3, "add", 8.0),
    (10, 2, "divide", 5.0),
    (-5, 3, "add", -2.0),
    (0, 100, "multiply", 0.0),
    (10, 4, "Subtract", 6.0),
])
def test_evaluate_success(first, second, operation, expected) -> None:
    """Known operations evaluate to a Success."""
    assert evaluate(OperationInput(first=first, second=second, operation=operation)) == Success(value=expected)


@pytest.mark.parametrize("name", ["ADD", "Add", "add", "aDd"])
def test_evaluate_case_insensitive(name) -> None:
    """Dispatch ignores the case of the operation name."""
    assert evaluate(OperationInput(first=2, second=3, operation=name)) == Success(value=5.0)


def test_evaluate_division_by_zero() -> None:
    """Division by zero is reported as a Failure, not raised."""
    result = evaluate(OperationInput(first=10, second=0, operation="divide"))
    assert result == Failure(message="error: Cannot divide by zero")


@pytest.mark.parametrize("name", ["modulo", "Modulo", "POWER", ""])
def test_evaluate_unknown_operation(name) -> None:
    """Unknown operations keep the original name in the diagnostic."""
    result = evaluate(OperationInput(first=1, second=2, operation=name))
    assert result == Failure(message=f"Unknown operation: {name}")


@pytest.mark.parametrize("result,expected", [
    (Success(value=8.0), "8.0"),
    (Success(value=-2.0), "-2.0"),
    (Success(value=1e12), "1000000000000.0"),
    (Success(value=1e16), "1e+16"),
    (Success(value=0.1 + 0.2), "0.30000000000000004"),
    (Failure(message="error: Cannot divide by zero"), "error: Cannot divide by zero"),
])
def test_render(result, expected) -> None:
    """Numbers render with str(float); failures render their message."""
    assert render(result) == expected


def test_operations_dispatch_through_calculator(monkeypatch) -> None:
    """Known operations are served by the shared Calculator instance."""
    from calculator_fixture.common import operations

    assert operations.OPERATIONS[Operation.ADD] == operations.CALCULATOR.add
    monkeypatch.setitem(operations.OPERATIONS, Operation.ADD, lambda a, b: 42.0)
    assert evaluate(OperationInput(first=1, second=1, operation="add")) == Success(value=42.0)
