"""RoofCost error handling.

Custom exceptions and error codes for the estimation core.
"""

from typing import Optional, Dict, Any


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Formula Errors
    FORMULA_SYNTAX_ERROR = "FORMULA_SYNTAX_ERROR"
    FORMULA_UNKNOWN_VARIABLE = "FORMULA_UNKNOWN_VARIABLE"
    FORMULA_DIVISION_BY_ZERO = "FORMULA_DIVISION_BY_ZERO"

    # Catalog Errors
    LINE_ITEM_NOT_FOUND = "LINE_ITEM_NOT_FOUND"
    MACRO_NOT_FOUND = "MACRO_NOT_FOUND"


class RoofCostError(Exception):
    """Base exception for RoofCost errors.

    Provides structured error information for API responses.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize RoofCostError.

        Args:
            code: Error code from ErrorCode constants
            message: Human-readable error message
            details: Additional error context
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API response.

        Returns:
            Dictionary with code, message, and details.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class FormulaError(RoofCostError):
    """Base class for quantity formula failures."""

    def __init__(
        self,
        code: str,
        message: str,
        formula: Optional[str] = None,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "formula": formula}
        )
        self.formula = formula


class FormulaSyntaxError(FormulaError):
    """Formula could not be tokenized or parsed."""

    def __init__(self, reason: str, formula: Optional[str] = None):
        super().__init__(
            code=ErrorCode.FORMULA_SYNTAX_ERROR,
            message=f"Syntax error: {reason}",
            formula=formula,
            details={"reason": reason}
        )
        self.reason = reason


class UnknownVariableError(FormulaError):
    """Formula references a variable the roof measurements do not define."""

    def __init__(self, name: str, formula: Optional[str] = None):
        super().__init__(
            code=ErrorCode.FORMULA_UNKNOWN_VARIABLE,
            message=f"Unknown variable: {name}",
            formula=formula,
            details={"variable": name}
        )
        self.name = name


class DivisionByZeroError(FormulaError):
    """Right-hand operand of a division evaluated to zero."""

    def __init__(self, formula: Optional[str] = None):
        super().__init__(
            code=ErrorCode.FORMULA_DIVISION_BY_ZERO,
            message="Division by zero",
            formula=formula
        )


class LineItemNotFoundError(RoofCostError):
    """Line item id is not present in the pricing catalog."""

    def __init__(self, line_item_id: str):
        super().__init__(
            code=ErrorCode.LINE_ITEM_NOT_FOUND,
            message=f"Line item not found: {line_item_id}",
            details={"line_item_id": line_item_id}
        )
        self.line_item_id = line_item_id


class MacroNotFoundError(RoofCostError):
    """Macro id is not present in the engine's macro index."""

    def __init__(self, macro_id: str):
        super().__init__(
            code=ErrorCode.MACRO_NOT_FOUND,
            message=f"Macro not found: {macro_id}",
            details={"macro_id": macro_id}
        )
        self.macro_id = macro_id
