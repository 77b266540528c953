"""
Formula Parser Service for RoofCost.

Safely evaluates quantity formulas with roof variable substitution.
Examples: "SQ*1.10", "EAVE+RAKE", "F1SQ+F2SQ+F3SQ", "(SQ-5)*0.9"

Architecture:
- Tokenizer turns the formula into NUMBER / VARIABLE / OPERATOR / paren tokens
- Recursive descent parser builds a small expression tree
- Evaluator walks the tree against RoofVariables.to_variable_map()

Grammar:
    expression := term (('+' | '-') term)*
    term       := unary (('*' | '/') unary)*
    unary      := '-' unary | primary
    primary    := number | identifier | '(' expression ')'

There is no call, assignment or statement syntax, so anything other than
arithmetic over known variables fails to parse.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

import structlog

from roofcost.config.errors import (
    DivisionByZeroError,
    FormulaError,
    FormulaSyntaxError,
    UnknownVariableError,
)
from roofcost.models.variables import RoofVariables

logger = structlog.get_logger(__name__)


# =============================================================================
# Tokens
# =============================================================================


class TokenType(str, Enum):
    """Lexical token types."""

    NUMBER = "NUMBER"
    VARIABLE = "VARIABLE"
    OPERATOR = "OPERATOR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """Single lexical token."""

    type: TokenType
    value: Union[str, float]
    position: int = 0


OPERATORS = "+-*/"
NUMBER_CHARS = "0123456789."


def _is_identifier_start(char: str) -> bool:
    return char.isascii() and (char.isalpha() or char == "_")


def _is_identifier_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


def tokenize(formula: str) -> List[Token]:
    """Convert a formula string into tokens.

    Identifiers are upper-cased so variable lookup is case-insensitive.

    Raises:
        FormulaSyntaxError: On a malformed number or a character outside
            the formula alphabet.
    """
    tokens: List[Token] = []
    text = formula.strip()
    pos = 0

    while pos < len(text):
        char = text[pos]

        if char.isspace():
            pos += 1
            continue

        if char in NUMBER_CHARS:
            start = pos
            while pos < len(text) and text[pos] in NUMBER_CHARS:
                pos += 1
            literal = text[start:pos]
            try:
                value = float(literal)
            except ValueError:
                raise FormulaSyntaxError(f"invalid number '{literal}' at position {start}", formula)
            tokens.append(Token(TokenType.NUMBER, value, start))
            continue

        if _is_identifier_start(char):
            start = pos
            while pos < len(text) and _is_identifier_char(text[pos]):
                pos += 1
            tokens.append(Token(TokenType.VARIABLE, text[start:pos].upper(), start))
            continue

        if char in OPERATORS:
            tokens.append(Token(TokenType.OPERATOR, char, pos))
            pos += 1
            continue

        if char == "(":
            tokens.append(Token(TokenType.LPAREN, "(", pos))
            pos += 1
            continue

        if char == ")":
            tokens.append(Token(TokenType.RPAREN, ")", pos))
            pos += 1
            continue

        raise FormulaSyntaxError(f"unexpected character '{char}' at position {pos}", formula)

    tokens.append(Token(TokenType.EOF, "", len(text)))
    return tokens


# =============================================================================
# Expression tree
# =============================================================================


@dataclass(frozen=True)
class NumberNode:
    value: float


@dataclass(frozen=True)
class VariableNode:
    name: str


@dataclass(frozen=True)
class UnaryOpNode:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOpNode:
    op: str
    left: "Node"
    right: "Node"


Node = Union[NumberNode, VariableNode, UnaryOpNode, BinaryOpNode]


# =============================================================================
# Parser
# =============================================================================


class Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, tokens: List[Token], formula: Optional[str] = None):
        self.tokens = tokens
        self.formula = formula
        self.pos = 0

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self._current()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def _is_operator(self, ops: str) -> bool:
        token = self._current()
        return token.type == TokenType.OPERATOR and token.value in ops

    def _error(self, reason: str) -> FormulaSyntaxError:
        return FormulaSyntaxError(reason, self.formula)

    def _describe(self, token: Token) -> str:
        if token.type == TokenType.EOF:
            return "end of formula"
        return f"'{token.value}' at position {token.position}"

    def parse(self) -> Node:
        """Parse the full token stream into an expression tree.

        Raises:
            FormulaSyntaxError: If the tokens do not form one expression.
        """
        try:
            node = self._expression()
        except RecursionError:
            raise self._error("formula is nested too deeply")

        if self._current().type != TokenType.EOF:
            raise self._error(f"unexpected token {self._describe(self._current())}")
        return node

    def _expression(self) -> Node:
        left = self._term()
        while self._is_operator("+-"):
            op = self._advance().value
            right = self._term()
            left = BinaryOpNode(op, left, right)
        return left

    def _term(self) -> Node:
        left = self._unary()
        while self._is_operator("*/"):
            op = self._advance().value
            right = self._unary()
            left = BinaryOpNode(op, left, right)
        return left

    def _unary(self) -> Node:
        if self._is_operator("-"):
            self._advance()
            return UnaryOpNode("-", self._unary())
        return self._primary()

    def _primary(self) -> Node:
        token = self._current()

        if token.type == TokenType.NUMBER:
            self._advance()
            return NumberNode(float(token.value))

        if token.type == TokenType.VARIABLE:
            self._advance()
            if self._current().type == TokenType.LPAREN:
                raise self._error(f"function calls are not supported ('{token.value}(')")
            return VariableNode(str(token.value))

        if token.type == TokenType.LPAREN:
            self._advance()
            node = self._expression()
            if self._current().type != TokenType.RPAREN:
                raise self._error(f"expected ')' but found {self._describe(self._current())}")
            self._advance()
            return node

        raise self._error(f"unexpected token {self._describe(token)}")


def parse_formula(formula: str) -> Node:
    """Tokenize and parse a formula into an expression tree."""
    return Parser(tokenize(formula), formula).parse()


# =============================================================================
# Evaluator
# =============================================================================


def _apply_operator(op: str, left: float, right: float, formula: Optional[str]) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if right == 0:
        raise DivisionByZeroError(formula)
    return left / right


def _evaluate_node(root: Node, variables: Dict[str, float], formula: Optional[str]) -> float:
    """Evaluate a tree left to right with an explicit stack, so operator
    chains of any length evaluate."""
    values: List[float] = []
    pending: List[Tuple[Node, bool]] = [(root, False)]

    while pending:
        node, children_done = pending.pop()

        if isinstance(node, NumberNode):
            values.append(node.value)
            continue

        if isinstance(node, VariableNode):
            if node.name not in variables:
                raise UnknownVariableError(node.name, formula)
            values.append(variables[node.name])
            continue

        if not children_done:
            pending.append((node, True))
            if isinstance(node, UnaryOpNode):
                pending.append((node.operand, False))
            else:
                pending.append((node.right, False))
                pending.append((node.left, False))
            continue

        if isinstance(node, UnaryOpNode):
            values.append(-values.pop())
            continue

        right = values.pop()
        left = values.pop()
        values.append(_apply_operator(node.op, left, right, formula))

    return values.pop()


def evaluate_formula(formula: Optional[str], variables: RoofVariables) -> float:
    """Parse and evaluate a formula against roof variables.

    An empty or whitespace-only formula evaluates to 0.

    Args:
        formula: Quantity formula, e.g. "SQ*1.10".
        variables: Roof measurements to substitute.

    Returns:
        Unrounded float result.

    Raises:
        FormulaSyntaxError: Malformed formula or disallowed characters.
        UnknownVariableError: Identifier not defined by the variables.
        DivisionByZeroError: Division by a zero-valued operand.
    """
    if not formula or not formula.strip():
        return 0.0

    try:
        tree = parse_formula(formula)
        return _evaluate_node(tree, variables.to_variable_map(), formula)
    except FormulaError as e:
        logger.debug("formula_evaluation_failed", formula=formula, error_code=e.code, error=e.message)
        raise


# =============================================================================
# Validation
# =============================================================================


@dataclass
class FormulaValidation:
    """Result of validating a formula without evaluating it."""

    valid: bool = True
    required_variables: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        result: Dict[str, object] = {
            "valid": self.valid,
            "requiredVariables": list(self.required_variables),
        }
        if self.error is not None:
            result["error"] = self.error
        return result


def _collect_variables(tokens: List[Token]) -> List[str]:
    """Unique identifier names in order of first occurrence."""
    seen: Dict[str, None] = {}
    for token in tokens:
        if token.type == TokenType.VARIABLE:
            seen.setdefault(str(token.value), None)
    return list(seen)


def validate_formula(formula: Optional[str]) -> FormulaValidation:
    """Check a formula's syntax and list the variables it references.

    Failures are captured in the result rather than raised. Variables are
    reported whenever the formula tokenizes, even if parsing then fails.
    """
    if not formula or not formula.strip():
        return FormulaValidation(valid=True)

    try:
        tokens = tokenize(formula)
    except FormulaSyntaxError as e:
        return FormulaValidation(valid=False, error=e.message)

    required = _collect_variables(tokens)
    try:
        Parser(tokens, formula).parse()
    except FormulaSyntaxError as e:
        return FormulaValidation(valid=False, required_variables=required, error=e.message)

    return FormulaValidation(valid=True, required_variables=required)


# =============================================================================
# Display helpers and formula library
# =============================================================================


def format_formula(formula: str) -> str:
    """Format a formula for display, e.g. "EAVE*3/100" -> "EAVE × 3 ÷ 100"."""
    spaced = (
        formula.replace("+", " + ")
        .replace("-", " - ")
        .replace("*", " × ")
        .replace("/", " ÷ ")
    )
    return " ".join(spaced.split())


def get_known_variables() -> List[str]:
    """Variable names offered in the formula editor."""
    return [
        "SQ",
        "SF",
        "P",
        "EAVE",
        "R",
        "VAL",
        "HIP",
        "RAKE",
        "SKYLIGHT_COUNT",
        "CHIMNEY_COUNT",
        "PIPE_COUNT",
        "VENT_COUNT",
        "GUTTER_LF",
        "DS_COUNT",
        # Per-slope examples
        "F1SQ",
        "F1SF",
        "F1EAVE",
        "F2SQ",
        "F2SF",
        "F2EAVE",
    ]


COMMON_FORMULAS: Dict[str, str] = {
    # Area-based
    "squares": "SQ",
    "squares_with_waste_10": "SQ*1.10",
    "squares_with_waste_15": "SQ*1.15",
    # Linear measurements
    "eave": "EAVE",
    "eave_and_rake": "EAVE+RAKE",
    "ridge": "R",
    "ridge_and_hip": "R+HIP",
    "valley": "VAL",
    "perimeter": "P",
    # Ice & water shield (3ft from eave)
    "ice_and_water": "EAVE*3/100",
    "ice_and_water_valley": "VAL",
    # Feature-based
    "skylights": "SKYLIGHT_COUNT",
    "chimneys": "CHIMNEY_COUNT",
    "pipe_boots": "PIPE_COUNT",
    "vents": "VENT_COUNT",
    # Gutters
    "gutters": "GUTTER_LF",
    "downspouts": "DS_COUNT",
    "downspout_length": "DS_COUNT*10",
    "gutter_hangers": "GUTTER_LF/2",
}

_SUGGESTED_FORMULAS: Dict[str, str] = {
    "tear_off": "SQ",
    "underlayment": "SQ",
    "shingles": "SQ",
    "metal_roofing": "SQ",
    "tile_roofing": "SQ",
    "flat_roofing": "SQ",
    "flashing": "EAVE+RAKE",
    "ventilation": "R",
    "gutters": "GUTTER_LF",
    "skylights": "SKYLIGHT_COUNT",
    "chimneys": "CHIMNEY_COUNT",
    "disposal": "SQ",
}


def get_suggested_formula(category: str) -> Optional[str]:
    """Suggested default formula for a line item category, if any."""
    return _SUGGESTED_FORMULAS.get(getattr(category, "value", category))
