"""Macro definitions — parameter text and replacement text validation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from texlex.category import Category
from texlex.errors import (
    ExplicitBracesInParameterText,
    InvalidDefName,
    InvalidParameterNumber,
    NonConsecutiveParameterNumber,
)
from texlex.tokens import Character, ControlSequence, Other, Parameter, Span, Token

_BRACES = frozenset({Category.GROUP_OPEN, Category.GROUP_CLOSE})


@dataclass(frozen=True, slots=True)
class Undelimited:
    """Parameter taking the next token or balanced group."""

    number: int


@dataclass(frozen=True, slots=True)
class Delimited:
    """Parameter whose argument runs up to the given delimiter tokens."""

    number: int
    delimiter: tuple[Token, ...]


MacroParameter = Undelimited | Delimited


@dataclass(frozen=True, slots=True)
class Macro:
    """A validated macro definition."""

    control_sequence: str
    parameter_text: tuple[Token, ...]
    replacement_text: tuple[Token, ...]
    location: Span | None

    @property
    def prefix(self) -> tuple[Token, ...]:
        """Literal tokens that must precede the first argument."""
        prefix: list[Token] = []
        for token in self.parameter_text:
            if isinstance(token, Parameter):
                break
            prefix.append(token)
        return tuple(prefix)

    @property
    def parameters(self) -> tuple[MacroParameter, ...]:
        params: list[MacroParameter] = []
        number: int | None = None
        delimiter: list[Token] = []

        for token in self.parameter_text:
            if isinstance(token, Parameter):
                if number is not None:
                    params.append(_make_parameter(number, delimiter))
                number = token.index
                delimiter = []
            elif number is not None:
                delimiter.append(token)

        if number is not None:
            params.append(_make_parameter(number, delimiter))
        return tuple(params)


def _make_parameter(number: int, delimiter: list[Token]) -> MacroParameter:
    if delimiter:
        return Delimited(number, tuple(delimiter))
    return Undelimited(number)


def _is_parameter_char(token: Token) -> bool:
    return isinstance(token, Character) and token.category == Category.PARAMETER


def _resolve_parameters(
    tokens: Iterable[Token], span: Span | None, allow_braces: bool
) -> tuple[Token, ...]:
    """Replace `#n` pairs with Parameter tokens and `##` with a literal `#`."""
    result: list[Token] = []
    after_marker = False

    for token in tokens:
        if after_marker:
            after_marker = False
            if _is_parameter_char(token):
                result.append(token)
            elif (
                isinstance(token, Character)
                and token.category == Category.OTHER
                and token.value in "123456789"
            ):
                result.append(Parameter(int(token.value)))
            else:
                raise InvalidParameterNumber(span=span)
        elif _is_parameter_char(token):
            after_marker = True
        elif isinstance(token, Character) and token.category in _BRACES and not allow_braces:
            raise ExplicitBracesInParameterText(span=span)
        else:
            result.append(token)

    if after_marker:
        raise InvalidParameterNumber("parameter marker at end of token list", span)
    return tuple(result)


def _check_numbering(
    parameter_text: tuple[Token, ...], replacement_text: tuple[Token, ...], span: Span | None
) -> None:
    declared = 0
    for token in parameter_text:
        if isinstance(token, Parameter):
            if token.index != declared + 1:
                raise NonConsecutiveParameterNumber(
                    f"expected parameter #{declared + 1}, got #{token.index}", span
                )
            declared = token.index

    for token in replacement_text:
        if isinstance(token, Parameter) and token.index > declared:
            raise InvalidParameterNumber(
                f"illegal parameter number #{token.index} in replacement text", span
            )


def define(
    control_sequence: Token,
    parameter_text: Iterable[Token],
    replacement_text: Iterable[Token],
    *,
    allow_replacement_braces: bool = False,
    strict_parameter_numbers: bool = False,
) -> Macro:
    """Build a Macro from the three parts of a definition.

    Raises an ExpansionError subclass when the definition is malformed.
    Explicit braces are rejected in the replacement text too unless
    *allow_replacement_braces* is set. With *strict_parameter_numbers*,
    parameters must be numbered 1, 2, 3, ... and the replacement text may
    only refer to declared parameters.
    """
    if not isinstance(control_sequence, ControlSequence):
        span = control_sequence.span if isinstance(control_sequence, Other) else None
        raise InvalidDefName(span=span)

    span = control_sequence.span
    params = _resolve_parameters(parameter_text, span, allow_braces=False)
    replacement = _resolve_parameters(replacement_text, span, allow_braces=allow_replacement_braces)

    if strict_parameter_numbers:
        _check_numbering(params, replacement, span)

    location = Span(span.line, span.start) if span is not None else None
    return Macro(control_sequence.name, params, replacement, location)
