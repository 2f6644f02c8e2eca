"""Error types with formatted source context."""

from __future__ import annotations

from texlex.tokens import Span


class ExpansionError(Exception):
    """Raised when a macro definition is rejected."""

    description = "invalid macro definition"

    def __init__(self, message: str | None = None, span: Span | None = None) -> None:
        self.message = message or self.description
        self.span = span
        super().__init__(self.message)

    def format(self, source: str | None = None, filename: str = "input.tex") -> str:
        if self.span is None:
            return f"error: {self.message}\n  --> {filename}"

        col = self.span.start + 1
        header = f"error: {self.message}\n"
        line_num = str(self.span.line)
        gutter_width = len(line_num) + 1
        location = f"{' ' * gutter_width}--> {filename}:{self.span.line}:{col}"
        if source is None:
            return header + location

        lines = source.splitlines(keepends=True)
        line_idx = self.span.line - 1
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the span when its end is known, otherwise one character
        if self.span.end is not None:
            underline_len = max(1, self.span.end - self.span.start + 1)
        else:
            underline_len = 1

        pad = " " * (col - 1)
        carets = "^" * underline_len

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            header
            + location
            + "\n"
            + f"{blank_gutter}\n"
            + f"{line_gutter} {source_line}\n"
            + f"{blank_gutter} {pad}{carets}"
        )


class InvalidDefName(ExpansionError):
    description = "the first argument of a macro definition must be a control sequence"


class ExplicitBracesInParameterText(ExpansionError):
    description = "macro parameter text cannot contain explicit groups"


class InvalidParameterNumber(ExpansionError):
    description = "macro parameters must be digits 1-9 with category code 12"


class NonConsecutiveParameterNumber(ExpansionError):
    description = "macro parameters must be numbered consecutively"


class ConfigError(Exception):
    """Raised when a configuration file holds an invalid value."""

    def __init__(self, message: str, key: str) -> None:
        self.message = message
        self.key = key
        super().__init__(f"{key}: {message}")
