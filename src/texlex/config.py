"""TOML configuration for tokenizer and macro-definition settings."""

from __future__ import annotations

import tomllib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from texlex.category import Category, default_table
from texlex.errors import ConfigError
from texlex.macros import Macro, define
from texlex.tokenizer import DEFAULT_END_OF_LINE_CHAR, Tokenizer
from texlex.tokens import Token

CONFIG_FILENAME = "texlex.toml"


@dataclass(frozen=True, slots=True)
class Config:
    """Resolved settings."""

    end_of_line_char: int = DEFAULT_END_OF_LINE_CHAR
    catcodes: tuple[tuple[int, Category], ...] = ()
    allow_replacement_braces: bool = False
    strict_parameter_numbers: bool = False

    def build_tokenizer(self, lines: Iterable[str]) -> Tokenizer:
        table = default_table()
        for code, category in self.catcodes:
            table.assign_single(code, category)
        return Tokenizer(lines, table=table, end_of_line_char=self.end_of_line_char)

    def define(
        self,
        control_sequence: Token,
        parameter_text: Iterable[Token],
        replacement_text: Iterable[Token],
    ) -> Macro:
        return define(
            control_sequence,
            parameter_text,
            replacement_text,
            allow_replacement_braces=self.allow_replacement_braces,
            strict_parameter_numbers=self.strict_parameter_numbers,
        )


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def parse_category(value: Any, key: str) -> Category:
    """Accept a catcode number (0-15) or a category name such as "letter"."""
    if isinstance(value, bool):
        raise ConfigError(f"expected a category, got {value!r}", key)
    if isinstance(value, int):
        try:
            return Category(value)
        except ValueError:
            raise ConfigError(f"catcode must be 0-15, got {value}", key) from None
    if isinstance(value, str):
        try:
            return Category[value.strip().upper().replace("-", "_").replace(" ", "_")]
        except KeyError:
            raise ConfigError(f"unknown category {value!r}", key) from None
    raise ConfigError(f"expected a category, got {value!r}", key)


def _parse_code_point(key: str) -> int:
    if len(key) == 1:
        return ord(key)
    if key.upper().startswith("U+"):
        try:
            code = int(key[2:], 16)
        except ValueError:
            raise ConfigError("invalid code point", f"catcodes.{key}") from None
        if 0 <= code <= 0x10FFFF:
            return code
    raise ConfigError("expected a single character or U+XXXX", f"catcodes.{key}")


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError("expected a table", name)
    return section


def _bool(section: dict[str, Any], name: str, key: str, default: bool) -> bool:
    value = section.get(name, default)
    if not isinstance(value, bool):
        raise ConfigError(f"expected true or false, got {value!r}", key)
    return value


def resolve_config(config: dict[str, Any]) -> Config:
    """Validate a loaded config dict into a Config."""
    tokenizer = _section(config, "tokenizer")
    end_of_line_char = tokenizer.get("end_of_line_char", DEFAULT_END_OF_LINE_CHAR)
    if isinstance(end_of_line_char, bool) or not isinstance(end_of_line_char, int):
        raise ConfigError(
            f"expected an integer, got {end_of_line_char!r}", "tokenizer.end_of_line_char"
        )

    catcodes: list[tuple[int, Category]] = []
    for key, value in _section(config, "catcodes").items():
        catcodes.append((_parse_code_point(key), parse_category(value, f"catcodes.{key}")))

    macros = _section(config, "macros")
    return Config(
        end_of_line_char=end_of_line_char,
        catcodes=tuple(catcodes),
        allow_replacement_braces=_bool(
            macros, "allow_replacement_braces", "macros.allow_replacement_braces", False
        ),
        strict_parameter_numbers=_bool(
            macros, "strict_parameter_numbers", "macros.strict_parameter_numbers", False
        ),
    )
