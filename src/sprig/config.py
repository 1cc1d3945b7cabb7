"""
Sprig Scanner - Configuration
=============================

Scanner options and their environment overrides. Configuration can
come from:
- Default values (defined here)
- Command-line flags (see sprig.cli.sprig_lex)
- Environment variables

Environment Variables
---------------------
| Variable        | Option             | Example         |
|-----------------|--------------------|-----------------|
| SPRIG_LONE_CR   | lone_cr_is_newline | 0, 1, no, true  |
| SPRIG_INT_BITS  | int_bits           | 32              |
"""

from dataclasses import dataclass
import os

from sprig.errors import ConfigError


MIN_INT_BITS = 8
MAX_INT_BITS = 1024

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ScannerOptions:
    """
    Scanner configuration options.

    Attributes:
        filename: Name reported in diagnostics (default: "<input>")
        lone_cr_is_newline: Treat a '\\r' that is not followed by '\\n'
                            as a line terminator. When False, a lone
                            '\\r' is an unrecognized character.
        int_bits: Width of the signed integer range that int literals
                  must fit in (default: 64)
    """
    filename: str = "<input>"
    lone_cr_is_newline: bool = True
    int_bits: int = 64

    def __post_init__(self):
        if not MIN_INT_BITS <= self.int_bits <= MAX_INT_BITS:
            raise ConfigError(
                f"int_bits must be between {MIN_INT_BITS} and {MAX_INT_BITS}, "
                f"got {self.int_bits}"
            )

    @property
    def int_min(self) -> int:
        return -(1 << (self.int_bits - 1))

    @property
    def int_max(self) -> int:
        return (1 << (self.int_bits - 1)) - 1

    @classmethod
    def from_env(cls, filename: str = "<input>") -> "ScannerOptions":
        """
        Create ScannerOptions from environment variables.

        Environment variables (all optional):
            SPRIG_LONE_CR: Whether a lone carriage return ends a line
            SPRIG_INT_BITS: Signed integer width for int literals

        Raises:
            ConfigError: If a variable holds an unusable value
        """
        kwargs = {"filename": filename}

        if lone_cr := os.environ.get("SPRIG_LONE_CR"):
            value = lone_cr.strip().lower()
            if value in _TRUE_VALUES:
                kwargs["lone_cr_is_newline"] = True
            elif value in _FALSE_VALUES:
                kwargs["lone_cr_is_newline"] = False
            else:
                raise ConfigError(f"invalid SPRIG_LONE_CR value: {lone_cr!r}")

        if int_bits := os.environ.get("SPRIG_INT_BITS"):
            try:
                kwargs["int_bits"] = int(int_bits)
            except ValueError:
                raise ConfigError(
                    f"invalid SPRIG_INT_BITS value: {int_bits!r}"
                ) from None

        return cls(**kwargs)
