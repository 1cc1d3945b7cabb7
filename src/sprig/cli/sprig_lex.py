"""
sprig-lex - Tokenizer Command-Line Interface
============================================

This module implements the command-line interface for the Sprig
scanner. It reads source files, tokenizes them and prints the token
stream, which is mostly useful for debugging the language front end.

Usage Examples
--------------
Print the tokens of a file:
    $ sprig-lex main.sp

Several files, without end-of-line tokens:
    $ sprig-lex --no-eol a.sp b.sp

JSON output:
    $ sprig-lex --format json main.sp

Reject lone carriage returns:
    $ sprig-lex --strict-cr main.sp

Exit Codes
----------
0 - Success
1 - Lexical error in at least one file
2 - Invalid arguments, configuration, or unreadable input
3 - Internal error
"""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from sprig import __version__
from sprig.cli.errors import handle_cli_exception
from sprig.config import MAX_INT_BITS, MIN_INT_BITS, ScannerOptions
from sprig.errors import ErrorCollector, LexicalError
from sprig.lexer import tokenize
from sprig.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Output Formatting
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def read_source(path: Path) -> str:
    """Read a source file without translating its line endings."""
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def format_token(token: Token) -> str:
    """Format one token as 'line:column  KIND  value'."""
    position = f"{token.line}:{token.column}"
    if token.kind is TokenKind.EOF:
        return f"{position:<8}{token.kind.name}"
    if token.kind is TokenKind.EOL:
        return f"{position:<8}{token.kind.name:<16}{token.lexeme!r}"
    return f"{position:<8}{token.kind.name:<16}{token.value!r}"


def token_to_dict(token: Token) -> dict:
    """Convert a token to a JSON-serializable dictionary."""
    entry = {
        "kind": token.kind.name,
        "lexeme": token.lexeme,
        "line": token.line,
        "column": token.column,
    }
    if token.kind in (TokenKind.INT_LITERAL, TokenKind.FLOAT_LITERAL):
        entry["value"] = token.value
    return entry


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text)",
)
@click.option(
    "--no-eol",
    is_flag=True,
    help="Leave end-of-line tokens out of the listing",
)
@click.option(
    "--strict-cr",
    is_flag=True,
    help="Report a carriage return not followed by a newline as an error",
)
@click.option(
    "--int-bits",
    type=click.IntRange(MIN_INT_BITS, MAX_INT_BITS),
    default=None,
    help="Signed width that integer literals must fit in (default: 64)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="sprig-lex")
def main(
    input_files: tuple[Path, ...],
    output_format: str,
    no_eol: bool,
    strict_cr: bool,
    int_bits: Optional[int],
    verbose: bool,
) -> None:
    """
    Tokenize Sprig source files and print the token stream.

    INPUT_FILES are one or more source files. Each file is scanned
    independently; scanning a file stops at its first lexical error,
    and all errors are reported together at the end.

    \b
    Examples:
        sprig-lex main.sp               # Text listing
        sprig-lex -f json main.sp       # JSON listing
        sprig-lex --no-eol a.sp b.sp    # Hide end-of-line tokens

    Environment variables SPRIG_LONE_CR and SPRIG_INT_BITS set the
    defaults that --strict-cr and --int-bits override.
    """
    setup_logging(verbose)

    try:
        base_options = ScannerOptions.from_env()
        if strict_cr:
            base_options = replace(base_options, lone_cr_is_newline=False)
        if int_bits is not None:
            base_options = replace(base_options, int_bits=int_bits)

        collector = ErrorCollector()
        results = []

        for path in input_files:
            logger.debug(f"Tokenizing {path}")
            source = read_source(path)
            options = replace(base_options, filename=str(path))

            try:
                tokens = tokenize(source, options=options)
            except LexicalError as e:
                collector.add(e)
                if collector.should_stop():
                    break
                continue

            if no_eol:
                tokens = [t for t in tokens if t.kind is not TokenKind.EOL]
            results.append((path, tokens))

        if output_format.lower() == "json":
            document = [
                {"file": str(path), "tokens": [token_to_dict(t) for t in tokens]}
                for path, tokens in results
            ]
            click.echo(json.dumps(document, indent=2))
        else:
            for path, tokens in results:
                if len(input_files) > 1:
                    click.echo(f"==> {path} <==")
                for token in tokens:
                    click.echo(format_token(token))

        collector.raise_if_errors()

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
