"""
Command-line entry point.

Expressions come from, in order of preference:
- the words given on the command line, joined together
- a file or archive passed with --file, one expression per line
- a single line read from standard input

Results are printed as "= <value>"; invalid expressions print an error
pointing at the offending character. Both cases exit with status 0.

Put "--" before an expression that starts with a minus sign, e.g.
`arithmetic-calculator -- -0.5(1+2)`, so it is not read as an option.
"""

import argparse
from pathlib import Path
import sys
from typing import List, Optional, TextIO

from pydantic import BaseModel, Field, FilePath, ValidationError

from arithmetic_calculator.calculator import calculate, to_operation_result
from arithmetic_calculator.common.loader import load_expressions
from arithmetic_calculator.common.logger import logger, set_verbose
from arithmetic_calculator.common.operations import OperationRequest


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : List[str]
        Words of the expression to evaluate, joined without separator.
    file_path : FilePath, optional
        Path to a file (or archive) containing one expression per line.
    output_path : Path, optional
        Where batch results are written. Derived from file_path when omitted.
    verbose : bool
        Enable debug logging.
    """

    expression: List[str] = Field(default_factory=list)
    file_path: Optional[FilePath] = None
    output_path: Optional[Path] = None
    verbose: bool = False


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate arithmetic expressions with + - * /, unary minus and parentheses"
    )
    parser.add_argument(
        "expression",
        nargs="*",
        help="Expression to evaluate; read from stdin when omitted",
    )
    parser.add_argument(
        "-f", "--file",
        dest="file_path",
        help="Evaluate every line of a .txt file or a .zip, .tar.xz or .7z archive",
    )
    parser.add_argument(
        "-o", "--output",
        dest="output_path",
        help="Where to write batch results (default: derived from --file)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, sys.argv[1:] when None
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    if args.expression and args.file_path:
        parser.error("give either an expression or --file, not both")
    if args.output_path and not args.file_path:
        parser.error("--output is only used together with --file")

    try:
        return CliArgs(
            expression=args.expression,
            file_path=args.file_path,
            output_path=args.output_path,
            verbose=args.verbose,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results path next to the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    stem = input_path.name[: len(input_path.name) - len("".join(input_path.suffixes))]
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def run_single(expression: str, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> bool:
    """
    Evaluate one expression and print its result or error.

    Results go to `out` and errors to `err`, stdout and stderr by default.

    :return: True if the expression was valid
    :rtype: bool
    """
    outcome = calculate(expression)
    if outcome.ok:
        print(f"= {outcome.result}", file=out or sys.stdout)
    else:
        print(outcome.message, file=err or sys.stderr)
    return outcome.ok


def run_batch(input_path: Path, output_path: Path) -> int:
    """
    Evaluate every expression of `input_path` and write one line per result.

    :param Path input_path: Text file or archive with one expression per line
    :param Path output_path: Destination of the results
    :return: Number of expressions that failed
    :rtype: int
    """
    expressions = load_expressions(input_path)
    logger.info(f"📂 Loaded {len(expressions)} expressions from {input_path}")

    failures = 0
    with output_path.open("w", encoding="utf-8") as f_out:
        for line_number, expression in enumerate(expressions, start=1):
            outcome = to_operation_result(OperationRequest(expression=expression))
            if outcome.error is not None:
                failures += 1
                logger.info(f"❌ Line {line_number}: {outcome.error}")
            f_out.write(outcome.to_line() + "\n")

    logger.info(f"✅ Results written to {output_path} ({failures} failed)")
    return failures


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function used by the console script.
    """
    cli_args = parse_args(argv)
    set_verbose(cli_args.verbose)

    if cli_args.file_path is not None:
        input_path = Path(cli_args.file_path)
        output_path = cli_args.output_path or build_output_path(input_path)
        try:
            run_batch(input_path, output_path)
        except ValueError as exc:
            build_argument_parser().error(str(exc))
        return

    if cli_args.expression:
        expression = "".join(cli_args.expression)
    else:
        expression = sys.stdin.readline()

    run_single(expression)


if __name__ == "__main__":
    main()
