from . import PROGRAM_VERSION, DEFAULT_CONFIG, Line, calculate
from .logging_config import setup_logging
import argparse
import logging
import sys


def read_document(path):
    with open(path, encoding="utf-8") as f:
        return [Line(position=i, expression=text) for i, text in enumerate(f.read().splitlines())]


def render(lines, color=False, error_marker=DEFAULT_CONFIG.error_marker):
    width = max((len(line.expression) for line in lines), default=0)
    out = ""
    for line in lines:
        result = line.result
        if color and result:
            code = "31;1" if result == error_marker else "32;1"
            result = f"\033[{code}m{result}\033[0m"
        out += f"{line.expression.ljust(width)}  => {result}\n" if result else f"{line.expression}\n"
    return out


def build_parser():
    parser = argparse.ArgumentParser(
        prog="linecalc",
        description="Line calculator: evaluates one expression per line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  linecalc budget.txt
  linecalc budget.txt -O budget.out
  linecalc budget.txt -D -L debug.log
        """,
    )
    parser.add_argument("filepath", help="Input document, one expression per line")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"linecalc {PROGRAM_VERSION}",
        help="prints the linecalc version number and exits",
    )
    parser.add_argument(
        "-O", "--output", metavar="FILE", help="write results to FILE instead of printing"
    )
    parser.add_argument("-D", "--debug", action="store_true", help="enable debug output")
    parser.add_argument("-V", "--verbose", action="store_true", help="enable verbose output")
    parser.add_argument("-L", "--logfile", metavar="FILE", help="write logs to FILE")
    parser.add_argument("--error-marker", metavar="TEXT", help="result shown for failing lines")
    parser.add_argument("--digits", type=int, metavar="N", help="fractional digits for non-integer results")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING
    logger = setup_logging(level, args.logfile)

    try:
        config = DEFAULT_CONFIG.with_overrides(
            error_marker=args.error_marker, fraction_digits=args.digits
        )
        lines = read_document(args.filepath)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("cannot read %s: %s", args.filepath, e)
        print(f"\033[31;1mError: cannot read '{args.filepath}'\033[0m", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"\033[31;1mError: {e}\033[0m", file=sys.stderr)
        return 1

    results = calculate(lines, config)

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(render(results))
        except OSError as e:
            logger.error("cannot write %s: %s", args.output, e)
            print(f"\033[31;1mError: cannot write '{args.output}'\033[0m", file=sys.stderr)
            return 1
        logger.info("written to %s", args.output)
    else:
        print(render(results, color=sys.stdout.isatty(), error_marker=config.error_marker), end="", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
