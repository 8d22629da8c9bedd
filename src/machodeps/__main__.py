import argparse
import pathlib
import sys

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from . import __version__, _config, _parser, _reporter
from ._errors import MachOError

DESCRIPTION = """\
Show the architectures, install name, library dependencies
and rpath entries of Mach-O executables and libraries.

Universal binaries are reported per architecture.
"""


def parse_arguments(argv):
    parser = argparse.ArgumentParser(
        prog=f"{sys.executable} -mmachodeps",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        type=pathlib.Path,
        help="Mach-O file to inspect",
    )
    parser.add_argument(
        "--config",
        "-c",
        dest="config",
        default=None,
        metavar="FILE",
        type=pathlib.Path,
        help="read the 'tool.machodeps' table from this TOML file",
    )
    parser.add_argument(
        "--json",
        dest="output_format",
        default=None,
        action="store_const",
        const=_config.OutputFormat.JSON,
        help="write the result as JSON.",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        default=None,
        action="store_false",
        help="don't use colors in the output.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        default=None,
        action="store_true",
        help="print more information while inspecting files.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    if not args.files:
        parser.print_usage(sys.stderr)
        sys.exit(1)

    if args.config is None:
        config = _config.ReportConfiguration()

    else:
        try:
            with open(args.config, "rb") as stream:
                contents = tomllib.load(stream)
        except OSError as exc:
            print(f"Cannot open {str(args.config)!r}: {exc}", file=sys.stderr)
            sys.exit(1)
        except tomllib.TOMLDecodeError as exc:
            print(f"{args.config}: {exc}", file=sys.stderr)
            sys.exit(1)

        try:
            config = _config.parse_pyproject(contents)
        except _config.ConfigurationError as exc:
            print(f"{args.config}: {exc}", file=sys.stderr)
            sys.exit(1)

    if args.output_format is not None:
        config.update(format=args.output_format)

    if args.color is not None:
        config.update(color=args.color)

    if args.verbose is not None:
        config.update(verbose=args.verbose)

    return args.files, config


def main(argv=None):
    files, config = parse_arguments(sys.argv[1:] if argv is None else argv)

    reporter = _reporter.Reporter(config)
    for path in files:
        reporter.trace(f"Inspecting {str(path)!r}")
        try:
            macho = _parser.parse_file(path)
        except (OSError, MachOError) as exc:
            # Failures are per file, continue with the next one.
            reporter.report_failure(str(path), exc)
            continue

        reporter.trace(
            f"{str(path)!r}: {macho.kind.value}, "
            f"architectures: {', '.join(macho.architectures()) or '-'}"
        )
        reporter.report_file(macho)

    reporter.finish()
    return 0


if __name__ == "__main__":
    sys.exit(main())
