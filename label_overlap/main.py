import argparse
import logging
import sys
import time

from .config import (
    OverlapConfig,
    configure_logging,
    verbose_from_env,
    EXIT_OK,
    EXIT_USAGE
)
from .core.driver import run
from .data.loader import load_volume
from .errors import OverlapError, VolumeMismatchError
from .report import ResultLog, ReportEmitter

PROG = "label-overlap"

# first letters of the recognised options
OPTION_LETTERS = ("q", "a", "l", "u", "?")

logger = logging.getLogger(__name__)


class _UsageAction(argparse.Action):
    """Prints usage to stdout and exits successfully."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help()
        parser.exit(EXIT_OK)


class OverlapArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose failures exit with the tool's usage status."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = OverlapArgumentParser(
        prog=PROG,
        usage="%(prog)s [options] <volume 1> <volume 2> [label ...]",
        description="Voxel-count difference and overlap of labels between two labelmaps.",
        add_help=False
    )
    parser.add_argument("-q", dest="quiet", action="store_true",
                        help="suppress per-label output")
    parser.add_argument("-a", dest="all_labels", action="store_true",
                        help="compute overlap of all labels 0..999")
    parser.add_argument("-l", dest="log_path", metavar="<path>",
                        help="append results to <path>")
    parser.add_argument("-u", "-?", action=_UsageAction,
                        help="print this message and exit")
    parser.add_argument("inputs", nargs="*", metavar="<volume> / <label>",
                        help="two labelmaps followed by the label ids to compare")
    return parser


def split_leading_flags(argv):
    """
    Separates the leading option tokens from the positional arguments.

    Options are recognised by their first letter only, in either case, so
    `-quiet` and `-Q` both mean `-q`. Scanning stops at the first token not
    starting with '-'; everything from there on is positional. `-l` takes
    the following token as its path.

    Returns:
        tuple: (normalised option tokens, positional tokens, unknown option or None)
    """
    flags = []
    i = 0
    while i < len(argv) and argv[i].startswith("-"):
        token = argv[i]
        letter = token[1:2].lower()
        if letter not in OPTION_LETTERS:
            return flags, [], token
        if letter == "l":
            if i + 1 >= len(argv):
                flags.append("-l")
                break
            # attached form keeps a path starting with '-' from reading as an option
            flags.append(f"-l{argv[i + 1]}")
            i += 2
            continue
        flags.append(f"-{letter}")
        i += 1
        if letter in ("u", "?"):
            break
    return flags, argv[i:], None


def parse_flags(argv):
    """
    Parses the command line into an OverlapConfig.

    Exits with status 1 on an unknown option, fewer than two volumes or a
    label id that is not an integer, and with status 0 after printing usage.
    """
    parser = build_parser()
    flags, inputs, unknown = split_leading_flags(list(argv))
    if unknown is not None:
        print(f"unknown option {unknown}", file=sys.stderr)
        parser.exit(EXIT_USAGE)

    args = parser.parse_args(flags)

    if len(inputs) < 2:
        parser.print_help()
        parser.exit(EXIT_USAGE)

    label_ids = []
    for token in inputs[2:]:
        try:
            label_ids.append(int(token))
        except ValueError:
            parser.error(f"invalid label id: {token!r}")

    if args.log_path:
        logger.info("logging results to %s", args.log_path)

    return OverlapConfig(
        volume_1=inputs[0],
        volume_2=inputs[1],
        label_ids=label_ids,
        quiet=args.quiet,
        all_labels=args.all_labels,
        log_path=args.log_path,
        verbose=verbose_from_env()
    )


def main(argv=None):
    """
    Runs one comparison and returns the process exit status.

    Args:
        argv (list, optional): Arguments without the program name.
            Defaults to sys.argv[1:].
    """
    verbose = verbose_from_env()
    configure_logging('DEBUG' if verbose else 'INFO')

    start = time.perf_counter()
    config = parse_flags(sys.argv[1:] if argv is None else argv)

    emitter = None
    try:
        volume_1 = load_volume(config.volume_1)
        volume_2 = load_volume(config.volume_2)
        if volume_1.shape != volume_2.shape:
            raise VolumeMismatchError(volume_1.shape, volume_2.shape)

        log = ResultLog(config.log_path).open() if config.log_path else None
        emitter = ReportEmitter(quiet=config.quiet, log=log)
        run(volume_1, volume_2, config, emitter)
    except OverlapError as exc:
        logger.error("%s: %s", PROG, exc)
        return exc.exit_code
    finally:
        if emitter is not None:
            emitter.close()

    msec = int((time.perf_counter() - start) * 1000)
    minutes, seconds = divmod(round(msec / 1000), 60)
    if config.verbose:
        logger.info("overlap calculation took %d minutes and %d seconds.", minutes, seconds)

    return EXIT_OK


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
