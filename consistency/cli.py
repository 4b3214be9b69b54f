import functools
import logging
import sys
from pathlib import Path

import fncli

from . import config
from .core.errors import ConsistencyError
from .lib import ansi


@functools.cache
def _discover() -> None:
    fncli.autodiscover(Path(__file__).parent, "consistency")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.get_log_level(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(args: list[str]) -> int:
    _discover()
    argv = ["consistency", *args]
    try:
        return fncli.dispatch(argv)
    except ConsistencyError as e:
        sys.stderr.write(f"{e}\n")
        return 1


def main():
    user_args = sys.argv[1:]
    verbose = any(a in ("-v", "--verbose") for a in user_args)
    user_args = [a for a in user_args if a not in ("-v", "--verbose")]
    _setup_logging(verbose)
    if not sys.stdout.isatty():
        ansi.use(ansi.PLAIN)
    sys.exit(run(user_args or ["grid"]))


if __name__ == "__main__":
    main()
