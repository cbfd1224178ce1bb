import argparse
import logging
import sys

from . import settings
from .algorithms import Algorithm
from .config import load_config
from .errors import SortSonicError
from .logging_setup import setup_logging

logger = logging.getLogger("sortsonic")


def build_parser():
    p = argparse.ArgumentParser(prog="sortsonic",
                                description="Animated, sonified sorting algorithms.")
    p.add_argument("--config", help="JSON file overriding the default settings")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    p.add_argument("--log-file", help="also write the log to this file")
    p.add_argument("--seed", type=int, help="seed for the random arrays")
    p.add_argument("--headless", metavar="ALGORITHM",
                   help="sort once without a window: " + ", ".join(a.key for a in Algorithm))
    p.add_argument("--size", default=str(settings.DEFAULT_SIZE), help="array size (headless)")
    p.add_argument("--speed", type=int, default=settings.SPEED_MAX,
                   help=f"speed {settings.SPEED_MIN}-{settings.SPEED_MAX} (headless)")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except SortSonicError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return 2

    log = config["logging"]
    setup_logging(args.log_level or log["level"], args.log_file or log["file"])
    if args.seed is not None:
        config["sort"]["seed"] = args.seed

    if args.headless:
        from .app import run_headless
        try:
            result = run_headless(args.headless, args.size, args.speed, config["sort"]["seed"])
        except (SortSonicError, KeyError) as e:
            logger.error("%s", e)
            return 2
        print(" ".join(str(v) for v in result))
        return 0

    from .app import App
    App(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
