import argparse
import sys

from circus.config import CONFIG
from circus.core.utils import configure_logging
from circus.main import play_match
from interface.protocol import ProtocolError, parse_cell, run, tokens


def main(argv=None):
    parser = argparse.ArgumentParser(prog="circus-agent", description="Circus board game agent")
    parser.add_argument(
        "--selfplay", action="store_true",
        help="read the house cells from stdin and let the agent play both sides",
    )
    args = parser.parse_args(argv)

    log = configure_logging(CONFIG)
    log.info("starting")

    if args.selfplay:
        reader = tokens(sys.stdin)
        houses = [parse_cell(t) for _, t in zip(range(CONFIG.game.houses_count), reader)]
        state = play_match(houses, CONFIG)
        print(state.board)
        print(f"steps {state.done_steps} free houses {len(state.board.free_houses)}")
        return 0

    try:
        run(sys.stdin, sys.stdout, CONFIG)
    except ProtocolError as e:
        # exit status stays 0 even when the setup is cut off
        log.error("%s", e)
    return 0


if __name__ == "__main__":
    sys.exit(main())
