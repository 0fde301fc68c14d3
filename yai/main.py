"""Command-line entry point for yai: interprets a .yai file, or runs in command-line mode when no file is given.
Also uses the error handling context manager. Called from the `yai` console script.
"""

import argparse
import sys

from yai.lang.error import ErrorHandler
from yai.lang.session import Session
from yai.lang.shell import Shell

RECURSION_LIMIT = 10000


def main(argv=None):
    """Runs yai interpreter. Called from yai console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="yai", description="yet another interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", action="store_true", help="print each parsed statement before running it")
        parser.add_argument("--recursion-limit", type=int, default=RECURSION_LIMIT,
                            help=f"maximum nesting depth of calls and expressions (default: {RECURSION_LIMIT})")
        args = parser.parse_args(argv)

        sys.setrecursionlimit(args.recursion_limit)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, show_ast=args.ast)
            sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_ast=args.ast)).cmdloop()


if __name__ == "__main__":
    main()
