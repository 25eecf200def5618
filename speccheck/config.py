import argparse
import logging
import os
import sys

from typing import List, Optional

# quiet mode only reports problems, debug mode additionally describes every generated vector
DEFAULT_LOG_LEVEL = logging.WARNING
DEBUG_LOG_LEVEL = logging.DEBUG
LOG_FORMAT = "%(levelname)s:%(name)s: %(message)s"

# upper bound (in seconds) for a single verifier call on a single vector
CALL_TIMEOUT = 10.0

# number of (backend, vector) calls running concurrently
MAX_WORKERS = 8

# number of candidate messages tried before a vector is considered unsatisfiable
MAX_MESSAGE_SEARCH = 4096

OUTPUT_DIR = os.path.abspath(os.path.join(os.curdir, "output"))
JSON_FILE_NAME = "cases.json"
TEXT_FILE_NAME = "cases.txt"
REPORT_FILE_NAME = "results.md"

DEBUG = False


def init_arg_parser():
    parser = argparse.ArgumentParser(
        prog="speccheck", description="Ed25519 edge-case vectors and verifier compliance matrix"
    )
    parser.add_argument("--debug", action="store_true",
                        help="print order class, canonicity and scalar range of every generated vector")
    parser.add_argument("--output-dir", type=str, help="directory the vector files and the report are written to")

    commands = parser.add_subparsers(dest="command")
    commands.required = True

    commands.add_parser("generate", help="write the test vectors as json and text files")

    run = commands.add_parser("run", help="run all registered verifiers against the test vectors")
    run.add_argument("--timeout", type=float, help="time limit in seconds for a single verifier call")
    run.add_argument("--workers", type=int, help="number of verifier calls running concurrently")
    run.add_argument("--backend", action="append", dest="backends", metavar="NAME",
                     help="only run the named backend (can be repeated)")
    run.add_argument("--no-files", action="store_true", help="only print the report, do not write any files")
    run.add_argument("--vectors", type=str, metavar="PATH",
                     help="run against a previously written cases.json instead of freshly generated vectors")
    return parser


def parse_cli_arguments(argv: Optional[List[str]] = None):
    global DEBUG
    global OUTPUT_DIR
    global CALL_TIMEOUT
    global MAX_WORKERS

    arg_parser = init_arg_parser()
    args = arg_parser.parse_args(argv)

    DEBUG = args.debug
    if args.output_dir:
        OUTPUT_DIR = os.path.abspath(args.output_dir)

    if getattr(args, "timeout", None) is not None:
        if args.timeout <= 0:
            arg_parser.error("--timeout must be positive")
        CALL_TIMEOUT = args.timeout

    if getattr(args, "workers", None) is not None:
        if args.workers < 1:
            arg_parser.error("--workers must be at least 1")
        MAX_WORKERS = args.workers

    level = DEBUG_LOG_LEVEL if DEBUG else DEFAULT_LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig leaves an already configured root logger untouched
    logging.getLogger().setLevel(level)
    logging.getLogger("config").debug("parsing cli arguments: argv=%s", str(argv if argv is not None else sys.argv))
    return args


def output_path(file_name: str) -> str:
    return os.path.join(OUTPUT_DIR, file_name)
