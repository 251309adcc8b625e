"""Argument parsing functionality for hashlock."""

import argparse

from constants import Constants


def _non_negative_int(value):
    """argparse type for counts and depths that may be zero but not negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer: {value!r}")
    return number


def _add_common_options(parser, search=False):
    """Options shared by the resolve/find/enumerate actions.

    Defaults are left as None so config and environment values apply.
    """
    parser.add_argument("name", help="Package name, e.g. axios or @scope/pkg")
    parser.add_argument("version", help="Exact package version, e.g. 1.8.4")
    parser.add_argument("--registry",
                        dest="REGISTRY",
                        help="Registry base URL (default: %s)" % Constants.REGISTRY_URL_NPM,
                        action="store", type=str)
    parser.add_argument("--max-depth",
                        dest="MAX_DEPTH",
                        help="Maximum dependency depth to resolve (default: %d)" % Constants.DEFAULT_MAX_DEPTH,
                        action="store", type=_non_negative_int)
    if search:
        parser.add_argument("--max-trees",
                            dest="MAX_TREES",
                            help="Maximum number of candidate trees to explore (default: %d)"
                            % Constants.DEFAULT_MAX_TREES,
                            action="store", type=_non_negative_int)


def _add_algorithm_option(parser):
    parser.add_argument("-a", "--algorithm",
                        dest="ALGORITHM",
                        help="Hash algorithm (default: %s)" % Constants.DEFAULT_ALGORITHM,
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_ALGORITHMS)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="hashlock",
        description="hashlock - resolve npm dependency trees and find trees by hash",
        add_help=True,
    )
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)

    subparsers = parser.add_subparsers(dest="action", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve one tree (highest versions) and hash it")
    _add_common_options(resolve)
    _add_algorithm_option(resolve)
    output = resolve.add_mutually_exclusive_group()
    output.add_argument("--json",
                        dest="JSON",
                        help="Print the tree as JSON",
                        action="store_true")
    output.add_argument("--flat",
                        dest="FLAT",
                        help="Print a flat name -> version mapping as JSON",
                        action="store_true")

    find = subparsers.add_parser("find", help="Search alternative trees for one matching a hash")
    _add_common_options(find, search=True)
    find.add_argument("target_hash", help="Hex digest to search for")
    _add_algorithm_option(find)
    find.add_argument("--json",
                      dest="JSON",
                      help="Print the matching tree as JSON",
                      action="store_true")

    enumerate_cmd = subparsers.add_parser("enumerate", help="Print every candidate tree and its hash")
    _add_common_options(enumerate_cmd, search=True)
    _add_algorithm_option(enumerate_cmd)

    hash_cmd = subparsers.add_parser("hash", help="Hash a tree stored as JSON")
    hash_cmd.add_argument("tree_file", help="Path to a JSON tree ('-' for stdin)")
    _add_algorithm_option(hash_cmd)

    return parser.parse_args(argv)
