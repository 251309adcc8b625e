"""hashlock - resolve npm dependency trees and find trees by hash

    Returns:
        int: Exit code
"""
import json
import logging
import sys

import yaml

from args import parse_args
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes, apply_config, apply_env_overrides, _load_yaml_config
from errors import MetadataFetchError, UnsupportedAlgorithmError, VersionNotFoundError
from hashlock_api import (
    find_tree_by_hash,
    generate_all_possible_trees,
    hash_tree,
    resolve_and_hash,
    serialize_tree,
    tree_to_flat_structure,
)
from versioning.models import DependencyNode

logger = logging.getLogger(__name__)


def load_configuration(config_path=None):
    """Apply YAML config then environment overrides onto Constants.

    Returns:
        ExitCodes.SUCCESS, or ExitCodes.FILE_ERROR if the config is unusable.
    """
    try:
        cfg = _load_yaml_config(config_path)
    except (OSError, yaml.YAMLError) as e:
        logging.error("Unable to load configuration: %s", e)
        return ExitCodes.FILE_ERROR
    apply_config(cfg)
    apply_env_overrides()
    return ExitCodes.SUCCESS


def load_tree_file(file_name):
    """Load a JSON tree from a file path or '-' for stdin."""
    if file_name == "-":
        return DependencyNode.from_dict(json.load(sys.stdin))
    with open(file_name, encoding="utf-8") as file:
        return DependencyNode.from_dict(json.load(file))


def run_resolve(args):
    result = resolve_and_hash(
        args.name, args.version,
        algorithm=args.ALGORITHM, registry=args.REGISTRY, max_depth=args.MAX_DEPTH,
    )
    if args.FLAT:
        print(json.dumps(tree_to_flat_structure(result.tree), indent=2))
    elif args.JSON:
        print(json.dumps({"hash": result.hash, "tree": result.tree.to_dict()}, indent=2))
    else:
        print(result.hash)
        print(serialize_tree(result.tree))
    return ExitCodes.SUCCESS


def run_find(args):
    result = find_tree_by_hash(
        args.name, args.version, args.target_hash,
        algorithm=args.ALGORITHM, max_trees=args.MAX_TREES,
        registry=args.REGISTRY, max_depth=args.MAX_DEPTH,
    )
    if result is None:
        print("No matching tree found")
        return ExitCodes.NOT_FOUND
    if args.JSON:
        print(json.dumps({
            "hash": result.hash,
            "treesExplored": result.trees_explored,
            "tree": result.tree.to_dict(),
        }, indent=2))
    else:
        print("Found matching tree!")
        print(f"Trees explored: {result.trees_explored}")
        print(f"Hash: {result.hash}")
        print(serialize_tree(result.tree))
    return ExitCodes.SUCCESS


def run_enumerate(args):
    algorithm = args.ALGORITHM or Constants.DEFAULT_ALGORITHM
    count = 0
    for tree in generate_all_possible_trees(
        args.name, args.version,
        max_trees=args.MAX_TREES, registry=args.REGISTRY, max_depth=args.MAX_DEPTH,
    ):
        count += 1
        print(hash_tree(tree, algorithm))
        print(serialize_tree(tree))
        print()
    logging.info("Enumerated %d candidate trees.", count)
    return ExitCodes.SUCCESS


def run_hash(args):
    try:
        tree = load_tree_file(args.tree_file)
    except (OSError, ValueError, AttributeError) as e:
        logging.error("Unable to read tree file %s: %s", args.tree_file, e)
        return ExitCodes.FILE_ERROR
    print(hash_tree(tree, args.ALGORITHM or Constants.DEFAULT_ALGORITHM))
    return ExitCodes.SUCCESS


ACTIONS = {
    "resolve": run_resolve,
    "find": run_find,
    "enumerate": run_enumerate,
    "hash": run_hash,
}


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    code = load_configuration(args.CONFIG)
    if code is not ExitCodes.SUCCESS:
        return code.value

    try:
        code = ACTIONS[args.action](args)
    except MetadataFetchError as e:
        logging.error("%s", e)
        code = ExitCodes.CONNECTION_ERROR
    except (VersionNotFoundError, UnsupportedAlgorithmError) as e:
        logging.error("%s", e)
        code = ExitCodes.RESOLUTION_ERROR
    return code.value


if __name__ == "__main__":
    sys.exit(main())
