# kswitch/cli.py

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from kswitch import __version__
from kswitch.config import load_config, resolve_kubeconfig_path, save_config
from kswitch.errors import KswitchError
from kswitch.handlers import Action, apply_context, apply_namespace
from kswitch.k8s_api import ClusterNamespaceSource, NamespaceSource
from kswitch.selection import Chooser, FzfChooser

# --- Logging Setup ---
logger = logging.getLogger("kswitch")
logger.setLevel(logging.WARNING)
handler = logging.StreamHandler()
formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s", "%H:%M:%S")
handler.setFormatter(formatter)
logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kswitch",
        description="Switch the current kubeconfig context or namespace.",
    )
    parser.add_argument(
        "action",
        type=Action,
        choices=list(Action),
        metavar="{" + ",".join(a.value for a in Action) + "}",
        help="What to switch.",
    )
    parser.add_argument(
        "item_name",
        nargs="?",
        default=None,
        help="Target name; pick interactively when omitted.",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Kubeconfig file to edit (default: first $KUBECONFIG entry, else ~/.kube/config).",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(
    action: Action,
    item_name: Optional[str],
    kubeconfig_path: Path,
    chooser: Chooser,
    namespace_source: Optional[NamespaceSource] = None,
) -> None:
    """Load the kubeconfig, apply one action and store it back."""
    config = load_config(kubeconfig_path)

    if action is Action.CONTEXT:
        config = apply_context(config, item_name, chooser)
    elif action is Action.NAMESPACE:
        if namespace_source is None:
            namespace_source = ClusterNamespaceSource(kubeconfig_path, config.current_context)
        config = apply_namespace(config, item_name, namespace_source, chooser)

    save_config(config, kubeconfig_path)


def main(argv: Optional[Sequence[str]] = None, env: Optional[Mapping[str, str]] = None) -> int:
    args = build_parser().parse_args(argv)
    env = os.environ if env is None else env

    if args.debug:
        logger.setLevel(logging.DEBUG)
        logger.debug("Debug mode activated")

    try:
        if args.kubeconfig is not None:
            kubeconfig_path = Path(args.kubeconfig).expanduser()
        else:
            kubeconfig_path = resolve_kubeconfig_path(env)
        logger.debug(f"Using kubeconfig {kubeconfig_path}")

        run(args.action, args.item_name, kubeconfig_path, FzfChooser.from_env(env))
    except KswitchError as e:
        logger.debug("Run failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0
