# kswitch/handlers.py

import logging
from enum import Enum
from typing import Optional

from kswitch.config import KubeConfig
from kswitch.errors import SelectionCancelled
from kswitch.k8s_api import NamespaceSource
from kswitch.selection import Chooser, Outcome, select

logger = logging.getLogger(__name__)


class Action(Enum):
    CONTEXT = "context"
    NAMESPACE = "namespace"


# ---------------- Context ---------------- #

def apply_context(
    config: KubeConfig,
    explicit_name: Optional[str],
    chooser: Chooser,
) -> KubeConfig:
    """
    Point current-context at `explicit_name`, or at the context the user picks.

    An explicit name is taken as-is, even if no entry carries it.
    """
    if explicit_name is not None:
        config.set_current_context(explicit_name)
        return config

    result = select(config.context_names(), chooser, current=config.current_context)
    if result.outcome is Outcome.CANCELLED:
        raise SelectionCancelled()

    # an empty pick is applied like any other label here
    config.set_current_context(result.label)
    logger.info(f"Switched to context {result.label!r}")
    return config


# ---------------- Namespace ---------------- #

def apply_namespace(
    config: KubeConfig,
    explicit_name: Optional[str],
    namespace_source: NamespaceSource,
    chooser: Chooser,
) -> KubeConfig:
    """Set the namespace of the current context, asking the cluster for choices when none is given."""
    if explicit_name is not None:
        config.set_namespace(explicit_name)
        return config

    labels = namespace_source.list_namespaces(config.current_namespace())
    result = select(labels, chooser)

    if result.outcome is Outcome.CANCELLED:
        raise SelectionCancelled()
    if result.outcome is Outcome.EMPTY:
        logger.info("No namespace selected")
        print("No namespace selected")
        return config

    config.set_namespace(result.label)
    logger.info(f"Switched namespace of {config.current_context!r} to {result.label!r}")
    return config
