# kswitch/k8s_api.py

import logging
from pathlib import Path
from typing import Optional, Protocol

from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from kswitch.errors import RemoteListingFailed
from kswitch.selection import mark_candidates
from kswitch.utils.k8s_config import load_core_v1

logger = logging.getLogger(__name__)


class NamespaceSource(Protocol):
    def list_namespaces(self, current: Optional[str]) -> list[str]:
        """Return namespace labels with `current` marked."""


# ---------------- Cluster Namespace Listing ---------------- #

class ClusterNamespaceSource:
    """Lists namespaces visible to the credentials of one kubeconfig context."""

    def __init__(self, kubeconfig_path: Path, context: Optional[str] = None):
        self.kubeconfig_path = kubeconfig_path
        self.context = context

    def get_namespaces(self) -> list[str]:
        """List all namespace names, in the order the API returns them"""
        try:
            v1 = load_core_v1(self.kubeconfig_path, self.context)
            namespaces = v1.list_namespace()
        except ApiException as e:
            raise RemoteListingFailed(f"Failed to list namespaces: {e.reason}") from e
        except ConfigException as e:
            raise RemoteListingFailed(f"Failed to load kubeconfig for context {self.context!r}: {e}") from e
        except Exception as e:
            raise RemoteListingFailed(f"Unexpected error while listing namespaces: {str(e)}") from e

        names = [ns.metadata.name for ns in namespaces.items]
        logger.debug(f"Cluster returned {len(names)} namespace(s)")
        return names

    def list_namespaces(self, current: Optional[str]) -> list[str]:
        return mark_candidates(self.get_namespaces(), current)
