# kswitch/utils/k8s_config.py

from pathlib import Path
from typing import Optional

from kubernetes import client, config


def load_core_v1(kubeconfig_path: Path, context: Optional[str] = None) -> client.CoreV1Api:
    """
    Build a CoreV1Api client from a specific kubeconfig file and context.

    The global kubernetes configuration is left alone; the client gets its
    own ApiClient. Raises kubernetes.config.ConfigException when the file
    cannot be used to reach a cluster.
    """
    api_client = config.new_client_from_config(
        config_file=str(kubeconfig_path),
        context=context or None,
        persist_config=False,
    )
    return client.CoreV1Api(api_client)
