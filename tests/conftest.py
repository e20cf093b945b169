import textwrap

import pytest

from kswitch.config import KubeConfig

SAMPLE_KUBECONFIG = textwrap.dedent(
    """\
    apiVersion: v1
    clusters:
    - cluster:
        certificate-authority-data: Q0EK
        server: https://10.0.0.1:6443
      name: prod
    - cluster:
        insecure-skip-tls-verify: true
        server: https://127.0.0.1:6443
      name: kind
    contexts:
    - context:
        cluster: prod
        namespace: default
        user: admin
      name: ctx1
      extensions:
      - name: owner
        extension: team-a
    - context:
        cluster: kind
        user: kind-user
      name: ctx2
    current-context: ctx1
    kind: Config
    preferences:
      colors: true
    users:
    - name: admin
      user:
        token: abc123
    - name: kind-user
      user:
        client-certificate-data: Q0VSVAo=
    """
)


class FakeChooser:
    """Returns a canned answer and records what it was shown."""

    def __init__(self, answer=None):
        self.answer = answer
        self.calls = []

    def choose(self, labels):
        self.calls.append(list(labels))
        return self.answer


class FakeNamespaceSource:
    def __init__(self, names):
        self.names = names
        self.currents = []

    def list_namespaces(self, current):
        self.currents.append(current)
        return [f"{n} *" if n == current else n for n in self.names]


@pytest.fixture
def sample_text():
    return SAMPLE_KUBECONFIG


@pytest.fixture
def kubeconfig():
    return KubeConfig.from_yaml(SAMPLE_KUBECONFIG)


@pytest.fixture
def kubeconfig_file(tmp_path):
    path = tmp_path / "config"
    path.write_text(SAMPLE_KUBECONFIG)
    return path
