"""Switch the current kubeconfig context and namespace interactively."""

__version__ = "0.1.0"
