# kswitch/errors.py


class KswitchError(Exception):
    """Base class for every failure that terminates a kswitch run."""


class ConfigLocationUnresolvable(KswitchError):
    """Neither an override path nor a home directory is available."""


class MalformedConfig(KswitchError):
    """The kubeconfig document does not have the expected shape."""


class PersistenceFailed(KswitchError):
    """Reading or writing the kubeconfig file failed."""


class SelectionCancelled(KswitchError):
    """The user aborted the interactive picker."""

    def __init__(self, message: str = "Selection cancelled"):
        super().__init__(message)


class SelectionFailed(KswitchError):
    """The interactive picker could not be run."""


class RemoteListingFailed(KswitchError):
    """Listing namespaces from the cluster failed."""
