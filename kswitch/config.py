# kswitch/config.py

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    model_serializer,
    model_validator,
)

from kswitch.errors import ConfigLocationUnresolvable, MalformedConfig, PersistenceFailed

logger = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"
DEFAULT_KUBECONFIG = Path(".kube") / "config"


# ---------------- Location ---------------- #

def resolve_kubeconfig_path(env: Mapping[str, str]) -> Path:
    """
    Work out which kubeconfig file to edit.

    The first entry of KUBECONFIG wins; otherwise ~/.kube/config is used.
    Only the given mapping is consulted, never os.environ directly.
    """
    entries = [p for p in env.get(KUBECONFIG_ENV, "").split(os.pathsep) if p.strip()]
    if entries:
        return Path(entries[0]).expanduser()

    home = env.get("HOME")
    if not home:
        raise ConfigLocationUnresolvable("HOME env var is not set and KUBECONFIG is empty")
    return Path(home) / DEFAULT_KUBECONFIG


# ---------------- Models ---------------- #

class _ExtensibleModel(BaseModel):
    """
    Base for kubeconfig objects.

    Keys the model does not declare are kept as extras and written back
    untouched. Keys are emitted in the order they were read; keys assigned
    later are appended.
    """
    model_config = ConfigDict(extra="allow")

    _key_order: list[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, data: Any, handler):
        instance = handler(data)
        if isinstance(data, dict):
            instance._key_order = list(data)
        return instance

    @model_serializer(mode="wrap")
    def _dump_in_key_order(self, handler) -> dict[str, Any]:
        dumped = handler(self)
        ordered = {key: dumped[key] for key in self._key_order if key in dumped}
        ordered.update((key, value) for key, value in dumped.items() if key not in ordered)
        return ordered


class ContextSettings(_ExtensibleModel):
    """The inner `context:` object of a context entry (cluster, user, namespace...)."""
    namespace: Optional[str] = None


class ContextEntry(_ExtensibleModel):
    name: str
    context: ContextSettings


class KubeConfig(_ExtensibleModel):
    """A kubeconfig document. clusters, users, preferences etc. live in the extras."""
    current_context: Optional[str] = Field(default=None, alias="current-context")
    contexts: Optional[list[ContextEntry]] = None

    # ---------------- Serialization ---------------- #

    @classmethod
    def from_yaml(cls, text: Union[str, bytes]) -> "KubeConfig":
        try:
            data = yaml.safe_load(text)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise MalformedConfig(f"kubeconfig is not valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise MalformedConfig(
                f"kubeconfig must be a mapping, got {type(data).__name__}"
            )

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedConfig(f"kubeconfig has an unexpected shape: {e}") from e

    def to_yaml(self) -> str:
        data = self.model_dump(by_alias=True, exclude_unset=True)
        try:
            return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
        except yaml.YAMLError as e:
            raise PersistenceFailed(f"Failed to serialize kubeconfig: {e}") from e

    # ---------------- Queries ---------------- #

    def context_names(self) -> list[str]:
        return [entry.name for entry in self.contexts or []]

    def find_context(self, name: Optional[str]) -> Optional[ContextEntry]:
        """Return the first entry called `name`, or None."""
        return next((entry for entry in self.contexts or [] if entry.name == name), None)

    def current_namespace(self) -> Optional[str]:
        entry = self.find_context(self.current_context)
        return entry.context.namespace if entry else None

    # ---------------- Mutations ---------------- #

    def set_current_context(self, name: str) -> None:
        self.current_context = name

    def set_namespace(self, namespace: str) -> None:
        """Set the namespace on every entry named like the current context."""
        matched = False
        for entry in self.contexts or []:
            if entry.name == self.current_context:
                entry.context.namespace = namespace
                matched = True

        if not matched:
            logger.debug(f"No context named {self.current_context!r}; namespace left unset")


# ---------------- Persistence ---------------- #

def load_config(path: Path) -> KubeConfig:
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise PersistenceFailed(f"Failed to read kubeconfig {path}: {e}") from e

    logger.debug(f"Loaded kubeconfig from {path}")
    return KubeConfig.from_yaml(raw)


def save_config(config: KubeConfig, path: Path) -> None:
    text = config.to_yaml()
    try:
        Path(path).write_text(text)
    except OSError as e:
        raise PersistenceFailed(f"Failed to write kubeconfig {path}: {e}") from e

    logger.debug(f"Wrote kubeconfig to {path}")
