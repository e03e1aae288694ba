"""Connection model: one provider endpoint with its credentials.

A :class:`Connection` resolves itself into the three things a request needs:
the endpoint URL for an operation segment, the auth header, and the model id
placed in the request body. Provider differences are expressed through
``provider_mode`` and the endpoint template, not through subclasses; provider
defaults live in :mod:`compat_providers.connections.factory`.

API keys are held in stored form (encrypted when encryption is enabled) and
decrypted on read. Reading a key that was supplied in plaintext migrates the
in-memory stored copy to its encrypted form.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..base.credentials import CredentialStore, EncryptionSettings
from ..base.errors import ConfigurationError
from ..base.logging import get_logger, log_event
from ..config.defaults import (
    AZURE_V1_ENDPOINT_TEMPLATE,
    AZURE_V1_PATH_SEGMENT,
    OPENAI_ENDPOINT_TEMPLATE,
)
from ..config.env import expand_env_vars
from .modes import OperationMode, ProviderMode

_logger = get_logger("compat.connections")


def _as_text(value: Any) -> str:
    """Persisted string field as ``str``; ``None`` and empty values give ``""``."""
    if value is None or value == "":
        return ""
    return str(value)


@dataclass(eq=False)
class Connection:
    """Describes how to reach one model/provider instance.

    Attributes:
        name: Display identifier, used as a lookup key by the registry.
        endpoint: Base URL of the service. A connection without an endpoint
            is *empty* and cannot be used for requests.
        endpoint_template: Positional format string. Slots: ``{0}`` endpoint,
            ``{1}`` operation segment, ``{2}`` model/deployment id,
            ``{3}`` API version.
        model_id: Model (OpenAI style) or deployment name (Azure).
        api_version: API version, used by the Azure template only.
        provider_mode: Provider tag; selects the auth header style.
        operation_mode: Completions or image generation.
        stored_api_key: API key as stored (encrypted form when enabled).
        encryption: Settings for the credential store.

    Equality is identity; two connections with the same fields are distinct
    registry entries.
    """

    name: str = ""
    endpoint: str = ""
    endpoint_template: str = OPENAI_ENDPOINT_TEMPLATE
    model_id: str = ""
    api_version: Optional[str] = None
    provider_mode: ProviderMode = ProviderMode.OPENAI
    operation_mode: OperationMode = OperationMode.COMPLETIONS
    stored_api_key: str = field(default="", repr=False)
    encryption: EncryptionSettings = field(default_factory=EncryptionSettings, repr=False)
    _credential_store: Optional[CredentialStore] = field(default=None, init=False, repr=False)

    # ----- credentials -----

    def _store(self) -> CredentialStore:
        store = self._credential_store
        if store is None or store.settings is not self.encryption:
            store = CredentialStore(self.encryption)
            self._credential_store = store
        return store

    @property
    def api_key(self) -> str:
        """Decrypted API key with ``%NAME%`` references expanded.

        Side effect: a plaintext stored key is replaced by its encrypted form.
        """
        store = self._store()
        stored = self.stored_api_key
        if stored and not store.is_encrypted(stored):
            migrated = store.migrate_if_plaintext(stored)
            if migrated != stored:
                self.stored_api_key = migrated
                log_event(_logger, "credentials.migrated", connection=self.name or None)
        return store.decrypt(stored)

    @api_key.setter
    def api_key(self, value: Optional[str]) -> None:
        self.stored_api_key = self._store().encrypt(value)

    @property
    def decrypted_api_key(self) -> str:
        return self.api_key

    @property
    def encrypted_api_key(self) -> str:
        """Stored form suitable for persisting."""
        return self._store().encrypt(self.stored_api_key)

    # ----- state -----

    @property
    def is_empty(self) -> bool:
        return not self.endpoint

    # ----- request resolution -----

    def resolve_endpoint_url(self, operation_segment: str) -> str:
        """Build the full URL for an operation segment (e.g. ``chat/completions``).

        Raises:
            ConfigurationError: the endpoint is unset or the template is invalid.
        """
        if not self.endpoint:
            raise ConfigurationError(
                message="Connection endpoint is not set. Cannot make AI API request.",
                provider=self.provider_mode.value,
                model=self.model_id or None,
            )
        endpoint = expand_env_vars(self.endpoint).rstrip("/")
        template = self.endpoint_template or OPENAI_ENDPOINT_TEMPLATE

        if (
            self.provider_mode is ProviderMode.AZURE_OPENAI
            and "deployments" in template
            and AZURE_V1_PATH_SEGMENT in endpoint
        ):
            # Azure unified v1 endpoint configured with the deployment template
            template = AZURE_V1_ENDPOINT_TEMPLATE
            self.endpoint_template = template
            self.endpoint = self.endpoint.replace(AZURE_V1_PATH_SEGMENT, "").rstrip("/")
            endpoint = endpoint.replace(AZURE_V1_PATH_SEGMENT, "").rstrip("/")

        segment = (operation_segment or "").strip("/")
        try:
            return template.format(endpoint, segment, self.model_id or "", self.api_version or "")
        except (IndexError, KeyError, ValueError) as exc:
            raise ConfigurationError(
                message=f"Invalid endpoint template: {template}",
                provider=self.provider_mode.value,
                model=self.model_id or None,
                raw=exc,
            ) from exc

    def build_auth_header(self) -> Dict[str, str]:
        """Return the auth header for this provider, empty when no key is set."""
        key = self.api_key
        if not key:
            return {}
        if self.provider_mode.uses_api_key_header:
            return {"api-key": key}
        return {"Authorization": f"Bearer {key}"}

    # ----- persistence -----

    def to_document(self) -> Dict[str, Any]:
        """Return the persisted representation (API key in stored form)."""
        return {
            "Name": self.name,
            "EncryptedApiKey": self.encrypted_api_key,
            "Endpoint": self.endpoint,
            "EndpointTemplate": self.endpoint_template,
            "ModelId": self.model_id,
            "ApiVersion": self.api_version,
            "ProviderMode": self.provider_mode.value,
            "OperationMode": self.operation_mode.value,
        }

    @classmethod
    def from_document(
        cls, doc: Mapping[str, Any], encryption: Optional[EncryptionSettings] = None
    ) -> "Connection":
        """Build a connection from its persisted representation.

        Missing fields take the dataclass defaults; unknown mode values fall
        back to OpenAI / Completions. A missing endpoint template falls back
        to the provider's default template.
        """
        from .factory import PROVIDER_DEFAULTS  # factory imports this module

        provider_mode = ProviderMode.parse(doc.get("ProviderMode")) or ProviderMode.OPENAI
        template = _as_text(doc.get("EndpointTemplate")) or PROVIDER_DEFAULTS[provider_mode].endpoint_template
        api_version = doc.get("ApiVersion")
        return cls(
            name=_as_text(doc.get("Name")),
            endpoint=_as_text(doc.get("Endpoint")),
            endpoint_template=template,
            model_id=_as_text(doc.get("ModelId")),
            api_version=None if api_version is None else str(api_version),
            provider_mode=provider_mode,
            operation_mode=OperationMode.parse(doc.get("OperationMode")) or OperationMode.COMPLETIONS,
            stored_api_key=_as_text(doc.get("EncryptedApiKey")),
            encryption=encryption or EncryptionSettings(),
        )

    def __str__(self) -> str:
        return f"{self.name} - {self.provider_mode.value} - {self.model_id} - {self.endpoint}"


__all__ = ["Connection"]
