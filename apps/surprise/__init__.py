"""Surprise slash-command dispatcher.

:class:`SurpriseDispatcher` is the single entry point for a ``/surprise``
invocation.  It checks the form fields, verifies the shared secret, picks a
content provider and wraps the provider's output into a
:class:`~lib.contracts.slack_message.SlackResponse`.

The dispatcher holds no per-request state; one instance serves every request.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

import httpx

from lib.config.surprise_loader import SurpriseConfig, load_surprise_config
from lib.contracts.slack_message import SlackResponse
from lib.telemetry.logger import get_logger
from lib.utils.helpers import _is_missing_val, _tokens_match, _unix_ts
from lib.utils.validation import ensure

from .errors import MalformedRequest, ProviderError, Unauthorized
from .providers import Provider, build_providers

logger = get_logger(__name__)

PROVIDER_NAMES = ("dog", "weather", "job")
RESPONSE_TYPE = "in_channel"
ATTACHMENT_COLOR = "#36a64f"
ATTACHMENT_FOOTER = "Generated by Surprise service"
UNKNOWN_ARGUMENT_REPLY = "Surprise service is running"


@dataclass
class SurpriseDispatcher:
    """Validate a slash command and answer it with a provider's content.

    Parameters
    ----------
    config: optional :class:`SurpriseConfig`; loaded from ``config_path`` and
        the process environment when omitted.
    token: shared secret override.  Falls back to ``config.token``.
    providers: mapping of provider name to :class:`Provider`.  Built from the
        configuration when omitted.
    client: ``httpx.Client`` the providers talk through.
    rng: random source used for blank-argument selection.  Defaults to the
        process-wide :mod:`random` module.
    """

    config: SurpriseConfig | None = field(default=None)
    config_path: str = "config/surprise.yaml"
    token: Optional[str] = None
    providers: Dict[str, Provider] | None = None
    client: httpx.Client | None = None
    rng: Any = field(default=random)

    def __post_init__(self) -> None:
        if self.config is None:
            self.config = load_surprise_config(self.config_path)
        if self.token is None:
            self.token = self.config.token
        if not self.token:
            logger.warning(
                "no shared secret configured (%s is unset); every request will be rejected",
                self.config.token_env,
            )
        if self.providers is None:
            self.providers = build_providers(self.config, rng=self.rng)
        if self.client is None:
            self.client = httpx.Client(timeout=self.config.timeout_seconds)

    def select_provider(self, text: Optional[str]) -> Optional[str]:
        """Return the provider name for ``text`` or ``None`` if unknown.

        A blank argument draws uniformly from all known providers.
        """

        if _is_missing_val(text):
            return self.rng.choice(PROVIDER_NAMES)
        return text if text in PROVIDER_NAMES else None

    def dispatch(
        self,
        token: Optional[str],
        command: Optional[str],
        text: Optional[str] = None,
    ) -> Union[SlackResponse, str]:
        """Handle one invocation.

        Returns a :class:`SlackResponse` for a provider reply or the plain
        acknowledgement string for an unrecognised argument.

        Raises
        ------
        MalformedRequest
            ``token`` or ``command`` is absent.  Empty strings count as present.
        Unauthorized
            ``token`` does not match the shared secret.
        ProviderError
            The selected provider failed.
        """

        ensure(token is not None, "token is missing", MalformedRequest)
        ensure(command is not None, "command is missing", MalformedRequest)
        if not _tokens_match(token, self.token):
            logger.warning("rejected %s: token mismatch", command)
            raise Unauthorized("token mismatch")

        name = self.select_provider(text)
        if name is None:
            logger.info("%s %r: no such provider", command, text)
            return UNKNOWN_ARGUMENT_REPLY

        logger.info("%s: dispatching to %s", command, name)
        try:
            result = self.providers[name].fetch(self.client)
        except ProviderError:
            logger.exception("provider %s failed", name)
            raise

        attachment = result.attachment
        attachment.color = ATTACHMENT_COLOR
        attachment.footer = ATTACHMENT_FOOTER
        if attachment.fallback is None:
            attachment.fallback = result.summary
        if attachment.ts is None:
            attachment.ts = _unix_ts()
        return SlackResponse(
            response_type=RESPONSE_TYPE,
            text=result.summary,
            attachments=[attachment],
        )

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


__all__ = [
    "SurpriseDispatcher",
    "PROVIDER_NAMES",
    "ATTACHMENT_COLOR",
    "ATTACHMENT_FOOTER",
    "UNKNOWN_ARGUMENT_REPLY",
]
