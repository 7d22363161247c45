"""Content providers behind the ``/surprise`` command.

Each provider performs one HTTP lookup and turns the answer into the
provider specific part of an :class:`Attachment`.  Colour, footer and
timestamp are stamped by the dispatcher, not here.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from lib.config.surprise_loader import SurpriseConfig
from lib.contracts.slack_message import Attachment, AttachmentField
from lib.telemetry.logger import get_logger

from .errors import ProviderError

logger = get_logger(__name__)

DOG_URL = "https://dog.ceo/api/breeds/image/random"
WEATHER_URL = "https://wttr.in"
JOB_URL = "https://remotive.com/api/remote-jobs"


@dataclass
class ProviderResult:
    summary: str
    attachment: Attachment


@dataclass
class Provider:
    """Base class; subclasses implement :meth:`_build`."""

    settings: Dict[str, Any] = field(default_factory=dict)
    name: str = field(init=False, default="")
    default_url: str = field(init=False, default="")

    @property
    def url(self) -> str:
        return self.settings.get("url") or self.default_url

    def _params(self) -> Dict[str, Any]:
        return {}

    def _get_json(self, client: httpx.Client, url: str) -> Any:
        try:
            resp = client.get(url, params=self._params())
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as exc:
            raise ProviderError(self.name, f"request failed: {exc.__class__.__name__}") from exc
        except ValueError as exc:
            raise ProviderError(self.name, "response is not JSON") from exc

    def fetch(self, client: httpx.Client) -> ProviderResult:
        endpoint = self._endpoint()
        logger.debug("provider %s: GET %s", self.name, endpoint)
        data = self._get_json(client, endpoint)
        try:
            return self._build(data)
        except (AttributeError, KeyError, IndexError, TypeError, ValidationError) as exc:
            raise ProviderError(self.name, "unexpected payload") from exc

    def _endpoint(self) -> str:
        return self.url

    def _build(self, data: Any) -> ProviderResult:
        raise NotImplementedError


@dataclass
class DogProvider(Provider):
    name: str = field(init=False, default="dog")
    default_url: str = field(init=False, default=DOG_URL)

    def _build(self, data: Any) -> ProviderResult:
        if data.get("status") != "success":
            raise ProviderError(self.name, f"status {data.get('status')!r}")
        image = data["message"]
        breed = _breed_from_image(image)
        title = f"Meet this {breed}" if breed else "Meet a good dog"
        return ProviderResult(
            summary="Here is a dog to brighten your day!",
            attachment=Attachment(title=title, title_link=image, image_url=image),
        )


def _breed_from_image(url: str) -> Optional[str]:
    # dog.ceo image paths look like .../breeds/<breed>[-<sub>]/<file>.jpg
    parts = url.split("/")
    if "breeds" not in parts:
        return None
    idx = parts.index("breeds")
    if idx + 1 >= len(parts) - 1:
        return None
    breed = parts[idx + 1].split("-")
    return " ".join(reversed(breed))


@dataclass
class WeatherProvider(Provider):
    name: str = field(init=False, default="weather")
    default_url: str = field(init=False, default=WEATHER_URL)

    @property
    def city(self) -> str:
        return self.settings.get("city") or "Berlin"

    def _endpoint(self) -> str:
        return f"{self.url.rstrip('/')}/{self.city}"

    def _params(self) -> Dict[str, Any]:
        return {"format": "j1"}

    def _build(self, data: Any) -> ProviderResult:
        current = data["current_condition"][0]
        condition = current["weatherDesc"][0]["value"]
        fields = [
            AttachmentField(title="Temperature", value=f"{current['temp_C']} °C", short=True),
            AttachmentField(title="Feels like", value=f"{current['FeelsLikeC']} °C", short=True),
            AttachmentField(title="Humidity", value=f"{current['humidity']} %", short=True),
            AttachmentField(title="Wind", value=f"{current['windspeedKmph']} km/h", short=True),
        ]
        return ProviderResult(
            summary=f"Current weather in {self.city}",
            attachment=Attachment(
                title=f"Weather in {self.city}",
                title_link=f"{self.url.rstrip('/')}/{self.city}",
                text=condition,
                fields=fields,
            ),
        )


@dataclass
class JobProvider(Provider):
    rng: Any = field(default=random)
    name: str = field(init=False, default="job")
    default_url: str = field(init=False, default=JOB_URL)

    def _params(self) -> Dict[str, Any]:
        return {"limit": int(self.settings.get("limit", 20))}

    def _build(self, data: Any) -> ProviderResult:
        jobs: List[Dict[str, Any]] = data["jobs"]
        if not jobs:
            raise ProviderError(self.name, "no open positions")
        job = self.rng.choice(jobs)
        fields = [
            AttachmentField(
                title="Location",
                value=job.get("candidate_required_location") or "Anywhere",
                short=True,
            ),
            AttachmentField(
                title="Type",
                value=(job.get("job_type") or "n/a").replace("_", " "),
                short=True,
            ),
        ]
        return ProviderResult(
            summary="Maybe it is time for a new job?",
            attachment=Attachment(
                author_name=job.get("company_name"),
                title=job["title"],
                title_link=job["url"],
                thumb_url=job.get("company_logo") or None,
                fields=fields,
            ),
        )


def build_providers(config: SurpriseConfig, rng: Any = random) -> Dict[str, Provider]:
    """Instantiate the known providers in their canonical order."""

    return {
        "dog": DogProvider(config.provider("dog")),
        "weather": WeatherProvider(config.provider("weather")),
        "job": JobProvider(config.provider("job"), rng=rng),
    }


__all__ = [
    "Provider",
    "ProviderResult",
    "DogProvider",
    "WeatherProvider",
    "JobProvider",
    "build_providers",
]
