import random

import httpx
import pytest

from apps.surprise import SurpriseDispatcher
from lib.config.surprise_loader import SurpriseConfig

TOKEN = "slack-testing-token"

DOG_IMAGE = "https://images.dog.ceo/breeds/hound-afghan/n02088094_1003.jpg"

WEATHER_PAYLOAD = {
    "current_condition": [
        {
            "temp_C": "12",
            "FeelsLikeC": "10",
            "humidity": "81",
            "windspeedKmph": "14",
            "weatherDesc": [{"value": "Light rain"}],
        }
    ]
}

JOBS_PAYLOAD = {
    "job-count": 1,
    "jobs": [
        {
            "id": 1,
            "url": "https://remotive.com/remote-jobs/software-dev/backend-engineer-1",
            "title": "Backend Engineer",
            "company_name": "Acme",
            "company_logo": "https://remotive.com/job/1/logo",
            "job_type": "full_time",
            "candidate_required_location": "Europe",
        }
    ],
}


def fake_upstream(request: httpx.Request) -> httpx.Response:
    host = request.url.host
    if host == "dog.ceo":
        return httpx.Response(200, json={"message": DOG_IMAGE, "status": "success"})
    if host == "wttr.in":
        return httpx.Response(200, json=WEATHER_PAYLOAD)
    if host == "remotive.com":
        return httpx.Response(200, json=JOBS_PAYLOAD)
    return httpx.Response(404)


@pytest.fixture
def http_client():
    client = httpx.Client(transport=httpx.MockTransport(fake_upstream))
    yield client
    client.close()


@pytest.fixture
def dispatcher(http_client):
    return SurpriseDispatcher(
        config=SurpriseConfig(),
        token=TOKEN,
        client=http_client,
        rng=random.Random(1234),
    )
