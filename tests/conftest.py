import os

import pytest

# Make sure the engine falls back to in-memory SQLite before anything imports it
os.environ.setdefault("PYTEST_RUNNING", "1")


def make_payload(index: int = 0, **overrides):
    payload = {
        "name": f"Nominee {index}",
        "course": "Computer Science",
        "phone_no": f"98765{index:05d}",
        "domain": "Web Dev",
        "email": f"nominee{index}@example.com",
        "insta_id": f"@nominee{index}",
        "github_id": f"nominee{index}",
        "gender": "Female",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def alice_payload():
    return {
        "name": "Alice Johnson",
        "course": "CS",
        "phone_no": "9876543210",
        "domain": "Web Dev",
        "email": "a@x.com",
        "gender": "Female",
    }
