import datetime
import functools

import pytest
from fastapi.testclient import TestClient

from cover_letter_genius.model import ContactInfo, GenerationRequest, LetterBody
from tests.fakes import ACME_LETTER, JANE_CONTACT, JANE_RESUME


@pytest.fixture
def jane_request():
    return GenerationRequest(
        resume_text=JANE_RESUME,
        job_description="Senior Engineer at Acme",
        company_info="Acme builds developer tooling.",
        model_name="gemini-2.5-flash",
    )


@pytest.fixture
def jane_contact():
    return ContactInfo.from_payload(JANE_CONTACT)


@pytest.fixture
def acme_letter():
    return LetterBody.from_payload(ACME_LETTER)


@pytest.fixture
def letter_day():
    return datetime.date(2025, 1, 5)


@pytest.fixture
def make_client(monkeypatch):
    """Return a factory building a TestClient whose pipeline talks to a FakeModel."""
    from cover_letter_genius import main

    def _make(fake_model):
        monkeypatch.setattr(
            main,
            "build_cover_letter",
            functools.partial(main.build_cover_letter, model_client=fake_model),
        )
        return TestClient(main.app)

    return _make
