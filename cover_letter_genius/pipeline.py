"""Two-stage generation: contact extraction, then letter body, then PDF."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .config import Settings
from .errors import MissingCredentialError
from .llm import call_model
from .model import ContactInfo, GenerationRequest, LetterBody, merge_contact_info
from .pdf_layout import FALLBACK_MANAGER, render_cover_letter
from .prompt_templates import EXTRACTION_PROMPT, LETTER_PROMPT

logger = logging.getLogger(__name__)

# (prompt, api_key, model_name, settings=...) -> parsed JSON
ModelClient = Callable[..., Any]

MISSING_KEY_MESSAGE = "Gemini API key was not provided."


def extract_contact_info(
    resume_text: str,
    api_key: str,
    model_name: str,
    *,
    model_client: ModelClient = call_model,
    settings: Optional[Settings] = None,
) -> ContactInfo:
    prompt = EXTRACTION_PROMPT.render(resume_text=resume_text)
    return ContactInfo.from_payload(model_client(prompt, api_key, model_name, settings=settings))


def generate_letter_body(
    request: GenerationRequest,
    contact: ContactInfo,
    api_key: str,
    *,
    model_client: ModelClient = call_model,
    settings: Optional[Settings] = None,
) -> LetterBody:
    prompt = LETTER_PROMPT.render(
        fallback_manager=FALLBACK_MANAGER,
        full_name=contact.full_name,
        resume_text=request.resume_text,
        job_description=request.job_description,
        company_info=request.company_info,
    )
    payload = model_client(prompt, api_key, request.model_name, settings=settings)
    return LetterBody.from_payload(payload)


def build_cover_letter(
    request: GenerationRequest,
    api_key: str,
    *,
    model_client: ModelClient = call_model,
    settings: Optional[Settings] = None,
) -> bytes:
    """Run the whole pipeline for one request and return the PDF bytes.

    Extraction always runs first; the merged contact info must pass
    validation before the (more expensive) letter generation call is made.
    """
    if not api_key:
        raise MissingCredentialError(MISSING_KEY_MESSAGE)

    extracted = extract_contact_info(
        request.resume_text,
        api_key,
        request.model_name,
        model_client=model_client,
        settings=settings,
    )
    contact = merge_contact_info(
        extracted,
        full_name=request.full_name,
        email=request.email,
        address=request.address,
    )
    body = generate_letter_body(
        request, contact, api_key, model_client=model_client, settings=settings
    )
    font_path = settings.font_path if settings else None
    return render_cover_letter(contact, body, font_path=font_path)
