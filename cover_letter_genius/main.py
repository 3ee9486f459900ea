from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .config import load_settings
from .errors import CoverLetterError
from .model import GenerationRequest
from .pipeline import build_cover_letter

# -------------------------------------------------
# Setup
# -------------------------------------------------

settings = load_settings()
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title="Cover Letter Genius API", version=__version__)

CORS_PATHS = ("/api/generate",)


class PathCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that only answers for the listed paths."""

    def __init__(self, app, paths=(), **kwargs):
        super().__init__(app, **kwargs)
        self.paths = frozenset(paths)

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope["path"] not in self.paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


app.add_middleware(
    PathCORSMiddleware,
    paths=CORS_PATHS,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

PDF_FILENAME = "Cover-Letter-Genius.pdf"
GENERIC_FAILURE = "Failed to generate cover letter."


# -------------------------------------------------
# Schemas
# -------------------------------------------------

class GenerateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    resume_text: str = Field("", alias="resumeText")
    job_description: str = Field("", alias="jobDescription")
    company_info: str = Field("", alias="companyInfo")
    gemini_api_key: str = Field("", alias="geminiApiKey")
    model_name: Literal["gemini-2.5-pro", "gemini-2.5-flash"] = Field(alias="modelName")
    full_name: Optional[str] = Field(None, alias="fullName")
    email: Optional[str] = None
    address: Optional[str] = None


# -------------------------------------------------
# Error handling
# -------------------------------------------------

@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request body: %s", exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body.", "details": str(exc)},
    )


# -------------------------------------------------
# Routes
# -------------------------------------------------

@app.get("/")
def index():
    return {"ok": True, "routes": ["/healthz", "/api/generate", "/docs"]}


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.post("/api/generate")
def generate(data: GenerateIn):
    """
    Generate a cover letter PDF.

    - Contact details are extracted from the résumé, then overridden by any
      non-empty fullName/email/address sent by the client.
    - The letter body is written by the selected Gemini model.
    - Either the whole PDF or a JSON error comes back, never both.
    """
    request = GenerationRequest(
        resume_text=data.resume_text,
        job_description=data.job_description,
        company_info=data.company_info,
        model_name=data.model_name,
        full_name=data.full_name,
        email=data.email,
        address=data.address,
    )
    try:
        pdf_bytes = build_cover_letter(request, data.gemini_api_key, settings=settings)
    except CoverLetterError as e:
        if e.status_code == 400:
            logger.info("generate() rejected: %s", e)
            return JSONResponse(status_code=400, content={"error": str(e)})
        logger.exception("generate() failed")
        return JSONResponse(
            status_code=e.status_code,
            content={"error": GENERIC_FAILURE, "details": str(e)},
        )
    except Exception as e:
        logger.exception("generate() failed")
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_FAILURE, "details": str(e)},
        )

    logger.info("Generated cover letter with %s (%d bytes)", data.model_name, len(pdf_bytes))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'},
    )
