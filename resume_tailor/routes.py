import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, Response

from resume_tailor import config
from resume_tailor.core.accept import PDF_FILENAME, accept
from resume_tailor.core.tailor import generate
from resume_tailor.errors import PdfRenderError, ResumeTailorError, UpstreamUnavailable
from resume_tailor.schemas import ErrorResponse, GenerateResponse
from resume_tailor.services.session_store import SessionStore

logger = logging.getLogger(__name__)

INDEX_HTML = Path(__file__).parent / "static" / "index.html"

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}

router = APIRouter()


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store

def _session_id(request: Request) -> Optional[str]:
    return getattr(request.state, "session_id", None) or request.cookies.get(config.SESSION_COOKIE_NAME)

@router.get("/health")
def health():
    return {"ok": True}

@router.get("/", response_class=HTMLResponse)
def index():
    return HTMLResponse(INDEX_HTML.read_text(encoding="utf-8"))

@router.post("/api/generate", response_model=GenerateResponse, responses=ERROR_RESPONSES)
def generate_route(
    request: Request,
    resume: Optional[str] = Form(None),
    resume_file: Optional[UploadFile] = File(None, alias="resumeFile"),
    job: Optional[str] = Form(None),
    store: SessionStore = Depends(get_session_store),
):
    pdf_bytes = None
    if resume_file is not None:
        data = resume_file.file.read()
        # browsers post an empty, unnamed part for an untouched file input
        if resume_file.filename or data:
            pdf_bytes = data
    try:
        return generate(resume, pdf_bytes, job, store, session_id=_session_id(request))
    except ResumeTailorError:
        raise
    except Exception as e:
        logger.exception("generate failed")
        raise UpstreamUnavailable() from e

@router.post("/api/accept", responses=ERROR_RESPONSES)
def accept_route(request: Request, store: SessionStore = Depends(get_session_store)):
    # a token minted by the middleware on this very request never has a record
    session_id = None if getattr(request.state, "session_issued", False) else _session_id(request)
    try:
        pdf = accept(session_id, store)
    except ResumeTailorError:
        raise
    except Exception as e:
        logger.exception("accept failed")
        raise PdfRenderError() from e

    headers = {"Content-Disposition": f"attachment; filename={PDF_FILENAME}"}
    return Response(content=pdf, media_type="application/pdf", headers=headers)
