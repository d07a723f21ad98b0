import logging
from typing import Optional

from resume_tailor.core.prompting import build_tailor_prompt
from resume_tailor.errors import InputMissing
from resume_tailor.schemas import GenerateResponse, SessionRecord
from resume_tailor.services.extract import extract_pdf_text
from resume_tailor.services.llm import openai_chat
from resume_tailor.services.session_store import SessionStore

logger = logging.getLogger(__name__)


def format_for_display(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\n", "<br>")

def resolve_resume_text(pasted_text: Optional[str], pdf_bytes: Optional[bytes]) -> str:
    # an uploaded file always wins over pasted text
    if pdf_bytes is not None:
        text = extract_pdf_text(pdf_bytes)
    else:
        text = pasted_text or ""

    if not text.strip():
        raise InputMissing("Resume text or PDF file is required")
    return text

def tailor_text(resume_text: str, jd_text: str) -> str:
    return openai_chat(build_tailor_prompt(resume_text, jd_text))

def save_pending(store: SessionStore, session_id: Optional[str], original: str, tailored: str) -> None:
    if not session_id:
        return
    try:
        store.save(session_id, SessionRecord(original_resume=original, tailored_resume=tailored))
    except Exception:
        logger.exception("could not persist session record")

def generate(
    pasted_text: Optional[str],
    pdf_bytes: Optional[bytes],
    jd_text: Optional[str],
    store: SessionStore,
    session_id: Optional[str] = None,
) -> GenerateResponse:
    if not (jd_text or "").strip():
        raise InputMissing("Job description is required")

    resume_text = resolve_resume_text(pasted_text, pdf_bytes)
    tailored = tailor_text(resume_text, jd_text)

    save_pending(store, session_id, resume_text, tailored)

    return GenerateResponse(
        original=format_for_display(resume_text),
        tailored=format_for_display(tailored),
    )
