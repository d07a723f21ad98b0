import logging
from typing import Optional

from resume_tailor.errors import NoSession, NoTailoredResume
from resume_tailor.services.pdf import render_resume_pdf
from resume_tailor.services.session_store import SessionStore

logger = logging.getLogger(__name__)

PDF_FILENAME = "tailored-resume.pdf"


def accept(session_id: Optional[str], store: SessionStore) -> bytes:
    """Render the session's tailored resume to PDF, then drop the record.

    At most once per generate: the record is gone after a successful call.
    A failed render leaves the record in place.
    """
    if not session_id:
        raise NoSession()

    record = store.load(session_id)
    if record is None:
        raise NoTailoredResume()

    pdf = render_resume_pdf(record.tailored_resume)

    try:
        store.delete(session_id)
    except Exception:
        logger.exception("error cleaning up session record")

    return pdf
