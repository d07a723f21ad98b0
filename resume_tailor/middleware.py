import logging
import uuid

from fastapi import Request

from resume_tailor import config

logger = logging.getLogger(__name__)

SESSION_PATHS = {"/api/generate", "/api/accept"}


async def assign_session(request: Request, call_next):
    """
    Make sure callers of the generate/accept routes carry a session cookie.

    A missing cookie gets a fresh uuid4 token on the response. Handlers read
    the resolved id from ``request.state.session_id``; ``session_issued`` is
    True when the token was minted for this request rather than sent by the
    client.
    """
    if request.url.path not in SESSION_PATHS:
        return await call_next(request)

    session_id = request.cookies.get(config.SESSION_COOKIE_NAME)
    issued = not session_id
    if issued:
        session_id = str(uuid.uuid4())
        logger.debug("issuing new session for %s", request.url.path)

    request.state.session_id = session_id
    request.state.session_issued = issued

    response = await call_next(request)

    if issued:
        response.set_cookie(
            config.SESSION_COOKIE_NAME,
            session_id,
            max_age=config.SESSION_MAX_AGE,
            httponly=True,
            secure=config.IS_PRODUCTION,
            samesite="lax",
        )
    return response
