import logging
from typing import Optional

import requests

from resume_tailor import config
from resume_tailor.errors import (
    AuthenticationFailed,
    RateLimited,
    UpstreamProtocolError,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)


def _upstream_error_text(r: requests.Response) -> Optional[str]:
    try:
        body = r.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    err = body.get("error")
    if isinstance(err, dict):
        return err.get("message") or None
    if isinstance(err, str):
        return err or None
    return None


def openai_chat(prompt: str) -> str:
    """Single chat-completion call; returns the first choice's message text.

    No retries. Failures are raised as the matching UpstreamError subclass.
    """
    if not config.OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY is not set")
        raise AuthenticationFailed()

    payload = {
        "model": config.OPENAI_MODEL,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": config.OPENAI_TEMPERATURE,
        "max_tokens": config.OPENAI_MAX_TOKENS,
    }
    headers = {
        "Authorization": f"Bearer {config.OPENAI_API_KEY}",
        "Content-Type": "application/json",
    }

    logger.info("sending prompt to completion service (%d chars)", len(prompt))
    try:
        r = requests.post(config.OPENAI_URL, json=payload, headers=headers, timeout=config.LLM_TIMEOUT)
    except requests.RequestException as e:
        logger.error("completion service unreachable: %s", e)
        raise UpstreamUnavailable() from e

    if r.status_code != 200:
        detail = _upstream_error_text(r)
        logger.warning("completion service error: status=%s detail=%s", r.status_code, detail)
        if r.status_code == 401:
            raise AuthenticationFailed(detail, status=401)
        if r.status_code == 429:
            raise RateLimited(detail, status=429)
        raise UpstreamUnavailable(detail, status=r.status_code)

    try:
        data = r.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.error("invalid response from completion service: %s", e)
        raise UpstreamProtocolError() from e

    if not isinstance(content, str):
        logger.error("completion service returned non-text content")
        raise UpstreamProtocolError()

    logger.info("tailored resume received (%d chars)", len(content))
    return content
