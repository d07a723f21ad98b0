import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resume_tailor import config
from resume_tailor.errors import ResumeTailorError
from resume_tailor.middleware import assign_session
from resume_tailor.routes import router
from resume_tailor.services.session_store import build_session_store

# =========================
# Logging
# =========================
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# =========================
# App
# =========================
app = FastAPI(title="AI Resume Tailor API", version="0.3")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.WEB_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(assign_session)

app.state.session_store = build_session_store()

if not config.OPENAI_API_KEY:
    logger.warning("OPENAI_API_KEY is not set; every generate call will fail authentication")


@app.exception_handler(ResumeTailorError)
async def resume_tailor_error_handler(request: Request, exc: ResumeTailorError):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("resume_tailor.main:app", host="127.0.0.1", port=8000)
