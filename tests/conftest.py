import pytest
import requests
from fastapi.testclient import TestClient

from resume_tailor import config
from resume_tailor.main import app
from resume_tailor.services.session_store import FileSessionStore

from .fakes import FakeLLM, make_pdf


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")
    return "sk-test"


@pytest.fixture(autouse=True)
def builtin_pdf_fonts(monkeypatch):
    monkeypatch.setattr(config, "PDF_FONT_PATH", "")
    monkeypatch.setattr(config, "PDF_CJK_FONT", "STSong-Light")


@pytest.fixture
def fake_llm(monkeypatch):
    fake = FakeLLM()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def store(tmp_path):
    return FileSessionStore(str(tmp_path))


@pytest.fixture
def client(store):
    previous = app.state.session_store
    app.state.session_store = store
    with TestClient(app) as c:
        yield c
    app.state.session_store = previous


@pytest.fixture
def resume_pdf():
    return make_pdf(["John Smith", "Data Engineer", "Spark and Airflow pipelines"])
