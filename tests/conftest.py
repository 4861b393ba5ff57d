"""
Test Configuration and Fixtures
"""
import io
import json
from types import SimpleNamespace

import pytest
from docx import Document as DocxDocument
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from contract_review import create_app
from contract_review.services import openai_service


CONTRACT_TEXT = (
    "This Influencer Agreement is made between Acme Beverages Inc. and Jamie Creator. "
    "Creator will deliver two Instagram Reels and one TikTok video for a flat fee of $5,000."
)

WELL_FORMED_REVIEW = {
    "snapshot": {
        "parties": "Acme Beverages Inc. and Jamie Creator",
        "dates": "March 1 - March 31, 2026",
        "term": "30 days",
        "rate": "$5,000 flat fee",
        "deliverables": "2 Instagram Reels, 1 TikTok video",
        "usage": "Organic usage for 90 days, no exclusivity",
        "brandBrief": "Summer launch campaign",
        "additionalReqs": "Tag @acme in captions",
        "billing": "Net 30 after final post",
    },
    "risks": [
        {"label": "Perpetual usage rights", "level": "High", "note": "Usage clause has no end date."},
        {"label": "Broad morality clause", "level": "Med"},
        {"label": "Short approval window", "level": "Low", "note": "48h to revise."},
    ],
    "counters": [
        "Limit paid usage to 90 days",
        "Ask for 50% upfront",
    ],
}


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    """Stands in for ``openai.OpenAI``; only ``chat.completions.create`` is used."""

    def __init__(self, content=None, error=None):
        self.completions = FakeCompletions(content=content, error=error)
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture(scope='session')
def app():
    """Create application for testing"""
    app = create_app('testing')
    yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def fake_openai(monkeypatch):
    """Install a fake OpenAI client. Call with the reply content (str or dict)."""
    def install(content=None, error=None):
        if isinstance(content, (dict, list)):
            content = json.dumps(content)
        fake = FakeOpenAI(content=content, error=error)
        monkeypatch.setattr(openai_service, "get_client", lambda: fake)
        return fake
    return install


def make_pdf(text: str) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    y = 740
    for line in [text[i:i + 90] for i in range(0, len(text), 90)] or [""]:
        c.drawString(54, y, line)
        y -= 14
    c.showPage()
    c.save()
    return buf.getvalue()


def make_docx(paragraphs, table_rows=None) -> bytes:
    doc = DocxDocument()
    for p in paragraphs:
        doc.add_paragraph(p)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def contract_pdf():
    return make_pdf(CONTRACT_TEXT)


@pytest.fixture
def contract_docx():
    return make_docx([CONTRACT_TEXT])
