"""Summary PDF export."""
from __future__ import annotations

import io
from typing import Any, Dict, List

from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import letter as rl_letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

NOT_SPECIFIED = "Not Specified"

SNAPSHOT_LABELS = (
    ("parties", "Parties"),
    ("dates", "Dates"),
    ("term", "Term"),
    ("rate", "Rate"),
    ("deliverables", "Deliverables"),
    ("usage", "Usage & Exclusivity"),
    ("brandBrief", "Brand Brief"),
    ("additionalReqs", "Additional Requirements"),
    ("billing", "Billing"),
)

LEVEL_COLORS = {
    "Low": colors.HexColor("#047857"),
    "Med": colors.HexColor("#b45309"),
    "High": colors.HexColor("#be123c"),
}


def esc(s: str) -> str:
    return (s or "").replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def show(val: str) -> str:
    return val if val and val.strip() else NOT_SPECIFIED


def build_summary_pdf(result: Dict[str, Any], title: str = "Contract Summary") -> bytes:
    """Render a normalized ReviewResult as a one-document PDF and return its bytes."""
    styles = getSampleStyleSheet()
    base = ParagraphStyle(
        "base", parent=styles["Normal"], fontName="Helvetica",
        fontSize=9.5, leading=12, spaceAfter=2, alignment=TA_LEFT
    )
    head = ParagraphStyle(
        "head", parent=base, fontName="Helvetica-Bold", fontSize=11,
        spaceBefore=10, spaceAfter=4
    )
    heading = ParagraphStyle(
        "heading", parent=base, fontName="Helvetica-Bold", fontSize=15,
        leading=18, spaceAfter=6
    )

    story: List[Any] = [Paragraph(esc(title), heading)]

    story.append(Paragraph("Snapshot", head))
    snapshot = result.get("snapshot") or {}
    rows = [
        [Paragraph(f"<b>{esc(label)}:</b>", base), Paragraph(esc(show(snapshot.get(key, ""))), base)]
        for key, label in SNAPSHOT_LABELS
    ]
    table = Table(rows, colWidths=[130, 370])
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LINEBELOW", (0, 0), (-1, -2), 0.25, colors.lightgrey),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    story.append(table)

    story.append(Paragraph("What to watch out for", head))
    risks = result.get("risks") or []
    if not risks:
        story.append(Paragraph("No risks flagged.", base))
    for risk in risks:
        level = risk.get("level", "Med")
        color = LEVEL_COLORS.get(level, colors.black).hexval()[2:]
        line = f'<font color="#{color}"><b>[{esc(level)}]</b></font> <b>{esc(risk.get("label", ""))}</b>'
        story.append(Paragraph(line, base))
        if risk.get("note"):
            story.append(Paragraph(esc(risk["note"]), ParagraphStyle("note", parent=base, leftIndent=14, textColor=colors.dimgrey)))

    story.append(Paragraph("Suggested counters", head))
    counters = result.get("counters") or []
    if not counters:
        story.append(Paragraph("No counters suggested.", base))
    for counter in counters:
        story.append(Paragraph(f"&bull; {esc(counter)}", base))

    story.append(Spacer(1, 12))

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=rl_letter,
        leftMargin=54,
        rightMargin=54,
        topMargin=54,
        bottomMargin=54,
        title=title,
    )
    doc.build(story)
    return buf.getvalue()
