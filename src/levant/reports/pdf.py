"""Monthly hours PDF (reportlab)."""

from __future__ import annotations

import io

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .service import MonthlyReport

LEVANT_GOLD = colors.Color(212 / 255, 175 / 255, 55 / 255)
HEADER_DARK = colors.Color(20 / 255, 20 / 255, 20 / 255)
TABLE_HEAD = colors.Color(28 / 255, 25 / 255, 23 / 255)
HEADER_HEIGHT = 40 * mm

FOOTER_TEXT = "Dit document is automatisch gegenereerd door het Levant Personeelsportaal."


def _draw_header(canvas, doc) -> None:
    width, height = A4
    canvas.saveState()
    canvas.setFillColor(HEADER_DARK)
    canvas.rect(0, height - HEADER_HEIGHT, width, HEADER_HEIGHT, stroke=0, fill=1)
    canvas.setFillColor(LEVANT_GOLD)
    canvas.setFont("Times-Bold", 22)
    canvas.drawCentredString(width / 2, height - 20 * mm, "LEVANT")
    canvas.setFillColor(colors.white)
    canvas.setFont("Times-Roman", 10)
    canvas.drawCentredString(width / 2, height - 30 * mm, "Urenregistratie")
    canvas.restoreState()


def render_monthly_report(report: MonthlyReport) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        topMargin=HEADER_HEIGHT + 10 * mm,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        title=report.filename,
    )
    styles = getSampleStyleSheet()

    info = Table(
        [
            [f"Medewerker: {report.employee.name}", f"Totaal Uren: {report.total_display}"],
            [f"Maand: {report.year_month}", ""],
        ],
        colWidths=[120 * mm, 62 * mm],
    )
    info.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), "Times-Roman"),
                ("FONTNAME", (1, 0), (1, 0), "Times-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 11),
            ]
        )
    )

    body = [["Datum", "Start", "Eind", "Uren", "Aangepast"]]
    body += [[r["date"], r["start"], r["end"], r["hours"], r["edited_label"]] for r in report.rows]
    table = Table(body, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), TABLE_HEAD),
                ("TEXTCOLOR", (0, 0), (-1, 0), LEVANT_GOLD),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.Color(245 / 255, 245 / 255, 245 / 255)]),
            ]
        )
    )

    footer_style = styles["Normal"].clone("footer", fontSize=8, textColor=colors.Color(100 / 255, 100 / 255, 100 / 255))
    story = [info, Spacer(1, 8 * mm), table, Spacer(1, 6 * mm), Paragraph(FOOTER_TEXT, footer_style)]
    doc.build(story, onFirstPage=_draw_header, onLaterPages=_draw_header)
    return buf.getvalue()
