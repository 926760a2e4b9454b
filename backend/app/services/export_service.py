"""
Export of completed analyses as downloadable PDF, JSON or CSV
"""

import json
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from app.core.exceptions import ValidationError


SUPPORTED_FORMATS = ("pdf", "json", "csv")


@dataclass
class ExportFile:
    content: bytes
    media_type: str
    filename: str


def _flatten_summary(summary: Dict[str, Any]) -> Dict[str, Any]:
    # Nested values (confidence intervals, coefficients) go in as JSON text
    return {
        key: json.dumps(value) if isinstance(value, (dict, list)) else value
        for key, value in summary.items()
    }


def _text(value: Any) -> str:
    """Paragraph-safe text; reportlab parses paragraphs as markup"""
    if value is None or value == "":
        return "-"
    return escape(str(value))


def _report_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name='ReportTitle',
        parent=styles['Title'],
        fontSize=18,
        textColor=HexColor('#1a1a1a'),
        spaceAfter=12,
        fontName='Helvetica-Bold',
    ))
    styles.add(ParagraphStyle(
        name='SectionHeading',
        parent=styles['Normal'],
        fontSize=13,
        textColor=HexColor('#2c3e50'),
        spaceBefore=10,
        spaceAfter=6,
        fontName='Helvetica-Bold',
        keepWithNext=True,
    ))
    return styles


def render_pdf(analysis: Dict[str, Any], project: Optional[Dict[str, Any]] = None) -> bytes:
    """Research report: project context, method, interpretation and summary table"""
    project = project or {}
    styles = _report_styles()
    body = styles['BodyText']
    results = analysis.get("results") or {}
    summary = results.get("summary") or {}

    story: List[Any] = [
        Paragraph("LAPORAN ANALISIS PENELITIAN", styles['ReportTitle']),
        Paragraph(f"<b>Judul:</b> {_text(project.get('title'))}", body),
        Paragraph(f"<b>Deskripsi:</b> {_text(project.get('description'))}", body),
        Paragraph(f"<b>Jenis Penelitian:</b> {_text(project.get('research_type'))}", body),
        Paragraph(f"<b>Hipotesis:</b> {_text(project.get('hypothesis'))}", body),
        Paragraph("Variabel Penelitian", styles['SectionHeading']),
        Paragraph(f"<b>Independen:</b> {_text(project.get('var_independent'))}", body),
        Paragraph(f"<b>Dependen:</b> {_text(project.get('var_dependent'))}", body),
        Paragraph("Hasil Analisis", styles['SectionHeading']),
        Paragraph(f"<b>Metode:</b> {_text(analysis.get('selected_method'))}", body),
        Paragraph(f"<b>Interpretasi:</b> {_text(analysis.get('interpretation'))}", body),
    ]

    if summary:
        rows = [["Statistik", "Nilai"]] + [[str(k), str(v)] for k, v in _flatten_summary(summary).items()]
        table = Table(rows, colWidths=[6 * cm, 9 * cm])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), HexColor('#2c3e50')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ]))
        story.extend([Spacer(1, 0.3 * cm), table])

    story.extend([
        Spacer(1, 0.5 * cm),
        Paragraph(f"Dibuat pada: {_text(analysis.get('completed_at'))}", styles['Italic']),
    ])

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title="Laporan Analisis Penelitian",
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
    )
    doc.build(story)
    return buffer.getvalue()


def export_analysis(
    analysis: Dict[str, Any],
    fmt: str,
    project: Optional[Dict[str, Any]] = None,
) -> ExportFile:
    """Render one analysis record in ``fmt``; ``project`` adds context to the PDF report"""
    fmt = (fmt or "").lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ValidationError(
            f"Format tidak didukung: {fmt}. Gunakan {', '.join(SUPPORTED_FORMATS)}",
            field="format",
        )
    if analysis.get("status") != "completed":
        raise ValidationError("Analisis belum selesai")

    base_name = f"analysis_{analysis.get('id', 'export')}"

    if fmt == "pdf":
        return ExportFile(
            content=render_pdf(analysis, project),
            media_type="application/pdf",
            filename=f"{base_name}.pdf",
        )

    if fmt == "json":
        return ExportFile(
            content=json.dumps(analysis, indent=2, default=str).encode("utf-8"),
            media_type="application/json",
            filename=f"{base_name}.json",
        )

    results = analysis.get("results") or {}
    row = {
        "method": analysis.get("selected_method"),
        "interpretation": analysis.get("interpretation"),
        **_flatten_summary(results.get("summary") or {}),
    }
    csv_text = pd.DataFrame([row]).to_csv(index=False)
    return ExportFile(
        content=csv_text.encode("utf-8"),
        media_type="text/csv",
        filename=f"{base_name}.csv",
    )
