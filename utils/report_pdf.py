"""
사진별 자세 분석 결과를 PDF 리포트로 변환한다.
"""
from collections import Counter
from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape

from posture_modules import format_value, metric_rows

# 본문 폭 (A4 - 좌우 여백 16mm)
_CONTENT_WIDTH_MM = 178


def _table_style(colors, header=True):
    from reportlab.platypus import TableStyle

    commands = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("GRID", (0, 0), (-1, -1), 0.4, colors.HexColor("#d1d5db")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("RIGHTPADDING", (0, 0), (-1, -1), 6),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    if header:
        commands.append(("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#e5e7eb")))
        commands.append(("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"))
    else:
        commands.append(("BACKGROUND", (0, 0), (0, -1), colors.HexColor("#f3f4f6")))
    return TableStyle(commands)


def _build_summary_rows(photos):
    found = [p for p in photos if p.analysis.pose_found]
    failed = [p for p in photos if p.error]
    ratings = Counter(p.analysis.rating.value for p in found if p.analysis.rating)
    return [
        ["Photos", f"{len(photos)}"],
        ["Pose detected", f"{len(found)}"],
        ["Unreadable", f"{len(failed)}"],
        ["Good", f"{ratings.get('Good', 0)}"],
        ["Average", f"{ratings.get('Average', 0)}"],
        ["Poor", f"{ratings.get('Poor', 0)}"],
    ]


def _build_rating_rows(analysis):
    angles = analysis.rating_angles
    rows = [["Rating angle", "Value"]]
    for name in ("shoulder", "neck", "spine", "knee"):
        value = getattr(angles, name) if angles else None
        text = format_value(value)
        rows.append([name.capitalize(), text if value is None else f"{text} °"])
    return rows


def _overlay_flowable(png_bytes, max_width, max_height):
    from reportlab.lib.utils import ImageReader
    from reportlab.platypus import Image

    reader = ImageReader(BytesIO(png_bytes))
    w, h = reader.getSize()
    scale = min(max_width / w, max_height / h, 1.0)
    return Image(BytesIO(png_bytes), width=w * scale, height=h * scale)


def build_posture_report_pdf(photos, title="Posture Analysis Report"):
    """
    Args:
        photos: PhotoAnalysis 리스트 (apps.api.analysis.analyze_images 결과)
        title: 리포트 제목
    Returns:
        bytes: PDF 바이너리
    """
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.lib.units import mm
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle",
        parent=styles["Title"],
        fontName="Helvetica-Bold",
        fontSize=20,
        leading=24,
        textColor=colors.HexColor("#1f2937"),
    )
    heading_style = ParagraphStyle(
        "ReportHeading",
        parent=styles["Heading2"],
        fontName="Helvetica-Bold",
        fontSize=13,
        leading=16,
        textColor=colors.HexColor("#111827"),
    )
    normal_style = ParagraphStyle(
        "ReportNormal",
        parent=styles["Normal"],
        fontName="Helvetica",
        fontSize=10.5,
        leading=14,
        textColor=colors.HexColor("#111827"),
    )

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=16 * mm,
        rightMargin=16 * mm,
        topMargin=14 * mm,
        bottomMargin=14 * mm,
        title=title,
    )
    story = []

    story.append(Paragraph(title, title_style))
    story.append(Spacer(1, 4 * mm))
    story.append(
        Paragraph(
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            normal_style,
        )
    )
    story.append(Spacer(1, 6 * mm))

    story.append(Paragraph("1) Summary", heading_style))
    summary_table = Table(_build_summary_rows(photos), colWidths=[48 * mm, 118 * mm])
    summary_table.setStyle(_table_style(colors, header=False))
    story.append(summary_table)
    story.append(Spacer(1, 6 * mm))

    for i, photo in enumerate(photos, start=2):
        analysis = photo.analysis
        story.append(Paragraph(f"{i}) {photo.name}", heading_style))

        if photo.error:
            story.append(Paragraph(f"Could not analyze this photo: {escape(photo.error)}", normal_style))
            story.append(Spacer(1, 6 * mm))
            continue

        story.append(
            Paragraph(f"Resolution: {photo.width}x{photo.height}", normal_style)
        )

        if not analysis.pose_found:
            story.append(Paragraph("No person detected in this photo.", normal_style))
            story.append(Spacer(1, 6 * mm))
            continue

        story.append(Paragraph(f"Rating: {analysis.rating.value}", normal_style))
        story.append(Spacer(1, 3 * mm))

        if photo.overlay_png:
            story.append(_overlay_flowable(photo.overlay_png, _CONTENT_WIDTH_MM * mm, 110 * mm))
            story.append(Spacer(1, 3 * mm))

        rows = [["Metric", "Value", "Unit"]]
        rows.extend([label, value, unit] for label, value, unit in metric_rows(analysis.metrics))
        metric_table = Table(rows, colWidths=[70 * mm, 60 * mm, 36 * mm])
        metric_table.setStyle(_table_style(colors))
        story.append(metric_table)
        story.append(Spacer(1, 3 * mm))

        rating_table = Table(_build_rating_rows(analysis), colWidths=[70 * mm, 96 * mm])
        rating_table.setStyle(_table_style(colors))
        story.append(rating_table)
        story.append(Spacer(1, 6 * mm))

    doc.build(story)
    return buffer.getvalue()
