"""PDF generation for the fridge list using ReportLab."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from .freshness import BAND_COLORS
from .models import ListedItem


def generate_pdf(
    items: list[ListedItem], output_path: str | Path, today: date
) -> Path:
    """Generate a printable fridge list.

    Args:
        items: Listing to render, typically ``InventoryStore.list(today)``.
        output_path: Where to save the PDF file.
        today: Day the listing was computed against, shown in the title.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4
        from reportlab.lib.styles import getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError("reportlab is required: pip install reportlab")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"Fridge {today.isoformat()}",
    )
    styles = getSampleStyleSheet()

    elements: list = [
        Paragraph(f"Fridge on {today.isoformat()}", styles["Title"]),
        Spacer(1, 6 * mm),
    ]

    if not items:
        elements.append(Paragraph("The fridge is empty.", styles["Normal"]))
        doc.build(elements)
        return output_path

    table_data = [["Food", "Best before", "Qty", "Days left", "State"]]
    for listed in items:
        name = listed.name + (" (open)" if listed.item.opened else "")
        table_data.append([
            name,
            listed.best_before.isoformat(),
            str(listed.quantity),
            str(listed.days_remaining),
            listed.freshness.label,
        ])

    style = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4A90D9")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("ALIGN", (2, 1), (3, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F5F5F5")]),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    # Band cell of each row takes the band color
    for row, listed in enumerate(items, 1):
        style.append(
            ("BACKGROUND", (4, row), (4, row), colors.HexColor(BAND_COLORS[listed.freshness]))
        )
        style.append(("TEXTCOLOR", (4, row), (4, row), colors.white))

    t = Table(table_data, colWidths=[70 * mm, 30 * mm, 15 * mm, 20 * mm, 25 * mm])
    t.setStyle(TableStyle(style))
    elements.append(t)

    doc.build(elements)
    return output_path
