# confcore/apps/reviews/services/report_xlsx.py
from __future__ import annotations

from typing import Any, Dict

from openpyxl import Workbook
from openpyxl.styles import Font

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

EVALUATION_COLUMNS = (
    ("evaluator", "Evaluador"),
    ("institution", "Institución"),
    ("score", "Puntuación"),
    ("relevance_score", "Relevancia"),
    ("quality_score", "Calidad"),
    ("originality_score", "Originalidad"),
    ("recommendation", "Recomendación"),
    ("comments", "Comentarios"),
    ("date", "Fecha"),
)


def _fmt(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float):
        return round(value, 2)
    return value


def report_filename(report: Dict[str, Any]) -> str:
    return f"evaluaciones_ponencia_{report['submission']['id']}.xlsx"


def build_report_workbook(report: Dict[str, Any]) -> Workbook:
    """
    Dos hojas: 'Resumen' (ponencia + estadísticas + recomendaciones)
    y 'Evaluaciones' (una fila por evaluación).
    """
    bold = Font(bold=True)
    wb = Workbook()

    ws = wb.active
    ws.title = "Resumen"
    submission = report["submission"]
    stats = report["statistics"]
    recs = report["recommendations"]
    rows = [
        ("Ponencia", submission["title"]),
        ("ID", submission["id"]),
        ("Autor", submission["author"]),
        ("Tipo", submission["type"]),
        ("Estado", submission.get("status", "")),
        ("Evento", submission.get("event", "")),
        (None, None),
        ("Total de evaluaciones", stats["total_evaluations"]),
        ("Promedio general", _fmt(stats["average_score"])),
        ("Promedio relevancia", _fmt(stats["average_relevance"])),
        ("Promedio calidad", _fmt(stats["average_quality"])),
        ("Promedio originalidad", _fmt(stats["average_originality"])),
        (None, None),
        ("Aceptar", recs.get("accept", 0)),
        ("Revisión", recs.get("revision", 0)),
        ("Rechazar", recs.get("reject", 0)),
        ("Recomendación mayoritaria", _fmt(recs.get("majority"))),
    ]
    for label, value in rows:
        ws.append([label, value])
        if label:
            ws.cell(row=ws.max_row, column=1).font = bold
    ws.column_dimensions["A"].width = 28
    ws.column_dimensions["B"].width = 60

    ws = wb.create_sheet("Evaluaciones")
    ws.append([label for _, label in EVALUATION_COLUMNS])
    for cell in ws[1]:
        cell.font = bold
    for row in report["evaluations"]:
        ws.append([_fmt(row.get(key)) for key, _ in EVALUATION_COLUMNS])

    return wb
