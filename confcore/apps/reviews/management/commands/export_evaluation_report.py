# confcore/apps/reviews/management/commands/export_evaluation_report.py
from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from confcore.apps.core.errors import NotFound
from confcore.apps.reviews.services.evaluation import (
    build_evaluation_report,
    load_submission_with_evaluations,
)
from confcore.apps.reviews.services.report_xlsx import build_report_workbook, report_filename


class Command(BaseCommand):
    help = "Exporta a XLSX el reporte de evaluaciones de una ponencia."

    def add_arguments(self, parser):
        parser.add_argument("submission_id", type=int, help="ID de la ponencia.")
        parser.add_argument(
            "--output", "-o", default=None,
            help="Ruta del .xlsx (por defecto evaluaciones_ponencia_<id>.xlsx en el directorio actual).",
        )

    def handle(self, *args, **opts):
        try:
            loaded = load_submission_with_evaluations(opts["submission_id"])
        except NotFound as exc:
            raise CommandError(exc.message)

        report = build_evaluation_report(loaded)
        output = Path(opts["output"] or report_filename(report))
        output.parent.mkdir(parents=True, exist_ok=True)

        wb = build_report_workbook(report)
        wb.save(str(output))

        self.stdout.write(self.style.SUCCESS(
            f"✓ Reporte de '{report['submission']['title']}' "
            f"({report['statistics']['total_evaluations']} evaluaciones) -> {output}"
        ))
