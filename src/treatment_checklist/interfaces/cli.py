from __future__ import annotations

import argparse
import json
import sys
from typing import TextIO

import structlog

from treatment_checklist.adapters.observability.metrics import render_latest
from treatment_checklist.core.application.dtos.checklist_dto import ChecklistItemDTO
from treatment_checklist.core.application.services.checklist_service import ChecklistFacadeService
from treatment_checklist.core.domain.entities.checklist_item_entity import ChecklistItemEntity
from treatment_checklist.core.domain.enums import StepName
from treatment_checklist.core.domain.events.exceptions import ChecklistError
from treatment_checklist.core.domain.services.checklist_projector import summarize_pending

logger = structlog.get_logger(__name__)


# ───────────────────────────────────────────────
# Renderização
# ───────────────────────────────────────────────
def render_table(items: list[ChecklistItemEntity], out: TextIO) -> None:
    if not items:
        out.write("Nenhum tratamento pendente.\n")
        return

    for item in items:
        out.write(f"{item.patient_name or '(sem nome)'} | {item.protocol_name} | tratamento {item.treatment_id}\n")
        out.write(f"  responsável: {item.guardian_name or '-'}  telefone: {item.phone or '-'}  dose: {item.dose_id or '-'}\n")
        out.write("  " + "  ".join(f"{name.label}:{st.value}" for name, st in item.steps.items()) + "\n")
        if item.missing_info:
            out.write(f"  faltando: {', '.join(item.missing_info)}\n")

    summary = summarize_pending(items)
    out.write(f"\n{len(items)} tratamento(s) pendente(s)\n")
    out.write("  ".join(f"{name.label}={count}" for name, count in summary.items()) + "\n")


def render_json(items: list[ChecklistItemEntity], out: TextIO) -> None:
    data = [ChecklistItemDTO.from_entity(i).model_dump(by_alias=True, mode="json") for i in items]
    json.dump(data, out, ensure_ascii=False, indent=2)
    out.write("\n")


# ───────────────────────────────────────────────
# Comandos
# ───────────────────────────────────────────────
class BaseCommand:
    """Subcomando no estilo management command: `add_arguments` + `handle`."""

    name: str = ""
    help: str = ""

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--json", action="store_true", help="Saída em JSON (camelCase).")

    def run(self, service: ChecklistFacadeService, options: argparse.Namespace) -> list[ChecklistItemEntity]:
        raise NotImplementedError

    def handle(self, service: ChecklistFacadeService, options: argparse.Namespace, out: TextIO) -> None:
        items = self.run(service, options)
        if options.json:
            render_json(items, out)
        else:
            render_table(items, out)


class ChecklistCommand(BaseCommand):
    name = "checklist"
    help = "Lista os tratamentos com alguma etapa pendente."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("--step", choices=[s.value for s in StepName], help="Somente itens com esta etapa pendente.")
        parser.add_argument("--search", help="Filtra por nome do paciente ou responsável.")
        parser.add_argument("--metrics", action="store_true", help="Imprime as métricas Prometheus ao final.")

    def run(self, service, options):
        return service.get_checklist(step=options.step, search=options.search)

    def handle(self, service, options, out):
        super().handle(service, options, out)
        if options.metrics:
            out.write(render_latest().decode())


class DoseStatusCommand(BaseCommand):
    name = "dose-status"
    help = "Altera o status de aplicação de uma dose."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("dose_id")
        parser.add_argument("status", help="Rótulo ('Aplicada') ou nome ('APPLIED').")

    def run(self, service, options):
        return service.update_dose_status(options.dose_id, options.status)


class PaymentStatusCommand(BaseCommand):
    name = "payment-status"
    help = "Altera o status de pagamento de uma dose."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("dose_id")
        parser.add_argument("payment_status", help="Rótulo ('PAGO') ou nome ('PAID').")

    def run(self, service, options):
        return service.update_payment_status(options.dose_id, options.payment_status)


class DeliveryCommand(BaseCommand):
    name = "confirm-delivery"
    help = "Confirma a entrega do medicamento (pagamento = PAGO)."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("dose_id")

    def run(self, service, options):
        return service.confirm_delivery(options.dose_id)


class UploadConsentCommand(BaseCommand):
    name = "upload-consent"
    help = "Registra o termo de consentimento de um paciente."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("patient_id")
        parser.add_argument("file_name")

    def run(self, service, options):
        return service.upload_consent(options.patient_id, options.file_name)


class SurveyAnswerCommand(BaseCommand):
    name = "survey-answer"
    help = "Registra a resposta da pesquisa de satisfação (nota 1 a 10)."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("dose_id")
        parser.add_argument("score", type=int)
        parser.add_argument("--comment")

    def run(self, service, options):
        return service.record_survey(options.dose_id, options.score, options.comment)


class SurveyMarkCommand(BaseCommand):
    name = "survey-mark"
    help = "Marca a pesquisa como enviada ou não enviada."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("dose_id")
        parser.add_argument("survey_status", help="SENT / NOT_SENT ou os rótulos equivalentes.")

    def run(self, service, options):
        return service.mark_survey(options.dose_id, options.survey_status)


COMMANDS: tuple[type[BaseCommand], ...] = (
    ChecklistCommand,
    DoseStatusCommand,
    PaymentStatusCommand,
    DeliveryCommand,
    UploadConsentCommand,
    SurveyAnswerCommand,
    SurveyMarkCommand,
)


def build_parser() -> tuple[argparse.ArgumentParser, dict[str, BaseCommand]]:
    parser = argparse.ArgumentParser(
        prog="treatment_checklist",
        description="Checklist operacional de tratamentos medicamentosos.",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    registry: dict[str, BaseCommand] = {}
    for cls in COMMANDS:
        cmd = cls()
        cmd.add_arguments(sub.add_parser(cmd.name, help=cmd.help, description=cmd.help))
        registry[cmd.name] = cmd
    return parser, registry


def _default_service() -> ChecklistFacadeService:
    from config import settings
    from config.structlog_config import configure_logging
    from treatment_checklist.adapters.config.composition_root import setup_di_container_from_settings

    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
    return setup_di_container_from_settings(settings).checklist_service()


def main(
    argv: list[str] | None = None,
    *,
    service: ChecklistFacadeService | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    parser, registry = build_parser()
    options = parser.parse_args(argv)
    command = registry[options.command]

    service = service or _default_service()
    try:
        command.handle(service, options, out)
    except ChecklistError as exc:
        logger.warning("cli.command_failed", command=command.name, error=str(exc))
        err.write(f"{exc}\n")
        return 1
    return 0
