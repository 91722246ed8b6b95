from dependency_injector import containers, providers

container = None


def setup_di_container_from_settings(settings):
    """Inicializa o DI container a partir do módulo de settings (decouple)."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    # API client e repositórios
    from treatment_checklist.adapters.api_clients.clinic_api_client import ClinicRecordsAPIClient
    from treatment_checklist.adapters.observability.event_listeners import audit_domain_event
    from treatment_checklist.adapters.repositories.api_consent_document_repo_impl import (
        ConsentDocumentRepoImpl,
    )
    from treatment_checklist.adapters.repositories.api_dose_repo_impl import DoseRepoImpl
    from treatment_checklist.adapters.repositories.api_snapshot_repo_impl import SnapshotRepoImpl

    # Commands / Queries
    from treatment_checklist.core.application.commands.consent_commands import (
        UploadConsentDocumentCommand,
    )
    from treatment_checklist.core.application.commands.dose_commands import (
        ConfirmDeliveryCommand,
        MarkSurveyCommand,
        RecordSurveyResponseCommand,
        UpdateDosePaymentStatusCommand,
        UpdateDoseStatusCommand,
    )

    # CQRS buses
    from treatment_checklist.core.application.cqrs import CommandBusImpl, QueryBusImpl

    # Handlers
    from treatment_checklist.core.application.handlers.checklist_handlers import GetChecklistHandler
    from treatment_checklist.core.application.handlers.mutation_handlers import (
        ConfirmDeliveryHandler,
        MarkSurveyHandler,
        RecordSurveyResponseHandler,
        UpdateDosePaymentStatusHandler,
        UpdateDoseStatusHandler,
        UploadConsentDocumentHandler,
    )
    from treatment_checklist.core.application.queries.checklist_queries import GetChecklistQuery

    # Serviços
    from treatment_checklist.core.application.services.checklist_service import ChecklistFacadeService
    from treatment_checklist.core.application.services.snapshot_service import SnapshotService
    from treatment_checklist.core.domain.events.events import DomainEvent
    from treatment_checklist.core.domain.mappers.record_payload_mapper import RecordPayloadMapper

    # ─────────────────────────────────────────────────────────
    # Construção do container DI
    # ─────────────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra & integração
        event_dispatcher = providers.Singleton(
            'treatment_checklist.core.domain.services.event_dispatcher.EventDispatcher'
        )

        # CQRS
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=event_dispatcher)
        query_bus   = providers.Singleton(QueryBusImpl)

        # API client + mapper
        clinic_client = providers.Singleton(
            ClinicRecordsAPIClient,
            base_url=config.api.base_url,
            token=config.api.token,
            timeout=config.api.timeout,
            retries=config.api.retries,
            treatments_limit=config.limits.treatments,
            patients_limit=config.limits.patients,
            doses_limit=config.limits.doses,
        )
        record_mapper = providers.Object(RecordPayloadMapper)

        # Implementações de Repositórios
        snapshot_repo = providers.Singleton(SnapshotRepoImpl, client=clinic_client, mapper=record_mapper)
        dose_repo     = providers.Singleton(DoseRepoImpl, client=clinic_client)
        consent_repo  = providers.Singleton(ConsentDocumentRepoImpl, client=clinic_client)

        snapshot_service = providers.Singleton(
            SnapshotService,
            repo=snapshot_repo,
            max_workers=config.snapshot.workers,
        )

        # Handlers (comandos)
        update_dose_status_handler   = providers.Factory(UpdateDoseStatusHandler,        repo=dose_repo)
        update_payment_handler       = providers.Factory(UpdateDosePaymentStatusHandler, repo=dose_repo)
        confirm_delivery_handler     = providers.Factory(ConfirmDeliveryHandler,         repo=dose_repo)
        record_survey_handler        = providers.Factory(RecordSurveyResponseHandler,    repo=dose_repo)
        mark_survey_handler          = providers.Factory(MarkSurveyHandler,              repo=dose_repo)
        upload_consent_handler       = providers.Factory(UploadConsentDocumentHandler,   repo=consent_repo)

        # Handlers (queries)
        get_checklist_handler = providers.Factory(GetChecklistHandler, snapshot_service=snapshot_service)

        # Fachada
        checklist_service = providers.Singleton(
            ChecklistFacadeService,
            command_bus=command_bus,
            query_bus=query_bus,
        )

        def init(self):
            cmd_bus = self.command_bus()
            cmd_bus.register(UpdateDoseStatusCommand, self.update_dose_status_handler())
            cmd_bus.register(UpdateDosePaymentStatusCommand, self.update_payment_handler())
            cmd_bus.register(ConfirmDeliveryCommand, self.confirm_delivery_handler())
            cmd_bus.register(RecordSurveyResponseCommand, self.record_survey_handler())
            cmd_bus.register(MarkSurveyCommand, self.mark_survey_handler())
            cmd_bus.register(UploadConsentDocumentCommand, self.upload_consent_handler())

            qry_bus = self.query_bus()
            qry_bus.register(GetChecklistQuery, self.get_checklist_handler())

            # auditoria de toda mutação aplicada
            self.event_dispatcher().subscribe(DomainEvent, audit_domain_event)

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.api.base_url.from_value(settings.CLINIC_API_BASE)
    container.config.api.token.from_value(settings.CLINIC_API_TOKEN)
    container.config.api.timeout.from_value(settings.CLINIC_API_TIMEOUT)
    container.config.api.retries.from_value(settings.CLINIC_API_RETRIES)
    container.config.limits.treatments.from_value(settings.TREATMENTS_FETCH_LIMIT)
    container.config.limits.patients.from_value(settings.PATIENTS_FETCH_LIMIT)
    container.config.limits.doses.from_value(settings.DOSES_FETCH_LIMIT)
    container.config.snapshot.workers.from_value(settings.SNAPSHOT_FETCH_WORKERS)
    Container.init(container)
    return container


def reset_container() -> None:
    """Descarta o container global (testes / troca de settings)."""
    global container  # noqa: PLW0603
    container = None
