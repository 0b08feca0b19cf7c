from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):
    """Build the DI container once Django settings are loaded (repos import models)."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger(__name__).debug("DI container already initialised.")
        return container

    # ------- IMPORTS THAT TOUCH DJANGO MODELS -------
    from medtrack_core.adapters.api_clients.gemini_api_client import GeminiAPIClient
    from medtrack_core.adapters.repositories.appointment_repo_impl import AppointmentRepoImpl
    from medtrack_core.adapters.repositories.bill_repo_impl import BillRepoImpl
    from medtrack_core.adapters.repositories.insurance_repo_impl import InsuranceRepoImpl
    from medtrack_core.adapters.repositories.result_repo_impl import ResultRepoImpl

    # Commands / queries
    from medtrack_core.core.application.commands.coverage_commands import AnalyzeInsuranceCoverageCommand
    from medtrack_core.core.application.queries.dashboard_queries import (
        GetCostBreakdownQuery,
        GetDashboardStatsQuery,
        GetTimelineQuery,
    )

    # CQRS buses
    from medtrack_core.core.application.cqrs import CommandBus, QueryBus

    # Handlers
    from medtrack_core.core.application.handlers.coverage_handlers import AnalyzeInsuranceCoverageHandler
    from medtrack_core.core.application.handlers.dashboard_handlers import (
        GetCostBreakdownHandler,
        GetDashboardStatsHandler,
        GetTimelineHandler,
    )

    # Services
    from medtrack_core.core.application.services.coverage_service import CoverageAnalysisService
    from medtrack_core.core.application.services.dashboard_service import DashboardService

    # ─────────────────────────────────────────────────────────
    # DI container
    # ─────────────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # CQRS
        command_bus = providers.Singleton(CommandBus)
        query_bus   = providers.Singleton(QueryBus)

        # API clients
        gemini_client = providers.Singleton(
            GeminiAPIClient,
            api_key=config.gemini.api_key,
            base_url=config.gemini.api_base,
            timeout=config.gemini.timeout,
        )

        # Repositories
        appointment_repo = providers.Singleton(AppointmentRepoImpl)
        result_repo      = providers.Singleton(ResultRepoImpl)
        bill_repo        = providers.Singleton(BillRepoImpl)
        insurance_repo   = providers.Singleton(InsuranceRepoImpl)

        # Services
        dashboard_service = providers.Singleton(
            DashboardService,
            appointment_repo=appointment_repo,
            result_repo=result_repo,
            bill_repo=bill_repo,
            recent_limit=config.dashboard.recent_limit,
        )
        coverage_service = providers.Singleton(
            CoverageAnalysisService,
            insurance_repo=insurance_repo,
            llm_client=gemini_client,
            model_names=config.gemini.models,
        )

        # Handlers
        dashboard_stats_handler  = providers.Factory(GetDashboardStatsHandler, dashboard_service=dashboard_service)
        timeline_handler         = providers.Factory(GetTimelineHandler,       dashboard_service=dashboard_service)
        cost_breakdown_handler   = providers.Factory(GetCostBreakdownHandler,  dashboard_service=dashboard_service)
        analyze_coverage_handler = providers.Factory(
            AnalyzeInsuranceCoverageHandler, coverage_service=coverage_service
        )

        def init(self):
            cmd_bus = self.command_bus()
            cmd_bus.register(AnalyzeInsuranceCoverageCommand, self.analyze_coverage_handler())

            qry_bus = self.query_bus()
            qry_bus.register(GetDashboardStatsQuery, self.dashboard_stats_handler())
            qry_bus.register(GetTimelineQuery,       self.timeline_handler())
            qry_bus.register(GetCostBreakdownQuery,  self.cost_breakdown_handler())

    # ------- INSTANTIATION & CONFIG -------
    container = Container()
    container.config.dashboard.recent_limit.from_value(settings.DASHBOARD_RECENT_LIMIT)
    container.config.gemini.api_key.from_value(settings.GEMINI_API_KEY)
    container.config.gemini.api_base.from_value(settings.GEMINI_API_BASE)
    container.config.gemini.timeout.from_value(settings.GEMINI_TIMEOUT)
    container.config.gemini.models.from_value(list(settings.GEMINI_MODELS))
    Container.init(container)
    return container
