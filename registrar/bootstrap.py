"""Bootstrap module for quick Registrar setup.

Wires configuration, logging, an in-memory context store and the mock
student services into a ReasoningEngine, for notebooks, demos and
integration tests.

Example usage:

    from registrar.bootstrap import bootstrap

    engine, ctx = bootstrap()

    response = await engine.handle_message(
        session_id="demo",
        message="Hola",
        student_id="STU001",
    )
"""

from dataclasses import dataclass

from registrar.config import Settings, get_settings
from registrar.conversation import ContextSweeper, InMemoryContextStore
from registrar.observability.logging import get_logger, setup_logging
from registrar.reasoning import ReasoningEngine
from registrar.services import (
    MockAcademicRecordService,
    MockCertificateService,
    MockKnowledgeService,
    MockProfileService,
)

logger = get_logger(__name__)


@dataclass
class BootstrapContext:
    """Stores and services created by bootstrap, for inspection in tests."""

    settings: Settings
    store: InMemoryContextStore
    sweeper: ContextSweeper
    profile_service: MockProfileService
    record_service: MockAcademicRecordService
    certificate_service: MockCertificateService
    knowledge_service: MockKnowledgeService


def bootstrap(
    settings: Settings | None = None,
    configure_logging: bool = True,
) -> tuple[ReasoningEngine, BootstrapContext]:
    """Bootstrap a ReasoningEngine backed by mock services.

    The returned sweeper is not started; call `await ctx.sweeper.start()`
    from a running event loop to reclaim expired contexts periodically.

    Args:
        settings: Settings to use (default: get_settings())
        configure_logging: Whether to call setup_logging from settings

    Returns:
        Tuple of (ReasoningEngine, BootstrapContext)
    """
    settings = settings or get_settings()

    if configure_logging:
        log_config = settings.observability.logging
        setup_logging(
            level=log_config.level,
            format=log_config.format,
            redact_pii=log_config.redact_pii,
        )

    store = InMemoryContextStore(timeout=settings.session.timeout)
    sweeper = ContextSweeper(store, settings.session.sweep_interval_seconds)

    profile_service = MockProfileService()
    record_service = MockAcademicRecordService()
    certificate_service = MockCertificateService()
    knowledge_service = MockKnowledgeService()

    engine = ReasoningEngine(
        store=store,
        profile_service=profile_service,
        record_service=record_service,
        certificate_service=certificate_service,
        knowledge_service=knowledge_service,
        session_config=settings.session,
        engine_config=settings.engine,
        procedures_config=settings.procedures,
    )

    logger.info(
        "engine_bootstrapped",
        app_name=settings.app_name,
        session_timeout_minutes=settings.session.timeout_minutes,
        history_limit=settings.session.history_limit,
    )

    ctx = BootstrapContext(
        settings=settings,
        store=store,
        sweeper=sweeper,
        profile_service=profile_service,
        record_service=record_service,
        certificate_service=certificate_service,
        knowledge_service=knowledge_service,
    )
    return engine, ctx
