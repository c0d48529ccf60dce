"""End-to-end conversations through a bootstrapped engine."""

import pytest

from registrar.bootstrap import bootstrap
from registrar.config.settings import Settings
from registrar.intent import IntentType

pytestmark = pytest.mark.integration


@pytest.fixture
def wired():
    return bootstrap(settings=Settings(), configure_logging=False)


class TestConversationFlow:
    """Multi-turn sessions against the mock services."""

    @pytest.mark.asyncio
    async def test_greeting_then_certificate(self, wired):
        """Should greet, issue a certificate and keep the whole history."""
        engine, ctx = wired

        greeting = await engine.handle_message("s1", "Hola", student_id="STU001")
        certificate = await engine.handle_message("s1", "Necesito un certificado de notas")

        assert greeting.reply_text.startswith("¡Buen")
        assert "Carlos" in greeting.reply_text
        assert "Número de seguimiento: CERT-" in certificate.reply_text
        assert certificate.metadata.intent == IntentType.REQUEST_CERTIFICATE

        stored = await ctx.store.get("s1")
        assert len(stored.history) == 4
        assert len(ctx.certificate_service.call_history) == 1

    @pytest.mark.asyncio
    async def test_indebted_student_is_blocked(self, wired):
        engine, ctx = wired

        response = await engine.handle_message(
            "s2", "Quiero un certificado de inscripción", student_id="STU003"
        )

        assert "deudas pendientes" in response.reply_text
        assert ctx.certificate_service.call_history == []
        assert response.metadata.error_code == "STUDENT_HAS_DEBTS"
        assert response.metadata.can_retry is False

    @pytest.mark.asyncio
    async def test_sessions_are_isolated(self, wired):
        """Should keep separate histories per session."""
        engine, ctx = wired

        await engine.handle_message("a", "Hola", student_id="STU001")
        await engine.handle_message("b", "Hola", student_id="STU002")
        await engine.handle_message("a", "Quiero ver mis calificaciones")

        assert len((await ctx.store.get("a")).history) == 4
        assert len((await ctx.store.get("b")).history) == 2
        assert (await ctx.store.get("b")).student_profile.first_name == "María"

    @pytest.mark.asyncio
    async def test_sweeper_lifecycle(self, wired):
        _, ctx = wired

        await ctx.sweeper.start()
        assert ctx.sweeper.running is True
        await ctx.sweeper.stop()
        assert ctx.sweeper.running is False

    def test_bootstrap_applies_settings(self):
        settings = Settings(session={"timeout_minutes": 5, "history_limit": 6})

        _, ctx = bootstrap(settings=settings, configure_logging=False)

        assert ctx.store.timeout.total_seconds() == 300
        assert ctx.settings.session.history_limit == 6
