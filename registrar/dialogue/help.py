"""Help and capability menus."""

from registrar.services.models import StudentProfile

UNKNOWN_REQUEST_MESSAGE = (
    "No estoy seguro de entender tu solicitud. Puedo ayudarte con:\n\n"
    "- Generar certificados académicos\n"
    "- Consultar información sobre programas\n"
    "- Revisar tu estado académico\n"
    "- Responder preguntas sobre admisiones\n"
    "- Realizar trámites como inscripciones, retiros o apelaciones\n\n"
    "¿Con cuál de estos temas te gustaría ayuda?"
)


def generate_help_message(profile: StudentProfile | None) -> str:
    """Capability menu, addressed by first name when known."""
    greeting = f"Hola {profile.first_name}" if profile else "Hola"

    return (
        f"{greeting}. Estoy aquí para ayudarte. Puedo asistirte con:\n\n"
        "📄 **Certificados**: Puedo generar certificados de inscripción, "
        "calificaciones o graduación\n"
        "📚 **Información Académica**: Consulta sobre programas, requisitos y "
        "fechas de inscripción\n"
        "📊 **Estado Académico**: Revisa tus calificaciones y recibe "
        "recomendaciones personalizadas\n"
        "📝 **Trámites**: Inscripciones, registro de materias, apelaciones, "
        "cambios de programa y retiros\n"
        "❓ **Preguntas Generales**: Respondo dudas sobre trámites y "
        "procedimientos\n\n"
        "¿En qué puedo ayudarte hoy?"
    )
