"""Personalized greetings."""

from datetime import datetime

from registrar.services.models import StudentProfile

IDENTIFICATION_REQUEST = (
    "¡Hola! Bienvenido al asistente virtual de la universidad. Para poder "
    "ayudarte mejor, ¿podrías proporcionarme tu número de identificación de "
    "estudiante?"
)

STATUS_MESSAGES = {
    "active": "Tu estado académico está activo.",
    "inactive": "Noto que tu estado académico está inactivo.",
    "graduated": "¡Felicitaciones por tu graduación!",
}


def generate_greeting(
    profile: StudentProfile | None, include_academic_status: bool = False
) -> str:
    """Greet by full name, or ask for identification without a profile."""
    if profile is None:
        return IDENTIFICATION_REQUEST

    greeting = f"¡Hola {format_name(profile.first_name, profile.last_name)}! "
    if profile.program:
        greeting += f"Veo que estás inscrito en {profile.program.name}. "
    if include_academic_status and profile.academic_status in STATUS_MESSAGES:
        greeting += f"{STATUS_MESSAGES[profile.academic_status]} "
    return greeting + "¿En qué puedo ayudarte hoy?"


def time_of_day_greeting(hour: int) -> str:
    if 5 <= hour < 12:
        return "¡Buenos días"
    if 12 <= hour < 19:
        return "¡Buenas tardes"
    return "¡Buenas noches"


def generate_time_based_greeting(profile: StudentProfile, now: datetime) -> str:
    """Greet by first name with a greeting matching the hour of now."""
    greeting = f"{time_of_day_greeting(now.hour)}, {profile.first_name}! "
    if profile.program:
        greeting += f"Veo que estás en {profile.program.name}. "
    return greeting + "¿Cómo puedo ayudarte?"


def format_name(first_name: str, last_name: str) -> str:
    """Trim and capitalize each word of a student's name."""

    def capitalize(value: str) -> str:
        return " ".join(word[:1].upper() + word[1:].lower() for word in value.strip().split())

    return f"{capitalize(first_name)} {capitalize(last_name)}"
