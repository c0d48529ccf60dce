"""Test factories for creating test data."""

from tests.factories.conversation import ContextFactory
from tests.factories.services import CourseFactory, ProfileFactory, RecordFactory

__all__ = [
    "ContextFactory",
    "CourseFactory",
    "ProfileFactory",
    "RecordFactory",
]
