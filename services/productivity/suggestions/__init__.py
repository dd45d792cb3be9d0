"""Suggestions service native package exports."""

from services.productivity.suggestions.component import SERVICE_COMPONENT_ID
from services.productivity.suggestions.domain import (
    EnergyTrend,
    SuggestionKind,
    SuggestionReport,
    TaskSuggestion,
)
from services.productivity.suggestions.implementation import DefaultSuggestionService
from services.productivity.suggestions.service import (
    SuggestionService,
    build_suggestion_service,
)

__all__ = [
    "DefaultSuggestionService",
    "EnergyTrend",
    "SERVICE_COMPONENT_ID",
    "SuggestionKind",
    "SuggestionReport",
    "SuggestionService",
    "TaskSuggestion",
    "build_suggestion_service",
]
