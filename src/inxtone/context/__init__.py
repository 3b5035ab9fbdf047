"""Context assembly and token budgeting for prompt injection."""

from .budget import ContextBudget, PriorityTiers
from .chapter import ChapterContextBuilder
from .formatting import format_character, format_context
from .models import (
    BuiltContext,
    ContextAssemblyError,
    ContextItem,
    ContextItemType,
    ContextSection,
    FormattedContext,
    InvalidBudgetError,
)
from .project import ProjectContextBuilder
from .relationships import scoped_relationships
from .store_types import StoryBible
from .tokens import count_tokens, truncate_to_budget

__all__ = [
    "BuiltContext",
    "ChapterContextBuilder",
    "ContextAssemblyError",
    "ContextBudget",
    "ContextItem",
    "ContextItemType",
    "ContextSection",
    "FormattedContext",
    "InvalidBudgetError",
    "PriorityTiers",
    "ProjectContextBuilder",
    "StoryBible",
    "count_tokens",
    "format_character",
    "format_context",
    "scoped_relationships",
    "truncate_to_budget",
]
