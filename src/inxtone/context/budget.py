"""Token budget and priority tier configuration for context builders."""

from dataclasses import dataclass

from inxtone.config import settings

from .models import InvalidBudgetError


@dataclass(frozen=True)
class ContextBudget:
    """Token budget allocation for one context assembly.

    Default allocation (1M tokens):
    - Output: 4K reserved for the model's response
    - Prompt: 2K reserved for the template and user instructions
    - Context: the remaining ~994K for Story Bible items
    """

    total: int = 1_000_000
    output_reserve: int = 4_000
    prompt_reserve: int = 2_000

    def __post_init__(self) -> None:
        for name in ("total", "output_reserve", "prompt_reserve"):
            value = getattr(self, name)
            if value < 0:
                raise InvalidBudgetError(f"{name} must be non-negative, got {value}")
        if self.output_reserve + self.prompt_reserve > self.total:
            raise InvalidBudgetError(
                f"Reserves ({self.output_reserve} + {self.prompt_reserve}) "
                f"exceed total budget {self.total}"
            )

    @property
    def usable(self) -> int:
        """Tokens available for context items."""
        return self.total - self.output_reserve - self.prompt_reserve

    @classmethod
    def from_settings(cls) -> "ContextBudget":
        """Create ContextBudget from application settings."""
        ctx = settings.context
        return cls(
            total=ctx.total_budget,
            output_reserve=ctx.output_reserve,
            prompt_reserve=ctx.prompt_reserve,
        )


@dataclass(frozen=True)
class PriorityTiers:
    """Priority assigned to each layer of chapter context.

    Higher values survive truncation first.
    """

    content: int = 1000  # L1: chapter content, previous-chapter tail
    outline: int = 800  # L2: outline, arc
    character: int = 600  # L3: characters, scoped relationships
    world: int = 400  # L4: locations, power system, social rules
    plot: int = 200  # L5: foreshadowing, hooks
    custom: int = 200

    @classmethod
    def from_settings(cls) -> "PriorityTiers":
        """Create PriorityTiers from application settings."""
        ctx = settings.context
        return cls(
            content=ctx.content_priority,
            outline=ctx.outline_priority,
            character=ctx.character_priority,
            world=ctx.world_priority,
            plot=ctx.plot_priority,
            custom=ctx.custom_priority,
        )
