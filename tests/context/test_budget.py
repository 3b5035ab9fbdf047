"""Tests for budget and priority tier configuration."""

import pytest

from inxtone.config import settings
from inxtone.context.budget import ContextBudget, PriorityTiers
from inxtone.context.models import InvalidBudgetError


class TestContextBudget:
    def test_defaults(self) -> None:
        budget = ContextBudget()

        assert budget.total == 1_000_000
        assert budget.output_reserve == 4_000
        assert budget.prompt_reserve == 2_000
        assert budget.usable == 994_000

    def test_usable_subtracts_reserves(self) -> None:
        budget = ContextBudget(total=10_000, output_reserve=1_000, prompt_reserve=500)

        assert budget.usable == 8_500

    def test_reserves_may_consume_everything(self) -> None:
        budget = ContextBudget(total=100, output_reserve=60, prompt_reserve=40)

        assert budget.usable == 0

    def test_reserves_exceeding_total_rejected(self) -> None:
        with pytest.raises(InvalidBudgetError, match="exceed total"):
            ContextBudget(total=100, output_reserve=80, prompt_reserve=40)

    @pytest.mark.parametrize(
        "field", ["total", "output_reserve", "prompt_reserve"]
    )
    def test_negative_values_rejected(self, field: str) -> None:
        kwargs = {"total": 100, "output_reserve": 10, "prompt_reserve": 10}
        kwargs[field] = -1

        with pytest.raises(InvalidBudgetError, match=field):
            ContextBudget(**kwargs)

    def test_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings.context, "total_budget", 50_000)
        monkeypatch.setattr(settings.context, "output_reserve", 1_000)
        monkeypatch.setattr(settings.context, "prompt_reserve", 2_000)

        budget = ContextBudget.from_settings()

        assert budget.usable == 47_000


class TestPriorityTiers:
    def test_defaults_are_strictly_ordered(self) -> None:
        tiers = PriorityTiers()

        assert tiers.content > tiers.outline > tiers.character
        assert tiers.character > tiers.world > tiers.plot
        assert (tiers.content, tiers.plot, tiers.custom) == (1000, 200, 200)

    def test_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings.context, "plot_priority", 900)

        tiers = PriorityTiers.from_settings()

        assert tiers.plot == 900
        assert tiers.content == settings.context.content_priority
