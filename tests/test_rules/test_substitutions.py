"""Tests for intolerance-aware ingredient substitution."""

from __future__ import annotations

from protocol_engine.content.substitutions import IngredientSwaps
from protocol_engine.models.profile import Intolerance, UserProfile


def _swaps(*names: str) -> IngredientSwaps:
    profile = UserProfile(intolerances=tuple(Intolerance(n) for n in names))
    return IngredientSwaps.for_profile(profile)


class TestIngredientSwaps:
    def test_defaults(self) -> None:
        swaps = _swaps()
        assert swaps.protein == "Whey Isolate"
        assert swaps.yogurt == "Greek Yogurt (2-5%)"
        assert swaps.casein == "Casein or Cottage Cheese"
        assert swaps.toast == "White/Sourdough Toast"
        assert swaps.pasta == "Pasta"
        assert swaps.allows_caffeine

    def test_dairy_swaps_dairy_slots_only(self) -> None:
        swaps = _swaps("Dairy")
        assert swaps.protein == "Plant-Based Isolate (Pea/Soy)"
        assert swaps.yogurt == "Coconut/Almond Yogurt"
        assert swaps.casein == "Slow-Release Plant Protein"
        assert swaps.toast == "White/Sourdough Toast"

    def test_gluten_swaps_grain_slots(self) -> None:
        swaps = _swaps("Gluten")
        assert swaps.toast == "Gluten-Free Toast"
        assert swaps.pasta == "Rice Noodles/GF Pasta"
        assert "GF Oat Bar" in swaps.snack_line
        assert swaps.protein == "Whey Isolate"

    def test_caffeine_and_fructose_flags(self) -> None:
        swaps = _swaps("Caffeine", "Fructose")
        assert not swaps.allows_caffeine
        assert swaps.fructose_free

    def test_match_is_case_sensitive(self) -> None:
        swaps = _swaps("dairy", "Lactose")
        assert not swaps.dairy_free
        assert swaps.protein == "Whey Isolate"
