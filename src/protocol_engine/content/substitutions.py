"""Intolerance-aware ingredient substitution.

Maps a profile's intolerances onto the ingredient names used in generated
detail strings. Only exact (case-sensitive) names trigger a swap:
"Dairy", "Gluten", "Caffeine", "Fructose". Any other intolerance is
display-only.
"""

from __future__ import annotations

from dataclasses import dataclass

from protocol_engine.models.enums import CAFFEINE, DAIRY, FRUCTOSE, GLUTEN
from protocol_engine.models.profile import UserProfile

# (default, substitute) per ingredient slot
_PROTEIN = ("Whey Isolate", "Plant-Based Isolate (Pea/Soy)")
_YOGURT = ("Greek Yogurt (2-5%)", "Coconut/Almond Yogurt")
_CASEIN = ("Casein or Cottage Cheese", "Slow-Release Plant Protein")
_TOAST = ("White/Sourdough Toast", "Gluten-Free Toast")
_PASTA = ("Pasta", "Rice Noodles/GF Pasta")
_SNACK = (
    "SNACK CHOICE: Oat bar or ripe banana. Something familiar.",
    "SNACK CHOICE: Ripe banana or GF Oat Bar.",
)


@dataclass(frozen=True)
class IngredientSwaps:
    """Resolved ingredient names and content switches for one profile."""

    dairy_free: bool = False
    gluten_free: bool = False
    caffeine_free: bool = False
    fructose_free: bool = False

    @classmethod
    def for_profile(cls, profile: UserProfile) -> IngredientSwaps:
        return cls(
            dairy_free=profile.has_intolerance(DAIRY),
            gluten_free=profile.has_intolerance(GLUTEN),
            caffeine_free=profile.has_intolerance(CAFFEINE),
            fructose_free=profile.has_intolerance(FRUCTOSE),
        )

    @property
    def protein(self) -> str:
        return _PROTEIN[self.dairy_free]

    @property
    def yogurt(self) -> str:
        return _YOGURT[self.dairy_free]

    @property
    def casein(self) -> str:
        return _CASEIN[self.dairy_free]

    @property
    def toast(self) -> str:
        return _TOAST[self.gluten_free]

    @property
    def pasta(self) -> str:
        return _PASTA[self.gluten_free]

    @property
    def snack_line(self) -> str:
        return _SNACK[self.gluten_free]

    @property
    def allows_caffeine(self) -> bool:
        return not self.caffeine_free
