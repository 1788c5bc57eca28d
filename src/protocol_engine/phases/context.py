"""Generation context and event factory shared by every phase routine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from protocol_engine.content.substitutions import IngredientSwaps
from protocol_engine.math.clock import event_status, event_time, time_markup
from protocol_engine.math.dosing import Portions, calculate_portions
from protocol_engine.models.enums import CAFFEINE, EventType, GutTier, Intensity, Theme
from protocol_engine.models.profile import UserProfile
from protocol_engine.models.session import SessionContext
from protocol_engine.models.timeline import TimelineEvent
from protocol_engine.rules.classifier import assess_event_risk, classify_gut_tier, theme_for_tier


@dataclass(frozen=True)
class EventFactory:
    """Builds TimelineEvents positioned relative to one reference instant.

    Markup, status and risk are all derived here at construction time so
    events are complete and immutable once created.
    """

    reference_time: datetime
    intensity: Intensity
    gut_scale: int
    profile: UserProfile | None = None

    def create(
        self,
        offset_minutes: int,
        label: str,
        title: str,
        event_type: EventType,
        details: Sequence[str],
        contains_caffeine: bool = False,
    ) -> TimelineEvent:
        # A caffeine mention in the details alone does not flag the event
        contains_caffeine = contains_caffeine or CAFFEINE in title
        instant = event_time(self.reference_time, offset_minutes)
        risk, factors = assess_event_risk(
            event_type,
            self.intensity,
            self.gut_scale,
            contains_caffeine,
            self.profile,
        )
        return TimelineEvent(
            time_markup=time_markup(self.reference_time, offset_minutes),
            label=label,
            title=title,
            type=event_type,
            timestamp=instant,
            details=tuple(details),
            status=event_status(self.reference_time, instant),
            risk_level=risk,
            risk_factors=factors,
            contains_caffeine=contains_caffeine,
        )


@dataclass(frozen=True)
class GenerationContext:
    """Frozen per-call state handed to every phase rule.

    Built once by the engine from a SessionContext so phases never
    recompute the theme, doses or substitutions.
    """

    session: SessionContext
    tier: GutTier
    theme: Theme
    user: UserProfile
    portions: Portions
    swaps: IngredientSwaps
    events: EventFactory

    @classmethod
    def from_session(cls, session: SessionContext) -> GenerationContext:
        user = session.user
        tier = classify_gut_tier(session.gut_scale)
        return cls(
            session=session,
            tier=tier,
            theme=theme_for_tier(tier),
            user=user,
            portions=calculate_portions(user.weight_kg),
            swaps=IngredientSwaps.for_profile(user),
            events=EventFactory(
                reference_time=session.reference_time,
                intensity=session.intensity,
                gut_scale=session.gut_scale,
                profile=session.profile,
            ),
        )

    @property
    def effective_offset(self) -> int:
        return self.session.effective_offset

    @property
    def days_out(self) -> int:
        """Requested prep horizon. Not clamped to the event's proximity."""
        return self.session.lead_time_days

    @property
    def reference_time(self) -> datetime:
        return self.session.reference_time
