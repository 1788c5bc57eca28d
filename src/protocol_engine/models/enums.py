"""Enumerations and editorial constants for the protocol engine.

Enums are string-valued so records round-trip through JSON unchanged.
Dosing coefficients are fixed editorial values derived from a 75 kg
reference athlete; they are not a physiological model.
"""

from enum import Enum, IntEnum


class SessionTimeBucket(str, Enum):
    """Coarse "when does the session start" choice from the check-in form."""

    JUST_FINISHED = "just_finished"
    NOW = "now"
    ONE_HOUR = "1hr"
    TWO_HOURS_PLUS = "2hr+"
    RACE_PREP_72H = "race_prep_72h"


class Intensity(str, Enum):
    ZONE2 = "zone2"
    THRESHOLD = "threshold"
    MAX_EFFORT = "max_effort"


class DurationBucket(str, Enum):
    """Session length buckets: <1h, 1-2h, 2-4h, 4h+."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    ULTRA = "ultra"


class Theme(str, Enum):
    """Go/no-go banner. GOLD is reserved and never assigned by the engine."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    BLACK = "black"
    GOLD = "gold"


class GutTier(IntEnum):
    """Gut-state tier. Lower value means a healthier gut."""

    TIER_1 = 1
    TIER_2 = 2
    TIER_3 = 3
    TIER_4 = 4
    TIER_5 = 5


class EventType(str, Enum):
    NUTRITION = "nutrition"
    HYDRATION = "hydration"
    TRAINING = "training"
    RECOVERY = "recovery"


class EventStatus(str, Enum):
    COMPLETED = "completed"
    ACTIVE = "active"
    UPCOMING = "upcoming"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TravelMode(str, Enum):
    FLIGHT = "flight"
    DRIVE = "drive"
    TRAIN = "train"
    OTHER = "other"


class AdhocType(str, Enum):
    BOWEL = "bowel"
    MEAL = "meal"
    SLEEP = "sleep"
    SYMPTOM = "symptom"
    WORKOUT = "workout"


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class FutureEventType(str, Enum):
    RACE = "race"
    TRAINING = "training"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Session timing
# ---------------------------------------------------------------------------
# Start offsets (minutes from now) for the coarse session-time buckets
SESSION_BUCKET_OFFSET_MIN = {
    SessionTimeBucket.ONE_HOUR: 60,
    SessionTimeBucket.TWO_HOURS_PLUS: 120,
}

DURATION_BUCKET_MIN = {
    DurationBucket.SHORT: 45,
    DurationBucket.MEDIUM: 90,
    DurationBucket.LONG: 180,
    DurationBucket.ULTRA: 240,
}
DEFAULT_DURATION_MIN = 60

DEFAULT_LEAD_TIME_DAYS = 3
MAX_LEAD_TIME_DAYS = 14

# ---------------------------------------------------------------------------
# Gut-state tiering (gut scale 1-10, 10 = best)
# ---------------------------------------------------------------------------
GUT_TIER_1_MIN = 9
GUT_TIER_2_MIN = 7
GUT_TIER_3_MIN = 5
GUT_TIER_4_MIN = 3

# Max-effort training becomes high risk below this gut score
HIGH_RISK_GUT_THRESHOLD = 6
# Start event adds the abort-threshold safety line below this gut score
SAFETY_VALVE_GUT_THRESHOLD = 7

# Recall matches sessions within this many gut points
RECALL_GUT_TOLERANCE = 2

# ---------------------------------------------------------------------------
# Clock windows
# ---------------------------------------------------------------------------
SLEEP_WINDOW_START_HOUR = 23  # [23:00, 05:00)
SLEEP_WINDOW_END_HOUR = 5

DINNER_CAP_THRESHOLD = (19, 30)  # at or after 19:30 gets clamped...
DINNER_CAP_TIME = (19, 0)        # ...to 19:00 the same day

# Event is "active" within this many minutes either side of now
ACTIVE_WINDOW_MIN = 15

# Events older than this are dropped from the assembled plan
TRAILING_WINDOW_HOURS = 24

# ---------------------------------------------------------------------------
# Phase anchors (minutes)
# ---------------------------------------------------------------------------
MINUTES_PER_DAY = 24 * 60
T72H_OFFSET_MIN = 72 * 60
T48H_OFFSET_MIN = 48 * 60
T24H_OFFSET_MIN = 24 * 60

EXTENDED_PREP_MIN_DAYS = 4
PEAK_VOLUME_MIN_DAYS = 10      # d > 10
STRUCTURAL_MAINT_MIN_DAYS = 7  # 7 < d <= 10
PREP_INSIGHT_DELAY_MIN = 600

CARB_LOADING_DELAY_MIN = 720
BREAKFAST_DELAY_MIN = 90
T48H_LUNCH_DELAY_MIN = 360
T24H_LUNCH_DELAY_MIN = 300
DINNER_DELAY_MIN = 720

PRIMARY_MEAL_LEAD_MIN = 120
PRE_LOAD_LEAD_MIN = 60
LAST_MINUTE_PRIME_MIN = 15
INTRA_WORKOUT_DELAY_MIN = 15
REFEED_DELAY_MIN = 60

TRAVEL_MOVEMENT_EVERY_HOURS = 2
TRAVEL_MOVEMENT_DELAY_MIN = 5

# ---------------------------------------------------------------------------
# Dosing coefficients (per kg body weight)
# ---------------------------------------------------------------------------
RICE_G_PER_KG = 4.0            # 300 g for 75 kg
POTATOES_G_PER_KG = 4.6        # 350 g for 75 kg
MEAT_G_PER_KG = 2.4            # 180 g for 75 kg
MEAT_SMALL_G_PER_KG = 2.0      # 150 g for 75 kg
PROTEIN_POWDER_G_PER_KG = 0.5  # ~40 g for 75 kg
PROTEIN_POWDER_MIN_G = 25
FAST_CARBS_G_PER_KG = 1.0      # 75 g for 75 kg
WATER_LARGE_ML_PER_KG = 10.0   # 750 ml for 75 kg
WATER_STD_ML_PER_KG = 6.7      # 500 ml for 75 kg
SODIUM_MG_PER_KG = 13.0        # ~1000 mg for 75 kg
WAKE_SODIUM_FRACTION = 0.7
T24H_DINNER_RICE_REDUCTION_G = 50

INTRA_CARB_HIGH_G_PER_KG_HR = 1.0
INTRA_CARB_STD_G_PER_KG_HR = 0.6
INTRA_CARB_HIGH_CAP_G_HR = 90
INTRA_CARB_STD_CAP_G_HR = 60

REFEED_PROTEIN_G_PER_KG = 0.3
REFEED_PROTEIN_MIN_G = 20
REFEED_CARB_G_PER_KG = 0.8

CARB_LOAD_LOW_G_PER_KG = 7.0
CARB_LOAD_HIGH_G_PER_KG = 8.0

# ---------------------------------------------------------------------------
# Default profile
# ---------------------------------------------------------------------------
DEFAULT_WEIGHT_KG = 70.0
DEFAULT_HEIGHT_CM = 175.0

# Intolerance names that change generated content (exact match)
DAIRY = "Dairy"
GLUTEN = "Gluten"
CAFFEINE = "Caffeine"
FRUCTOSE = "Fructose"

IBS_D_MARKER = "IBS-D"
IBS_C_MARKER = "IBS-C"
