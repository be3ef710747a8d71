"""
Configuration: plant registry, field-label synonyms, thresholds, constants.

PLANTS holds the static per-plant reference values (default pit capacity,
furnace count, standard per-furnace throughput). FIELD_LABEL_MAP maps every
label an operator may type, in Chinese or English, to the canonical record
field.
"""

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Plant identity
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PlantConfig:
    name: str
    default_capacity: float  # tons
    max_furnaces: int
    standard_per_furnace: float  # tons/day


PLANTS: tuple[PlantConfig, ...] = (
    PlantConfig("中區廠", default_capacity=1000, max_furnaces=3, standard_per_furnace=225),
    PlantConfig("南區廠", default_capacity=1200, max_furnaces=4, standard_per_furnace=300),
    PlantConfig("仁武廠", default_capacity=800, max_furnaces=3, standard_per_furnace=425),
    PlantConfig("岡山廠", default_capacity=900, max_furnaces=3, standard_per_furnace=373),
)

PLANT_NAMES: tuple[str, ...] = tuple(p.name for p in PLANTS)
PLANT_BY_NAME: dict[str, PlantConfig] = {p.name: p for p in PLANTS}

# Used when a record names a plant that is not in the registry
DEFAULT_MAX_FURNACES = 4

# Chart colours per plant
PLANT_COLORS: dict[str, str] = {
    "中區廠": "#f97316",
    "南區廠": "#3b82f6",
    "仁武廠": "#22c55e",
    "岡山廠": "#a855f7",
}

# ---------------------------------------------------------------------------
# Record fields
# ---------------------------------------------------------------------------
REQUIRED_FIELDS: tuple[str, ...] = (
    "date",
    "plant_name",
    "furnace_count",
    "total_intake",
    "incineration_amount",
    "pit_storage",
    "pit_capacity",
)

OPTIONAL_FIELDS: tuple[str, ...] = (
    "platform_reserved",
    "actual_intake",
    "over_reserved_trips",
    "adjusted_trips",
)

# Fields that must hold whole numbers
INTEGER_FIELDS = {"furnace_count", "over_reserved_trips", "adjusted_trips"}

# Display labels (Traditional Chinese, as used on the operator forms)
FIELD_DISPLAY_NAMES: dict[str, str] = {
    "date": "日期",
    "plant_name": "廠區",
    "furnace_count": "爐數",
    "total_intake": "總進廠量",
    "incineration_amount": "焚化量",
    "pit_storage": "貯坑量",
    "pit_capacity": "貯坑容量",
    "platform_reserved": "平台預約",
    "actual_intake": "實際進廠",
    "over_reserved_trips": "超約車次",
    "adjusted_trips": "調整車次",
}

# Raw labels (CSV headers and "label: value" lines) -> canonical field name.
# Keys are compared after stripping whitespace and lower-casing.
FIELD_LABEL_MAP: dict[str, str] = {
    # date
    "日期": "date",
    "date": "date",
    # plant
    "廠區": "plant_name",
    "廠名": "plant_name",
    "plant": "plant_name",
    "plantname": "plant_name",
    "plant_name": "plant_name",
    # furnaces
    "爐數": "furnace_count",
    "運轉爐數": "furnace_count",
    "furnaces": "furnace_count",
    "furnacecount": "furnace_count",
    "furnace_count": "furnace_count",
    # intake
    "進廠量": "total_intake",
    "總進廠量": "total_intake",
    "intake": "total_intake",
    "totalintake": "total_intake",
    "total_intake": "total_intake",
    # incineration
    "焚化量": "incineration_amount",
    "incineration": "incineration_amount",
    "incinerationamount": "incineration_amount",
    "incineration_amount": "incineration_amount",
    # pit storage
    "貯坑量": "pit_storage",
    "貯坑存量": "pit_storage",
    "pitstorage": "pit_storage",
    "pit_storage": "pit_storage",
    # pit capacity
    "貯坑容量": "pit_capacity",
    "pitcapacity": "pit_capacity",
    "pit_capacity": "pit_capacity",
    # optional platform figures
    "平台預約": "platform_reserved",
    "平台預約量": "platform_reserved",
    "platformreserved": "platform_reserved",
    "platform_reserved": "platform_reserved",
    "實際進廠": "actual_intake",
    "實際進廠量": "actual_intake",
    "actualintake": "actual_intake",
    "actual_intake": "actual_intake",
    "超約車次": "over_reserved_trips",
    "超過預約量車次": "over_reserved_trips",
    "overreservedtrips": "over_reserved_trips",
    "over_reserved_trips": "over_reserved_trips",
    "調整車次": "adjusted_trips",
    "調整後進廠車次": "adjusted_trips",
    "adjustedtrips": "adjusted_trips",
    "adjusted_trips": "adjusted_trips",
}

# Minimum number of recognised tokens on the first line for it to count as
# a CSV header
CSV_HEADER_MIN_TOKENS = 2

# Trailing unit suffixes operators append to values, longest first
VALUE_UNIT_SUFFIXES = ("公噸", "噸", "t", "車", "爐", "座")

# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------
TRAILING_WINDOW_DAYS = 7

# Pit status bands (percent of capacity); checked from the top down
PIT_STATUS_BANDS: tuple[tuple[float, str], ...] = (
    (100.0, "red"),
    (80.0, "orange"),
    (60.0, "yellow"),
)

# Alert thresholds
PIT_CRITICAL_PCT = 110.0
DIVERSION_HIGH_PCT = 85.0
DIVERSION_LOW_PCT = 60.0
LOW_EFFICIENCY_TONS_PER_FURNACE = 150.0

# Exponential decay for the weighted trend regression (recent days weigh more)
FORECAST_DECAY = 0.95
FORECAST_DAYS = 3

# ---------------------------------------------------------------------------
# Downtime
# ---------------------------------------------------------------------------
DOWNTIME_TYPES: tuple[str, ...] = ("計畫歲修", "臨時停機")
