"""
Record and summary types shared by the parser, the metrics layer and the UI.

Every numeric slot is ``float | None`` / ``int | None``: ``None`` means the
value is absent (left blank or unparseable), which is never the same as 0.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime

from .config import REQUIRED_FIELDS


@dataclass
class OperationalRecord:
    """One plant's figures for one calendar day, possibly incomplete."""

    date: str | None = None
    plant_name: str | None = None
    furnace_count: int | None = None
    total_intake: float | None = None
    incineration_amount: float | None = None
    pit_storage: float | None = None
    pit_capacity: float | None = None
    platform_reserved: float | None = None
    actual_intake: float | None = None
    over_reserved_trips: int | None = None
    adjusted_trips: int | None = None
    source: str = ""

    def missing_fields(self) -> list[str]:
        """Return required fields that are absent, in declaration order."""
        return [name for name in REQUIRED_FIELDS if getattr(self, name) in (None, "")]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def has_data(self) -> bool:
        """True if any field other than ``source`` was filled in."""
        return any(v is not None for k, v in asdict(self).items() if k != "source")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PlantSummary:
    plant_name: str
    total_intake: float
    incineration_amount: float
    pit_storage: float
    pit_capacity: float
    pit_storage_pct: float
    furnace_count: int
    max_furnaces: int
    platform_reserved: float | None = None
    actual_intake: float | None = None
    days_to_full: float | None = None
    per_furnace_efficiency: float | None = None


@dataclass(frozen=True)
class DailySummary:
    """Aggregate over all plants reporting on one date."""

    date: str
    total_intake: float
    total_incineration: float
    furnaces_running: int
    furnaces_stopped: int
    plants: tuple[PlantSummary, ...] = ()

    @property
    def total_capacity(self) -> float:
        return sum(p.pit_capacity for p in self.plants)

    @property
    def total_pit_storage(self) -> float:
        return sum(p.pit_storage for p in self.plants)

    @property
    def remaining_capacity(self) -> float:
        return self.total_capacity - self.total_pit_storage

    @property
    def avg_pit_storage_pct(self) -> float:
        if not self.plants:
            return 0.0
        return sum(p.pit_storage_pct for p in self.plants) / len(self.plants)

    @property
    def intake_ratio(self) -> float:
        """Intake as a percentage of incineration (0 when nothing was burnt)."""
        if self.total_incineration <= 0:
            return 0.0
        return self.total_intake * 100 / self.total_incineration


@dataclass(frozen=True)
class WindowAverages:
    avg_intake: float
    avg_incineration: float
    avg_pit_storage_pct: float
    avg_ratio: float
    days: int


@dataclass(frozen=True)
class TrendDeltas:
    """Percent change of today against the trailing-window average.

    A ``None`` entry means there is no baseline to compare against.
    """

    intake_trend: float | None
    incineration_trend: float | None
    pit_storage_trend: float | None
    ratio_trend: float | None


@dataclass(frozen=True)
class RangeStatistics:
    total_intake: float
    total_incineration: float
    average_pit_storage: float
    record_count: int


@dataclass(frozen=True)
class Alert:
    level: str  # "warning", "suggest" or "info"
    title: str
    description: str


@dataclass(frozen=True)
class DowntimeRecord:
    plant_name: str
    furnace_number: int
    downtime_type: str
    start: datetime
    end: datetime
    notes: str | None = None


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


@dataclass
class ParseResult:
    """Parsed records plus the detected input format, for display."""

    records: list[OperationalRecord] = field(default_factory=list)
    fmt: str = "none"  # "csv", "plant_lines", "labels" or "none"

    @property
    def complete(self) -> list[OperationalRecord]:
        return [r for r in self.records if r.is_complete]

    @property
    def incomplete(self) -> list[OperationalRecord]:
        return [r for r in self.records if not r.is_complete]
