"""Operator alerts derived from the day's plant summaries."""

import logging
from typing import Sequence

from .config import (
    DIVERSION_HIGH_PCT,
    DIVERSION_LOW_PCT,
    LOW_EFFICIENCY_TONS_PER_FURNACE,
    PIT_CRITICAL_PCT,
)
from .models import Alert, PlantSummary

logger = logging.getLogger(__name__)


def build_alerts(plants: Sequence[PlantSummary]) -> list[Alert]:
    """Return alerts in display order: storage, diversion, efficiency.

    - warning: a plant's pit is above PIT_CRITICAL_PCT.
    - suggest: divert trucks from the first plant above DIVERSION_HIGH_PCT
      to the first plant below DIVERSION_LOW_PCT.
    - info: a running plant burns less than LOW_EFFICIENCY_TONS_PER_FURNACE
      per furnace.
    """
    alerts = []

    for plant in plants:
        if plant.pit_storage_pct > PIT_CRITICAL_PCT:
            alerts.append(Alert(
                level="warning",
                title=f"{plant.plant_name} 貯坑告警",
                description=(
                    f"目前佔比 {plant.pit_storage_pct:.1f}% 已接近飽和，建議減少進廠預約。"
                ),
            ))

    high = next((p for p in plants if p.pit_storage_pct > DIVERSION_HIGH_PCT), None)
    low = next((p for p in plants if p.pit_storage_pct < DIVERSION_LOW_PCT), None)
    if high is not None and low is not None:
        alerts.append(Alert(
            level="suggest",
            title="調度平衡建議",
            description=(
                f"建議將部分原本進入「{high.plant_name}」的車輛引流至"
                f"「{low.plant_name}」以平衡貯坑壓力。"
            ),
        ))

    for plant in plants:
        efficiency = plant.per_furnace_efficiency
        if efficiency is not None and efficiency < LOW_EFFICIENCY_TONS_PER_FURNACE:
            alerts.append(Alert(
                level="info",
                title=f"{plant.plant_name} 效能提示",
                description="平均單爐焚化量較低，請確認垃圾熱值或設備運轉狀況。",
            ))

    if alerts:
        logger.info("Raised %d alerts", len(alerts))
    return alerts
