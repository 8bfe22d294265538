"""
Per-plugin API for the prayer log. Mounted at /api/components/prayer_log/.
Reads and writes go through the app's TrackerState, same as the views.
"""
from datetime import date
from typing import Dict, List, Literal, Optional

from fastapi import APIRouter, HTTPException, Path
from pydantic import BaseModel

from namaaz_tracker.core.calendar_grid import (
    DayCell,
    MonthGrid,
    SUNDAY,
    month_grid,
    project_year,
    trailing_padding,
)
from namaaz_tracker.core.log_store import (
    DailyLog,
    PRAYER_NAMES,
    canonical_date_key,
    format_readable_date,
    parse_date_key,
)
from namaaz_tracker.core.scoring import FRIDAY


class PrayerRecordResponse(BaseModel):
    status: str
    points: int


class DailyLogResponse(BaseModel):
    """One materialized day."""

    date_key: str
    readable_date: str
    is_friday: bool
    completed_count: int
    prayers: Dict[str, PrayerRecordResponse]


class LogPrayerRequest(BaseModel):
    status: Literal["none", "individual", "jamaat", "qaza"]


class LogPrayerResponse(DailyLogResponse):
    """Day after the write; persisted is False when the save to disk failed."""

    persisted: bool


class StatsResponse(BaseModel):
    total_points: int
    current_streak: int


class DayCellResponse(BaseModel):
    day_number: Optional[int] = None
    date_key: Optional[str] = None
    completed_count: int = 0
    percentage: float = 0.0
    is_today: bool = False
    is_empty: bool = False
    is_complete: bool = False


class MonthGridResponse(BaseModel):
    year: int
    month: int
    title: str
    cells: List[DayCellResponse]
    trailing_padding: int


def _day_response(date_key: str, daily_log: DailyLog) -> Dict:
    day = parse_date_key(date_key)
    return {
        "date_key": date_key,
        "readable_date": format_readable_date(day),
        "is_friday": day.weekday() == FRIDAY,
        "completed_count": daily_log.completed_count,
        "prayers": {
            name: PrayerRecordResponse(status=record.status, points=record.points)
            for name, record in daily_log.items()
        },
    }


def _cell_response(cell: DayCell) -> DayCellResponse:
    return DayCellResponse(
        **cell._asdict(),
        percentage=0.0 if cell.is_empty else cell.percentage,
        is_complete=cell.is_complete,
    )


def _grid_response(grid: MonthGrid) -> MonthGridResponse:
    return MonthGridResponse(
        year=grid.year,
        month=grid.month,
        title=grid.title,
        cells=[_cell_response(cell) for cell in grid.cells],
        trailing_padding=trailing_padding(grid.cells),
    )


def _date_key_or_422(date_key: str) -> str:
    try:
        return canonical_date_key(date_key)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date {date_key!r}, expected YYYY-MM-DD")


def get_router(tracker_app) -> Optional[APIRouter]:
    """Return router for this plugin; mounted with prefix /api/components/prayer_log."""
    router = APIRouter(tags=["Prayer Log"])
    state = tracker_app.state

    def first_weekday() -> int:
        return getattr(tracker_app, "first_weekday", SUNDAY)

    @router.get("/stats", response_model=StatsResponse)
    def get_stats() -> StatsResponse:
        """Total points and current streak as of today."""
        snapshot = state.stats()
        return StatsResponse(total_points=snapshot.total_points, current_streak=snapshot.current_streak)

    @router.get("/days/{date_key}", response_model=DailyLogResponse)
    def get_day(date_key: str) -> DailyLogResponse:
        """Return the day's prayers, creating an empty day if it was never opened."""
        date_key = _date_key_or_422(date_key)
        daily_log = state.view_day(date_key)
        return DailyLogResponse(**_day_response(date_key, daily_log))

    @router.put("/days/{date_key}/{prayer}", response_model=LogPrayerResponse)
    def put_prayer(date_key: str, prayer: str, body: LogPrayerRequest) -> LogPrayerResponse:
        """Log one prayer's status; points are derived, never accepted from the client."""
        date_key = _date_key_or_422(date_key)
        if prayer not in PRAYER_NAMES:
            raise HTTPException(status_code=404, detail=f"Unknown prayer {prayer!r}")
        persisted = state.log_prayer(date_key, prayer, body.status)
        daily_log = state.store.get(date_key)
        return LogPrayerResponse(**_day_response(date_key, daily_log), persisted=persisted)

    @router.get("/months/{year}/{month}", response_model=MonthGridResponse)
    def get_month(
        year: int = Path(..., ge=1, le=9999),
        month: int = Path(..., ge=1, le=12),
    ) -> MonthGridResponse:
        """Calendar cells for one month. Does not create any days."""
        grid = month_grid(year, month, state.store, today=date.today(), first_weekday=first_weekday())
        return _grid_response(grid)

    @router.get("/years/{year}", response_model=List[MonthGridResponse])
    def get_year(year: int = Path(..., ge=1, le=9999)) -> List[MonthGridResponse]:
        """Twelve month grids for the year. Does not create any days."""
        grids = project_year(year, state.store, today=date.today(), first_weekday=first_weekday())
        return [_grid_response(grid) for grid in grids]

    return router
