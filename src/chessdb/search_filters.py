"""Search filter models accepted by the HTTP endpoints."""

from datetime import date

from pydantic import BaseModel


def _with_offset(criteria: dict[str, object], offset: int | None) -> dict[str, object]:
    if offset is not None:
        criteria["pagination"] = {"offset": offset}
    return criteria


class GameSearchFilters(BaseModel):
    """Optional game criteria; unset fields add no constraint."""

    white: str | None = None
    black: str | None = None
    either_colour: str | None = None
    opponent: str | None = None
    minimum_elo: int | None = None
    maximum_elo: int | None = None
    event: str | None = None
    site: str | None = None
    from_date: date | None = None
    to_date: date | None = None
    round: str | None = None
    result: str | None = None
    eco: str | None = None
    offset: int | None = None

    def to_criteria(self) -> dict[str, object]:
        criteria = self.model_dump(exclude_none=True, exclude={"offset"})
        return _with_offset(criteria, self.offset)


class PositionSearchFilters(BaseModel):
    """Optional position criteria, nested under ``position``."""

    fen_position: str | None = None
    castling_availability: int | None = None
    active_colour: int | None = None
    en_passant: int | None = None
    offset: int | None = None

    def to_criteria(self) -> dict[str, object]:
        position = self.model_dump(exclude_none=True, exclude={"offset"})
        criteria: dict[str, object] = {"position": position} if position else {}
        return _with_offset(criteria, self.offset)
