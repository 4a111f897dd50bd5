from __future__ import annotations

from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query, status

from chessdb.cache import ResultCache
from chessdb.config import get_settings
from chessdb.pagination import PAGE_SIZE
from chessdb.position_key import PositionDescriptor, descriptor_from_fen, position_key
from chessdb.repository import ChessRepository
from chessdb.search_filters import GameSearchFilters, PositionSearchFilters
from chessdb.utils.build_once import build_once
from chessdb.utils.logger import get_logger, set_level

logger = get_logger(__name__)


@build_once
def get_repository() -> ChessRepository:
    """Return the process-wide repository, connecting on first use."""
    settings = get_settings()
    set_level(settings.log_level)
    return ChessRepository.from_settings(settings)


@build_once
def get_cache() -> ResultCache:
    settings = get_settings()
    return ResultCache(ttl_s=settings.cache_ttl_s, max_entries=settings.cache_max_entries)


Repository = Annotated[ChessRepository, Depends(get_repository)]
Cache = Annotated[ResultCache, Depends(get_cache)]

app = FastAPI(title="chessdb", version="0.1.0")


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/games/count")
def game_count(
    filters: Annotated[GameSearchFilters, Depends()],
    repository: Repository,
) -> dict[str, object]:
    return {"count": repository.game_count(filters.to_criteria())}


@app.get("/api/games")
def game_search(
    filters: Annotated[GameSearchFilters, Depends()],
    repository: Repository,
) -> dict[str, object]:
    games = repository.game_search(filters.to_criteria())
    return {"offset": filters.offset or 0, "page_size": PAGE_SIZE, "games": games}


@app.get("/api/games/{game_id}")
def game_detail(game_id: int, repository: Repository) -> dict[str, object]:
    game = repository.game(game_id)
    if game is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return {"game": game}


@app.get("/api/games/{game_id}/moves")
def game_moves(game_id: int, repository: Repository) -> dict[str, object]:
    return {"game_id": game_id, "moves": repository.moves_in_game(game_id)}


@app.get("/api/positions/count")
def position_count(
    filters: Annotated[PositionSearchFilters, Depends()],
    repository: Repository,
) -> dict[str, object]:
    return {"count": repository.position_count(filters.to_criteria())}


@app.get("/api/positions")
def position_search(
    filters: Annotated[PositionSearchFilters, Depends()],
    repository: Repository,
) -> dict[str, object]:
    positions = repository.position_search(filters.to_criteria())
    return {"offset": filters.offset or 0, "page_size": PAGE_SIZE, "positions": positions}


def _resolve_descriptor(
    fen: str,
    castling_availability: int | None,
    active_colour: int | None,
    en_passant: int | None,
) -> PositionDescriptor:
    # A full FEN record carries the side to move after the placement field.
    if " " not in fen.strip():
        return PositionDescriptor(
            fen=fen.strip(),
            castling_availability=castling_availability,
            active_colour=active_colour,
            en_passant=en_passant,
        )
    try:
        return descriptor_from_fen(fen)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.get("/api/popular_moves")
def popular_moves(
    repository: Repository,
    cache: Cache,
    fen: Annotated[str, Query(min_length=1)],
    castling_availability: Annotated[int | None, Query()] = None,
    active_colour: Annotated[int | None, Query()] = None,
    en_passant: Annotated[int | None, Query()] = None,
) -> dict[str, object]:
    descriptor = _resolve_descriptor(fen, castling_availability, active_colour, en_passant)
    key = ("popular_moves", *position_key(descriptor).cache_key)
    moves = cache.fetch(key, lambda: repository.popular_moves(descriptor))
    logger.debug("Popular moves for %s: %d candidates", descriptor.fen, len(moves))
    return {"fen": descriptor.fen, "moves": moves}
