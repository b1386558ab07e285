from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from ... import config
from ...engine.errors import ChessError
from ...engine.game import Game, dumps, loads
from .error import (
    chess_error_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemoryGameStore


logger = logging.getLogger(__name__)


class CreateGameRequest(BaseModel):
    fen: Optional[str] = Field(default=None, description="Start position; standard if omitted")


class PositionRequest(BaseModel):
    fen: str = Field(..., description="Six-field position string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Coordinate move, e.g. e2e4")


class MovesPayload(BaseModel):
    moves: str = Field(..., description="Space separated moves, e.g. 'e2e4 e7e5'")


class CastlingRights(BaseModel):
    white_kingside: bool
    white_queenside: bool
    black_kingside: bool
    black_queenside: bool


class GameState(BaseModel):
    game_id: str
    turn: str
    board: list[str]
    castling: CastlingRights
    en_passant: Optional[str]
    halfmove_clock: int
    fullmove_number: int
    last_move: Optional[str]
    move_history: list[str]
    captured: list[str]


class CreateGameResponse(BaseModel):
    game_id: str
    state: GameState


def create_app(start_fen: str = config.START_FEN, log_level: str = config.LOG_LEVEL) -> FastAPI:
    app = FastAPI(title="termchess", version="0.1.0")

    logging.basicConfig(level=log_level)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(ChessError, chess_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemoryGameStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        fen = req.fen if req is not None and req.fen else start_fen
        game = Game.new(fen)
        game_id = store.create(game)
        logger.info("created game %s", game_id)
        return CreateGameResponse(game_id=game_id, state=_state(game_id, game))

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        game.play(req.move)
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: PositionRequest) -> GameState:
        game = _require_game(store, game_id)
        replacement = Game.new(req.fen)
        game.start_fen = replacement.start_fen
        game.board = replacement.board
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/reset", response_model=GameState)
    async def reset(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        game.reset()
        return _state(game_id, game)

    @app.get("/api/games/{game_id}/moves", response_model=MovesPayload)
    async def export_moves(game_id: str) -> MovesPayload:
        game = _require_game(store, game_id)
        return MovesPayload(moves=dumps(game.history))

    @app.post("/api/games/{game_id}/moves", response_model=GameState)
    async def import_moves(game_id: str, req: MovesPayload) -> GameState:
        game = _require_game(store, game_id)
        game.replay(loads(req.moves))
        return _state(game_id, game)

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    return app


def _require_game(store: InMemoryGameStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _state(game_id: str, game: Game) -> GameState:
    board = game.board
    return GameState(
        game_id=game_id,
        turn=str(board.turn),
        board=board.placement_rows(),
        castling=CastlingRights(
            white_kingside=board.white_can_castle_kingside,
            white_queenside=board.white_can_castle_queenside,
            black_kingside=board.black_can_castle_kingside,
            black_queenside=board.black_can_castle_queenside,
        ),
        en_passant=board.en_passant_str(),
        halfmove_clock=board.halfmove_clock,
        fullmove_number=board.fullmove_number,
        last_move=game.last_move,
        move_history=list(game.history),
        captured=[p.letter() for p in board.captured],
    )
