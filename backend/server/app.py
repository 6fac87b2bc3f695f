from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .schemas import AIMoveRequest, MoveRequest, NewGameRequest, SelectRequest
from .session import GameSession


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(title="Checkers Backend", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    session = GameSession(settings)

    def get_session() -> GameSession:
        return session

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/board")
    def read_board(session: GameSession = Depends(get_session)):
        return session.serialize()

    @app.get("/settings")
    def read_settings(session: GameSession = Depends(get_session)):
        return session.settings_payload()

    @app.get("/valid-moves")
    def read_valid_moves(
        row: int = Query(..., ge=0, le=7),
        col: int = Query(..., ge=0, le=7),
        session: GameSession = Depends(get_session),
    ):
        try:
            return session.get_valid_moves(row, col)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/new-game")
    def new_game(payload: Optional[NewGameRequest] = None, session: GameSession = Depends(get_session)):
        try:
            return session.new_game(payload)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/select")
    def select_piece(payload: SelectRequest, session: GameSession = Depends(get_session)):
        return session.select(payload)

    @app.post("/move")
    def play_move(payload: MoveRequest, session: GameSession = Depends(get_session)):
        try:
            return session.make_move(payload)
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/ai-move")
    def ai_move(payload: Optional[AIMoveRequest] = None, session: GameSession = Depends(get_session)):
        try:
            return session.run_ai_move(payload)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/forfeit")
    def forfeit(session: GameSession = Depends(get_session)):
        return session.forfeit()

    return app


app = create_app()
