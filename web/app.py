"""
FastAPI web application for the NullShot chess backend.

Exposes the move endpoint the browser frontend calls when it is the engine's
turn, plus a health check:

    GET  /api/health       service liveness
    POST /api/chess/move   choose a move for a FEN position

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like search.
- One MoveChooser per app, created in create_app() and kept on app.state.
  Its cache is shared by every request the app serves.
- Stateless per request otherwise: the client sends the full FEN each time.
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, field_validator

from nullshot.chooser import MoveChooser
from nullshot.config import EngineConfig
from nullshot.errors import InvalidPosition, NoLegalMoves, SideMismatch
from nullshot.models import Difficulty, Side

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

SERVICE_NAME = "NullShot Chess AI"
SERVICE_VERSION = "1.0.0"


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        fen: Full FEN string representing the current board position.
        side: Side the engine plays; must be the side to move.
        difficulty: Engine strength. Defaults to "hard".
    """

    fen: str
    side: Side
    difficulty: Difficulty = Difficulty.HARD

    @field_validator("fen")
    @classmethod
    def fen_not_blank(cls, v: str) -> str:
        """Reject empty FEN strings before they reach the engine."""
        if not v.strip():
            raise ValueError("fen must not be empty")
        return v


class MoveResponse(BaseModel):
    """
    Engine response after choosing a move.

    Fields:
        move: Chosen move in SAN (e.g. "Nf3", "exd5", "O-O").
        fen: Board FEN after the move is applied.
        newFen: Same as fen; kept for frontend clients that read this key.
        from_square / to_square: Move endpoints, e.g. "g1" / "f3".
        source: "cache", "book", "oracle" or "search".
        success: Always true on a 200 response.
    """

    move: str
    fen: str
    newFen: str
    from_square: str
    to_square: str
    source: str
    success: bool = True


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(chooser: MoveChooser | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        chooser: Engine to serve. When omitted, one is built from the
                 environment with EngineConfig.from_env().

    Returns:
        A configured FastAPI instance.
    """
    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
    app.state.chooser = chooser or MoveChooser(EngineConfig.from_env())

    # The browser frontend is served from a different origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        max_age=86400,
    )

    @app.get("/api/health", response_model=HealthResponse)
    def api_health() -> HealthResponse:
        """Report that the service is up."""
        return HealthResponse(status="ok", service=SERVICE_NAME, version=SERVICE_VERSION)

    @app.post("/api/chess/move", response_model=MoveResponse)
    def api_move(body: MoveRequest, request: Request) -> MoveResponse:
        """
        Choose the engine's move for the given position.

        Raises:
            HTTPException 400: Malformed FEN or side not to move.
            HTTPException 409: Game already over.
            HTTPException 500: Unexpected engine failure.
        """
        chooser: MoveChooser = request.app.state.chooser
        _log.info("move request side=%s difficulty=%s", body.side.value, body.difficulty.value)

        try:
            result = chooser.choose_move(body.fen, body.side, body.difficulty)
        except (InvalidPosition, SideMismatch) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except NoLegalMoves as exc:
            raise HTTPException(
                status_code=409,
                detail=f"Game is already over: {exc.result}",
            ) from exc
        except Exception as exc:
            _log.exception("Engine failed for FEN=%s", body.fen)
            raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

        return MoveResponse(
            move=result.move.san,
            fen=result.fen,
            newFen=result.fen,
            from_square=result.move.from_square,
            to_square=result.move.to_square,
            source=result.source,
        )

    return app


app = create_app()
