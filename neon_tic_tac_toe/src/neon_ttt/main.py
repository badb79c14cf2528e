import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse

from . import config
from .controller import GameController
from .models import (
    CellEvent,
    Event,
    EventOutcome,
    LoginEvent,
    LoginRequest,
    LogoutEvent,
    MoveRequest,
    ProfileView,
    RestartEvent,
    Snapshot,
)
from .page import render_page
from .session import SessionStore
from .store import JsonFileStore, Store

logger = logging.getLogger(__name__)


def get_controller(request: Request) -> GameController:
    return request.app.state.controller


# PUBLIC_INTERFACE
def create_app(store: Optional[Store] = None) -> FastAPI:
    """Build the app around one controller. Defaults to the JSON file store from config."""
    if store is None:
        store = JsonFileStore(config.STORE_PATH)
    controller = GameController(SessionStore(store))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        snap = controller.startup()
        logger.info("%s ready; landing on %s page", config.APP_TITLE, snap.page)
        yield
        controller.shutdown()

    app = FastAPI(
        title=f"{config.APP_TITLE} API",
        description="Local backend for the Neon Tic Tac Toe page. Owns the board, the player session and its stats.",
        version=config.APP_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "page", "description": "The single-page UI"},
            {"name": "session", "description": "Simulated login/logout and profile"},
            {"name": "game", "description": "Moves and restarts"},
        ],
    )
    app.state.controller = controller

    @app.get("/health", tags=["health"])
    def health_check():
        """Health check route for backend"""
        return {"message": "Healthy"}

    # PUBLIC_INTERFACE
    @app.get("/", response_class=HTMLResponse, tags=["page"], summary="Game page")
    def index():
        return render_page()

    # PUBLIC_INTERFACE
    @app.get("/state", response_model=Snapshot, tags=["page"], summary="Current snapshot")
    def get_state(ctrl: GameController = Depends(get_controller)):
        """Board, turn, status and profile, plus the page to show."""
        return ctrl.snapshot()

    # PUBLIC_INTERFACE
    @app.get("/profile", response_model=ProfileView, tags=["session"], summary="Player profile")
    def get_profile(ctrl: GameController = Depends(get_controller)):
        return ctrl.profile()

    # PUBLIC_INTERFACE
    @app.post("/login/google", response_model=EventOutcome, tags=["session"], summary="Simulated Google login")
    def login_google(request: LoginRequest, ctrl: GameController = Depends(get_controller)):
        """Start a session under the given name. A blank name cancels the login."""
        return ctrl.dispatch(LoginEvent(name=request.name, mode="google"))

    # PUBLIC_INTERFACE
    @app.post("/login/guest", response_model=EventOutcome, tags=["session"], summary="Guest login")
    def login_guest(request: LoginRequest, ctrl: GameController = Depends(get_controller)):
        """Start a guest session; the name gets a " (Guest)" suffix."""
        return ctrl.dispatch(LoginEvent(name=request.name, mode="guest"))

    # PUBLIC_INTERFACE
    @app.post("/logout", response_model=EventOutcome, tags=["session"], summary="Logout")
    def logout(ctrl: GameController = Depends(get_controller)):
        """Clear the session, zero the stats and reset the board."""
        return ctrl.dispatch(LogoutEvent())

    # PUBLIC_INTERFACE
    @app.post("/move", response_model=EventOutcome, tags=["game"], summary="Select a cell")
    def make_move(request: MoveRequest, ctrl: GameController = Depends(get_controller)):
        """Play the current marker. Occupied cells and finished games are ignored (accepted=false)."""
        return ctrl.dispatch(CellEvent(index=request.index))

    # PUBLIC_INTERFACE
    @app.post("/restart", response_model=EventOutcome, tags=["game"], summary="Restart game")
    def restart(ctrl: GameController = Depends(get_controller)):
        return ctrl.dispatch(RestartEvent())

    # PUBLIC_INTERFACE
    @app.post("/events", response_model=EventOutcome, tags=["game"], summary="Dispatch any event")
    def post_event(event: Event, ctrl: GameController = Depends(get_controller)):
        """Generic entry point taking a typed event: cell, login, logout or restart."""
        return ctrl.dispatch(event)

    return app


app = create_app()


def run() -> None:
    """Serve the game on the configured host and port."""
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
