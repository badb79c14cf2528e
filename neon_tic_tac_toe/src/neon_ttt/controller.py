import logging
import threading
from typing import Callable, Dict, Optional, Tuple

from . import config, core
from .models import (
    CellEvent,
    Event,
    EventOutcome,
    GameResult,
    GameState,
    GameStatus,
    GameView,
    LoginEvent,
    LogoutEvent,
    Notice,
    ProfileView,
    RestartEvent,
    Snapshot,
)
from .session import InvalidNameError, SessionStore

logger = logging.getLogger(__name__)

LOGIN_TITLES = {
    "google": ("Welcome!", "Login Cancelled"),
    "guest": ("Welcome Guest!", "Guest Login Cancelled"),
}


# PUBLIC_INTERFACE
def status_text(result: GameResult) -> str:
    """Headline shown above the board."""
    if result.status is GameStatus.DRAW:
        return "It's a Draw!"
    if result.status is GameStatus.WON:
        return f"Player {result.winner} Wins!"
    return "Game in Progress"


# PUBLIC_INTERFACE
def end_notice(result: GameResult) -> Notice:
    if result.status is GameStatus.DRAW:
        return Notice(title="Game Over", message="The game ended in a draw!")
    return Notice(title="Victory!", message=f"Player {result.winner} has won the game!")


# PUBLIC_INTERFACE
def game_view(state: GameState) -> GameView:
    result = state.result
    return GameView(
        board=list(state.board),
        current=state.current,
        active=state.active,
        status=result.status,
        status_text=status_text(result),
        winner=result.winner,
        winning_line=list(result.line) if result.line else None,
    )


class GameController:
    """
    Owns the game state and the player session for one running app.

    Each event handler returns (accepted, notice); dispatch wraps that with a
    fresh snapshot. Invalid input never raises past dispatch.
    """

    def __init__(self, session: SessionStore):
        self.session = session
        self.state: GameState = core.new_game()
        self._lock = threading.Lock()
        self._handlers: Dict[str, Callable[..., Tuple[bool, Optional[Notice]]]] = {
            "cell": self._on_cell,
            "login": self._on_login,
            "logout": self._on_logout,
            "restart": self._on_restart,
        }

    # PUBLIC_INTERFACE
    def startup(self) -> Snapshot:
        """Load the persisted session and report which page to land on."""
        with self._lock:
            self.session.load()
            logger.info("Loaded session (logged_in=%s)", self.session.logged_in)
            return self._snapshot()

    # PUBLIC_INTERFACE
    def shutdown(self) -> None:
        with self._lock:
            self.session.save()

    # PUBLIC_INTERFACE
    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot()

    # PUBLIC_INTERFACE
    def profile(self) -> ProfileView:
        with self._lock:
            return self.session.profile()

    # PUBLIC_INTERFACE
    def dispatch(self, event: Event) -> EventOutcome:
        with self._lock:
            accepted, notice = self._handlers[event.type](event)
            return EventOutcome(
                event=event.type,
                accepted=accepted,
                notice=notice,
                snapshot=self._snapshot(),
            )

    def select_cell(self, index: int) -> EventOutcome:
        return self.dispatch(CellEvent(index=index))

    def login(self, name: Optional[str], mode: str = "google") -> EventOutcome:
        return self.dispatch(LoginEvent(name=name, mode=mode))

    def logout(self) -> EventOutcome:
        return self.dispatch(LogoutEvent())

    def restart(self) -> EventOutcome:
        return self.dispatch(RestartEvent())

    ##---- Handlers ----##

    def _on_cell(self, event: CellEvent) -> Tuple[bool, Optional[Notice]]:
        self.state, outcome = core.apply_move(self.state, event.index)
        if not outcome.accepted or not outcome.result.is_terminal:
            return outcome.accepted, None
        self.session.record_result(outcome.result)
        self.session.save()
        logger.info("Game over: %s", status_text(outcome.result))
        return True, end_notice(outcome.result)

    def _on_login(self, event: LoginEvent) -> Tuple[bool, Optional[Notice]]:
        welcome, cancelled = LOGIN_TITLES[event.mode]
        try:
            self.session.start_session(event.name, guest=event.mode == "guest")
        except InvalidNameError as exc:
            return False, Notice(title=cancelled, message=str(exc))
        self.session.save()
        return True, Notice(title=welcome, message=f"Welcome to {config.APP_TITLE}, {self.session.name}!")

    def _on_logout(self, event: LogoutEvent) -> Tuple[bool, Optional[Notice]]:
        self.session.end_session()
        self.session.save()
        self.state = core.reset()
        return True, Notice(title="Logged Out", message="You have been successfully logged out.")

    def _on_restart(self, event: RestartEvent) -> Tuple[bool, Optional[Notice]]:
        self.state = core.reset()
        return True, Notice(title="Game Restarted", message="A new game has begun!")

    def _snapshot(self) -> Snapshot:
        return Snapshot(
            page="profile" if self.session.logged_in else "home",
            game=game_view(self.state),
            profile=self.session.profile(),
        )
