import math
from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

Marker = Literal["X", "O"]
Cell = Literal["", "X", "O"]
Line = Tuple[int, int, int]

EMPTY: Cell = ""


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


# PUBLIC_INTERFACE
class GameResult(BaseModel):
    """Outcome of evaluating a board: still running, won by a marker, or drawn."""
    model_config = ConfigDict(frozen=True)

    status: GameStatus = Field(GameStatus.IN_PROGRESS, description="in_progress, won or draw.")
    winner: Optional[Marker] = Field(None, description="Winning marker when status is won.")
    line: Optional[Line] = Field(None, description="Board indices of the completed line.")

    @property
    def is_terminal(self) -> bool:
        return self.status is not GameStatus.IN_PROGRESS


IN_PROGRESS = GameResult()


# PUBLIC_INTERFACE
class GameState(BaseModel):
    """Immutable board plus turn state. Transitions return a new instance."""
    model_config = ConfigDict(frozen=True)

    board: Tuple[Cell, ...] = Field((EMPTY,) * 9, min_length=9, max_length=9, description="9 cells, row-major.")
    current: Marker = Field("X", description="Marker to move next.")
    active: bool = Field(True, description="False once the game has been won or drawn.")
    result: GameResult = Field(IN_PROGRESS, description="Result recorded by the last move.")


# PUBLIC_INTERFACE
class MoveOutcome(BaseModel):
    """What a cell selection did to the game."""
    model_config = ConfigDict(frozen=True)

    accepted: bool = Field(..., description="False when the move was ignored.")
    index: int = Field(..., description="Requested cell index.")
    result: GameResult = Field(IN_PROGRESS, description="Result after the move.")


# PUBLIC_INTERFACE
class PlayerStats(BaseModel):
    """Cumulative match counters for the tracked player."""
    model_config = ConfigDict(populate_by_name=True)

    matches_played: int = Field(0, ge=0, alias="matchesPlayed")
    matches_won: int = Field(0, ge=0, alias="matchesWon")
    matches_lost: int = Field(0, ge=0, alias="matchesLost")
    matches_draw: int = Field(0, ge=0, alias="matchesDraw")

    @property
    def win_percentage(self) -> int:
        if self.matches_played <= 0:
            return 0
        # Halves round up.
        return math.floor(self.matches_won / self.matches_played * 100 + 0.5)


# PUBLIC_INTERFACE
class SessionRecord(BaseModel):
    """The single persisted record: player identity and stats."""
    name: str = Field("", description="Display name; empty when nobody is logged in.")
    stats: PlayerStats = Field(default_factory=PlayerStats)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


##---- Events ----##

# PUBLIC_INTERFACE
class CellEvent(BaseModel):
    """A board cell was selected."""
    type: Literal["cell"] = "cell"
    index: int = Field(..., description="Cell index (0-8).")


# PUBLIC_INTERFACE
class LoginEvent(BaseModel):
    """The player entered a name through one of the login buttons."""
    type: Literal["login"] = "login"
    name: Optional[str] = Field(None, description="Name typed by the player; may be blank.")
    mode: Literal["google", "guest"] = Field("google", description="Which login button was used.")


# PUBLIC_INTERFACE
class LogoutEvent(BaseModel):
    type: Literal["logout"] = "logout"


# PUBLIC_INTERFACE
class RestartEvent(BaseModel):
    type: Literal["restart"] = "restart"


Event = Annotated[
    Union[CellEvent, LoginEvent, LogoutEvent, RestartEvent],
    Field(discriminator="type"),
]


##---- Requests ----##

# PUBLIC_INTERFACE
class LoginRequest(BaseModel):
    """Request model for both simulated login flows."""
    name: Optional[str] = Field(None, description="Name for the game.")


# PUBLIC_INTERFACE
class MoveRequest(BaseModel):
    """Request model for selecting a cell."""
    index: int = Field(..., ge=0, le=8, description="Cell in board (0-8), row-major.")


##---- Views ----##

# PUBLIC_INTERFACE
class Notice(BaseModel):
    """Modal dialog content for the page."""
    title: str
    message: str


# PUBLIC_INTERFACE
class GameView(BaseModel):
    board: List[Cell]
    current: Marker
    active: bool
    status: GameStatus
    status_text: str
    winner: Optional[Marker] = None
    winning_line: Optional[List[int]] = None


# PUBLIC_INTERFACE
class ProfileView(BaseModel):
    logged_in: bool
    name: str
    avatar: str
    matches_played: int
    matches_won: int
    matches_lost: int
    matches_draw: int
    win_percentage: int


# PUBLIC_INTERFACE
class Snapshot(BaseModel):
    """Everything the page needs to render."""
    page: Literal["home", "profile"]
    game: GameView
    profile: ProfileView


# PUBLIC_INTERFACE
class EventOutcome(BaseModel):
    """Returned after every event: the new snapshot and an optional notice."""
    event: str
    accepted: bool = True
    notice: Optional[Notice] = None
    snapshot: Snapshot
