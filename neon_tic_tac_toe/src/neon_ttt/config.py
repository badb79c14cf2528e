import os

from . import __version__

APP_TITLE = "Neon Tic Tac Toe"
APP_VERSION = __version__

# Single persisted slot; the key matches the browser build's localStorage key.
STORAGE_KEY = "ticTacToeUserData"
STORE_PATH = os.path.expanduser(os.environ.get("NEON_TTT_STORE_PATH", "~/.neon_tic_tac_toe.json"))

HOST = os.environ.get("NEON_TTT_HOST", "127.0.0.1")
PORT = int(os.environ.get("NEON_TTT_PORT", "8000"))

LOG_LEVEL = os.environ.get("NEON_TTT_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

GUEST_SUFFIX = " (Guest)"
