"""FastAPI-powered web UI for playing Emoji Tic-Tac-Toe in the browser."""

from __future__ import annotations

import logging
import os
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .game import BOARD_CELLS, EMPTY, LABELS, TOKENS, EmojiTicTacToe, InvalidCellError

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() not in ("0", "false", "no", "off")


def _env_seed(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


# Randomize who opens each new round, as the original game does on reset.
RANDOM_START: bool = _env_flag("EMOJITTT_RANDOM_START", "1")
SEED: Optional[int] = _env_seed("EMOJITTT_SEED")
SESSION_TTL_SECONDS = 60 * 30  # 30 minutes since last request


@dataclass
class GameSession:
    """Container for one browser's game and the random source used on reset."""

    game: EmojiTicTacToe
    rng: random.Random
    last_active: float = field(default_factory=lambda: time.time())
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Emoji Tic-Tac-Toe", description="Cat vs Dog tic-tac-toe in the browser")


def _cleanup_sessions() -> None:
    """Drop games that have not been touched within the TTL."""

    now = time.time()
    expired = [
        session_id
        for session_id, session in list(SESSIONS.items())
        if now - session.last_active >= SESSION_TTL_SECONDS
    ]
    for session_id in expired:
        SESSIONS.pop(session_id, None)
    if expired:
        logger.info("Evicted %d idle game(s)", len(expired))


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: StrictInt = Field(alias="cellIndex", ge=0, le=BOARD_CELLS - 1)


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    _cleanup_sessions()
    session = GameSession(game=EmojiTicTacToe(), rng=random.Random(SEED))
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        session = SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc
    session.last_active = time.time()
    return session


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        snap = game.snapshot()
        return {
            "id": game_id,
            "board": ["" if c == EMPTY else c for c in snap.board],
            "activePlayer": snap.active_player,
            "status": snap.status,
            "winner": snap.winner,
            "winningLine": list(snap.winning_line) if snap.winning_line else None,
            "availableMoves": game.available_moves(),
            "tokens": dict(TOKENS),
            "labels": dict(LABELS),
        }


def _apply_player_move(game_id: str, session: GameSession, cell_index: int) -> None:
    with session.lock:
        game = session.game
        before = game.snapshot()
        try:
            after = game.submit_move(cell_index)
        except InvalidCellError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        if after == before:
            logger.debug("Ignored move at cell %d in game %s", cell_index, game_id)
        elif game.is_over:
            logger.info("Game %s ended: %s (winner=%s)", game_id, game.status, game.winner)


def _reset_session(game_id: str, session: GameSession) -> None:
    with session.lock:
        snap = session.game.reset(session.rng if RANDOM_START else None)
    logger.info("Reset game %s, %s opens", game_id, snap.active_player)


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.cell_index)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    _reset_session(game_id, session)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Emoji Tic Tac Toe</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
        --primary: #4f8a8b;
        --secondary: #ffb866;
        --accent: #f76e5c;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        flex-direction: column;
        align-items: center;
        justify-content: center;
        padding: 2.5rem 0.75rem 1.25rem;
        background: radial-gradient(circle at 20% 20%, #4f8a8b40, transparent 40%),
          radial-gradient(circle at 80% 25%, #f76e5c33, transparent 40%),
          radial-gradient(circle at 45% 85%, #ffb86638, transparent 45%), #fafafa;
        color: #242424;
      }
      h1 {
        margin: 0 0 0.25rem;
        font-size: clamp(2rem, 4vw + 1rem, 3rem);
        font-weight: 800;
        color: var(--primary);
        text-shadow: 2px 2px 0 var(--secondary);
        text-align: center;
      }
      .players {
        display: flex;
        gap: 0.5rem;
        align-items: center;
      }
      .player {
        border-radius: 6px;
        padding: 0.25rem 0.5rem;
        font-weight: 600;
        background: #eee;
        transition: all 0.2s;
      }
      .player.active {
        color: #fff;
        border: 2px solid var(--accent);
      }
      .player.active[data-player=\"A\"] {
        background: var(--primary);
      }
      .player.active[data-player=\"B\"] {
        background: var(--secondary);
      }
      #status {
        margin: 0.75rem 0 1.75rem;
        font-weight: 700;
        color: var(--accent);
        letter-spacing: 1px;
      }
      #board {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.6rem;
        padding: 1rem;
        width: min(92vw, 410px);
        border-radius: 24px;
        background: rgba(255, 255, 255, 0.95);
        box-shadow: 0 8px 40px 0 #f76e5c33;
      }
      .cell {
        aspect-ratio: 1;
        min-height: 56px;
        font-size: 3rem;
        border-radius: 12px;
        border: 2px solid #e0e0e0;
        background: #fff;
        cursor: pointer;
        transition: transform 0.2s;
      }
      .cell:hover:enabled {
        transform: scale(1.05);
      }
      .cell:disabled {
        cursor: default;
        color: inherit;
      }
      .cell.highlight {
        border-color: var(--accent);
        outline: 4px solid var(--accent);
        transform: scale(1.1);
      }
      #reset {
        margin-top: 2rem;
        border-radius: 999px;
        padding: 0.5rem 1.75rem;
        font-size: 1.2rem;
        font-weight: 800;
        letter-spacing: 1.5px;
        border: 4px solid var(--accent);
        background: linear-gradient(90deg, #4f8a8b22 0%, #ffb86655 100%);
        cursor: pointer;
      }
    </style>
  </head>
  <body>
    <h1>Emoji Tic Tac Toe</h1>
    <div class=\"players\">
      <span class=\"player\" data-player=\"A\"></span>
      <span>vs</span>
      <span class=\"player\" data-player=\"B\"></span>
    </div>
    <div id=\"status\"></div>
    <div id=\"board\"></div>
    <button id=\"reset\" type=\"button\" aria-label=\"Reset Game\">&#x1F504; Reset Game</button>
    <script>
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const resetButton = document.getElementById('reset');
      let gameId = null;
      let isRequestPending = false;

      async function request(path, body) {
        const response = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: body ? JSON.stringify(body) : undefined,
        });
        if (!response.ok) {
          const payload = await response.json().catch(() => ({}));
          throw new Error(payload.detail || 'Request failed');
        }
        return response.json();
      }

      function render(state) {
        gameId = state.id;
        document.querySelectorAll('.player').forEach((el) => {
          const player = el.dataset.player;
          el.textContent = `${state.tokens[player]} ${state.labels[player]}`;
          el.classList.toggle(
            'active',
            state.status === 'in-progress' && state.activePlayer === player
          );
        });
        if (state.status === 'won') {
          statusEl.textContent = `${state.labels[state.winner]} ${state.tokens[state.winner]} wins!`;
        } else if (state.status === 'drawn') {
          statusEl.textContent = "It's a Draw!";
        } else {
          const next = state.activePlayer;
          statusEl.textContent = `${state.labels[next]}'s turn ${state.tokens[next]}`;
        }
        const highlight = new Set(state.winningLine || []);
        const open = new Set(state.availableMoves);
        boardEl.innerHTML = '';
        state.board.forEach((value, index) => {
          const cell = document.createElement('button');
          cell.type = 'button';
          cell.className = 'cell';
          cell.setAttribute('aria-label', `Tic Tac Toe Square ${index + 1}`);
          cell.textContent = value ? state.tokens[value] : '';
          cell.disabled = !open.has(index);
          cell.classList.toggle('highlight', highlight.has(index));
          cell.addEventListener('click', () => play(index));
          boardEl.appendChild(cell);
        });
      }

      async function run(action) {
        if (isRequestPending) return;
        isRequestPending = true;
        try {
          render(await action());
        } catch (err) {
          statusEl.textContent = err.message;
        } finally {
          isRequestPending = false;
        }
      }

      function play(index) {
        run(() => request(`/api/game/${gameId}/move`, { cellIndex: index }));
      }

      resetButton.addEventListener('click', () => {
        run(() => request(`/api/game/${gameId}/reset`));
      });

      run(() => request('/api/game'));
    </script>
  </body>
</html>
"""
