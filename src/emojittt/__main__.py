"""Entry point for running Emoji Tic-Tac-Toe via ``python -m emojittt``."""

from __future__ import annotations

import logging
import os

import uvicorn


def _python_log_level(log_level: str) -> int:
    """Translate a uvicorn log level name into a stdlib logging level."""

    # uvicorn adds "trace" below DEBUG; stdlib logging has no such name
    if log_level == "trace":
        return logging.DEBUG
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {log_level!r}")
    return level


def main() -> None:
    """Start the FastAPI-powered Emoji Tic-Tac-Toe web server."""

    host = os.environ.get("EMOJITTT_HOST", "0.0.0.0")
    port = int(os.environ.get("EMOJITTT_PORT", "8000"))
    log_level = os.environ.get("EMOJITTT_LOG_LEVEL", "info").lower()
    logging.basicConfig(level=_python_log_level(log_level), format="%(levelname)s:     %(name)s - %(message)s")
    uvicorn.run("emojittt.ui:app", host=host, port=port, log_level=log_level, reload=False)


if __name__ == "__main__":
    main()
