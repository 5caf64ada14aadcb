from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
import uvicorn

from ..config import Config, default_config, load_config
from ..dungeon import Dungeon
from ..logging_utils import setup_logging
from ..main import build_dungeon
from ..rooms import RoomType

logger = logging.getLogger(__name__)


class DungeonManager:
    def __init__(self, config_path: Optional[Path]) -> None:
        self._config_path = config_path
        self._current_dungeon: Optional[Dungeon] = None

    def load(self) -> Config:
        if self._config_path is None:
            return default_config()
        return load_config(self._config_path)

    def get_dungeon(self, reload: bool = False, seed: Optional[int] = None) -> Dungeon:
        if reload or seed is not None or self._current_dungeon is None:
            config = self.load()
            self._current_dungeon, _, _ = build_dungeon(config, seed)
        return self._current_dungeon


def create_app(config_path: Optional[Path] = None) -> FastAPI:
    manager = DungeonManager(config_path)

    app = FastAPI(title="Breadcrawl Dungeon Layouts", version="0.1.0")

    @app.get("/api/dungeon")
    async def get_dungeon(reload: Optional[int] = None, seed: Optional[int] = None) -> JSONResponse:
        try:
            dungeon = manager.get_dungeon(reload=bool(reload), seed=seed)
        except (FileNotFoundError, ValueError) as exc:
            logger.error("Could not build dungeon: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return JSONResponse(dungeon.to_dict())

    @app.get("/api/legend")
    async def get_legend() -> JSONResponse:
        try:
            settings = manager.load().rooms
        except (FileNotFoundError, ValueError) as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        legend = [
            {
                "name": room_type.name,
                "glyph": room_type.glyph,
                "description": room_type.description,
                "color": settings.color(room_type),
            }
            for room_type in RoomType
            if room_type not in (RoomType.EMPTY, RoomType.CORRIDOR)
        ]
        return JSONResponse(legend)

    return app


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Serve generated dungeon layouts as JSON.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the dungeon configuration file.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    parser.add_argument("--log-level", default="INFO", help="Logging level for generation diagnostics.")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    config_path = args.config.resolve() if args.config is not None else None
    app = create_app(config_path)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
