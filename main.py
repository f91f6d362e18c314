import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from game.errors import ClientDisconnected, ConfigError
from game.session import GameSession
from game.settings import Settings, load_settings

logger = logging.getLogger(__name__)

# Paths
BASE_DIR = Path(__file__).parent
STATIC_DIR = BASE_DIR / "static"


def make_sender(websocket: WebSocket):
    """Wrap websocket.send_json so a closed socket surfaces as ClientDisconnected."""

    async def send(message: dict) -> None:
        try:
            await websocket.send_json(message)
        except WebSocketDisconnect as e:
            raise ClientDisconnected(f"Client disconnected (code {e.code})") from e

    return send


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app serving the page and the game websocket."""
    settings = settings or load_settings()
    app = FastAPI(title="SnakeBurst")
    app.state.settings = settings

    @app.get("/")
    async def serve_index():
        """Serve the main index.html file."""
        index_path = STATIC_DIR / "index.html"
        if index_path.exists():
            return FileResponse(index_path)
        return {"error": "index.html not found"}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/config")
    async def get_config():
        """Settings the page needs to lay out the board."""
        return {
            "grid_size": settings.grid_size,
            "cell_size": settings.cell_size,
            "tick_interval": settings.tick_interval,
            "particle_count": settings.particle_count,
        }

    @app.websocket("/ws/game")
    async def websocket_game(websocket: WebSocket):
        """WebSocket endpoint for real-time game communication."""
        await websocket.accept()

        session = GameSession(make_sender(websocket), settings=settings)

        try:
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({"type": "error", "message": "Invalid JSON"})
                    continue
                if not isinstance(message, dict):
                    await websocket.send_json({"type": "error", "message": "Expected a JSON object"})
                    continue

                msg_type = message.get("type")

                if msg_type == "start_game":
                    if session.running or session.game.game_over:
                        await session.reset()
                    else:
                        await session.start()

                elif msg_type == "key":
                    # Queue the direction for the next tick
                    session.handle_key(str(message.get("key", "")))

                elif msg_type == "reset":
                    await session.reset()

                else:
                    await websocket.send_json({
                        "type": "error",
                        "message": f"Unknown message type: {msg_type}",
                    })

        except WebSocketDisconnect:
            logger.info("Client disconnected")
        finally:
            await session.close()

    # Mount static files (after all routes)
    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


def find_available_port(start_port: int = 8000, max_attempts: int = 100) -> int:
    """Find an available port starting from start_port.

    Args:
        start_port: Port number to start searching from
        max_attempts: Maximum number of ports to try

    Returns:
        An available port number

    Raises:
        RuntimeError: If no available port is found
    """
    import socket

    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(("0.0.0.0", port))
                return port
        except OSError:
            continue

    raise RuntimeError(f"No available port found in range {start_port}-{start_port + max_attempts - 1}")


def serve(settings: Settings, port: Optional[int] = None) -> None:
    """Run the app under uvicorn."""
    import uvicorn

    logging.basicConfig(level=settings.log_level.upper())

    requested = port or settings.port
    port = find_available_port(requested)
    if port != requested:
        print(f"Port {requested} is in use, using port {port} instead")

    print(f"Starting server at http://localhost:{port}")
    uvicorn.run(create_app(settings), host=settings.host, port=port)


def main():
    parser = argparse.ArgumentParser(description="Serve the SnakeBurst game")
    parser.add_argument("--config", type=str, help="Path to YAML config file")
    parser.add_argument("--port", type=int, help="Port to listen on")
    args = parser.parse_args()

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        parser.error(str(e))

    serve(settings, port=args.port)


if __name__ == "__main__":
    main()
