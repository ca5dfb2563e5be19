"""A small multiplayer game server: players move squares over WebSockets."""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass
from typing import Dict, Optional, Union

import websockets
from websockets.exceptions import ConnectionClosed

MOVE_STEP = 10
BROADCAST_INTERVAL = 0.1

_MOVES = {
    "R": (MOVE_STEP, 0),
    "L": (-MOVE_STEP, 0),
    "D": (0, MOVE_STEP),
    "U": (0, -MOVE_STEP),
}


@dataclass
class Entity:
    """A player's square on the board."""

    id: int = 0
    pos: tuple[int, int] = (0, 0)

    def to_json(self) -> str:
        """Describe the entity as a JSON object."""
        x, y = self.pos
        return f'{{"position":{{"x":{x},"y":{y}}}, "id":{self.id}}}'

    def process_message(self, text: str) -> None:
        """Move one step for ``R``, ``L``, ``D`` or ``U``; ignore anything else."""
        dx, dy = _MOVES.get(text, (0, 0))
        x, y = self.pos
        self.pos = (x + dx, y + dy)


class GameState:
    """Every player's entity, keyed by player id."""

    def __init__(self) -> None:
        self._entities: Dict[int, Entity] = {}
        self._counter = 0

    @property
    def entities(self) -> Dict[int, Entity]:
        return dict(self._entities)

    def add_player(self) -> int:
        """Create an entity for a new player and return its id."""
        self._counter += 1
        player_id = self._counter
        self._entities[player_id] = Entity(id=player_id)
        return player_id

    def handle_message(self, player_id: int, message: Union[str, bytes]) -> None:
        """Apply a text message from ``player_id``; binary messages are ignored."""
        if not isinstance(message, str):
            return
        entity = self._entities.get(player_id)
        if entity is not None:
            entity.process_message(message)

    def snapshot(self) -> Optional[str]:
        """A JSON array of all entities, newest first; None when there are none."""
        if not self._entities:
            return None
        return "[" + ",".join(e.to_json() for e in reversed(list(self._entities.values()))) + "]"


async def _broadcast(state: GameState, connections: Dict[int, object]) -> None:
    print("broadcast game state")
    snapshot = state.snapshot()
    if snapshot is None:
        return
    for player_id, connection in list(connections.items()):
        try:
            await connection.send(snapshot)
        except ConnectionClosed:
            connections.pop(player_id, None)


async def serve(host: str = "127.0.0.1", port: int = 8080) -> None:
    """Accept players at ``host:port`` and broadcast the game state every 100 ms."""
    state = GameState()
    connections: Dict[int, object] = {}

    async def handle_client(connection) -> None:
        print(f"client addr: {connection.remote_address}")
        player_id = state.add_player()
        print(f"new client {player_id}")
        connections[player_id] = connection
        try:
            async for message in connection:
                print(f"message for client {player_id}")
                state.handle_message(player_id, message)
        except ConnectionClosed:
            pass
        finally:
            connections.pop(player_id, None)

    async with websockets.serve(handle_client, host, port):
        while True:
            await asyncio.sleep(BROADCAST_INTERVAL)
            await _broadcast(state, connections)


def main(argv: list[str] | None = None) -> int:
    """Run the game server until interrupted."""
    parser = argparse.ArgumentParser(prog="game-server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    try:
        asyncio.run(serve(args.host, args.port))
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Error while running core loop: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())