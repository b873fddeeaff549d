from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .models import GameDesignPattern, GameDifficulty


class Catalog:
    """Read-only, ordered collection of game design patterns."""

    def __init__(self, games: Iterable[GameDesignPattern] = ()) -> None:
        self._games: Tuple[GameDesignPattern, ...] = tuple(games)

    def __iter__(self) -> Iterator[GameDesignPattern]:
        return iter(self._games)

    def __len__(self) -> int:
        return len(self._games)

    @property
    def games(self) -> Tuple[GameDesignPattern, ...]:
        return self._games

    def get_game_by_id(self, game_id: str) -> Optional[GameDesignPattern]:
        for game in self._games:
            if game.game_id == game_id:
                return game
        return None

    def find_by_name(self, name: str) -> Optional[GameDesignPattern]:
        wanted = name.strip().lower()
        for game in self._games:
            if game.game_name.lower() == wanted:
                return game
        return None

    def owned(self, owned_games: Sequence[str]) -> Tuple[GameDesignPattern, ...]:
        """Catalog entries the player owns, in catalog order."""
        return tuple(g for g in self._games if g.game_id in owned_games)

    def search(
        self,
        genres: Optional[Sequence[str]] = None,
        platforms: Optional[Sequence[str]] = None,
        difficulty: Optional[GameDifficulty] = None,
        max_time_to_fun: Optional[float] = None,
    ) -> Tuple[GameDesignPattern, ...]:
        out = []
        for game in self._games:
            if genres and not any(g in game.genres for g in genres):
                continue
            if platforms and not any(p in game.platforms for p in platforms):
                continue
            if difficulty and game.difficulty != difficulty:
                continue
            if max_time_to_fun is not None and game.time_to_fun > max_time_to_fun:
                continue
            out.append(game)
        return tuple(out)
