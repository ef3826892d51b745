"""
Ledger of every distinct final score (winner, loser) seen so far.

Fed by whoever drives games; the engine never touches it.
"""
from __future__ import annotations
import json
import time
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Optional

import pandas as pd


@dataclass(frozen=True, slots=True)
class ScoragamiEntry:
    winner_score: int
    loser_score: int
    count: int
    first_discovered: float     # unix timestamp
    last_era: str


class ScoragamiBook:
    def __init__(self, entries=()):
        self._entries: dict[tuple[int, int], ScoragamiEntry] = {
            (e.winner_score, e.loser_score): e for e in entries
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return tuple(key) in self._entries

    def get(self, winner: int, loser: int) -> Optional[ScoragamiEntry]:
        return self._entries.get((winner, loser))

    def entries(self) -> list[ScoragamiEntry]:
        return sorted(self._entries.values(), key=lambda e: (e.winner_score, e.loser_score))

    def record(self, home_score: int, away_score: int, era_name: str,
               now: Optional[float] = None) -> bool:
        """Log a final score. Returns True when the pair has never been seen."""
        key = (max(home_score, away_score), min(home_score, away_score))
        prev = self._entries.get(key)
        if prev is not None:
            self._entries[key] = replace(prev, count=prev.count + 1, last_era=era_name)
            return False
        self._entries[key] = ScoragamiEntry(
            winner_score=key[0], loser_score=key[1], count=1,
            first_discovered=time.time() if now is None else now, last_era=era_name,
        )
        return True

    def to_frame(self) -> pd.DataFrame:
        cols = [f.name for f in fields(ScoragamiEntry)]
        return pd.DataFrame([asdict(e) for e in self.entries()], columns=cols)

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump([asdict(e) for e in self.entries()], f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> "ScoragamiBook":
        path = Path(path)
        if not path.exists():
            return cls()
        with open(path, "r") as f:
            raw = json.load(f)
        return cls(ScoragamiEntry(**row) for row in raw)
