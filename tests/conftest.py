from dataclasses import replace

from chronogrid.game import initialize_game
from chronogrid.vocab import EraId


class FixedRng:
    """
    Deterministic stand-in for the shared stream.

    random() always returns ``u``; integers(low, high) returns the low end or
    the top of the range (numpy's high is exclusive).
    """

    def __init__(self, u=0.5, pick="low"):
        self.u = u
        self.pick = pick
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.u

    def integers(self, low, high):
        self.calls += 1
        return low if self.pick == "low" else high - 1


def scrimmage(era=EraId.SPREAD, **kw):
    """Mid-game snap situation; override any GameState field by keyword."""
    s = initialize_game(era, "Bears", "Packers")
    base = dict(is_kickoff=False, quarter=2, time_left=600, down=1, distance=10, ball_location=50)
    base.update(kw)
    return replace(s, **base)
