from collections import Counter
import os, sys

# Ensure project root is on sys.path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tennisgame.config import MatchConfig
from tennisgame.simulation import simulate_match


def run(seed: int, bias=50):
    """Run one simulated match and return points played and final sets.

    This uses a fixed configuration and a changing seed.
    """
    cfg = MatchConfig(player_a='A', player_b='B', seed=seed, bias=bias)
    for event, data in simulate_match(cfg):
        if event == 'match':
            return data['points'], tuple(data['final_sets'])
    raise RuntimeError("simulation ended without a match event")


def probe(label, n=200, **kwargs):
    """Try many seeds and print simple distribution info.

    This is a rough way to eyeball how long matches run.
    """
    finals = Counter()
    points = []
    for s in range(n):
        played, sets = run(s, **kwargs)
        points.append(played)
        finals[sets] += 1
    points.sort()
    print(f"\n[{label}] matches: {n}  points min/median/max: {points[0]}/{points[n // 2]}/{points[-1]}")
    for k, v in finals.most_common(5):
        print(v, k)


def main():
    """Run a few probes with different point biases."""
    probe('even bias=50', bias=50)
    probe('slight edge bias=55', bias=55)
    probe('strong edge bias=70', bias=70)


if __name__ == '__main__':
    main()
