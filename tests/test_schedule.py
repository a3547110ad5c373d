"""Tests for schedule generation."""

from __future__ import annotations

import random
import unittest
from collections import Counter
from itertools import combinations

from scoreroom.errors import ValidationError
from scoreroom.schedule.services import ScheduleFormat, ScheduleGenerator, bracket_rounds
from scoreroom.stats.services import manual_adjustment, new_player


def _roster(count):
    return [new_player(f"P{i}", f"p{i}") for i in range(count)]


class ScheduleGeneratorTestCase(unittest.TestCase):
    """Test case for ScheduleGenerator."""

    def setUp(self) -> None:
        self.generator = ScheduleGenerator(rng=random.Random(7))

    def test_needs_two_players(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.generator.generate(_roster(1), ScheduleFormat.ROUND_ROBIN, 0)
        self.assertEqual(ctx.exception.message, "Need at least 2 players!")

    def test_unknown_format(self) -> None:
        with self.assertRaises(ValueError):
            self.generator.generate(_roster(2), "LADDER", 0)

    def test_first_round_pairs_everyone_once(self) -> None:
        for fmt in (ScheduleFormat.SINGLE_ELIMINATION, ScheduleFormat.SWISS):
            matches = self.generator.generate(_roster(6), fmt, 1000)
            self.assertEqual(len(matches), 3)
            ids = [m["p1_id"] for m in matches] + [m["p2_id"] for m in matches]
            self.assertEqual(sorted(ids), sorted(f"p{i}" for i in range(6)))
            self.assertTrue(all(m["round"] == 1 for m in matches))
            self.assertTrue(all(m["status"] == "pending" for m in matches))
            self.assertTrue(all(m["type"] == "scheduled" for m in matches))

    def test_first_round_odd_player_gets_bye(self) -> None:
        matches = self.generator.generate(_roster(5), "1V1", 0)
        self.assertEqual(len(matches), 2)
        paired = {m["p1_id"] for m in matches} | {m["p2_id"] for m in matches}
        self.assertEqual(len(paired), 4)

    def test_round_robin_covers_every_pair(self) -> None:
        for count in (2, 3, 4, 5, 6):
            matches = self.generator.generate(_roster(count), "GROUP", 0)
            pairs = Counter(frozenset((m["p1_id"], m["p2_id"])) for m in matches)
            expected = {frozenset(p) for p in combinations([f"p{i}" for i in range(count)], 2)}
            self.assertEqual(set(pairs), expected)
            self.assertTrue(all(n == 1 for n in pairs.values()))

    def test_round_robin_rounds(self) -> None:
        matches = ScheduleGenerator.generate_round_robin(["a", "b", "c", "d"], 0)
        self.assertEqual(len(matches), 6)
        self.assertEqual(sorted({m["round"] for m in matches}), [1, 2, 3])
        for round_no in (1, 2, 3):
            in_round = [m for m in matches if m["round"] == round_no]
            players = [m["p1_id"] for m in in_round] + [m["p2_id"] for m in in_round]
            self.assertEqual(len(players), len(set(players)))

    def test_timestamps_are_increasing(self) -> None:
        matches = self.generator.generate(_roster(4), "GROUP", 500)
        self.assertEqual([m["timestamp"] for m in matches], list(range(500, 506)))

    def test_bracket_rounds_skip_manual(self) -> None:
        matches = ScheduleGenerator.generate_round_robin(["a", "b", "c"], 0)
        matches.append(manual_adjustment("a", 2, 9))
        rounds = bracket_rounds(matches)
        self.assertEqual([r["round"] for r in rounds], [1, 2, 3])
        self.assertEqual(sum(len(r["matches"]) for r in rounds), 3)


if __name__ == "__main__":
    unittest.main()
