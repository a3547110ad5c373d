"""Tests for broadcast targeting and the overlay."""

from __future__ import annotations

import unittest

from scoreroom.broadcast.services import (
    BroadcastOverlay,
    build_message,
    is_targeted,
    latest_for,
    overlay_title,
    resolve_targets,
    visible_message,
)
from scoreroom.errors import ValidationError
from scoreroom.stats.services import new_player


def _message(message_id, targets, timestamp, names=None):
    return {
        "id": message_id,
        "text": f"text {message_id}",
        "targets": targets,
        "targetNames": names or [],
        "timestamp": timestamp,
    }


class TargetingTestCase(unittest.TestCase):
    """Test case for message targeting."""

    def setUp(self) -> None:
        self.players = [new_player("Ann", "a"), new_player("Bob", "b")]

    def test_resolve_all(self) -> None:
        self.assertEqual(resolve_targets(self.players, None), (["all"], ["ALL"]))

    def test_resolve_selection(self) -> None:
        self.assertEqual(resolve_targets(self.players, ["b"]), (["b"], ["Bob"]))

    def test_resolve_empty_selection(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            resolve_targets(self.players, [])
        self.assertEqual(ctx.exception.message, "Select at least one player!")

    def test_build_message(self) -> None:
        message = build_message("  Hello ", ["all"], ["ALL"], 42, message_id="m")
        self.assertEqual(
            message,
            {
                "id": "m",
                "text": "Hello",
                "targets": ["all"],
                "targetNames": ["ALL"],
                "timestamp": 42,
            },
        )
        with self.assertRaises(ValidationError):
            build_message("   ", ["all"], ["ALL"], 42)

    def test_is_targeted(self) -> None:
        self.assertTrue(is_targeted(_message("1", ["all"], 0), None))
        self.assertTrue(is_targeted(_message("1", [], 0), "a"))
        self.assertTrue(is_targeted(_message("1", ["a"], 0), "a"))
        self.assertFalse(is_targeted(_message("1", ["a"], 0), "b"))
        self.assertFalse(is_targeted(_message("1", ["a"], 0), None))

    def test_latest_uses_log_order(self) -> None:
        messages = [_message("1", ["all"], 500), _message("2", ["all"], 100)]
        self.assertEqual(latest_for(messages, "a")["id"], "2")

    def test_latest_skips_other_targets(self) -> None:
        messages = [_message("1", ["all"], 100), _message("2", ["b"], 200)]
        self.assertEqual(latest_for(messages, "a")["id"], "1")
        self.assertEqual(latest_for(messages, "b")["id"], "2")

    def test_visible_window(self) -> None:
        messages = [_message("1", ["all"], 1000)]
        self.assertIsNotNone(visible_message(messages, None, 10_999))
        self.assertIsNone(visible_message(messages, None, 11_000))

    def test_overlay_title(self) -> None:
        self.assertEqual(overlay_title(_message("1", ["all"], 0, ["ALL"])), "BROADCAST")
        self.assertEqual(
            overlay_title(_message("1", ["a", "b"], 0, ["Ann", "Bob"])),
            "MESSAGE FOR: Ann, Bob",
        )
        self.assertEqual(overlay_title(_message("1", ["a"], 0)), "MESSAGE FOR: YOU")


class OverlayTestCase(unittest.TestCase):
    """Test case for BroadcastOverlay."""

    def setUp(self) -> None:
        self.overlay = BroadcastOverlay(visible_ms=10_000, dismiss_ms=8_000)

    def test_fresh_message_is_shown(self) -> None:
        messages = [_message("1", ["all"], 1000)]
        self.assertEqual(self.overlay.update(messages, "a", 2000)["id"], "1")

    def test_stale_message_is_not_shown(self) -> None:
        messages = [_message("1", ["all"], 1000)]
        self.assertIsNone(self.overlay.update(messages, "a", 20_000))

    def test_auto_dismiss(self) -> None:
        messages = [_message("1", ["all"], 1000)]
        self.overlay.update(messages, "a", 1000)
        self.assertIsNotNone(self.overlay.update(messages, "a", 8_999))
        self.assertIsNone(self.overlay.update(messages, "a", 9_000))

    def test_manual_dismiss_is_final(self) -> None:
        messages = [_message("1", ["all"], 1000)]
        self.overlay.update(messages, "a", 1000)
        self.overlay.dismiss()
        self.assertIsNone(self.overlay.update(messages, "a", 1500))

    def test_newer_message_replaces_current(self) -> None:
        messages = [_message("1", ["all"], 1000)]
        self.overlay.update(messages, "a", 1000)
        messages.append(_message("2", ["a"], 2000))
        self.assertEqual(self.overlay.update(messages, "a", 2000)["id"], "2")

    def test_stale_newer_message_keeps_current(self) -> None:
        overlay = BroadcastOverlay(visible_ms=3_000, dismiss_ms=8_000)
        messages = [_message("1", ["all"], 1000)]
        overlay.update(messages, "a", 1000)
        messages.append(_message("2", ["all"], 500))
        self.assertEqual(overlay.update(messages, "a", 4000)["id"], "1")

    def test_replaced_message_does_not_return(self) -> None:
        messages = [_message("1", ["all"], 1000)]
        self.overlay.update(messages, "a", 1000)
        messages.append(_message("2", ["a"], 2000))
        self.overlay.update(messages, "a", 2000)
        self.overlay.dismiss()
        self.assertIsNone(self.overlay.update(messages[:1], "a", 3000))

    def test_message_for_someone_else(self) -> None:
        messages = [_message("1", ["b"], 1000)]
        self.assertIsNone(self.overlay.update(messages, "a", 1000))
        self.assertIsNone(self.overlay.update(messages, None, 1000))


if __name__ == "__main__":
    unittest.main()
