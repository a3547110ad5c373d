"""Tests for app wiring and room entry routes."""

from __future__ import annotations

import unittest

from scoreroom import create_app
from tests.mock_utils import FakeClock, FakeStore, StoreError


class AppTestCase(unittest.TestCase):
    """Test case for an app without a store."""

    def setUp(self) -> None:
        self.app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})
        self.client = self.app.test_client()

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, b"OK")

    def test_status_reports_store_error(self) -> None:
        data = self.client.get("/room/status").get_json()
        self.assertEqual(data["firebase"], {"ready": False, "error": "Firebase disabled."})
        self.assertIsNone(data["room"])
        self.assertEqual(data["language"], "zh")
        self.assertTrue(data["clientId"])

    def test_entry_refused_without_store(self) -> None:
        response = self.client.post("/room/scorer", data={"code": "1234", "password": "pw"})
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.get_json()["error"], "Firebase disabled.")

    def test_unknown_route(self) -> None:
        response = self.client.get("/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {"error": "Page Not Found"})

    def test_proxy_headers(self) -> None:
        @self.app.route("/test_scheme")
        def test_scheme():
            from flask import request

            return request.scheme

        response = self.client.get("/test_scheme", headers={"X-Forwarded-Proto": "https"})
        self.assertEqual(response.data.decode(), "https")


class RoomRoutesTestCase(unittest.TestCase):
    """Test case for entering and leaving rooms."""

    def setUp(self) -> None:
        self.store = FakeStore()
        self.app = create_app(
            {
                "TESTING": True,
                "WTF_CSRF_ENABLED": False,
                "ROOM_STORE": self.store,
                "CLOCK": FakeClock(),
            }
        )
        self.client = self.app.test_client()

    def tearDown(self) -> None:
        self.app.extensions["room_sessions"].close_all()

    def test_enter_as_scorer_creates_room(self) -> None:
        response = self.client.post("/room/scorer", data={"code": "1234", "password": "pw"})
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data["room"], "1234")
        self.assertEqual(data["role"], "scorer")
        self.assertTrue(data["ready"])
        self.assertEqual(data["notices"][0]["message"], "Entered room 1234.")
        self.assertEqual(self.store.data["rooms/1234/scorerPin"], "pw")

    def test_wrong_password(self) -> None:
        self.client.post("/room/scorer", data={"code": "1234", "password": "pw"})
        other = self.app.test_client()
        response = other.post("/room/scorer", data={"code": "1234", "password": "bad"})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["error"], "Incorrect scorer password.")

    def test_cached_pin_is_reused(self) -> None:
        self.client.post("/room/scorer", data={"code": "1234", "password": "pw"})
        self.client.post("/room/leave")
        response = self.client.post("/room/scorer", data={"code": "1234"})
        self.assertEqual(response.status_code, 200)

    def test_contestant_needs_room(self) -> None:
        response = self.client.post("/room/contestant", data={"code": "5555"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "Room not found.")

    def test_invalid_code(self) -> None:
        response = self.client.post("/room/contestant", data={"code": "12a"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Enter a 4-digit room code.")

    def test_missing_code(self) -> None:
        response = self.client.post("/room/contestant", data={})
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.get_json()["error"].startswith("Room Code:"))

    def test_status_and_leave(self) -> None:
        self.client.post("/room/scorer", data={"code": "1234", "password": "pw"})
        data = self.client.get("/room/status").get_json()
        self.assertEqual((data["room"], data["role"], data["lastRoom"]), ("1234", "scorer", "1234"))
        self.assertEqual(self.store.open_subscriptions(), 4)

        self.client.post("/room/leave")
        data = self.client.get("/room/status").get_json()
        self.assertIsNone(data["room"])
        self.assertEqual(data["lastRoom"], "1234")
        self.assertEqual(self.store.open_subscriptions(), 0)

    def test_switching_rooms_closes_previous(self) -> None:
        self.client.post("/room/scorer", data={"code": "1111", "password": "pw"})
        self.client.post("/room/scorer", data={"code": "2222", "password": "pw"})
        self.assertEqual(self.store.open_subscriptions(), 4)

    def test_language(self) -> None:
        response = self.client.post("/room/language", data={"lang": "en"})
        self.assertEqual(response.get_json()["language"], "en")
        self.assertEqual(self.client.get("/room/status").get_json()["language"], "en")
        response = self.client.post("/room/language", data={"lang": "fr"})
        self.assertEqual(response.status_code, 400)

    def test_store_write_failure_is_503(self) -> None:
        self.store.fail_writes = StoreError("PERMISSION_DENIED")
        response = self.client.post("/room/scorer", data={"code": "1234", "password": "pw"})
        self.assertEqual(response.status_code, 503)
        self.assertEqual(
            response.get_json()["error"], "Firebase write failed: PERMISSION_DENIED"
        )

    def test_devices_are_separate(self) -> None:
        self.client.post("/room/scorer", data={"code": "1234", "password": "pw"})
        other = self.app.test_client()
        data = other.get("/room/status").get_json()
        self.assertIsNone(data["room"])
        self.assertEqual(len(self.app.extensions["room_sessions"]), 2)


class IdleDevicesTestCase(unittest.TestCase):
    """Test case for dropping devices that stopped making requests."""

    def setUp(self) -> None:
        self.store = FakeStore()
        self.clock = FakeClock()
        self.app = create_app(
            {
                "TESTING": True,
                "WTF_CSRF_ENABLED": False,
                "ROOM_STORE": self.store,
                "CLOCK": self.clock,
                "DEVICE_IDLE_MS": 1000,
            }
        )
        self.registry = self.app.extensions["room_sessions"]

    def tearDown(self) -> None:
        self.registry.close_all()

    def test_idle_devices_are_closed(self) -> None:
        for _ in range(5):
            client = self.app.test_client()
            response = client.post("/room/scorer", data={"code": "1234", "password": "pw"})
            self.assertEqual(response.status_code, 200)
        self.assertEqual(len(self.registry), 5)
        self.assertEqual(self.store.open_subscriptions(), 20)

        self.clock.advance(1001)
        latest = self.app.test_client()
        latest.post("/room/scorer", data={"code": "1234", "password": "pw"})
        self.assertEqual(len(self.registry), 1)
        self.assertEqual(self.store.open_subscriptions(), 4)

    def test_active_device_is_kept(self) -> None:
        client = self.app.test_client()
        client.post("/room/scorer", data={"code": "1234", "password": "pw"})
        self.clock.advance(800)
        client.get("/room/status")
        self.clock.advance(800)
        self.app.test_client().get("/room/status")
        self.assertEqual(len(self.registry), 2)
        self.assertEqual(client.get("/room/status").get_json()["room"], "1234")

    def test_close_all_shuts_down_store(self) -> None:
        self.app.test_client().post("/room/scorer", data={"code": "1234", "password": "pw"})
        self.registry.close_all()
        self.assertEqual(len(self.registry), 0)
        self.assertEqual(self.store.open_subscriptions(), 0)
        self.assertTrue(self.store.shut_down)


if __name__ == "__main__":
    unittest.main()
