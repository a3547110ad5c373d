"""Tests for the Firestore room store."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

from mockfirestore import MockFirestore

from scoreroom import create_app
from scoreroom.store.connection import connect_store
from scoreroom.store.firestore import FirestoreRoomStore


class FirestoreRoomStoreTestCase(unittest.TestCase):
    """Test case for FirestoreRoomStore reads and writes."""

    def setUp(self) -> None:
        self.db = MockFirestore()
        self.store = FirestoreRoomStore(db=self.db, max_workers=1)

    def tearDown(self) -> None:
        self.store.shutdown()
        self.db.reset()

    def test_set_then_once(self) -> None:
        self.store.set("rooms/1234/players", [{"id": "a"}]).result()
        snapshot = self.store.once("rooms/1234/players")
        self.assertTrue(snapshot.exists)
        self.assertEqual(snapshot.value, [{"id": "a"}])

    def test_document_layout(self) -> None:
        self.store.set("rooms/1234/scorerPin", "pw").result()
        doc = (
            self.db.collection("rooms")
            .document("1234")
            .collection("state")
            .document("scorerPin")
            .get()
        )
        self.assertEqual(doc.to_dict(), {"value": "pw"})

    def test_missing_path(self) -> None:
        snapshot = self.store.once("rooms/1234/meta")
        self.assertFalse(snapshot.exists)
        self.assertIsNone(snapshot.value)

    def test_rejects_other_paths(self) -> None:
        with self.assertRaises(ValueError):
            self.store.once("users/1")
        with self.assertRaises(ValueError):
            self.store.set("rooms/1234/players/extra", [])


class FirestoreSubscriptionTestCase(unittest.TestCase):
    """Test case for snapshot listeners."""

    def setUp(self) -> None:
        self.db = MagicMock()
        self.doc_ref = (
            self.db.collection.return_value.document.return_value.collection.return_value.document.return_value
        )
        self.store = FirestoreRoomStore(db=self.db, max_workers=1)
        self.on_value = MagicMock()
        self.on_error = MagicMock()
        self.subscription = self.store.subscribe(
            "rooms/1234/timer", self.on_value, self.on_error
        )
        self.callback = self.doc_ref.on_snapshot.call_args[0][0]

    def tearDown(self) -> None:
        self.store.shutdown()

    def test_value_is_unwrapped(self) -> None:
        doc = MagicMock(exists=True)
        doc.to_dict.return_value = {"value": {"isRunning": True}}
        self.callback([doc], [], None)
        self.on_value.assert_called_once_with({"isRunning": True})

    def test_absent_document_is_none(self) -> None:
        self.callback([], [], None)
        self.on_value.assert_called_once_with(None)
        self.callback([MagicMock(exists=False)], [], None)
        self.assertEqual(self.on_value.call_args[0][0], None)

    def test_handler_failure_goes_to_on_error(self) -> None:
        error = RuntimeError("boom")
        self.on_value.side_effect = error
        doc = MagicMock(exists=True)
        doc.to_dict.return_value = {"value": 1}
        self.callback([doc], [], None)
        self.on_error.assert_called_once_with(error)

    def test_close_unsubscribes_once(self) -> None:
        self.subscription.close()
        self.subscription.close()
        self.doc_ref.on_snapshot.return_value.unsubscribe.assert_called_once()


class ConnectStoreTestCase(unittest.TestCase):
    """Test case for Firebase initialization."""

    def setUp(self) -> None:
        self.app = create_app({"TESTING": True, "STORE_WRITE_WORKERS": 1})

    @patch("scoreroom.store.connection._load_credentials")
    def test_missing_credentials(self, mock_load) -> None:
        mock_load.return_value = (None, None)
        store, status = connect_store(self.app)
        self.assertIsNone(store)
        self.assertFalse(status.ready)
        self.assertEqual(status.error, "Missing Firebase credentials.")

    @patch("scoreroom.store.firestore.firestore")
    @patch("scoreroom.store.connection.firebase_admin")
    @patch("scoreroom.store.connection._load_credentials")
    def test_initializes_once(self, mock_load, mock_admin, mock_firestore) -> None:
        mock_load.return_value = (MagicMock(), "demo-project")
        mock_admin._apps = {}
        store, status = connect_store(self.app)
        self.assertTrue(status.ready)
        self.assertIsNotNone(store)
        mock_admin.initialize_app.assert_called_once()
        self.assertEqual(
            mock_admin.initialize_app.call_args[0][1], {"projectId": "demo-project"}
        )
        store.shutdown()

    @patch("scoreroom.store.firestore.firestore")
    @patch("scoreroom.store.connection.firebase_admin")
    @patch("scoreroom.store.connection._load_credentials")
    def test_client_failure(self, mock_load, mock_admin, mock_firestore) -> None:
        mock_load.return_value = (MagicMock(), None)
        mock_admin._apps = {"[DEFAULT]": MagicMock()}
        mock_firestore.client.side_effect = Exception("no project")
        store, status = connect_store(self.app)
        self.assertIsNone(store)
        self.assertEqual(status.error, "Firebase init failed: no project")
        mock_admin.initialize_app.assert_not_called()


if __name__ == "__main__":
    unittest.main()
