"""Firebase Admin initialization for the room store."""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any

import firebase_admin
from firebase_admin import credentials

from .base import StoreStatus
from .firestore import FirestoreRoomStore

if TYPE_CHECKING:
    from flask import Flask


def _load_credentials(app: Flask) -> tuple[Any, str | None]:
    """Resolve credentials from env JSON, a local file, or application defaults."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = app.config.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
            "firebase_credentials.json",
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    # If both methods fail, fallback to default credentials
    if not cred:
        try:
            cred = credentials.ApplicationDefault()
            project_id = app.config.get("FIREBASE_PROJECT_ID")
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )

    return cred, project_id


def connect_store(app: Flask) -> tuple[FirestoreRoomStore | None, StoreStatus]:
    """Initialize Firebase and build the room store.

    Any failure degrades to a not-ready status carrying the reason, which
    blocks room entry instead of crashing the app.
    """
    cred, project_id = _load_credentials(app)
    if not cred:
        return None, StoreStatus(ready=False, error="Missing Firebase credentials.")

    if not firebase_admin._apps:
        try:
            firebase_options = {}
            if project_id:
                firebase_options["projectId"] = project_id
            firebase_admin.initialize_app(cred, firebase_options)
        except ValueError:
            # This can happen if the app is already initialized, which is fine.
            app.logger.info("Firebase app already initialized.")

    try:
        store = FirestoreRoomStore(max_workers=app.config["STORE_WRITE_WORKERS"])
    except Exception as e:
        app.logger.error(f"Firestore client initialization failed: {e}")
        return None, StoreStatus(ready=False, error=f"Firebase init failed: {e}")

    return store, StoreStatus(ready=True)
