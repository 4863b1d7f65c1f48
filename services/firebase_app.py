# services/firebase_app.py
"""
Lazy Firebase Admin initialisation.

Nothing touches Firebase at import time; the first caller that needs
Auth, Firestore or Storage triggers `init_firebase()`.
"""

import base64
import json
import logging

import firebase_admin
from firebase_admin import credentials

from config import Settings

logger = logging.getLogger(__name__)


def init_firebase(settings: Settings) -> firebase_admin.App:
    """Initialise the default Firebase app once and return it."""
    if firebase_admin._apps:
        return firebase_admin.get_app()

    if settings.firebase_service_account_b64:
        service_account_json = base64.b64decode(settings.firebase_service_account_b64).decode()
        cred = credentials.Certificate(json.loads(service_account_json))
    else:
        cred = credentials.Certificate(settings.firebase_service_account_path)

    options = {}
    if settings.firebase_storage_bucket:
        options["storageBucket"] = settings.firebase_storage_bucket

    app = firebase_admin.initialize_app(cred, options or None)
    logger.info("Firebase app initialised (bucket=%s)", settings.firebase_storage_bucket or "-")
    return app
