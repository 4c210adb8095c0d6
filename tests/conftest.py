"""Shared fixtures: in-memory stores, a fake sign-in client and the app."""
import copy
from unittest.mock import MagicMock

import pytest

from careforme.core.config import Config
from careforme.core.exceptions import AuthenticationError, ResourceNotFoundError
from careforme.main import create_app
from careforme.services.auth_service import AuthService

ADMIN_UID = "admin-uid"
ADMIN_EMAIL = "admin@careforme.com"
ADMIN_PASSWORD = "admin123"
VALID_TOKEN = "valid-token"


class FakeDoctorStore:
    """Dictionary-backed stand-in for DoctorRepository."""

    def __init__(self, documents=None):
        self.documents = {}
        self.calls = []
        self.failures = {}
        self._next_id = 1
        for doc in documents or []:
            data = dict(doc)
            self.documents[data.pop("id")] = data

    def fail(self, method, error=None):
        self.failures[method] = error or RuntimeError(f"{method} failed")

    def _check(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.failures:
            raise self.failures[method]

    def list(self):
        self._check("list")
        return [dict(copy.deepcopy(data), id=doc_id) for doc_id, data in self.documents.items()]

    def get(self, doctor_id):
        self._check("get", doctor_id)
        if doctor_id not in self.documents:
            return None
        return dict(copy.deepcopy(self.documents[doctor_id]), id=doctor_id)

    def add(self, data):
        self._check("add", data)
        doctor_id = f"doc-{self._next_id}"
        self._next_id += 1
        self.documents[doctor_id] = {k: v for k, v in data.items() if k != "id"}
        return doctor_id

    def put(self, doctor_id, data):
        self._check("put", doctor_id, data)
        self.documents[doctor_id] = {k: v for k, v in data.items() if k != "id"}

    def update(self, doctor_id, patch):
        self._check("update", doctor_id, patch)
        if doctor_id not in self.documents:
            raise ResourceNotFoundError("Doctor", doctor_id)
        self.documents[doctor_id].update(patch)

    def delete(self, doctor_id):
        self._check("delete", doctor_id)
        self.documents.pop(doctor_id, None)


class FakeSettingsStore:
    """Dictionary-backed stand-in for SettingsRepository."""

    def __init__(self):
        self.settings = {}

    def get(self, uid, email=""):
        data = {"notificationEmail": email, "notifyOnNewDoctors": True}
        data.update(self.settings.get(uid, {}))
        return data

    def save(self, uid, data):
        self.settings.setdefault(uid, {}).update(data)
        return dict(data)


class FakeAuthClient:
    """Accepts exactly one email/password pair."""

    def sign_in_with_password(self, email, password):
        if email != ADMIN_EMAIL or password != ADMIN_PASSWORD:
            raise AuthenticationError("Invalid email or password")
        return {
            "localId": ADMIN_UID,
            "email": email,
            "idToken": VALID_TOKEN,
            "refreshToken": "refresh-token",
            "expiresIn": "3600",
        }


def make_admin_auth():
    """Mock of ``firebase_admin.auth`` accepting VALID_TOKEN only."""
    admin_auth = MagicMock()

    def verify_id_token(token, check_revoked=False):
        if token != VALID_TOKEN:
            raise ValueError("Token is invalid")
        return {"uid": ADMIN_UID, "email": ADMIN_EMAIL}

    admin_auth.verify_id_token.side_effect = verify_id_token
    return admin_auth


def sample_doctors():
    return [
        {
            "id": "doc1",
            "name": "Dr. Sarah Johnson",
            "specialty": "Cardiology",
            "city": "New York",
            "address": "123 Medical Ave, New York, NY 10001",
            "email": "sarah.johnson@careforme.com",
            "phone": "+1 (212) 555-1234",
            "rating": 4.8,
            "reviewCount": 156,
            "availableDays": ["Monday", "Tuesday"],
            "isAvailable": True,
            "suspended": False,
            "createdAt": "2024-03-05T10:00:00+00:00",
        },
        {
            "id": "doc2",
            "name": "Dr. Michael Chen",
            "specialty": "Dermatology",
            "city": "San Francisco",
            "address": "456 Health St, San Francisco, CA 94105",
            "email": "michael.chen@careforme.com",
            "phone": "+1 (415) 555-5678",
            "rating": 4.9,
            "reviewCount": 203,
            "isAvailable": False,
            "suspended": False,
            "createdAt": "2024-03-20T10:00:00+00:00",
        },
        {
            "id": "doc3",
            "name": "Dr. Emily Rodriguez",
            "specialty": "Cardiology",
            "city": "Chicago",
            "address": "789 Child Care Blvd, Chicago, IL 60601",
            "email": "emily.rodriguez@careforme.com",
            "phone": "+1 (312) 555-9012",
            "rating": 4.7,
            "reviewCount": 178,
            "isAvailable": True,
            "suspended": True,
            "createdAt": "2024-07-01T10:00:00+00:00",
        },
    ]


@pytest.fixture
def config():
    return Config(testing=True, enable_rate_limiting=False, firebase_web_api_key="test-key")


@pytest.fixture
def doctor_store():
    return FakeDoctorStore(sample_doctors())


@pytest.fixture
def settings_store():
    return FakeSettingsStore()


@pytest.fixture
def admin_auth():
    return make_admin_auth()


@pytest.fixture
def auth_service(admin_auth):
    return AuthService(
        auth_client=FakeAuthClient(),
        admin_auth=admin_auth,
        min_password_length=6
    )


@pytest.fixture
def app(config, doctor_store, settings_store, auth_service):
    return create_app(
        config=config,
        doctor_store=doctor_store,
        settings_store=settings_store,
        auth_service=auth_service
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
