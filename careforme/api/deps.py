"""Per-application collaborators shared by the route blueprints."""
from typing import Optional

from flask import current_app, request

from careforme.core.config import Config
from careforme.core.exceptions import ValidationError
from careforme.repositories.doctor_repository import DoctorRepository
from careforme.repositories.settings_repository import SettingsRepository
from careforme.services.auth_service import AuthService
from careforme.services.directory_view import DoctorDirectoryView
from careforme.services.doctor_service import DoctorService
from careforme.services.report_service import ReportService
from careforme.utils.firebase import get_firestore_client, initialize_firebase

EXTENSION_KEY = "careforme"


class AppServices:
    """Holds the store, settings and auth collaborators of one app.

    Anything not injected is built on first use from the Firebase-backed
    defaults, so tests and scripts never touch Firebase unless they ask to.
    """

    def __init__(self, config: Config, doctor_store=None, settings_store=None,
                 auth_service: Optional[AuthService] = None):
        self.config = config
        self._doctor_store = doctor_store
        self._settings_store = settings_store
        self._auth_service = auth_service
        self.rate_limiter = None

    @property
    def doctor_store(self):
        if self._doctor_store is None:
            self._doctor_store = DoctorRepository(
                db=get_firestore_client(self.config),
                collection_name=self.config.doctors_collection
            )
        return self._doctor_store

    @property
    def settings_store(self):
        if self._settings_store is None:
            self._settings_store = SettingsRepository(
                db=get_firestore_client(self.config),
                collection_name=self.config.settings_collection
            )
        return self._settings_store

    @property
    def auth_service(self) -> AuthService:
        if self._auth_service is None:
            initialize_firebase(self.config)
            self._auth_service = AuthService(min_password_length=self.config.min_password_length)
        return self._auth_service


def get_services() -> AppServices:
    return current_app.extensions[EXTENSION_KEY]


def doctor_service() -> DoctorService:
    return DoctorService(get_services().doctor_store)


def directory_view(refresh: bool = False) -> DoctorDirectoryView:
    """A view over the doctor store for the current request."""
    view = DoctorDirectoryView(get_services().doctor_store)
    if refresh:
        view.refresh()
    return view


def report_service() -> ReportService:
    services = get_services()
    return ReportService(directory_view(refresh=True), services.config)


def json_body() -> dict:
    """The request's JSON object body."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
