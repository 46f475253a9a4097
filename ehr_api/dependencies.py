from typing import Annotated
from fastapi import Depends, Request

from ehr_api.config import Settings
from ehr_api.store import EHRStore


def get_store(request: Request) -> EHRStore:
    """Return the store owned by the running application."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


StoreDep = Annotated[EHRStore, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
