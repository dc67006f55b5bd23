"""Settings read, export and import endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from taskwise.api.deps import get_workspace
from taskwise.api.schemas.preferences import UserPreferences
from taskwise.services.workspace import Workspace

router = APIRouter(prefix="/settings", tags=["settings"])


class SettingsDocument(BaseModel):
    data: str


class ImportResult(BaseModel):
    imported: bool


@router.get("/preferences", response_model=UserPreferences)
def get_preferences(workspace: Workspace = Depends(get_workspace)) -> UserPreferences:
    return workspace.settings.preferences()


@router.get("/export", response_model=SettingsDocument)
def export_settings(workspace: Workspace = Depends(get_workspace)) -> SettingsDocument:
    return SettingsDocument(data=workspace.settings.export_data())


@router.put("/import", response_model=ImportResult)
def import_settings(payload: SettingsDocument, workspace: Workspace = Depends(get_workspace)) -> ImportResult:
    return ImportResult(imported=workspace.settings.import_data(payload.data))
