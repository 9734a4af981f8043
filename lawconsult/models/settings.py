"""
Back-office settings, stored as the single document ``settings/config``
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ConfigDict

SETTINGS_PATH = "settings/config"


def utc_now():
    return datetime.now(timezone.utc)


class SystemSettings(BaseModel):
    site_name: str = Field(default="LawConsult", alias="siteName")
    maintenance_mode: bool = Field(default=False, alias="maintenanceMode")
    allow_registration: bool = Field(default=True, alias="allowRegistration")
    # share of each paid consultation kept by the platform
    commission_rate: float = Field(default=0.1, ge=0, le=1, alias="commissionRate")
    support_email: str = Field(default="support@lawconsult.example", alias="supportEmail")
    support_phone: str = Field(default="400-000-0000", alias="supportPhone")
    extra_config: Dict[str, Any] = Field(default_factory=dict, alias="extraConfig")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    def with_changes(self, changes: Dict[str, Any]) -> "SystemSettings":
        """Validated copy with ``changes`` (field names) applied and a fresh timestamp."""
        data = self.model_dump()
        data.update(changes)
        data["updated_at"] = utc_now()
        return SystemSettings.model_validate(data)


def firestore_settings_to_model(doc: Optional[dict]) -> SystemSettings:
    """Stored settings, or the defaults when nothing is stored yet."""
    return SystemSettings.model_validate(doc or {})


def settings_model_to_firestore(system_settings: SystemSettings) -> dict:
    return system_settings.model_dump(by_alias=True)
