from typing import Any, Dict, Optional
from pydantic import Field, field_validator

from schemas.response import CamelModel


class AcademySettingsUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    whatsapp: Optional[str] = None
    hours: Optional[Dict[str, Any]] = None
    colors: Optional[Dict[str, Any]] = None
    notifications: Optional[Dict[str, Any]] = None
    features: Optional[Dict[str, Any]] = None
    metrics: Optional[Dict[str, Any]] = None
    logo: Optional[str] = None
    about: Optional[str] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    hero_image: Optional[str] = None


class AcademySettingsResponse(CamelModel):
    name: str
    description: str
    phone: str
    email: str
    address: str
    whatsapp: str
    hours: Dict[str, Any]
    colors: Dict[str, Any]
    notifications: Dict[str, Any]
    features: Dict[str, Any]
    metrics: Dict[str, Any]
    logo: Optional[str] = "/placeholder-logo.png"
    about: Optional[str] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    hero_image: Optional[str] = None

    @field_validator("logo")
    @classmethod
    def default_logo(cls, value: Optional[str]) -> str:
        return value or "/placeholder-logo.png"
