"""Form schemas for the four directory entities.

Each form validates what the admin submits and turns it into the row that
is inserted into the matching Supabase table via ``to_record()``.
"""

from datetime import date, time
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, StringConstraints, field_validator, model_validator

from slp_admin.config import (
    BRAND_CATEGORIES,
    EVENT_CATEGORIES,
    PLACE_CATEGORIES,
    SERVICE_CATEGORIES,
)

Required = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Text = Annotated[str, StringConstraints(strip_whitespace=True)]


class EntityForm(BaseModel):
    """Fields shared by every directory entry."""

    categories: ClassVar[list[str]] = []

    category: Required
    description: Text = ""
    image_url: str | None = None
    featured: bool = False

    @field_validator("category")
    @classmethod
    def known_category(cls, value: str) -> str:
        if value not in cls.categories:
            raise ValueError(f"Unknown category '{value}'")
        return value

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class PlaceForm(EntityForm):
    """Body schema for POST /admin/places."""

    categories: ClassVar[list[str]] = PLACE_CATEGORIES

    name: Required
    address: Required
    city: Text = ""
    phone: Text = ""
    website: Text = ""
    instagram: Text = ""
    hours: Text = ""

    # tag helpers shown as checkboxes + free text in the admin form
    potosino_brand: bool = False
    local_brand: bool = False
    breakfast_place: bool = False
    other_tags: str = ""

    def tags(self) -> list[str]:
        tags = []
        if self.potosino_brand:
            tags.append("potosino")
        if self.local_brand:
            tags.append("local")
        if self.breakfast_place:
            tags.append("breakfast")
        tags.extend(t.strip().lower() for t in self.other_tags.split(",") if t.strip())
        return tags

    def to_record(self) -> dict[str, Any]:
        record = self.model_dump(
            mode="json",
            exclude={"potosino_brand", "local_brand", "breakfast_place", "other_tags"},
        )
        record["tags"] = self.tags()
        return record


class EventForm(EntityForm):
    """Body schema for POST /admin/events."""

    categories: ClassVar[list[str]] = EVENT_CATEGORIES

    title: Required
    start_date: date
    end_date: date
    start_time: time | None = None
    location: Required

    @model_validator(mode="after")
    def check_dates(self) -> "EventForm":
        if self.start_date > self.end_date:
            raise ValueError("End date must be after start date")
        return self


class ServiceForm(EntityForm):
    """Body schema for POST /admin/services."""

    categories: ClassVar[list[str]] = SERVICE_CATEGORIES

    name: Required
    contact_name: Required
    phone: Required
    email: Text = ""
    website: Text = ""
    address: Text = ""
    service_area: Text = ""
    hours: Text = ""
    document_url: str | None = None


class BrandForm(EntityForm):
    """Body schema for POST /admin/brands."""

    categories: ClassVar[list[str]] = BRAND_CATEGORIES

    name: Required
    city: Required
    year_founded: Text = ""
    address: Text = ""
    phone: Text = ""
    website: Text = ""
    instagram: Text = ""
    notable_products: Text = ""
    where_to_buy: Text = ""


ENTITY_FORMS: dict[str, type[EntityForm]] = {
    "places": PlaceForm,
    "events": EventForm,
    "services": ServiceForm,
    "brands": BrandForm,
}
