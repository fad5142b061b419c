"""Request bodies accepted by the API."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for the single configured account."""

    username: str | None = None
    password: str | None = None


class MarkerRequest(BaseModel):
    """Explicit marker creation or update."""

    model_config = ConfigDict(populate_by_name=True)

    travel_id: str | None = Field(default=None, alias="travelId")
    name: str | None = None
    location: str | None = None
    date: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)

    def coordinates(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude
