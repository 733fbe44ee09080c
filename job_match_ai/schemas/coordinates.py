"""Geographic coordinates in signed decimal degrees."""

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Latitude/longitude pair as returned by the geocoder or stored on a record."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
