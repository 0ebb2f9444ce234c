from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional
from pathlib import Path

from parkit.core.constants import ParkingType

class Settings(BaseSettings):
    app_name: str = Field(default="ParkIt API", alias="APP_NAME")
    env: str = Field(default="dev", alias="ENV")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_origins_raw: Optional[str] = Field(default=None, alias="CORS_ORIGINS", description="Comma or space separated list of allowed CORS origins")
    # Fare table
    car_rate_per_hour: float = Field(default=1.5, alias="CAR_RATE_PER_HOUR")
    bike_rate_per_hour: float = Field(default=1.0, alias="BIKE_RATE_PER_HOUR")
    free_minutes: int = Field(default=30, ge=0, alias="FREE_MINUTES")
    returning_user_discount: float = Field(default=0.05, ge=0, lt=1, alias="RETURNING_USER_DISCOUNT")
    # Spot inventory seeded in dev (spots 1..N are cars, the rest bikes)
    seed_car_spots: int = Field(default=3, ge=0, alias="SEED_CAR_SPOTS")
    seed_bike_spots: int = Field(default=2, ge=0, alias="SEED_BIKE_SPOTS")

    class Config:
        env_file = str(Path(__file__).resolve().parents[2] / ".env")
        case_sensitive = False

    @property
    def cors_origins(self) -> List[str]:
        raw = (self.cors_origins_raw or "").replace(" ", ",")
        origins = [o for o in raw.split(",") if o]
        return origins or ["http://localhost:5173", "http://127.0.0.1:5173"]

    @property
    def hourly_rates(self) -> dict[ParkingType, float]:
        return {ParkingType.CAR: self.car_rate_per_hour, ParkingType.BIKE: self.bike_rate_per_hour}

settings = Settings()  # type: ignore
