from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = True
    cors_origins: list[str] = ["*"]

    ENVIRONMENT: str = "Production"

    # Database backing the tabular stores
    database_url: str = "sqlite:///./bubble_rsvp.db"
    log_db: bool = False

    # Sheet names and captions
    rsvp_sheet_name: str = "RSVPs"
    guest_list_sheet_name: str = "Guest List"
    dietary_sheet_name: str = "Dietary Information"
    rsvp_title_text: str = "RSVP Submissions - Newest First"
    guest_list_title_text: str = "Guest List - Confirmed & Pending RSVPs"
    dietary_title_text: str = "Dietary Restrictions and Special Requests"

    # Max seconds a write waits for another write to finish
    write_lock_timeout_seconds: float = 10.0

    # Event details served to the invitation page
    app_name: str = "Bubble RSVP Evite"
    event_title: str = "Callie's Birthday Celebration"
    event_date: str = "Saturday, April 28, 2025"
    event_time: str = "12:00 PM - 2:00 PM"
    event_location: str = "Kenwood Baptist Church - Pavillion"
    event_location_link: str = ""
    event_description: str = ""
    event_gift_info: str = ""
    event_dress_code: str = "Casual outdoor attire"
    event_additional_info: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    RUN_MIGRATIONS_ON_STARTUP: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
