from functools import lru_cache

from bubble_rsvp.config.settings import get_settings
from bubble_rsvp.rsvps.layout import RsvpConfig
from bubble_rsvp.rsvps.repository.workbook import SqlWorkbook, Workbook


@lru_cache
def get_rsvp_config() -> RsvpConfig:
    return RsvpConfig.from_settings(get_settings())


def get_workbook() -> Workbook:
    """Dependency to get the SQL backed workbook."""
    return SqlWorkbook(get_rsvp_config())
