SUBMIT_RSVP_URL = "/rsvps"
RSVP_LIST_URL = "/rsvps"
RSVP_STATS_URL = "/rsvps/stats"
EXISTING_RSVPS_URL = "/rsvps/existing"
CONFIRMED_RSVPS_URL = "/rsvps/confirmed"
CONFIRM_ROW_URL = "/rsvps/rows/{row}/confirm"
EVENT_DETAILS_URL = "/event"

REGENERATE_SHEET_URL = "/sheets/{target}/regenerate"
REGENERATE_ALL_URL = "/sheets/regenerate"
CONFIRM_SELECTION_URL = "/sheets/{store}/confirm"
ENSURE_SHEETS_URL = "/sheets/ensure"
