# tripdesk/core/constants.py
"""
Core application constants.

Pagination defaults live in Settings; these are the literals shared by the
HTTP layer and the services.
"""

DEFAULT_PAGE: int = 1

# Common HTTP header names
HEADER_REQUEST_ID: str = "X-Request-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"

# Resource reference fields carried in inquiry preferences, mapped to the
# legacy inline snapshot key each one replaces.
REFERENCE_FIELDS = {
    "selectedVehicle": "vehicle",
    "selectedTourGuide": "tourGuide",
    "selectedDriver": "driver",
}
