"""Constants for the Nominatim provider."""

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"

SEARCH_ENDPOINT = "/search"

DEFAULT_CITY_CONTEXT = "Ottawa, Ontario, Canada"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pyparkingavailability-nominatim",
}
