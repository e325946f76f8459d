"""Constants for the weather relay provider."""

WEATHER_ENDPOINT = "/api/weather"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pyparkingavailability-weather",
}
