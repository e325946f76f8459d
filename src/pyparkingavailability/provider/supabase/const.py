"""Constants for the Supabase provider."""

DEFAULT_API_URI = "/rest/v1"

PARKING_VIEW_ENDPOINT = "/parking_app_view"

PARKING_VIEW_COLUMNS = (
    "map_id",
    "ottawa_lot_id",
    "map_name",
    "map_data_mode",
    "map_capacity",
    "map_available",
    "map_status",
    "map_lat",
    "map_lng",
    "map_updated_at",
)

PARKING_VIEW_ORDER = "map_name.asc"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pyparkingavailability-supabase",
}
