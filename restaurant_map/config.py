# restaurant_map/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# Credentials, resolved against the working directory like the data files
API_ENV_FILE = os.getenv("API_ENV_FILE", "api.env")
API_KEY_VAR = "GOOGLE_PLACES_API_KEY"

# Google Places API (New) - Text Search
PLACES_TEXT_SEARCH_URL = "https://places.googleapis.com/v1/places:searchText"
PLACES_FIELD_MASK = "places.displayName,places.formattedAddress,places.id,places.types"
LA_CENTER_LATITUDE = 34.0522
LA_CENTER_LONGITUDE = -118.2437
LOCATION_BIAS_RADIUS_METERS = 50000.0  # ~31 miles, covers Greater LA
QUERY_SUFFIX = "Los Angeles, CA"

# Runtime parameters
MAX_DISPLAY_RESULTS = 5
COST_PER_REQUEST = 0.032  # Text Search Pro SKU, USD
PLACES_MAX_RATE = 10  # requests per second
SAMPLE_SIZE = 10
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# File names
DEFAULT_TEXT_INPUT = "data/restaurants.txt"
DEFAULT_CSV_INPUT = "data/la-times-101-best-2025.csv"
