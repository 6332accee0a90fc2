import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-dev-key-change-in-production")

DEBUG = os.environ.get("DEBUG", "True") == "True"

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "corsheaders",
    "planner",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"
ASGI_APPLICATION = "config.asgi.application"

# No models are used; provide a minimal SQLite DB so Django's test runner
# and pytest-django can set up / tear down without errors.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# CORS — allow all origins in dev; restrict in prod via env
CORS_ALLOW_ALL_ORIGINS = DEBUG
CORS_ALLOWED_ORIGINS = [
    o for o in os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",") if o
]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "planner": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": True},
    },
}

# openrouteservice — geocoding and distance/duration matrix
ORS_API_KEY = os.environ.get("ORS_API_KEY", "")
ORS_BASE_URL = os.environ.get("ORS_BASE_URL", "https://api.openrouteservice.org")
ORS_PROFILE = os.environ.get("ORS_PROFILE", "driving-car")
GEOCODE_BOUNDARY_COUNTRY = os.environ.get("GEOCODE_BOUNDARY_COUNTRY", "GB")
ROUTING_HTTP_TIMEOUT = float(os.environ.get("ROUTING_HTTP_TIMEOUT", "30"))

# Above this many stops the optimiser switches from exhaustive search to
# nearest-neighbour. 9 stops = 362,880 permutations.
EXACT_SEARCH_MAX_STOPS = int(os.environ.get("EXACT_SEARCH_MAX_STOPS", "9"))

MAPS_DIRECTIONS_URL = os.environ.get(
    "MAPS_DIRECTIONS_URL", "https://www.google.com/maps/dir/"
)
