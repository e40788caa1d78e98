"""Weather Worldwide: place search, normalized forecasts and saved places."""

__version__ = "1.0.0"
