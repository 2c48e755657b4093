"""FastAPI weather service.

This package serves current weather conditions for a coordinate, relayed
from OpenWeather and classified as Hot, Cold or Moderate.
"""

__version__ = "1.0.0"
