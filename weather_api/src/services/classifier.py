"""Temperature classification and unit conversion."""

from weather_api.src.models.weather import ClassificationResult, TemperatureLabel

HOT_ABOVE_CELSIUS = 24.0
COLD_BELOW_CELSIUS = 10.0


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9.0 / 5.0 + 32.0


def classify(celsius: float) -> ClassificationResult:
    """
    Bucket a temperature into Hot, Cold or Moderate.

    Hot is strictly above 24C and Cold strictly below 10C; both bounds
    themselves are Moderate.
    """
    if celsius > HOT_ABOVE_CELSIUS:
        label = TemperatureLabel.HOT
    elif celsius < COLD_BELOW_CELSIUS:
        label = TemperatureLabel.COLD
    else:
        label = TemperatureLabel.MODERATE

    return ClassificationResult(
        label=label,
        celsius=celsius,
        fahrenheit=celsius_to_fahrenheit(celsius),
    )
