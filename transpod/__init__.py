"""Edge contours, distance transforms, dataset layout, detection qualities and placement planning."""

__version__ = "0.1.0"
__all__ = [
    "contours",
    "dataset",
    "distance",
    "manipulation",
    "qualities",
]