"""NowYouFoundChill - music, image and video content pipeline."""

__version__ = "0.1.0"
