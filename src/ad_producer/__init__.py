"""Ad Producer - automated video-ad production pipeline."""

__version__ = "0.1.0"
