"""Robot control utilities: filters, trajectories, LQR, heat and power limits, and video-link decoding."""

__version__ = "0.1.0"