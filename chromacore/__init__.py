"""Stream processors for chroma-based audio fingerprinting: downmixing, resampling, chroma extraction, filtering and averaging."""

__version__ = "1.6.0"