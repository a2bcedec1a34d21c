"""dbloader - discover database files across system and user roots."""

__version__ = "0.1.0"
