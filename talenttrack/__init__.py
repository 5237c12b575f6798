"""TalentTrack motion engine: pose landmarks in, exercise events and summaries out."""

__version__ = "1.0.0"
