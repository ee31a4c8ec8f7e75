"""Core engine: configuration, hook registration, themes, playback and upgrades."""
