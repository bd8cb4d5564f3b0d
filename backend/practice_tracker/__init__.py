"""Practice tracker API: daily practice actions, once-per-day completions, per-action stats."""

__version__ = "0.1.0"
