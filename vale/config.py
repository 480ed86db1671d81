"""
Game configuration.

Every setting can be overridden from the environment; command line
options take precedence over these values.
"""

import os

# Content directory (None = the world_data bundled with the package)
WORLD_DATA_DIR = os.getenv("VALE_WORLD_DATA") or None

# Logging goes to stderr so it never mixes with narration
LOG_LEVEL = os.getenv("VALE_LOG_LEVEL", "WARNING")

# Seed for the atmosphere RNG (None = seeded from system entropy)
_seed = os.getenv("VALE_SEED")
SEED = int(_seed) if _seed else None

# Presentation settings
CLEAR_SCREEN = os.getenv("VALE_CLEAR_SCREEN", "0").lower() in ("1", "true", "yes")
ATMOSPHERE_ENABLED = os.getenv("VALE_ATMOSPHERE", "1").lower() in ("1", "true", "yes")

PROMPT = "> "
