"""
Scoring constants for the match engine.

Each sub-score is capped at its band maximum, so the three bands
together can never exceed 100.
"""

SKILLS_MAX = 50
EXPERIENCE_MAX = 30
LOCATION_MAX = 20

# Neutral credit when a criterion does not apply
SKILLS_NEUTRAL = 25
LOCATION_NEUTRAL = 10

# Experience bands
EXPERIENCE_ABOVE_RANGE = 20
EXPERIENCE_CLOSE = 15
CLOSE_DEFICIT_YEARS = 2

# Location bands
LOCATION_REMOTE = 15
REMOTE_KEYWORD = "remote"

MIN_SCORE = 0
MAX_SCORE = 100
