"""Application constants."""

# Sessions
SESSION_NAME_MAX_LENGTH = 100
EXERCISE_NAME_MAX_LENGTH = 255

# Muscle groups offered by the session form (stored as free text)
MUSCLE_GROUPS = (
    "Chest",
    "Back",
    "Shoulders",
    "Biceps",
    "Triceps",
    "Legs",
    "Abs",
    "Glutes",
    "Cardio",
)

# Next-weight suggestion
SUGGESTION_LOOKBACK_SESSIONS = 5
SUGGESTION_INCREMENT_KG = 2.5
SUGGESTION_MIN_NAME_LENGTH = 3

# Summary placeholder when no muscle group was recorded
NO_MUSCLE_GROUP = "-"

# Display format for dates in search and CSV export
DISPLAY_DATE_FORMAT = "%d/%m/%Y"

CSV_HEADERS = ("Date", "Session Name", "Muscle Group", "Exercise", "Set", "Reps", "Weight (kg)")
