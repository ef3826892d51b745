from __future__ import annotations

# Situational thresholds
THIRD_AND_LONG_YTG = 7
FIRST_AND_TEN_YTG = 10
SHORT_YTG = 2
FG_RANGE_YARDS = 35
CHIP_SHOT_YARDS = 30
DESPERATION_RANGE_YARDS = 45
DESPERATION_SECONDS = 120
FG_SNAP_YARDS = 17  # end-zone depth + hold

# Field context
MAX_YARDLINE = 100
TOUCHBACK_YARD = 20
SAFETY_KICK_YARD = 20
MAX_DOWN = 4

# Clock
QUARTER_SECONDS = 900
LAST_REGULATION_QUARTER = 4
OVERTIME_QUARTER = 5

# Deficits where the chart says go for two
TWO_POINT_CHART = frozenset({2, 5, 9, 10, 13})

TEAMS = (
    "Bulldogs", "Tigers", "Maroons", "Cardinals", "Bears",
    "Packers", "Giants", "Eagles", "Steelers", "Rams",
    "Browns", "49ers", "Colts", "Cowboys", "Vikings",
    "Dolphins", "Raiders", "Patriots", "Seahawks", "Ravens",
)
