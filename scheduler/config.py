DEFAULT_INTERVAL = 0
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3

MIN_QUALITY = 0
MAX_QUALITY = 5
REMEMBERED_THRESHOLD = 3   # quality below this resets the interval

FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
