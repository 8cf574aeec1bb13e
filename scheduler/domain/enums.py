from enum import IntEnum

class Quality(IntEnum):
    BLACKOUT = 0
    HARD = 1
    DIFFICULT = 2
    GOOD = 3
    RECALLED = 4
    EASY = 5

# Answers offered to the learner; 0 and 4 are only reachable programmatically
ANSWER_LABELS = {
    Quality.HARD: "Hard",
    Quality.DIFFICULT: "Difficult",
    Quality.GOOD: "Good",
    Quality.EASY: "Easy",
}
