"""
Game constants for termsnake.

Coordinates are (row, column), 1-indexed, matching terminal cursor addressing.
"""

# Movement directions as (row delta, column delta).
# Horizontal moves step two columns, vertical moves one row.
UP = (-1, 0)
DOWN = (1, 0)
RIGHT = (0, 2)
LEFT = (0, -2)
STILL = (0, 0)
VALID_MOVES = {UP, DOWN, LEFT, RIGHT, STILL}

KEY_DIRECTIONS = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}

# Initial snake
INITIAL_BODY = [(2, 6), (2, 4), (2, 2)]
INITIAL_DIRECTION = RIGHT
INITIAL_LENGTH = len(INITIAL_BODY)

# Game settings
TICK_TIMEOUT_MS = 150

SNAKE_CHARACTER = "*"
FOOD_CHARACTER = "$"
BLANK_CHARACTER = " "

BOX = {
    "top_left": "┌",
    "top_right": "┐",
    "bottom_left": "└",
    "bottom_right": "┘",
    "horizontal": "─",
    "vertical": "│",
}

# Smallest terminal that fits the initial snake and one food cell
MIN_ROWS = 4
MIN_COLUMNS = 8

# Exit messages
GAME_OVER_MESSAGE = "You loose! Your score is: "
FAREWELL_MESSAGE = "See you soon again :)"
