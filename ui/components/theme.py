"""
Design tokens shared by the dashboard components and figures.
"""

SURFACE = "#0c1322"
BORDER = "#1c2535"
BORDER2 = "#243045"
GOLD = "#c9a842"
BLUE = "#4a9eff"
GREEN = "#22c55e"
RED = "#ef4444"
AMBER = "#f59e0b"
VIOLET = "#a78bfa"
ORANGE = "#cc6600"
SKY = "#60a5fa"
MINT = "#4ade80"
TEXT = "#dde2ed"
TEXT2 = "#8e9ab5"
TEXT3 = "#4a5570"

PIE_COLORS = [RED, BLUE, GOLD, GREEN, VIOLET, AMBER]

TONE_COLORS = {
    "good": MINT,
    "warning": AMBER,
    "bad": RED,
}
