"""
cell_evo module: render/colors.py

Central color palette.
"""

BG = (14, 14, 18)
DIR = (230, 230, 230)
TEXT = (235, 235, 235)

CELL = (80, 210, 140)
CELL_FOCUSED = (250, 210, 80)
BULLET = (220, 90, 90)

PANEL_BG = (28, 28, 36)
ACT_POS = (90, 170, 230)
ACT_NEG = (220, 90, 90)
FITNESS_LINE = (120, 220, 150)
