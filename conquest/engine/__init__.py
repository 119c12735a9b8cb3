"""
Territory Conquest Rules Engine
Placement phase only: turn order, starting reinforcements, unit placement, phase detection.
"""

from conquest.config import DEFAULT_STARTING_UNITS

STARTING_UNITS = DEFAULT_STARTING_UNITS

# Default dice used when no dice source is injected (API / demo).
DICE_SIDES = 6
