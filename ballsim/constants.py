#!/usr/bin/env python3
"""
Shared constants for the ball gravity simulator.

Keeping the tunables in one place keeps the simulation clock, the renderer and
the control panel consistent.
"""

# Simulation clock
STEPS_PER_SECOND = 100  # integration steps per simulated second; also the clock tick rate
SPEED = 10  # integration steps per clock tick; net simulated-time multiplier

# Rendering (viewport)
FPS = 60  # redraws per second, independent of the simulation rate
BALL_RADIUS = 5  # pixels
VIEW_WIDTH = 800
VIEW_HEIGHT = 600
BACKGROUND_COLOR = (255, 255, 255)
BALL_COLOR = (0, 0, 0)

# Scenarios
DEFAULT_SCENARIO = "dancing balls"

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
