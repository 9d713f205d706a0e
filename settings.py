"""
settings.py - Game constants for Saber Duel.

All configurable values live here so they're easy to tweak
and easy to reference from any module.

Times are in milliseconds, distances in arena units (pixels),
forces are velocity impulses in units/second.
"""

# ── Screen ────────────────────────────────────────────────
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
FPS = 60
TITLE = "Saber Duel – Force Combat"
BG_COLOR = (26, 26, 46)

# ── Arena bounds (body centres are clamped into this box) ─
ARENA_MIN_X = 20.0
ARENA_MAX_X = SCREEN_WIDTH - 20.0
ARENA_MIN_Y = 20.0
ARENA_MAX_Y = SCREEN_HEIGHT - 20.0

# AI target points stay a little further from the walls
AI_TARGET_MIN_X = 50.0
AI_TARGET_MAX_X = SCREEN_WIDTH - 50.0
AI_TARGET_MIN_Y = 50.0
AI_TARGET_MAX_Y = SCREEN_HEIGHT - 50.0

# ── Delta-time policy ─────────────────────────────────────
MAX_DELTA_MS = 1000.0          # top of the supported range; spikes above are capped

# ── Shared body physics ──────────────────────────────────
BODY_SPEED = 1000.0            # movement acceleration per second
BODY_FRICTION = 0.85           # multiplicative per-tick velocity decay
DAMAGE_COOLDOWN_MS = 100.0     # i-frames after taking damage
DAMAGE_FLASH_MS = 200.0        # cosmetic flash after taking damage
BODY_RADIUS = 30               # render only

# ── Player settings ──────────────────────────────────────
PLAYER_MAX_HEALTH = 200.0
PLAYER_START_X = 100.0
PLAYER_START_Y = 300.0
DIAGONAL_FACTOR = 0.707        # keeps diagonal movement at unit speed

# ── Opponent settings ────────────────────────────────────
OPPONENT_MAX_HEALTH = 100.0
OPPONENT_START_X = 700.0
OPPONENT_START_Y = 300.0
OPPONENT_ARRIVE_RADIUS = 5.0   # stop steering inside this distance

# ── Force abilities ──────────────────────────────────────
FORCE_PUSH_COOLDOWN_MS = 10000.0
FORCE_DASH_COOLDOWN_MS = 8000.0
ABILITY_ACTIVE_MS = 500.0

FORCE_PUSH_IMPULSE = 150.0     # applied every tick while push is active

DASH_IMPULSE = 1200.0          # immediate impulse along the blade angle
DASH_WINDOW_MS = 300.0         # supplemental force window after a dash
DASH_SUSTAIN_FORCE = 400.0     # decays linearly to 0 across the window
DASH_FRICTION = 0.9

# ── Melee (lightsaber) ───────────────────────────────────
SABER_REACH = 80.0
SABER_HIT_RADIUS = 14.0        # tip-to-body distance that counts as a hit
SABER_DAMAGE_MIN = 5.0
SABER_DAMAGE_MAX = 10.0
SABER_KNOCKBACK = 800.0        # only the player's hits knock back

# ── Opponent personality ranges (low, high) ──────────────
PERSONALITY_AGGRESSION_RANGE = (0.6, 0.9)
PERSONALITY_CAUTION_RANGE = (0.3, 0.7)
PERSONALITY_PREDICTION_RANGE = (0.4, 0.8)
PERSONALITY_ADAPTABILITY_RANGE = (0.5, 0.9)

ADAPT_HEALTH_THRESHOLD = 0.30
ADAPT_STEP = 0.10
ADAPT_SUCCESS_STEP = 0.05
ADAPT_SUCCESS_HIGH = 0.70
ADAPT_SUCCESS_LOW = 0.30
ADAPT_AGGRESSION_FLOOR = 0.20
ADAPT_AGGRESSION_CAP = 0.95
ADAPT_CAUTION_FLOOR = 0.10
ADAPT_CAUTION_CAP = 0.90

# ── Opponent combat memory ───────────────────────────────
MEMORY_CAPACITY = 10

# ── Opponent tactical state machine ──────────────────────
PATROL_ENGAGE_DISTANCE = 250.0
PATROL_REPLAN_MS = 3000.0
PATROL_OFFSET_RANGE = (100.0, 300.0)

ENGAGE_DISENGAGE_DISTANCE = 350.0
ENGAGE_RETREAT_HEALTH = 0.30
ENGAGE_SWITCH_CHANCE = 0.02    # per tick → Flank or Counter
ENGAGE_DISTANCE_TOLERANCE = 30.0
STRAFE_DISTANCE_RANGE = (30.0, 50.0)
STRAFE_REVERSE_CHANCE = 0.10

RETREAT_RECOVER_HEALTH = 0.50
RETREAT_GIVE_UP_DISTANCE = 400.0
RETREAT_DISTANCE = 200.0

FLANK_BREAK_DISTANCE = 300.0
FLANK_DURATION_MS = 2000.0
FLANK_DISTANCE = 100.0

COUNTER_BREAK_DISTANCE = 300.0
COUNTER_DURATION_MS = 1500.0
COUNTER_DISTANCE = 70.0
COUNTER_PREDICTION_TICKS = 2.0

# Engage distance bands per stance (low, high)
STANCE_AGGRESSIVE_RANGE = (45.0, 125.0)
STANCE_DEFENSIVE_RANGE = (150.0, 180.0)
STANCE_BALANCED_RANGE = (75.0, 135.0)

STANCE_INTERVAL_MS = 3000.0
STANCE_LOW_HEALTH = 0.40
STANCE_BALANCED_WEIGHT = 0.40
STANCE_AGGRESSIVE_WEIGHT = 0.30  # remainder goes to Defensive

# ── Opponent force-push heuristic ────────────────────────
PUSH_HEAVY_DAMAGE = 25.0
PUSH_DESPERATE_HEALTH = 0.30
PUSH_DESPERATE_DISTANCE = 100.0
PUSH_RAPID_DAMAGE = 15.0
PUSH_RAPID_HEALTH = 0.50

# ── Colors (R, G, B) ─────────────────────────────────────
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
YELLOW = (255, 255, 0)
GOLD = (255, 215, 0)
GREEN = (0, 255, 0)
RED = (255, 0, 0)
GRAY = (68, 68, 68)
PLAYER_BLADE_COLOR = (0, 102, 255)
OPPONENT_BLADE_COLOR = (255, 0, 0)

# Event category → particle colour
EVENT_COLORS = {
    "player_hit": (0, 102, 255),
    "opponent_hit": (255, 0, 102),
    "player_force": (0, 255, 255),
    "opponent_force": (255, 0, 255),
}

# ── Cosmetic particles (renderer only) ───────────────────
DAMAGE_PARTICLE_COUNT = 8
FORCE_PARTICLE_COUNT = 15
PARTICLE_SPEED = 200.0
PARTICLE_DECAY = 0.05

# ── Background stars ──────────────────────────────────────
STAR_COUNT = 50
STAR_TWINKLE_RATE = 0.001      # radians of flicker per ms

# ── Health bar display ────────────────────────────────────
HEALTHBAR_WIDTH = 200
HEALTHBAR_HEIGHT = 18
HEALTHBAR_Y = 20
PLAYER_HB_X = 20
OPPONENT_HB_X = SCREEN_WIDTH - HEALTHBAR_WIDTH - 20

# ── Font ──────────────────────────────────────────────────
FONT_SIZE = 22
SMALL_FONT_SIZE = 18

# ── Headless simulation ──────────────────────────────────
SIM_MAX_SECONDS = 120.0
