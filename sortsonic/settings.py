# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH  = 800
WINDOW_HEIGHT = 600
PANEL_HEIGHT  = 100
FPS           = 60

# Bars are drawn in the area below the control panel; its height is the
# largest magnitude a bar can have.
SURFACE_HEIGHT = WINDOW_HEIGHT - PANEL_HEIGHT

MIN_MAGNITUDE = 10
DEFAULT_SIZE  = 50

SPEED_MIN     = 1
SPEED_MAX     = 500
DEFAULT_SPEED = 100

BACKGROUND_COLOR = (238, 238, 238)
BASE_COLOR       = (40,  70, 220)
ACTIVE_COLOR     = (220, 40,  40)
SECONDARY_COLOR  = (40, 180,  70)
BAR_SPACING      = 1

# ============================================================
# ====================== SOUND SETTINGS ======================
# ============================================================
#
# BASE_PITCH / PITCH_RANGE: MIDI note numbers.
#   pitch = BASE_PITCH + magnitude * PITCH_RANGE // surface_height
#   60 is middle C; a range of 36 spans three octaves.
ENABLE_SOUND = True
BASE_PITCH   = 60
PITCH_RANGE  = 36
SAMPLE_RATE  = 44100
CHUNK_SIZE   = 512
#
# SOUND_ATTACK / SOUND_RELEASE: raised-cosine fade in/out, in seconds.
#   The sustain is not a setting: every note lasts one pacing delay.
SOUND_ATTACK  = 0.004
SOUND_RELEASE = 0.020
#
# HARMONIC_BLEND: amount of 2nd harmonic mixed into the sine.
HARMONIC_BLEND = 0.08
#
# MAX_VOICES: oldest voices are faded out once this many are sounding.
MAX_VOICES       = 16
VOICE_STEAL_FADE = 64

# ============================================================
# ========================= UI THEME =========================
# ============================================================

UI_BG         = (24, 24,  34)
UI_PANEL2     = (40, 40,  58)
UI_ACCENT     = (220, 40,  40)
UI_TEXT       = (215, 215, 228)
UI_SUBTEXT    = (140, 140, 165)
UI_HOVER      = (55,  45,  70)
UI_BORDER     = (70,  70,  95)
UI_DISABLED   = (90,  90, 100)
UI_GREEN      = (60, 200, 100)
UI_ERROR      = (255, 90,  90)

# ============================================================
# ========================= LOGGING ==========================
# ============================================================

LOG_LEVEL = "INFO"
LOG_FILE  = None
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%H:%M:%S"
