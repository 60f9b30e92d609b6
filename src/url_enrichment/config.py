import os
from dotenv import load_dotenv

load_dotenv()

# Structured content extraction (Tabstack)
TABSTACK_API_KEY = os.getenv("TABSTACK_API_KEY", "")
TABSTACK_API_URL = os.getenv("TABSTACK_API_URL", "https://api.tabstack.ai/v1/extract/json")

# Logo / brand data
# Brandfetch answers some lookups anonymously; a key raises the rate limit
BRANDFETCH_API_KEY = os.getenv("BRANDFETCH_API_KEY", "")
CLEARBIT_LOGO_URL = "https://logo.clearbit.com/{domain}"
BRANDFETCH_API_URL = "https://api.brandfetch.io/v2/brands/{domain}"
GOOGLE_FAVICON_URL = "https://www.google.com/s2/favicons?domain={domain}&sz=256"

# Audio providers
# Narration priority: ElevenLabs > MiniMax > Edge-TTS (opt-in, needs no key)
# Music priority: MiniMax > ElevenLabs
ELEVENLABS_API_KEY = os.getenv("ELEVENLABS_API_KEY", "")
ELEVENLABS_VOICE_ID = os.getenv("ELEVENLABS_VOICE_ID", "21m00Tcm4TlvDq8ikWAM")  # Rachel - professional, clear
ELEVENLABS_MODEL_ID = os.getenv("ELEVENLABS_MODEL_ID", "eleven_turbo_v2_5")
ELEVENLABS_MUSIC_URL = os.getenv("ELEVENLABS_MUSIC_URL", "https://api.elevenlabs.io/v1/music")

MINIMAX_API_KEY = os.getenv("MINIMAX_API_KEY", "")
MINIMAX_GROUP_ID = os.getenv("MINIMAX_GROUP_ID", "")  # Optional
MINIMAX_BASE_URL = os.getenv("MINIMAX_BASE_URL", "https://api.minimax.io")
MINIMAX_TTS_MODEL = os.getenv("MINIMAX_TTS_MODEL", "speech-2.5-hd-preview")
MINIMAX_VOICE_ID = os.getenv("MINIMAX_VOICE_ID", "English_expressive_narrator")
MINIMAX_MUSIC_MODEL = os.getenv("MINIMAX_MUSIC_MODEL", "music-2.0")

TTS_USE_EDGE_TTS = os.getenv("TTS_USE_EDGE_TTS", "false").lower() == "true"
TTS_EDGE_VOICE = os.getenv("TTS_EDGE_VOICE", "en-US-AriaNeural")
# Other Edge-TTS narrator voices:
# - "en-US-GuyNeural" (US English, Male)
# - "en-GB-SoniaNeural" (UK English, Female)

# Output directories (served as static files by the renderer)
PUBLIC_DIR = os.getenv("PUBLIC_DIR", "public")
IMAGES_SUBDIR = "images"
AUDIO_SUBDIR = "audio"

# Timeouts (seconds)
CDN_TIMEOUT = 5
PATH_PROBE_TIMEOUT = 3
STRUCTURED_API_TIMEOUT = 30
LOGO_DOWNLOAD_TIMEOUT = 10
AUDIO_DOWNLOAD_TIMEOUT = 30
PAGE_NAVIGATION_TIMEOUT = 15
PAGE_SETTLE_DELAY = 2
TTS_TIMEOUT = 60
MUSIC_TIMEOUT = 120
BEAT_TOOL_TIMEOUT = 60

# Browser
VIEWPORT_WIDTH = 1920
VIEWPORT_HEIGHT = 1080
DEVICE_SCALE_FACTOR = 2  # high-DPI screenshots
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

# Audio heuristics
MIN_AUDIO_BYTES = 1024  # anything smaller is an error body, not audio
WORDS_PER_SECOND = 2.5  # ~150 wpm narration pace
SEGMENT_PAUSE = 0.5
DEFAULT_BPM = 120
DEFAULT_MUSIC_DURATION = 60
PLACEHOLDER_BEAT_START = 1.0
PLACEHOLDER_BEAT_SPACING = 1.2

# Branding defaults
DEFAULT_FONT = "system-ui, -apple-system, sans-serif"
DEFAULT_PALETTE = ("#0066FF", "#003D99", "#66B3FF", "#FFFFFF")
