"""All magic values live here — no inline literals anywhere else."""

# Server
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_AWS_REGION = "us-east-1"
DEFAULT_LOG_LEVEL = "INFO"
HEALTH_STATUS = "healthy"

# Vision backends
BACKEND_BEDROCK = "bedrock"
BACKEND_ANTHROPIC = "anthropic"
BACKEND_OPENAI = "openai"
VISION_BACKENDS = (BACKEND_BEDROCK, BACKEND_ANTHROPIC, BACKEND_OPENAI)
DEFAULT_VISION_BACKEND = BACKEND_BEDROCK
DEFAULT_VISION_MODELS = {
    BACKEND_BEDROCK: "us.anthropic.claude-sonnet-4-20250514-v1:0",
    BACKEND_ANTHROPIC: "claude-sonnet-4-20250514",
    BACKEND_OPENAI: "gpt-4o",
}
DEFAULT_VISION_TIMEOUT = 60
# 0 keeps the one-inference-call-per-request contract.
DEFAULT_VISION_MAX_RETRIES = 0

# Inference parameters, fixed per deployment
INFERENCE_MAX_TOKENS = 2000
INFERENCE_TEMPERATURE = 0.7
INFERENCE_TOP_P = 0.9
IMAGE_MEDIA_TYPE = "image/jpeg"

# Image processing
DATA_URL_PREFIX = "data:%s;base64,"
DATA_URL_SEPARATOR = ","
JPEG_EXTENSION = ".jpg"
MIN_ENCODED_IMAGE_LENGTH = 1000

# Log messages
MSG_SERVER_STARTING = "Starting server on %s:%d (backend: %s, model: %s)"
MSG_ANALYZE_REQUEST = "Analyze request: %d base64 chars"
MSG_ANALYZE_OK = "✓ Analysis done (score %d, %.1fs)"
MSG_ANALYZE_FAIL = "✗ Analysis failed at %s stage: %s"
MSG_BAD_REQUEST = "Rejected request at %s stage: %s"
MSG_UNEXPECTED_FAIL = "✗ Analysis failed unexpectedly: %s"
MSG_HEALTH_FAIL = "Health check failed: %s"
MSG_RAW_REPLY = "Unusable model reply: %s"
MSG_NORMALIZED = "Normalized %dx%d → %dx%d (%s, %d bytes)"
MSG_VISION_CALL = "→ %s vision (%s)"

# HTTP error bodies
MSG_ERR_INVALID_FORMAT = "Invalid request format"
MSG_ERR_IMAGE_REQUIRED = "Image data is required"
MSG_ERR_INVALID_IMAGE = "Invalid image data"
MSG_ERR_ANALYSIS_FAILED = "Failed to analyze image"

# Client
DEFAULT_SERVER_URL = "http://localhost:8080"
ANALYZE_PATH = "/analyze"
HEALTH_PATH = "/health"
DEFAULT_CLIENT_TIMEOUT = 120.0
MSG_IMAGE_TOO_SMALL = "Image too small or corrupted, skipping analysis"
MSG_SENDING = "Sending %d base64 chars (%s)"

ANALYSIS_PROMPT = """You are a friendly photography teacher helping someone who is new to film photography (they use a reel camera, not a smartphone).
They've shared a photo, and your job is to gently guide them with clear, simple feedback to help them improve.

First, try to understand what the user was trying to capture in the photo (their intent). Was it a mood, a story, a main subject, or just something interesting? Use that to make your advice more helpful.

Respond in the following JSON format:

{
  "score": <number from 1 to 10>,
  "intent": "<one sentence guessing what the photographer might have wanted to show or express>",
  "composition": "<1-2 short, friendly sentences about how the photo is arranged and how it could be clearer or more balanced>",
  "lighting": "<1-2 beginner-friendly sentences about how the light is affecting the photo, and how it could be improved>",
  "subject": "<1-2 sentences about the main subject and how well it stands out>",
  "strengths": ["<something that works well>", "<another good thing you noticed>"],
  "suggestions": [
    "<an easy, practical tip for next time based on their intent>",
    "<another beginner-friendly idea to try>",
    "<one more basic improvement suggestion>"
  ]
}

Keep these guidelines in mind:
Speak like a friendly, supportive coach — be positive and encouraging.

Use very simple language (avoid terms like aperture, ISO, white balance).

Guess their intent kindly, even if it's not clear — this helps tailor your advice.

Focus suggestions on basic, easy-to-try ideas like:

"Try moving closer to your subject"

"Shoot during golden hour for softer light"

"Keep the background simple to highlight your subject"

They're learning with a film camera, so keep it practical and low-tech."""
