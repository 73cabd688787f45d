"""Application constants - centralized configuration values."""

# =============================================================================
# Timeouts (in seconds)
# =============================================================================
GITHUB_API_TIMEOUT = 8.0
GENERATION_TIMEOUT = 60.0

# =============================================================================
# Session & Security
# =============================================================================
SESSION_COOKIE_NAME = "sessionId"
SESSION_TTL_SECONDS = 24 * 60 * 60  # 24 hours
SESSION_KEY_PREFIX = "readme-gen-session:"
OAUTH_STATE_TTL_SECONDS = 10 * 60  # 10 minutes
REDACTION_MARKER = "[REDACTED]"
SECRET_KEY_MARKERS = ("token", "secret")
# GitHub token formats: personal, OAuth, user-to-server, server-to-server,
# refresh, and fine-grained personal tokens
GITHUB_TOKEN_PREFIXES = ("ghp_", "gho_", "ghu_", "ghs_", "ghr_", "github_pat_")

# =============================================================================
# GitHub URLs
# =============================================================================
GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github.v3+json"

# =============================================================================
# Repository data
# =============================================================================
MAX_ROOT_FILES = 10
NO_COMMITS_MESSAGE = "No commits yet"

# =============================================================================
# Repository listing
# =============================================================================
DEFAULT_REPOS_PAGE_SIZE = 30
MAX_REPOS_PAGE_SIZE = 100
VALID_REPO_TYPES = ["all", "owner", "public", "private", "member"]
VALID_REPO_SORTS = ["created", "updated", "pushed", "full_name"]
DEFAULT_REPO_TYPE = "all"
DEFAULT_REPO_SORT = "updated"

# =============================================================================
# Auth redirect markers
# =============================================================================
AUTH_SUCCESS_REDIRECT = "/?auth=success"
AUTH_INVALID_STATE_REDIRECT = "/?error=invalid_state"
AUTH_FAILED_REDIRECT = "/?error=auth_failed"
