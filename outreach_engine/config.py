"""
Centralized configuration — all env vars, provider names, closed vocabularies.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── Redis (RQ queue) ──────────────────────────────────────────────────────────
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
AGENT_QUEUE_NAME = os.getenv('AGENT_QUEUE_NAME', 'agents')
# -1 = no job timeout; runs rely on provider-level HTTP timeouts only
AGENT_JOB_TIMEOUT = int(os.getenv('AGENT_JOB_TIMEOUT', '-1'))

# ── PostgreSQL ────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── Provider selection ───────────────────────────────────────────────────────
LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'openai')
SCRAPE_PROVIDER = os.getenv('SCRAPE_PROVIDER', 'basic')

# ── OpenAI ────────────────────────────────────────────────────────────────────
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o')

# ── Anthropic ─────────────────────────────────────────────────────────────────
ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY')
ANTHROPIC_MODEL = os.getenv('ANTHROPIC_MODEL', 'claude-sonnet-4-20250514')

# ── Ollama (local LLM) ──────────────────────────────────────────────────────
OLLAMA_URL = os.getenv('OLLAMA_URL', 'http://localhost:11434')
OLLAMA_MODEL = os.getenv('OLLAMA_MODEL', 'gemma3:1b')

# ── Completion defaults ──────────────────────────────────────────────────────
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048

# ── Scraping / search ────────────────────────────────────────────────────────
FIRECRAWL_API_KEY = os.getenv('FIRECRAWL_API_KEY')
FIRECRAWL_API_URL = os.getenv('FIRECRAWL_API_URL', 'https://api.firecrawl.dev/v1')
BROWSERBASE_API_KEY = os.getenv('BROWSERBASE_API_KEY')
BROWSERBASE_PROJECT_ID = os.getenv('BROWSERBASE_PROJECT_ID')
BROWSERBASE_API_URL = os.getenv('BROWSERBASE_API_URL', 'https://api.browserbase.com/v1')
SCRAPE_MAX_CHARS = int(os.getenv('SCRAPE_MAX_CHARS', '10000'))
SCRAPE_USER_AGENT = os.getenv(
    'SCRAPE_USER_AGENT',
    'Mozilla/5.0 (compatible; OutreachEngine/1.0; +https://example.com/bot)',
)

# ── HTTP ─────────────────────────────────────────────────────────────────────
HTTP_TIMEOUT = int(os.getenv('HTTP_TIMEOUT', '30'))

# ── CRM fallbacks (per-integration extra_config wins) ────────────────────────
BEEHIIV_PUBLICATION_ID = os.getenv('BEEHIIV_PUBLICATION_ID')
NATIONBUILDER_SLUG = os.getenv('NATIONBUILDER_SLUG')
NATIONBUILDER_API_TOKEN = os.getenv('NATIONBUILDER_API_TOKEN')
CONSTANT_CONTACT_API_URL = 'https://api.cc.email/v3'
HUBSPOT_API_URL = 'https://api.hubapi.com'

# ── Slack notifications ──────────────────────────────────────────────────────
SLACK_WEBHOOK_URL = os.getenv('SLACK_WEBHOOK_URL')

# ── Closed vocabularies ──────────────────────────────────────────────────────
PROFILE_MODES = ['business', 'political']

AGENT_TYPES = [
    'lead_generator',
    'researcher',
    'outreach',
    'secretary',
    'issue_scout',
    'persuader',
    'donor_closer',
]

TERMINAL_STATUSES = ('completed', 'failed')

SENTIMENT_INTENT_TYPES = ['voter', 'donor']

# ── Lead discovery ───────────────────────────────────────────────────────────
RECENCY_OPTIONS = ['1week', '1month', '3months', '6months', 'any']
DEFAULT_RECENCY = {
    'business': '1month',
    'political': '1week',
}
DEFAULT_MAX_LEADS = 10
