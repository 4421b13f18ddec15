# chuk_ai_context_manager/config.py
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Central model config: can be overridden by environment variable
DEFAULT_TOKEN_MODEL = os.getenv("CHUK_DEFAULT_MODEL", "gpt-4o-mini")

# Limits used when a model id is not in the table
FALLBACK_MODEL = "gpt-4o-mini"

# Share of the context window the context selector may fill
MAX_CONTEXT_PERCENTAGE = int(os.getenv("CHUK_MAX_CONTEXT_PERCENTAGE", "85"))

# Compression events retained per engine
COMPRESSION_EVENT_CAPACITY = int(os.getenv("CHUK_COMPRESSION_EVENT_CAPACITY", "100"))
