"""
LLM backend layer.

Responsibilities:
- Manage Groq / OpenAI configuration and credentials.
- Build the activity-recommendation prompt from free-text user intent.
- Call each backend and hand back the raw JSON object it produced.
- Classify backend failures (quota / rate-limit vs. everything else).
"""
