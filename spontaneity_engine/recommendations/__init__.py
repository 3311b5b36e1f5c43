"""
Recommendation pipeline.

Responsibilities:
- Accept free-text intent ("vibe, time, location") plus generation options.
- Dispatch to LLM backends in priority order, falling back to an offline
  template generator so a request never fails.
- Normalize and validate candidates (context leakage, closed venues).
- Annotate the result with trust metadata and record an audit event.
"""
