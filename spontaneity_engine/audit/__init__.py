"""
Append-only, PII-free audit trail.

Responsibilities:
- Build one audit event per recommendation (hashed + scrubbed input,
  trust metadata, policy snapshot, partner id).
- Hand the event to a sink on a background worker; a failed or slow write
  never reaches the caller.
"""
