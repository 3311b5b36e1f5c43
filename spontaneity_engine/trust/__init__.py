"""
Trust & disclosure layer.

Responsibilities:
- Map trust signals to a badge, label, detail text and confidence tier
  (the single source of truth; callers and UIs never compute this).
- Generate the optional one-sentence "why this now" explanation.
- Hold the deployment trust policy and evaluate candidates against it.
"""
