"""
Scenario presets and context-aware category ranking.

Responsibilities:
- Hold the static catalog of nine presets across three motivation categories.
- Rank the categories by time of day, user history and coarse location.
- Detect which preset (if any) the current filter state matches.
"""
