"""
Offline recommendation generator.

Template-based synthesis used whenever no backend is configured, every
backend failed, or a backend result had to be thrown away. It needs no
network and cannot fail, which is what lets the pipeline promise a usable
answer for every valid request.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from .models import Activity, RealtimeStatus, RecommendationCandidate, Setting
from .text import extract_context

DEFAULT_LOCATION = "nearby"
DEFAULT_TIME = "a few hours"
DEFAULT_VIBE = "spontaneous"


@dataclass(frozen=True)
class _Template:
    title: str
    description: str
    cost: str
    setting: Setting
    group_friendly: bool
    activities: tuple[tuple[str, str, str], ...]  # (name, type, description)


TEMPLATES: tuple[_Template, ...] = (
    _Template(
        title="{Vibe} {time} adventure {where}",
        description=(
            "Explore {where_plain} with a {vibe} {time} experience. Discover local spots, "
            "hidden gems and small surprises that match your vibe."
        ),
        cost="Varies",
        setting=Setting.mixed,
        group_friendly=True,
        activities=(
            ("Local Exploration", "explore", "Wander {where_plain} through a {vibe} lens"),
            ("Hidden Gem Stop", "discover", "Pick the first place you've never been inside"),
        ),
    ),
    _Template(
        title="{Vibe} neighborhood stroll {where}",
        description=(
            "Take {time} to walk {where_plain} with no fixed plan. Follow whatever catches "
            "your eye and keep the pace {vibe}."
        ),
        cost="Free",
        setting=Setting.outdoor,
        group_friendly=True,
        activities=(
            ("Neighborhood Walk", "outdoor", "Loop through streets you normally skip"),
            ("Photo Break", "creative", "Capture three details that feel {vibe}"),
        ),
    ),
    _Template(
        title="{Vibe} café and browse session {where}",
        description=(
            "Settle into a café {where_plain}, then browse a bookshop or market stall. "
            "A {vibe} way to spend {time} indoors."
        ),
        cost="$",
        setting=Setting.indoor,
        group_friendly=False,
        activities=(
            ("Café Stop", "food", "Order something you haven't tried before"),
            ("Browse & Discover", "culture", "Spend time in a bookshop, gallery or market"),
        ),
    ),
    _Template(
        title="{Vibe} mini-challenge {where}",
        description=(
            "Give yourself {time} and a tiny mission {where_plain}: find the best view, the "
            "oldest building or the busiest corner. Keep it {vibe}."
        ),
        cost="Free",
        setting=Setting.mixed,
        group_friendly=True,
        activities=(
            ("Scavenger Mission", "adventure", "Tick off three small discoveries"),
            ("Wrap-up Treat", "food", "Celebrate with a snack somewhere new"),
        ),
    ),
)


def generate_offline(
    user_input: str | None,
    *,
    rng: random.Random | None = None,
    recommendation_id: str | None = None,
) -> RecommendationCandidate:
    """Build a recommendation from free text using a randomly chosen template.

    Pass a seeded ``random.Random`` for reproducible output.
    """
    ctx = extract_context(user_input)
    location = ctx.location or DEFAULT_LOCATION
    time = ctx.time or DEFAULT_TIME
    vibe = ctx.vibe or DEFAULT_VIBE
    primary_vibe = vibe.split(",")[0].strip() or DEFAULT_VIBE

    near = location.lower() == DEFAULT_LOCATION
    values = {
        "Vibe": primary_vibe[:1].upper() + primary_vibe[1:],
        "vibe": vibe.lower(),
        "time": time,
        "where": DEFAULT_LOCATION if near else f"in {location}",
        "where_plain": "your area" if near else location,
    }

    template = (rng or random).choice(TEMPLATES)
    return RecommendationCandidate(
        recommendation_id=recommendation_id,
        title=template.title.format(**values),
        description=template.description.format(**values),
        duration=time,
        cost=template.cost,
        location=location,
        vibe=vibe,
        setting=template.setting,
        group_friendly=template.group_friendly,
        status=RealtimeStatus.open,
        unavailable=False,
        activities=[
            Activity(name=name, type=kind, duration=time, description=desc.format(**values))
            for name, kind, desc in template.activities
        ],
    )
