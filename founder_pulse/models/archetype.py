"""Archetype catalog — the eight founder archetypes and their metadata.

Loaded once at import and never mutated. ``isUrgent`` is only set for
Burning Out; ``encouragement`` is only set for the Growth Seeker fallback.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Optional


class ArchetypeName:
    BURNING_OUT = "Burning Out"
    PERFECTIONIST_BUILDER = "Perfectionist Builder"
    OPPORTUNISTIC_VISIONARY = "Opportunistic Visionary"
    ISOLATED_DREAMER = "Isolated Dreamer"
    SELF_ASSURED_HUSTLER = "Self-Assured Hustler"
    COMMUNITY_DRIVEN = "Community-Driven"
    BALANCED_FOUNDER = "Balanced Founder"
    GROWTH_SEEKER = "Growth Seeker"

    ALL = (
        BURNING_OUT,
        PERFECTIONIST_BUILDER,
        OPPORTUNISTIC_VISIONARY,
        ISOLATED_DREAMER,
        SELF_ASSURED_HUSTLER,
        COMMUNITY_DRIVEN,
        BALANCED_FOUNDER,
        GROWTH_SEEKER,
    )


@dataclass(frozen=True)
class ArchetypeResult:
    name: str
    description: str
    traits: tuple
    strength: str
    challenge: str
    recommendation: str
    is_urgent: bool = False
    encouragement: Optional[str] = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["traits"] = list(self.traits)
        return d


_ARCHETYPES = {
    ArchetypeName.BURNING_OUT: ArchetypeResult(
        name=ArchetypeName.BURNING_OUT,
        description=(
            "Several pressure points are running hot at the same time. "
            "You are carrying more than is sustainable and it is showing up "
            "across how you see yourself, your company and your support."
        ),
        traits=("Running on empty", "High self-pressure", "Withdrawing under load"),
        strength="You care deeply and have kept going through a lot.",
        challenge="Recovering before exhaustion turns into a crisis.",
        recommendation=(
            "Talk to someone you trust this week and cut one commitment - "
            "rest is part of the work right now."
        ),
        is_urgent=True,
    ),
    ArchetypeName.PERFECTIONIST_BUILDER: ArchetypeResult(
        name=ArchetypeName.PERFECTIONIST_BUILDER,
        description=(
            "You hold yourself to an exacting standard and hesitate to ship "
            "until everything feels right."
        ),
        traits=("Detail-oriented", "Self-critical", "Risk-averse"),
        strength="The quality of what you build.",
        challenge="Shipping before it feels finished.",
        recommendation="Set a ship date for something small and keep it, even if it is imperfect.",
    ),
    ArchetypeName.OPPORTUNISTIC_VISIONARY: ArchetypeResult(
        name=ArchetypeName.OPPORTUNISTIC_VISIONARY,
        description=(
            "You move fast, spot openings others miss and are comfortable "
            "betting on uncertain outcomes."
        ),
        traits=("Bold", "Confident", "Opportunity-driven"),
        strength="Decisiveness in the face of uncertainty.",
        challenge="Slowing down enough to hear critical feedback.",
        recommendation="Before your next big bet, ask one advisor to argue against it.",
    ),
    ArchetypeName.ISOLATED_DREAMER: ArchetypeResult(
        name=ArchetypeName.ISOLATED_DREAMER,
        description=(
            "Your vision is strong, but you are carrying it mostly alone and "
            "it has become closely tied to who you are."
        ),
        traits=("Visionary", "Independent", "Isolated"),
        strength="Clarity and conviction about what you are building.",
        challenge="Letting others in before the load gets too heavy.",
        recommendation="Join a founder peer group and show up to it every week.",
    ),
    ArchetypeName.SELF_ASSURED_HUSTLER: ArchetypeResult(
        name=ArchetypeName.SELF_ASSURED_HUSTLER,
        description=(
            "You trust your abilities, rarely second-guess the path and "
            "push hard toward growth."
        ),
        traits=("Self-assured", "Driven", "Action-oriented"),
        strength="Momentum and resilience.",
        challenge="Spotting blind spots that confidence can hide.",
        recommendation="Ask for one piece of honest, uncomfortable feedback every week.",
    ),
    ArchetypeName.COMMUNITY_DRIVEN: ArchetypeResult(
        name=ArchetypeName.COMMUNITY_DRIVEN,
        description=(
            "You draw energy from the people around you and lean on your "
            "network to make progress."
        ),
        traits=("Collaborative", "Connected"),
        strength="A strong support network.",
        challenge="Trusting your own judgement without consensus.",
        recommendation="Make one decision this week on your own, then share it afterwards.",
    ),
    ArchetypeName.BALANCED_FOUNDER: ArchetypeResult(
        name=ArchetypeName.BALANCED_FOUNDER,
        description=(
            "None of the pressure points dominate. You are holding a steady "
            "middle ground across doubt, identity, risk and connection."
        ),
        traits=("Grounded", "Adaptable", "Steady"),
        strength="Emotional balance under pressure.",
        challenge="Staying balanced as the stakes rise.",
        recommendation="Write down the habits keeping you steady so you can return to them under stress.",
    ),
    ArchetypeName.GROWTH_SEEKER: ArchetypeResult(
        name=ArchetypeName.GROWTH_SEEKER,
        description=(
            "Your profile does not fit a single pattern yet. You are in the "
            "middle of figuring out what kind of founder you want to be."
        ),
        traits=("Curious", "Evolving"),
        strength="Openness to learning and change.",
        challenge="Choosing where to focus your growth.",
        recommendation="Pick one area you want to grow in this month and track it weekly.",
        encouragement=(
            "Every founder is a work in progress. Noticing where you are is "
            "the first step to getting where you want to be."
        ),
    ),
}

ARCHETYPES = MappingProxyType(_ARCHETYPES)
