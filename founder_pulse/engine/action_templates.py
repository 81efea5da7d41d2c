"""Action Template Catalog — static candidate micro-actions.

Three sources feed the daily selection:
- ARCHETYPE_ACTIONS: tailored to each archetype's typical challenge
- DIMENSION_ACTIONS: one set per at-risk dimension (assessment or check-in)
- GENERAL_WELLNESS_ACTIONS: filler that applies to everyone

All three are read-only and shared across requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from founder_pulse.models.action import ActionCategory as C
from founder_pulse.models.archetype import ArchetypeName as A


class Dimension:
    IMPOSTER_SYNDROME = "imposter_syndrome"
    FOUNDER_DOUBT = "founder_doubt"
    IDENTITY_FUSION = "identity_fusion"
    FEAR_OF_REJECTION = "fear_of_rejection"
    ISOLATION_LEVEL = "isolation_level"
    STRESS = "stress"
    ENERGY = "energy"
    MOOD = "mood"


D = Dimension


@dataclass(frozen=True)
class ActionTemplate:
    text: str
    category: str
    target_dimension: str


def _t(text: str, category: str, dimension: str) -> ActionTemplate:
    return ActionTemplate(text=text, category=category, target_dimension=dimension)


DIMENSION_ACTIONS = MappingProxyType({
    D.IMPOSTER_SYNDROME: (
        _t("Write down 3 accomplishments from this week", C.MINDFULNESS, D.IMPOSTER_SYNDROME),
        _t("Share a recent win with a trusted friend or mentor", C.SOCIAL, D.IMPOSTER_SYNDROME),
        _t("Review positive feedback you've received recently", C.MINDFULNESS, D.IMPOSTER_SYNDROME),
        _t("Document one skill you've improved this month", C.PROFESSIONAL, D.IMPOSTER_SYNDROME),
        _t("Remind yourself: everyone starts somewhere", C.MINDFULNESS, D.IMPOSTER_SYNDROME),
    ),
    D.FOUNDER_DOUBT: (
        _t("Revisit your original vision and why you started", C.MINDFULNESS, D.FOUNDER_DOUBT),
        _t("Talk to a customer about the value you provide", C.SOCIAL, D.FOUNDER_DOUBT),
        _t("List 3 problems your product solves", C.PROFESSIONAL, D.FOUNDER_DOUBT),
        _t("Read a founder success story for inspiration", C.REST, D.FOUNDER_DOUBT),
        _t("Celebrate one small milestone today", C.MINDFULNESS, D.FOUNDER_DOUBT),
    ),
    D.IDENTITY_FUSION: (
        _t("Spend 30 minutes on a hobby unrelated to work", C.REST, D.IDENTITY_FUSION),
        _t("Have a conversation without mentioning your startup", C.SOCIAL, D.IDENTITY_FUSION),
        _t("Write about who you are outside of being a founder", C.MINDFULNESS, D.IDENTITY_FUSION),
        _t("Reconnect with an old friend from before your startup", C.SOCIAL, D.IDENTITY_FUSION),
        _t("Take a walk without checking your phone", C.PHYSICAL, D.IDENTITY_FUSION),
    ),
    D.FEAR_OF_REJECTION: (
        _t("Reach out to one potential customer or partner", C.PROFESSIONAL, D.FEAR_OF_REJECTION),
        _t("Ask for feedback on something small", C.SOCIAL, D.FEAR_OF_REJECTION),
        _t("Reframe a past rejection as a learning opportunity", C.MINDFULNESS, D.FEAR_OF_REJECTION),
        _t("Practice a pitch with a supportive friend", C.SOCIAL, D.FEAR_OF_REJECTION),
        _t("Remember: rejection is redirection, not failure", C.MINDFULNESS, D.FEAR_OF_REJECTION),
    ),
    D.ISOLATION_LEVEL: (
        _t("Message a fellow founder to check in", C.SOCIAL, D.ISOLATION_LEVEL),
        _t("Join an online founder community discussion", C.SOCIAL, D.ISOLATION_LEVEL),
        _t("Schedule a virtual coffee with someone in your network", C.SOCIAL, D.ISOLATION_LEVEL),
        _t("Attend a local meetup or networking event", C.SOCIAL, D.ISOLATION_LEVEL),
        _t("Share a challenge you're facing with your support network", C.SOCIAL, D.ISOLATION_LEVEL),
    ),
    D.STRESS: (
        _t("Take 5 deep breaths right now", C.MINDFULNESS, D.STRESS),
        _t("Go for a 15-minute walk outside", C.PHYSICAL, D.STRESS),
        _t("Do a 10-minute guided meditation", C.MINDFULNESS, D.STRESS),
        _t("Write down what's stressing you and one action to address it", C.MINDFULNESS, D.STRESS),
        _t("Take a proper lunch break away from your desk", C.REST, D.STRESS),
    ),
    D.ENERGY: (
        _t("Take a 20-minute power nap", C.REST, D.ENERGY),
        _t("Do 10 minutes of stretching or light exercise", C.PHYSICAL, D.ENERGY),
        _t("Drink a full glass of water right now", C.PHYSICAL, D.ENERGY),
        _t("Step outside for fresh air and sunlight", C.PHYSICAL, D.ENERGY),
        _t("Set a firm end time for work today", C.REST, D.ENERGY),
    ),
    D.MOOD: (
        _t("Listen to a song that makes you happy", C.REST, D.MOOD),
        _t("Write down 3 things you're grateful for", C.MINDFULNESS, D.MOOD),
        _t("Call or text someone who makes you smile", C.SOCIAL, D.MOOD),
        _t("Watch a short funny video for a quick laugh", C.REST, D.MOOD),
        _t("Do something kind for someone else today", C.SOCIAL, D.MOOD),
    ),
})

ARCHETYPE_ACTIONS = MappingProxyType({
    A.PERFECTIONIST_BUILDER: (
        _t("Ship something imperfect today - done is better than perfect", C.PROFESSIONAL, D.IMPOSTER_SYNDROME),
        _t("Set a time limit on a task and stop when it's up", C.PROFESSIONAL, D.STRESS),
        _t("Ask for feedback before you think it's ready", C.SOCIAL, D.FEAR_OF_REJECTION),
    ),
    A.OPPORTUNISTIC_VISIONARY: (
        _t("Seek out one piece of critical feedback today", C.SOCIAL, D.FOUNDER_DOUBT),
        _t("Consult with an advisor before making a big decision", C.PROFESSIONAL, D.FOUNDER_DOUBT),
        _t("Write down potential risks of your current plan", C.MINDFULNESS, D.FOUNDER_DOUBT),
    ),
    A.ISOLATED_DREAMER: (
        _t("Reach out to one person in your network today", C.SOCIAL, D.ISOLATION_LEVEL),
        _t("Share your current challenge with someone who can help", C.SOCIAL, D.ISOLATION_LEVEL),
        _t("Join a founder community or forum discussion", C.SOCIAL, D.ISOLATION_LEVEL),
    ),
    A.BURNING_OUT: (
        _t("Take a real break - no screens for 30 minutes", C.REST, D.STRESS),
        _t("Reach out to a mental health professional or trusted mentor", C.SOCIAL, D.STRESS),
        _t("Delegate or postpone one task today", C.PROFESSIONAL, D.ENERGY),
    ),
    A.SELF_ASSURED_HUSTLER: (
        _t("Ask someone for honest feedback on a blind spot", C.SOCIAL, D.FOUNDER_DOUBT),
        _t("Listen more than you speak in your next conversation", C.SOCIAL, D.FEAR_OF_REJECTION),
        _t("Consider an alternative perspective on a decision", C.MINDFULNESS, D.FOUNDER_DOUBT),
    ),
    A.COMMUNITY_DRIVEN: (
        _t("Make a decision today without consulting others", C.PROFESSIONAL, D.FOUNDER_DOUBT),
        _t("Trust your gut on something small", C.MINDFULNESS, D.IMPOSTER_SYNDROME),
        _t("Spend time working alone without interruptions", C.PROFESSIONAL, D.IDENTITY_FUSION),
    ),
    A.BALANCED_FOUNDER: (
        _t("Document what's keeping you balanced right now", C.MINDFULNESS, D.MOOD),
        _t("Share your balance strategies with another founder", C.SOCIAL, D.ISOLATION_LEVEL),
        _t("Plan something fun for the weekend", C.REST, D.ENERGY),
    ),
    A.GROWTH_SEEKER: (
        _t("Learn something new related to your business today", C.PROFESSIONAL, D.FOUNDER_DOUBT),
        _t("Reflect on a recent challenge and what you learned", C.MINDFULNESS, D.IMPOSTER_SYNDROME),
        _t("Set one small growth goal for this week", C.PROFESSIONAL, D.MOOD),
    ),
})

GENERAL_WELLNESS_ACTIONS: tuple[ActionTemplate, ...] = (
    _t("Take a 5-minute mindfulness break", C.MINDFULNESS, D.STRESS),
    _t("Drink water and have a healthy snack", C.PHYSICAL, D.ENERGY),
    _t("Step away from screens for 10 minutes", C.REST, D.ENERGY),
    _t("Write down your top 3 priorities for tomorrow", C.PROFESSIONAL, D.STRESS),
    _t("End work at a reasonable hour today", C.REST, D.ENERGY),
    _t("Express gratitude to someone who helped you", C.SOCIAL, D.MOOD),
    _t("Review your wins from this week", C.MINDFULNESS, D.IMPOSTER_SYNDROME),
    _t("Do something that brings you joy", C.REST, D.MOOD),
)


def actions_for_dimension(dimension: str) -> tuple[ActionTemplate, ...]:
    return DIMENSION_ACTIONS.get(dimension, ())


def actions_for_archetype(archetype: str) -> tuple[ActionTemplate, ...]:
    return ARCHETYPE_ACTIONS.get(archetype, ())


def all_action_templates() -> list[ActionTemplate]:
    templates: list[ActionTemplate] = []
    for group in DIMENSION_ACTIONS.values():
        templates.extend(group)
    for group in ARCHETYPE_ACTIONS.values():
        templates.extend(group)
    templates.extend(GENERAL_WELLNESS_ACTIONS)
    return templates
