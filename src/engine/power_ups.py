"""
Element Alchemy - Power-Up Catalog & Activator

Power-ups cost accumulated power and go on cooldown after use. Each power-up
names an EffectKind; apply_effect() is the single interpreter for all of
them.

Gating order:
    1. Cooldown: (now - last_used) < cooldown -> "Cooldown: Ns remaining"
    2. Cost: total_power_gained < cost -> "Need N more power"
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import replace

from src.engine.base import (
    Activation,
    Availability,
    Discovery,
    EffectKind,
    GameState,
    Hint,
    PowerUp,
    PowerUpState,
)
from src.notifications.events import EventPayload, GameEvent, Variant

logger = logging.getLogger(__name__)


POWER_UPS: tuple[PowerUp, ...] = (
    PowerUp(
        id="multiplier_boost",
        name="Multiplier Boost",
        description="Doubles your combo multiplier",
        icon="Zap",
        cost=50,
        cooldown=60,
        effect=EffectKind.MULTIPLIER_BOOST,
    ),
    PowerUp(
        id="element_revealer",
        name="Element Revealer",
        description="Reveals a random undiscovered element",
        icon="Eye",
        cost=100,
        cooldown=180,
        effect=EffectKind.REVEAL_ELEMENT,
    ),
    PowerUp(
        id="power_surge",
        name="Power Surge",
        description="Instantly gain power for all your elements",
        icon="Battery",
        cost=75,
        cooldown=120,
        effect=EffectKind.POWER_SURGE,
    ),
    PowerUp(
        id="smart_hint",
        name="Smart Hint",
        description="Provides a specific hint for a new element combination",
        icon="Lightbulb",
        cost=30,
        cooldown=90,
        effect=EffectKind.SMART_HINT,
    ),
)

_POWER_UPS_BY_ID: dict[str, PowerUp] = {p.id: p for p in POWER_UPS}

MAX_MULTIPLIER = 3.0
SURGE_POWER_PER_LEVEL = 5
REVEALER_ATTRIBUTION = ("power-up", "revealer")


def power_up_by_id(power_up_id: str) -> PowerUp | None:
    return _POWER_UPS_BY_ID.get(power_up_id)


def remaining_cooldown(power_up: PowerUp, power_up_state: PowerUpState, now: float) -> float:
    """Seconds until the power-up is off cooldown (0.0 if ready)."""
    last_used = power_up_state.last_used.get(power_up.id)
    if last_used is None:
        return 0.0
    return max(0.0, power_up.cooldown - (now - last_used))


def is_available(
    power_up: PowerUp,
    game_state: GameState,
    power_up_state: PowerUpState,
    now: float,
) -> Availability:
    """
    Check cooldown and cost gating for a power-up.

    Args:
        power_up: Power-up definition
        game_state: Current game state (for spendable power)
        power_up_state: Activation timestamps
        now: Current time in seconds

    Returns:
        Availability with a player-facing reason when unavailable
    """
    remaining = remaining_cooldown(power_up, power_up_state, now)
    if remaining > 0:
        return Availability(False, f"Cooldown: {math.ceil(remaining)}s remaining")

    if game_state.total_power_gained < power_up.cost:
        shortfall = power_up.cost - game_state.total_power_gained
        return Availability(False, f"Need {shortfall} more power")

    return Availability(True)


def apply_effect(
    effect: EffectKind,
    game_state: GameState,
    rng: random.Random,
    now: float,
    hint: Hint | None = None,
) -> tuple[GameState, tuple[EventPayload, ...]]:
    """
    Apply a power-up effect to a game state.

    Args:
        effect: Effect to apply
        game_state: State before the effect
        rng: Random source for element reveals
        now: Current time in seconds (stamps reveal discoveries)
        hint: Hint shown by SMART_HINT

    Returns:
        Tuple of (new_state, notifications)
    """
    if effect == EffectKind.MULTIPLIER_BOOST:
        boosted = min(game_state.combo_multiplier * 2, MAX_MULTIPLIER)
        return replace(game_state, combo_multiplier=boosted), ()

    if effect == EffectKind.REVEAL_ELEMENT:
        hidden = [e for e in game_state.elements if not e.discovered]
        if not hidden:
            return game_state, (EventPayload(
                event=GameEvent.NOTHING_TO_REVEAL,
                title="No elements to reveal",
                description="You've discovered all elements!",
                variant=Variant.DESTRUCTIVE,
            ),)

        chosen = rng.choice(hidden)
        elements = tuple(
            replace(e, discovered=True) if e.id == chosen.id else e
            for e in game_state.elements
        )
        record = Discovery(
            id=f"power-up-reveal-{int(now * 1000)}",
            result=chosen.id,
            elements=REVEALER_ATTRIBUTION,
            timestamp=now,
            description="Revealed by using the Element Revealer power-up!",
        )
        state = replace(
            game_state,
            elements=elements,
            discoveries=(record, *game_state.discoveries),
        )
        return state, (EventPayload(
            event=GameEvent.ELEMENT_REVEALED,
            title="Element Revealed!",
            description=f"You've unlocked the {chosen.name} element",
            data={"element_id": chosen.id},
        ),)

    if effect == EffectKind.POWER_SURGE:
        boost = game_state.level * SURGE_POWER_PER_LEVEL
        discovered = [e for e in game_state.elements if e.discovered]
        powers = dict(game_state.element_powers)
        for element in discovered:
            powers[element.id] = powers.get(element.id, 0) + boost
        state = replace(
            game_state,
            element_powers=powers,
            total_power_gained=game_state.total_power_gained + boost * len(discovered),
        )
        return state, (EventPayload(
            event=GameEvent.POWER_SURGE,
            title="Power Surge!",
            description=f"Added {boost} power to all your elements",
            data={"boost": boost},
        ),)

    if effect == EffectKind.SMART_HINT:
        if hint is None:
            return game_state, ()
        return game_state, (EventPayload(
            event=GameEvent.HINT,
            title="Hint",
            description=hint.text,
            data={"elements": hint.elements},
        ),)

    raise ValueError(f"Unknown power-up effect: {effect}")


def activate(
    game_state: GameState,
    power_up_id: str,
    power_up_state: PowerUpState,
    now: float,
    rng: random.Random,
    hint: Hint | None = None,
) -> Activation:
    """
    Activate a power-up if it exists and passes gating.

    Availability is re-checked here regardless of what the caller checked.

    Args:
        game_state: Current game state
        power_up_id: Power-up to activate
        power_up_state: Activation timestamps and log
        now: Current time in seconds
        rng: Random source for effects
        hint: Hint for SMART_HINT

    Returns:
        Activation with updated states; unchanged states when rejected
    """
    power_up = power_up_by_id(power_up_id)
    if power_up is None:
        logger.warning("Unknown power-up requested: %s", power_up_id)
        return Activation(game_state, power_up_state, False, (EventPayload(
            event=GameEvent.POWER_UP_NOT_FOUND,
            title="Error",
            description="Power-up not found",
            variant=Variant.DESTRUCTIVE,
            data={"power_up_id": power_up_id},
        ),))

    availability = is_available(power_up, game_state, power_up_state, now)
    if not availability.available:
        return Activation(game_state, power_up_state, False, (EventPayload(
            event=GameEvent.POWER_UP_UNAVAILABLE,
            title="Power-up not available",
            description=availability.reason or "Unable to use this power-up right now",
            variant=Variant.DESTRUCTIVE,
            data={"power_up_id": power_up_id},
        ),))

    affected, effect_events = apply_effect(power_up.effect, game_state, rng, now, hint)
    new_game_state = replace(
        affected,
        total_power_gained=affected.total_power_gained - power_up.cost,
    )
    new_power_up_state = PowerUpState(
        last_used={**power_up_state.last_used, power_up.id: now},
        active_power_ups=(*power_up_state.active_power_ups, power_up.id),
    )
    logger.info("Power-up activated: %s (cost %d)", power_up.id, power_up.cost)

    activated = EventPayload(
        event=GameEvent.POWER_UP_ACTIVATED,
        title=f"{power_up.name} Activated!",
        description=power_up.description,
        data={"power_up_id": power_up.id},
    )
    return Activation(new_game_state, new_power_up_state, True, (*effect_events, activated))
