from __future__ import annotations

from esper import World

from stackclash.components.combatants import Combatants


def get_combatants(world: World) -> Combatants | None:
    for _, combatants in world.get_component(Combatants):
        return combatants
    return None


def find_opponent(world: World, owner_entity: int | None) -> int | None:
    """Return the rival of ``owner_entity`` in a versus session, if any."""

    if owner_entity is None:
        return None
    combatants = get_combatants(world)
    if combatants is None:
        return None
    if owner_entity == combatants.player_entity:
        return combatants.opponent_entity
    if owner_entity == combatants.opponent_entity:
        return combatants.player_entity
    return None
