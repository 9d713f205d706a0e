"""systems package – Abilities, melee weapon, per-tick combat resolution, rendering.

Only the leaf modules are re-exported here; import ``systems.combat_system``
and ``systems.renderer`` directly.
"""

from .ability_system import AbilityKind, AbilityState, create_ability
from .weapon import MeleeWeapon
