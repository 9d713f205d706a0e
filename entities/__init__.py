"""entities package – Combatant body, Player, and Opponent."""

from .body import CombatantBody, CombatantId
from .player import Player, PlayerIntent, PlayerIntentTranslator
from .opponent import Opponent
