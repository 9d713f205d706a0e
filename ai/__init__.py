"""
ai package – Tactical AI for the opponent combatant.

Modules:
    ai_core            – Central brain (OpponentAI) that orchestrates the sub-systems
    tactics            – Tactical state machine (Patrol → Engage → Retreat / Flank / Counter)
                         and stance selection
    personality        – Personality traits and per-tick adaptation
    combat_memory      – Rolling player observations used for prediction
    simulation_runner  – Headless AI-vs-scripted-player matches
"""
