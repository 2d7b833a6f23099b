"""
Stack Game
==========

Arcade stacking-tower game. The ``tower_core`` subpackage holds the
simulation (grid, oscillation, landing, falling overhang, camera, session
state machine and stats persistence). Front-ends live under ``tools/``.

All tunable parameters are in game_config.yaml.
"""
