"""Battle-resolution panels for a ghost collecting game.

Each panel is a small input-driven state machine: feed it key tokens or
pointer activations and it calls back with exactly one terminal outcome.
"""
