"""Test package for the ghost battle panels.

Core tests drive the panels directly with key tokens and pointer
activations; smoke tests run the pygame shell with SDL's dummy drivers so
no window opens.  Run ``pytest`` from the project root.
"""
