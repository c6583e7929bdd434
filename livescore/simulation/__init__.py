"""
Offline replay of recorded commentary through the live pipeline.

Typical usage (from repo root):

    python -m livescore.simulation.replay messages.txt --runs 164 --overs 19.4 --wickets 8
"""
