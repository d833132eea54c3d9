"""
Parlor core Python package.

AI opponents for the portal's turn-based board games, kept free of any UI,
storage or timer concerns so they can be driven by the web API, the CLI or tests.
Modules:
- board.py: Board, cell and player constants, board dimensions
- moves.py: drop/legality rules, win and draw detection
- evaluate.py: heuristic position scoring
- search.py: minimax with alpha-beta pruning, hard-tier move choice
- ai.py: Difficulty and the per-difficulty move dispatcher
- state.py: GameState (board + side to move)
- boxes.py / boxes_ai.py: dots-and-boxes model and AI
- config.py: environment configuration and logging setup
- cli.py: terminal play
"""
