from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .parlor_core.config import configure_logging, default_difficulty, search_depth  # type: ignore
    from .game import (  # type: ignore
        COLS,
        EMPTY,
        PLAYER1,
        PLAYER2,
        ROWS,
        Board,
        BoxesBoard,
        Difficulty,
        GameState,
        Line,
        ai_pick_move,
        available_moves,
        boxes_ai_pick_move,
        boxes_game_over,
        boxes_winner,
        calculate_scores,
        legal_columns,
        make_move,
        score_position,
        search_root,
    )
except ImportError:
    from parlor_core.config import configure_logging, default_difficulty, search_depth  # type: ignore
    from game import (  # type: ignore
        COLS,
        EMPTY,
        PLAYER1,
        PLAYER2,
        ROWS,
        Board,
        BoxesBoard,
        Difficulty,
        GameState,
        Line,
        ai_pick_move,
        available_moves,
        boxes_ai_pick_move,
        boxes_game_over,
        boxes_winner,
        calculate_scores,
        legal_columns,
        make_move,
        score_position,
        search_root,
    )

DEFAULT_DIFFICULTY = default_difficulty()
SEARCH_DEPTH = search_depth()

configure_logging()
_log = logging.getLogger(__name__)

app = Flask(__name__)


class ApiError(ValueError):
    pass


# ---------- JSON conversion ----------

def _other(player: int) -> int:
    return PLAYER2 if player == PLAYER1 else PLAYER1


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "board": s.board.rows(),
        "turn": int(s.turn),
        "lastMove": list(s.last_move) if s.last_move is not None else None,
    }


def json_to_state(obj: Any) -> GameState:
    if not isinstance(obj, dict):
        raise ApiError("state required")
    try:
        board = Board.from_rows(obj["board"])
        turn = int(obj.get("turn", PLAYER1))
        last = obj.get("lastMove")
        last_move = (int(last[0]), int(last[1])) if last else None
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise ApiError(f"bad state: {e}") from e
    if turn not in (PLAYER1, PLAYER2):
        raise ApiError(f"bad state: turn must be 1 or 2, got {turn}")
    for c in range(COLS):
        column = [board.at(r, c) for r in range(ROWS)]
        first = next((r for r, cell in enumerate(column) if cell != EMPTY), ROWS)
        if any(cell == EMPTY for cell in column[first:]):
            raise ApiError(f"bad state: floating piece in column {c}")
    if last_move is not None:
        r, c = last_move
        if not (0 <= r < ROWS and 0 <= c < COLS) or board.at(r, c) == EMPTY:
            raise ApiError(f"bad state: lastMove {list(last_move)} is not an occupied cell")
    return GameState(board=board, turn=turn, last_move=last_move)


def _outcome_json(s: GameState) -> Dict[str, Any]:
    line = s.winning_line
    return {
        "state": state_to_json(s),
        "status": s.status,
        "winner": s.winner,
        "winningLine": [list(c) for c in line] if line else None,
        "legalMoves": legal_columns(s.board) if s.winner is None else [],
    }


def _difficulty(body: Dict[str, Any]) -> Difficulty:
    try:
        return Difficulty.parse(body.get("difficulty", DEFAULT_DIFFICULTY))
    except ValueError as e:
        raise ApiError(str(e)) from e


def boxes_to_json(board: BoxesBoard, turn: int) -> Dict[str, Any]:
    return {
        "size": board.size,
        "horizontal": [list(r) for r in board.horizontal],
        "vertical": [list(r) for r in board.vertical],
        "boxes": [list(r) for r in board.boxes],
        "turn": int(turn),
    }


def json_to_boxes(obj: Any) -> Tuple[BoxesBoard, int]:
    if not isinstance(obj, dict):
        raise ApiError("state required")
    try:
        board = BoxesBoard(
            size=int(obj["size"]),
            horizontal=tuple(tuple(int(x) for x in r) for r in obj["horizontal"]),
            vertical=tuple(tuple(int(x) for x in r) for r in obj["vertical"]),
            boxes=tuple(tuple(int(x) for x in r) for r in obj["boxes"]),
        )
        turn = int(obj.get("turn", PLAYER1))
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"bad state: {e}") from e
    if turn not in (PLAYER1, PLAYER2):
        raise ApiError(f"bad state: turn must be 1 or 2, got {turn}")
    return board, turn


def line_to_json(line: Line) -> Dict[str, Any]:
    return {"row": line.row, "col": line.col, "type": line.kind}


def json_to_line(obj: Any) -> Line:
    try:
        return Line(int(obj["row"]), int(obj["col"]), str(obj["type"]))
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"bad line: {e}") from e


def _boxes_outcome(board: BoxesBoard, turn: int) -> Dict[str, Any]:
    scores = calculate_scores(board)
    over = boxes_game_over(board)
    return {
        "state": boxes_to_json(board, turn),
        "scores": {str(k): v for k, v in scores.items()},
        "status": "finished" if over else "playing",
        "winner": boxes_winner(scores) if over else None,
        "legalMoves": [line_to_json(m) for m in available_moves(board)],
    }


@app.errorhandler(ApiError)
def _bad_request(e: ApiError) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


# ---------- Connect four API ----------

@app.get("/api/health")
def api_health() -> Any:
    return jsonify({"ok": True, "searchDepth": SEARCH_DEPTH, "defaultDifficulty": DEFAULT_DIFFICULTY})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    difficulty = _difficulty(body)
    try:
        human_side = int(body.get("humanSide", PLAYER1))
    except (TypeError, ValueError) as e:
        raise ApiError(f"bad humanSide: {e}") from e
    if human_side not in (PLAYER1, PLAYER2):
        raise ApiError("humanSide must be 1 or 2")
    state = GameState.new()
    out = _outcome_json(state)
    out.update({"ok": True, "aiSide": _other(human_side), "humanSide": human_side, "difficulty": difficulty.value})
    return jsonify(out)


@app.post("/api/legal")
def api_legal() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    state = json_to_state(body.get("state"))
    return jsonify({"ok": True, "legalMoves": legal_columns(state.board)})


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    state = json_to_state(body.get("state"))
    legal = legal_columns(state.board)
    column = body.get("column")
    if state.status != "playing":
        return jsonify({"ok": False, "error": "Game is over", "legalMoves": []}), 400
    # JSON true/false decode to bool, which is an int subclass.
    if not isinstance(column, int) or isinstance(column, bool) or column not in legal:
        return jsonify({"ok": False, "error": "Illegal move", "legalMoves": legal}), 400
    next_state = state.apply(column)
    out = _outcome_json(next_state)
    out["ok"] = True
    return jsonify(out)


@app.post("/api/ai")
def api_ai() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    state = json_to_state(body.get("state"))
    difficulty = _difficulty(body)
    if state.status != "playing":
        out = _outcome_json(state)
        out.update({"ok": True, "move": None})
        return jsonify(out)

    move = ai_pick_move(state.board, state.turn, difficulty, depth=SEARCH_DEPTH)
    legal = legal_columns(state.board)
    if move is None:
        out = _outcome_json(state)
        out.update({"ok": True, "move": None})
        return jsonify(out)
    if move not in legal:
        _log.error("AI proposed illegal column %r (legal=%s)", move, legal)
        return jsonify({"ok": False, "error": f"AI produced an illegal move: {move}"}), 500
    next_state = state.apply(move)
    out = _outcome_json(next_state)
    out.update({"ok": True, "move": move})
    return jsonify(out)


@app.post("/api/evaluate")
def api_evaluate() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    state = json_to_state(body.get("state"))
    try:
        player = int(body.get("player", state.turn))
    except (TypeError, ValueError) as e:
        raise ApiError(f"bad player: {e}") from e
    if player not in (PLAYER1, PLAYER2):
        raise ApiError("player must be 1 or 2")
    return jsonify({"ok": True, "player": player, "score": score_position(state.board, player)})


@app.post("/api/analyze")
def api_analyze() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    state = json_to_state(body.get("state"))
    try:
        depth = int(body.get("depth", SEARCH_DEPTH))
    except (TypeError, ValueError) as e:
        raise ApiError(f"bad depth: {e}") from e
    if depth < 1 or depth > SEARCH_DEPTH:
        raise ApiError(f"depth must be between 1 and {SEARCH_DEPTH}")
    if state.status != "playing":
        return jsonify({"ok": True, "moves": []})
    scored = search_root(state.board, state.turn, depth=depth)
    return jsonify({"ok": True, "moves": [{"column": c, "score": s} for c, s in scored]})


# ---------- Dots and boxes API ----------

@app.post("/api/boxes/new")
def api_boxes_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board = BoxesBoard.empty(int(body.get("size", 4)))
    except (TypeError, ValueError) as e:
        raise ApiError(str(e)) from e
    out = _boxes_outcome(board, PLAYER1)
    out["ok"] = True
    return jsonify(out)


def _play_line(board: BoxesBoard, turn: int, line: Line) -> Optional[Dict[str, Any]]:
    result = make_move(board, line, turn)
    if result is None:
        return None
    # Closing a box earns another turn.
    next_turn = turn if result.boxes_completed > 0 else _other(turn)
    out = _boxes_outcome(result.board, next_turn)
    out.update({"ok": True, "move": line_to_json(line), "boxesCompleted": result.boxes_completed})
    return out


@app.post("/api/boxes/move")
def api_boxes_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    board, turn = json_to_boxes(body.get("state"))
    line = json_to_line(body.get("line"))
    out = _play_line(board, turn, line)
    if out is None:
        legal: List[Dict[str, Any]] = [line_to_json(m) for m in available_moves(board)]
        return jsonify({"ok": False, "error": "Illegal move", "legalMoves": legal}), 400
    return jsonify(out)


@app.post("/api/boxes/ai")
def api_boxes_ai() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    board, turn = json_to_boxes(body.get("state"))
    difficulty = _difficulty(body)
    line = boxes_ai_pick_move(board, difficulty)
    if line is None:
        out = _boxes_outcome(board, turn)
        out.update({"ok": True, "move": None})
        return jsonify(out)
    out = _play_line(board, turn, line)
    if out is None:
        _log.error("boxes AI proposed illegal line %r", line)
        return jsonify({"ok": False, "error": "AI produced an illegal move"}), 500
    return jsonify(out)


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
