import logging
import random

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS, cross_origin
from flask_socketio import SocketIO, emit

from game import Difficulty, SudokuGenerator
from grid import InvalidGrid, clone_grid, count_clues, find_conflicts, is_solved, validate_grid
from solver import Outcome, SudokuSolver

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'DEFAULT_DIFFICULTY': 'medium',
    'SOLVE_MAX_STEPS': None,
    'CHECK_UNIQUE': False,
    'CORS_ALLOWED_ORIGINS': '*',
    'SOCKETIO_ASYNC_MODE': None,
    'LOG_LEVEL': 'INFO',
}

NO_SOLUTION_MESSAGES = {
    Outcome.UNSOLVABLE: "No solution exists for this Sudoku puzzle!",
    Outcome.BUDGET_EXHAUSTED: "No solution found within the search budget.",
}

bp = Blueprint('sudoku', __name__)


class InvalidRequest(ValueError):
    """The request body cannot be turned into a solve/generate/check call."""


BAD_INPUT = (InvalidGrid, InvalidRequest)


def _payload(data):
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return data


def _rng(seed):
    if seed is None:
        return None
    # bool is an int subclass; reject it along with lists and objects
    if isinstance(seed, bool) or not isinstance(seed, (int, float, str)):
        raise InvalidRequest(f"Seed must be a number or a string, got {seed!r}")
    return random.Random(seed)


def resolve_log_level(value):
    """Turn a LOG_LEVEL setting (name or number) into a logging level."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {value!r}")
    return level


def _generate(data):
    data = _payload(data)
    difficulty = Difficulty.parse(data.get('difficulty') or current_app.config['DEFAULT_DIFFICULTY'])
    rng = _rng(data.get('seed'))

    generator = SudokuGenerator(level=difficulty, rng=rng)
    puzzle = generator.get_puzzle()
    result = {
        "puzzle": puzzle,
        "solution": generator.get_solution(),
        "difficulty": difficulty.value,
        "clues": count_clues(puzzle),
    }
    if data.get('check_unique', current_app.config['CHECK_UNIQUE']):
        result["unique"] = generator.has_unique_solution(
            puzzle, max_steps=current_app.config['SOLVE_MAX_STEPS'])
    return result


def _solve(data):
    grid = _payload(data).get('grid')
    validate_grid(grid)

    board = clone_grid(grid)
    outcome = SudokuSolver(max_steps=current_app.config['SOLVE_MAX_STEPS']).run(board)
    result = {
        "status": outcome.value,
        "solved": outcome is Outcome.SOLVED,
        "grid": board,
    }
    if outcome is not Outcome.SOLVED:
        result["message"] = NO_SOLUTION_MESSAGES[outcome]
    return result


def _check(data):
    grid = _payload(data).get('grid')
    validate_grid(grid)
    conflicts = find_conflicts(grid)
    return {"ok": not conflicts, "conflicts": conflicts, "complete": is_solved(grid)}


@bp.route("/")
def index():
    return "Sudoku Backend is running!"


@bp.route("/generate", methods=['POST'])
@cross_origin()
def generate_route():
    try:
        data = request.get_json(silent=True)
        return jsonify(_generate(data))
    except BAD_INPUT as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        log.exception("Generation failed")
        return jsonify({"error": str(e)}), 500


@bp.route("/solve", methods=['POST'])
@cross_origin()
def solve_route():
    try:
        data = request.get_json(silent=True)
        return jsonify(_solve(data))
    except BAD_INPUT as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        log.exception("Solve failed")
        return jsonify({"error": str(e)}), 500


@bp.route("/check", methods=['POST'])
@cross_origin()
def check_route():
    try:
        data = request.get_json(silent=True)
        return jsonify(_check(data))
    except BAD_INPUT as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        log.exception("Check failed")
        return jsonify({"error": str(e)}), 500


def on_generate(data):
    try:
        result = _generate(data)
    except BAD_INPUT as e:
        emit('error', {"message": str(e)})
        return
    emit('puzzle_generated', result)


def on_solve(data):
    try:
        result = _solve(data)
    except BAD_INPUT as e:
        emit('error', {"message": str(e)})
        return
    emit('solve_result', result)


def on_check(data):
    try:
        result = _check(data)
    except BAD_INPUT as e:
        emit('error', {"message": str(e)})
        return
    emit('check_result', result)


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env('SUDOKU')
    if config:
        app.config.update(config)

    CORS(app)
    app.register_blueprint(bp)

    socketio = SocketIO(app,
                        cors_allowed_origins=app.config['CORS_ALLOWED_ORIGINS'],
                        async_mode=app.config['SOCKETIO_ASYNC_MODE'])
    socketio.on_event('generate', on_generate)
    socketio.on_event('solve', on_solve)
    socketio.on_event('check', on_check)
    return app
