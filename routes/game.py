# routes/game.py
from datetime import datetime, timezone
from flask import Blueprint, jsonify, request
import logging

from pydantic import ValidationError

import config
from database import get_db
from models.game import VALID_DIFFICULTIES, VALID_MODES
from schemas.profile_schemas import GameProgressUpdate
from utils.auth import token_required
from utils.game import load_questions, pick_question
from utils.rate_limit import rate_limited

game_bp = Blueprint('game', __name__)
logger = logging.getLogger(__name__)

PROGRESS_COUNTERS = ('questions_answered', 'correct_answers', 'current_streak', 'best_streak')


@game_bp.route('', methods=['GET'])
@rate_limited('game')
def get_question():
    mode = request.args.get('mode') or None
    difficulty = request.args.get('difficulty') or None

    if mode is not None and mode not in VALID_MODES:
        return jsonify({'error': 'Invalid mode'}), 400
    if difficulty is not None and difficulty not in VALID_DIFFICULTIES:
        return jsonify({'error': 'Invalid difficulty'}), 400

    question = pick_question(load_questions(config.questions_file()), mode, difficulty)
    if question is None:
        return jsonify({'error': 'No questions available for selected criteria'}), 404

    return jsonify(question)


@game_bp.route('/progress', methods=['GET'])
@token_required
def get_progress(current_user):
    try:
        with get_db() as client:
            response = client.table('game_progress').select('*').eq('user_id', current_user).execute()
    except Exception as e:
        logger.error(f"Error fetching game progress: {str(e)}")
        return jsonify({'error': 'Failed to fetch progress'}), 500

    return jsonify(response.data or [])


@game_bp.route('/progress', methods=['POST'])
@token_required
def save_progress(current_user):
    """Create or update the caller's progress row for one game mode."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Invalid JSON body'}), 400
    if not body.get('mode'):
        return jsonify({'error': 'Mode is required'}), 400

    try:
        payload = GameProgressUpdate.model_validate(body)
    except ValidationError as e:
        logger.info(f"Rejected game progress payload: {e}")
        return jsonify({'error': 'Invalid mode or counters'}), 400

    counters = payload.model_dump(exclude_none=True, include=set(PROGRESS_COUNTERS))
    now = datetime.now(timezone.utc).isoformat()

    try:
        with get_db() as client:
            existing = (
                client.table('game_progress')
                .select('id')
                .eq('user_id', current_user)
                .eq('mode', payload.mode.value)
                .execute()
            )
            if existing.data:
                response = (
                    client.table('game_progress')
                    .update({**counters, 'last_played_at': now})
                    .eq('id', existing.data[0]['id'])
                    .execute()
                )
            else:
                new_progress = {
                    'user_id': current_user,
                    'mode': payload.mode.value,
                    **{name: 0 for name in PROGRESS_COUNTERS},
                    **counters,
                    'last_played_at': now,
                }
                response = client.table('game_progress').insert(new_progress).execute()
    except Exception as e:
        logger.error(f"Error saving game progress: {str(e)}")
        return jsonify({'error': 'Failed to save progress'}), 500

    if not response.data:
        return jsonify({'error': 'Failed to save progress'}), 500
    return jsonify(response.data[0])
