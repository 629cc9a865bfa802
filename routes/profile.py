# routes/profile.py
from flask import Blueprint, jsonify, request
import logging

from pydantic import ValidationError

from database import get_db
from schemas.profile_schemas import ProfileUpdate
from utils.auth import token_required

profile_bp = Blueprint('profile', __name__)
logger = logging.getLogger(__name__)


@profile_bp.route('/profile', methods=['GET'])
@token_required
def get_profile(current_user):
    try:
        with get_db() as client:
            response = client.table('profiles').select('*').eq('id', current_user).execute()
    except Exception as e:
        logger.error(f"Error fetching profile: {str(e)}")
        return jsonify({'error': 'Failed to fetch profile'}), 500

    if not response.data:
        return jsonify({'error': 'Profile not found'}), 404
    return jsonify(response.data[0])


@profile_bp.route('/profile', methods=['PATCH'])
@token_required
def update_profile(current_user):
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Invalid JSON body'}), 400

    try:
        payload = ProfileUpdate.model_validate(body)
    except ValidationError as e:
        logger.info(f"Rejected profile update: {e}")
        if 'preferred_translation' in body:
            return jsonify({'error': 'Invalid translation'}), 400
        return jsonify({'error': 'Invalid profile update'}), 400

    updates = payload.model_dump(mode='json', exclude_unset=True)
    if not updates:
        return jsonify({'error': 'No valid fields to update'}), 400

    try:
        with get_db() as client:
            response = client.table('profiles').update(updates).eq('id', current_user).execute()
    except Exception as e:
        logger.error(f"Error updating profile: {str(e)}")
        return jsonify({'error': 'Failed to update profile'}), 500

    if not response.data:
        return jsonify({'error': 'Profile not found'}), 404
    return jsonify(response.data[0])
