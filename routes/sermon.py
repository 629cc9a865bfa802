# routes/sermon.py
from flask import Blueprint, jsonify, request
import logging

from pydantic import ValidationError

from database import get_db
from schemas.sermon_schemas import (
    ReflectionRequest,
    SermonNoteCreate,
    SermonNoteUpdate,
    SermonRequest,
)
from utils.auth import token_required
from utils.llm import generate_reflection_questions, generate_sermon_outline
from utils.rate_limit import rate_limited

sermon_bp = Blueprint('sermon', __name__)
logger = logging.getLogger(__name__)


def validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = '.'.join(str(part) for part in first.get('loc', ()))
    return f"{field}: {first.get('msg')}" if field else first.get('msg', 'Invalid request body')


@sermon_bp.route('/sermon', methods=['POST'])
@rate_limited('sermon')
def create_sermon_outline():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Invalid JSON body'}), 400

    try:
        payload = SermonRequest.model_validate(body)
    except ValidationError as e:
        return jsonify({'error': 'Missing passage parameter', 'details': validation_message(e)}), 400

    try:
        outline = generate_sermon_outline(payload.passage, payload.title)
    except Exception as e:
        logger.error(f"Error generating sermon outline: {str(e)}", exc_info=True)
        outline = None

    if outline is None:
        return jsonify({'error': 'Failed to generate outline'}), 500

    return jsonify({
        'title': payload.title,
        'passage': payload.passage,
        **outline,
    })


@sermon_bp.route('/reflection', methods=['POST'])
@rate_limited('sermon')
def create_reflection_questions():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Invalid JSON body'}), 400

    try:
        payload = ReflectionRequest.model_validate(body)
    except ValidationError as e:
        return jsonify({'error': 'Invalid reflection request', 'details': validation_message(e)}), 400

    try:
        questions = generate_reflection_questions(payload.passage, payload.count)
    except Exception as e:
        logger.error(f"Error generating reflection questions: {str(e)}", exc_info=True)
        questions = None

    if questions is None:
        return jsonify({'error': 'Failed to generate questions'}), 500

    return jsonify({'questions': questions})


@sermon_bp.route('/sermon/notes', methods=['GET'])
@token_required
def get_sermon_notes(current_user):
    note_id = request.args.get('id')
    try:
        with get_db() as client:
            query = client.table('sermon_notes').select('*').eq('user_id', current_user)
            if note_id:
                response = query.eq('id', note_id).execute()
            else:
                response = query.order('created_at', desc=True).execute()
            notes = response.data or []
    except Exception as e:
        logger.error(f"Error fetching sermon notes: {str(e)}")
        return jsonify({'error': 'Failed to fetch notes'}), 500

    if note_id:
        if not notes:
            return jsonify({'error': 'Note not found'}), 404
        return jsonify(notes[0])
    return jsonify(notes)


@sermon_bp.route('/sermon/notes', methods=['POST'])
@token_required
def create_sermon_note(current_user):
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Invalid JSON body'}), 400

    try:
        payload = SermonNoteCreate.model_validate(body)
    except ValidationError as e:
        return jsonify({'error': 'Passage reference is required', 'details': validation_message(e)}), 400

    new_note = {'user_id': current_user, **payload.model_dump()}
    try:
        with get_db() as client:
            response = client.table('sermon_notes').insert(new_note).execute()
    except Exception as e:
        logger.error(f"Error creating sermon note: {str(e)}")
        return jsonify({'error': 'Failed to create note'}), 500

    if not response.data:
        return jsonify({'error': 'Failed to create note'}), 500
    return jsonify(response.data[0]), 201


@sermon_bp.route('/sermon/notes', methods=['PATCH'])
@token_required
def update_sermon_note(current_user):
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Invalid JSON body'}), 400

    try:
        payload = SermonNoteUpdate.model_validate(body)
    except ValidationError as e:
        return jsonify({'error': 'Note ID is required', 'details': validation_message(e)}), 400

    updates = payload.model_dump(exclude_unset=True, exclude={'id'})
    if not updates:
        return jsonify({'error': 'No valid fields to update'}), 400

    try:
        with get_db() as client:
            response = (
                client.table('sermon_notes')
                .update(updates)
                .eq('id', payload.id)
                .eq('user_id', current_user)
                .execute()
            )
    except Exception as e:
        logger.error(f"Error updating sermon note {payload.id}: {str(e)}")
        return jsonify({'error': 'Failed to update note'}), 500

    if not response.data:
        return jsonify({'error': 'Note not found'}), 404
    return jsonify(response.data[0])


@sermon_bp.route('/sermon/notes', methods=['DELETE'])
@token_required
def delete_sermon_note(current_user):
    note_id = request.args.get('id')
    if not note_id:
        return jsonify({'error': 'Note ID is required'}), 400

    try:
        with get_db() as client:
            client.table('sermon_notes').delete().eq('id', note_id).eq('user_id', current_user).execute()
    except Exception as e:
        logger.error(f"Error deleting sermon note {note_id}: {str(e)}")
        return jsonify({'error': 'Failed to delete note'}), 500

    return jsonify({'success': True})
