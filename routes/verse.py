# routes/verse.py
from flask import Blueprint, jsonify, request
import logging

from models.bible import Translation
from utils.bible_api import fetch_verse
from utils.rate_limit import rate_limited
from utils.verse_parser import parse_verse_reference

verse_bp = Blueprint('verse', __name__)
logger = logging.getLogger(__name__)


@verse_bp.route('', methods=['GET'])
@rate_limited('verse')
def get_verse():
    reference = request.args.get('reference', '').strip()
    translation = request.args.get('translation', Translation.ESV.value)

    if not reference:
        return jsonify({'error': 'Reference is required'}), 400

    parsed = parse_verse_reference(reference)
    if parsed is None:
        return jsonify({'error': 'Invalid verse reference format'}), 400

    try:
        verse_data = fetch_verse(parsed, translation)
    except Exception as e:
        logger.error(f"Error fetching verse '{reference}': {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch verse'}), 500

    if verse_data is None:
        return jsonify({'error': 'Verse not found or translation not available'}), 404

    return jsonify(verse_data.to_json())
