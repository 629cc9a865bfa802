# routes/strongs.py
from flask import Blueprint, jsonify
import logging

from utils.rate_limit import rate_limited
from utils.strongs import (
    GREEK_RANGE,
    HEBREW_RANGE,
    get_lexicon,
    is_lookup_key,
    normalize_strongs_number,
)

strongs_bp = Blueprint('strongs', __name__)
logger = logging.getLogger(__name__)


@strongs_bp.route('/<number>', methods=['GET'])
@rate_limited('strongs')
def get_strongs_entry(number):
    # H00430 and H430 name the same entry
    normalized = normalize_strongs_number(number)
    if not is_lookup_key(normalized):
        return jsonify({
            'error': f"Invalid Strong's number format: {number}. Expected format: H1234 or G1234"
        }), 400

    try:
        entry = get_lexicon().lookup(normalized)
    except Exception as e:
        logger.error(f"Error looking up Strong's {normalized}: {str(e)}", exc_info=True)
        return jsonify({'error': "Failed to load Strong's entry"}), 500

    if entry is None:
        suggestion = HEBREW_RANGE if normalized.startswith('H') else GREEK_RANGE
        return jsonify({
            'error': f"Strong's number not found: {normalized}",
            'suggestion': suggestion,
        }), 404

    return jsonify(entry)
