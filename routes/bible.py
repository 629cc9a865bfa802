# routes/bible.py
from flask import Blueprint, jsonify
import logging

from utils.bible_api import BibleAPIError, get_aggregator
from utils.books import get_book_name, is_valid_book_code
from utils.rate_limit import rate_limited
from utils.verse_parser import parse_positive_int

bible_bp = Blueprint('bible', __name__)
logger = logging.getLogger(__name__)


@bible_bp.route('/<book>/<chapter>', methods=['GET'])
@rate_limited('bible')
def get_chapter(book, chapter):
    """Full BSB chapter text."""
    book_code = book.upper()
    if not is_valid_book_code(book_code):
        return jsonify({'error': f'Invalid book code: {book}'}), 400

    chapter_number = parse_positive_int(chapter)
    if chapter_number is None:
        return jsonify({'error': 'Invalid chapter number'}), 400

    try:
        chapter_data = get_aggregator().fetch_chapter(book_code, chapter_number)
    except BibleAPIError as e:
        logger.error(f"Error fetching {book_code} {chapter_number}: {str(e)}")
        return jsonify({'error': 'Failed to fetch chapter'}), 500
    except Exception as e:
        logger.error(f"Unexpected error fetching {book_code} {chapter_number}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch chapter'}), 500

    if chapter_data is None:
        return jsonify({'error': f'{get_book_name(book_code)} {chapter_number} not found'}), 404

    return jsonify(chapter_data.to_json())
