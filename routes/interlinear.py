# routes/interlinear.py
from flask import Blueprint, jsonify, request
import logging

from utils.books import is_valid_book_code
from utils.interlinear import (
    get_chapter_from_book_data,
    get_verse_from_book_data,
    load_book_data,
)
from utils.rate_limit import rate_limited
from utils.verse_parser import parse_positive_int

interlinear_bp = Blueprint('interlinear', __name__)
logger = logging.getLogger(__name__)


@interlinear_bp.route('/<book>/<chapter>', methods=['GET'])
@rate_limited('interlinear')
def get_interlinear(book, chapter):
    """Word-by-word data for a chapter, or a single verse with ?verse=n."""
    book_code = book.upper()
    if not is_valid_book_code(book_code):
        return jsonify({'error': f'Invalid book code: {book}'}), 400

    chapter_number = parse_positive_int(chapter)
    if chapter_number is None:
        return jsonify({'error': 'Invalid chapter number'}), 400

    verse_param = request.args.get('verse')
    verse_number = None
    if verse_param is not None:
        verse_number = parse_positive_int(verse_param)
        if verse_number is None:
            return jsonify({'error': 'Invalid verse number'}), 400

    book_data = load_book_data(book_code)
    if book_data is None:
        return jsonify({'error': f'Interlinear data not available for {book_code}'}), 404

    if verse_number is not None:
        verse = get_verse_from_book_data(book_data, chapter_number, verse_number)
        if verse is None:
            return jsonify({'error': f'Verse not found: {book_code} {chapter_number}:{verse_number}'}), 404
        verses = [verse]
    else:
        verses = get_chapter_from_book_data(book_data, chapter_number)
        if verses is None:
            return jsonify({'error': f'Chapter not found: {book_code} {chapter_number}'}), 404

    return jsonify({
        'book': book_code,
        'chapter': chapter_number,
        'verses': verses,
    })
