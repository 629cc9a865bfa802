# scripts/convert_bsb_tables.py
"""
Convert the BSB translation tables TSV into one interlinear JSON file per book.

Usage: python scripts/convert_bsb_tables.py [input.tsv] [output_dir]

Defaults: scripts/data/bsb_tables.tsv -> data/bsb/
"""
import json
import re
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
backend_dir = current_dir.parent
sys.path.insert(0, str(backend_dir))

from utils.books import get_book_code

# Column indices in the TSV
COL_ORIGINAL = 6
COL_TRANSLITERATION = 7
COL_PARSING = 8
COL_PARSING_ALT = 9
COL_STRONGS_HEBREW = 10
COL_STRONGS_GREEK = 11
COL_VERSE_REF = 12
COL_ENGLISH = 18

PLACEHOLDERS = {'', '-', 'vvv'}

_VERSE_REF_PATTERN = re.compile(r'^(.+?)\s+(\d+):(\d+)$')
_BRACKETS = re.compile(r'[{}⧼⧽()〈〉\[\]‹›|]')


def parse_verse_ref(ref):
    """'1 John 3:16' -> ('1 John', '3', '16'), or None."""
    if not ref or ref == '-':
        return None
    match = _VERSE_REF_PATTERN.match(ref.strip())
    if not match:
        return None
    book, chapter, verse = match.groups()
    return book.strip(), chapter, verse


def format_strongs_number(hebrew, greek):
    """Padded G#### / H#### for a word; Greek wins when both are present."""
    for prefix, value in (('G', greek), ('H', hebrew)):
        value = (value or '').strip()
        if value and value != '-':
            digits = re.match(r'\d+', value)
            if digits:
                return f"{prefix}{int(digits.group()):04d}"
    return ''


def clean_original(text):
    return _BRACKETS.sub('', text).strip()


def _column(cols, index):
    return cols[index].strip() if len(cols) > index else ''


def convert_lines(lines):
    """Build {book_code: {"book", "chapters"}} from TSV lines (header first).

    Returns (books, processed, skipped).
    """
    books = {}
    current_ref = None
    position = 0
    processed = 0
    skipped = 0

    for line in list(lines)[1:]:
        if not line or not line.strip():
            continue
        cols = line.rstrip('\r\n').split('\t')

        verse_ref = _column(cols, COL_VERSE_REF)
        if verse_ref and verse_ref != '-':
            parsed = parse_verse_ref(verse_ref)
            if parsed:
                current_ref = parsed
                position = 0

        original = _column(cols, COL_ORIGINAL)
        transliteration = _column(cols, COL_TRANSLITERATION)
        if original in PLACEHOLDERS or transliteration in PLACEHOLDERS:
            continue

        english = _column(cols, COL_ENGLISH)
        if current_ref is None or english in PLACEHOLDERS:
            skipped += 1
            continue

        book_name, chapter, verse = current_ref
        book_code = get_book_code(book_name)
        if not book_code:
            skipped += 1
            continue

        book = books.setdefault(book_code, {'book': book_code, 'chapters': {}})
        words = book['chapters'].setdefault(chapter, {}).setdefault(verse, [])

        word = {
            'position': position,
            'text': english,
            'original': clean_original(original),
            'transliteration': transliteration,
            'strongsNumber': format_strongs_number(
                _column(cols, COL_STRONGS_HEBREW), _column(cols, COL_STRONGS_GREEK)
            ),
        }
        morphology = _column(cols, COL_PARSING) or _column(cols, COL_PARSING_ALT)
        if morphology and morphology != '-':
            word['morphology'] = morphology

        words.append(word)
        position += 1
        processed += 1

        if processed % 100000 == 0:
            print(f"Processed {processed} words...")

    return books, processed, skipped


def write_books(books, output_dir):
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    total_size = 0
    for book_code, book_data in books.items():
        output_path = output_dir / f"{book_code}.json"
        payload = json.dumps(book_data, ensure_ascii=False, separators=(',', ':'))
        output_path.write_text(payload, encoding='utf-8')
        total_size += len(payload)
        print(f"  {book_code}.json: {len(payload) / 1024:.1f} KB")
    return total_size


def main(input_path, output_dir):
    input_path = Path(input_path)
    if not input_path.exists():
        print(f"Input file not found: {input_path}")
        print("Download the BSB translation tables and save them as TSV first.")
        sys.exit(1)

    print(f"Reading BSB translation tables from: {input_path}")
    with open(input_path, 'r', encoding='utf-8') as f:
        books, processed, skipped = convert_lines(f)

    print(f"\nProcessed {processed} words, skipped {skipped}")
    print(f"Generated data for {len(books)} books")

    total_size = write_books(books, output_dir)
    print(f"\nTotal output size: {total_size / 1024 / 1024:.2f} MB")
    print("Conversion complete!")


if __name__ == '__main__':
    if len(sys.argv) > 3:
        print("Usage: python convert_bsb_tables.py [input.tsv] [output_dir]")
        sys.exit(1)

    input_path = sys.argv[1] if len(sys.argv) > 1 else current_dir / 'data' / 'bsb_tables.tsv'
    output_dir = sys.argv[2] if len(sys.argv) > 2 else backend_dir / 'data' / 'bsb'
    main(input_path, output_dir)
