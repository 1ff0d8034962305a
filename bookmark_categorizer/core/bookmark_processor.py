"""
Categorization of imported and stored bookmarks.
Filters raw bookmark records, assigns a category id to each one and collects
per-category statistics for the import. Stored bookmarks can be re-run through
the categorizer to find the ones whose category changed.
"""

import argparse
import json
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..config.constants import DEFAULT_BOOKMARK_CATEGORIES
from ..config.logging_config import setup_logging
from .categories import Category, load_categories
from .ml_categorizer import MLCategorizer, create_categorizer

logger = logging.getLogger(__name__)

IMPORTED_AUTHOR_NAME = 'Imported Tweet'
IMPORTED_USERNAME = 'imported'


def to_internal_bookmark(bookmark: Dict[str, Any], category_id: int) -> Dict[str, Any]:
    """Convert an exported tweet record into the stored bookmark shape"""
    author = bookmark.get('author') or {}
    author_username = author.get('username') or IMPORTED_USERNAME
    tweet_id = str(bookmark['id'])

    if author_username == IMPORTED_USERNAME:
        url = f"https://twitter.com/status/{tweet_id}"
    else:
        url = f"https://twitter.com/{author_username}/status/{tweet_id}"

    return {
        'tweet_id': tweet_id,
        'category_id': category_id,
        'author_name': author.get('name') or IMPORTED_AUTHOR_NAME,
        'author_username': author_username,
        'author_profile_image': author.get('profile_image_url'),
        'content': bookmark['text'],
        'created_at': bookmark.get('created_at') or datetime.now().isoformat(),
        'url': url,
    }


class BookmarkProcessor:
    """Assigns categories to a list of imported bookmark dicts"""

    def __init__(self, categories: Iterable, categorizer: Optional[MLCategorizer] = None):
        self.categories: List[Category] = load_categories(categories)
        self.categorizer = categorizer or create_categorizer(self.categories)
        logger.info(f"✅ BookmarkProcessor initialized with {len(self.categories)} categories")

    def process_bookmarks(
        self,
        bookmarks: List[Dict[str, Any]],
        existing_ids: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """Categorize imported bookmarks.

        Args:
            bookmarks: Exported tweet records with at least 'id' and 'text',
                optionally 'author' and 'created_at'
            existing_ids: Bookmark ids already stored, skipped as duplicates

        Returns:
            Dict with totals, the categorized bookmarks in stored form
            (see to_internal_bookmark) and a count per category id
        """
        start_time = datetime.now()
        seen = {str(bookmark_id) for bookmark_id in (existing_ids or [])}
        stats = {
            'total': len(bookmarks),
            'processed': 0,
            'skipped': 0,
            'categorized': {category.id: 0 for category in self.categories}
        }

        to_categorize = []
        for bookmark in bookmarks:
            bookmark_id = bookmark.get('id') if isinstance(bookmark, dict) else None
            text = bookmark.get('text') if isinstance(bookmark, dict) else None
            if not bookmark_id or not text:
                logger.warning(f"Skipping bookmark without id or text: {bookmark}")
                stats['skipped'] += 1
                continue
            if str(bookmark_id) in seen:
                logger.debug(f"Skipping duplicate bookmark {bookmark_id}")
                stats['skipped'] += 1
                continue
            seen.add(str(bookmark_id))
            to_categorize.append(bookmark)

        category_ids = self.categorizer.categorize_batch([b['text'] for b in to_categorize])

        processed = []
        for bookmark, category_id in zip(to_categorize, category_ids):
            processed.append(to_internal_bookmark(bookmark, category_id))
            stats['categorized'][category_id] = stats['categorized'].get(category_id, 0) + 1

        stats['processed'] = len(processed)
        stats['bookmarks'] = processed
        stats['processing_time_seconds'] = (datetime.now() - start_time).total_seconds()

        logger.info(f"Completed! Categorized {stats['processed']}/{stats['total']} bookmarks "
                    f"({stats['skipped']} skipped)")
        return stats

    def recategorize_bookmarks(self, bookmarks: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Re-run categorization over stored bookmarks.

        Args:
            bookmarks: Stored records with 'id', 'content' and 'category_id'

        Returns:
            Dict with the total, the number of bookmarks whose category
            changed, a count per category id and the list of changes to save
        """
        stats = {
            'total': len(bookmarks),
            'updated': 0,
            'categorized': {category.id: 0 for category in self.categories},
            'updates': []
        }

        new_ids = self.categorizer.categorize_batch([b.get('content') or '' for b in bookmarks])

        for bookmark, category_id in zip(bookmarks, new_ids):
            stats['categorized'][category_id] = stats['categorized'].get(category_id, 0) + 1
            if bookmark.get('category_id') == category_id:
                continue

            stats['updates'].append({
                'id': bookmark['id'],
                'previous_category_id': bookmark.get('category_id'),
                'category_id': category_id
            })
            stats['updated'] += 1

        logger.info(f"Recategorized {stats['total']} bookmarks, {stats['updated']} changed category")
        return stats


def load_export(path: Path) -> Dict[str, Any]:
    """Read a bookmark export: a list of bookmarks or {'categories': [...], 'bookmarks': [...]}"""
    with open(path, encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, list):
        data = {'bookmarks': data}
    if not isinstance(data, dict) or not isinstance(data.get('bookmarks'), list):
        raise ValueError(f"{path} does not contain a list of bookmarks")

    data.setdefault('categories', None)
    return data


def main(argv: Optional[List[str]] = None) -> int:
    """Categorize a bookmark export file and print the category distribution"""
    parser = argparse.ArgumentParser(description='Categorize exported bookmarks')
    parser.add_argument('export', type=Path, help='JSON file with bookmarks (and optionally categories)')
    parser.add_argument('--log-level', default=None, help='Override LOG_LEVEL')
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        export = load_export(args.export)
        categories = load_categories(export['categories'] or DEFAULT_BOOKMARK_CATEGORIES)
        processor = BookmarkProcessor(categories)
        result = processor.process_bookmarks(export['bookmarks'])
    except Exception as e:
        logger.error(f"❌ Error processing bookmarks: {e}")
        logger.error(traceback.format_exc())
        return 1

    names = {category.id: category.name for category in categories}
    print(f"\n✅ Processing complete!")
    print(f"Categorized: {result['processed']}/{result['total']} bookmarks")
    print(f"Skipped: {result['skipped']}")
    print("\nCategory Distribution:")
    for category_id, count in result['categorized'].items():
        print(f"{names.get(category_id, category_id)}: {count} bookmarks")
    return 0


if __name__ == "__main__":
    sys.exit(main())
