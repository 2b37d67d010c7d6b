# budget_analyzer/core/categorizer.py
import logging
from typing import Iterable, List, Sequence, Tuple

import anyio

from budget_analyzer.core.models import CategorizedTransaction, NormalizedTransaction

logger = logging.getLogger(__name__)

INCOME = 'Income'
UNCATEGORIZED = 'Uncategorized'

CategoryTable = Sequence[Tuple[str, Sequence[str]]]

# Order matters: on equal scores the earlier category wins.
SPENDING_CATEGORIES: CategoryTable = (
    ('Food & Dining', (
        'restaurant', 'cafe', 'food', 'dining', 'meal', 'lunch', 'dinner', 'breakfast',
        'grocery', 'supermarket', 'market', 'bakery', 'butcher', 'deli', 'takeout',
        'delivery', 'pizza', 'burger', 'sushi', 'coffee', 'starbucks', 'mcdonalds',
    )),
    ('Transportation', (
        'gas', 'fuel', 'petrol', 'uber', 'lyft', 'taxi', 'cab', 'parking', 'toll',
        'metro', 'subway', 'bus', 'train', 'airline', 'flight', 'car', 'auto',
        'maintenance', 'repair', 'insurance', 'registration', 'dmv',
    )),
    ('Entertainment', (
        'netflix', 'spotify', 'hulu', 'amazon prime', 'youtube', 'movie', 'cinema',
        'theater', 'concert', 'show', 'game', 'gaming', 'steam', 'playstation',
        'xbox', 'nintendo', 'ticket', 'event', 'festival', 'amusement', 'park',
    )),
    ('Shopping', (
        'amazon', 'walmart', 'target', 'costco', 'best buy', 'home depot', 'lowes',
        'clothing', 'shoes', 'apparel', 'electronics', 'furniture', 'home', 'decor',
        'jewelry', 'accessories', 'department store', 'mall', 'outlet',
    )),
    ('Utilities', (
        'electric', 'electricity', 'gas', 'water', 'sewer', 'trash', 'waste',
        'internet', 'cable', 'phone', 'telephone', 'mobile', 'cell', 'utility',
        'power', 'energy', 'heating', 'cooling', 'ac', 'hvac',
    )),
    ('Healthcare', (
        'doctor', 'hospital', 'medical', 'pharmacy', 'drug', 'medicine', 'prescription',
        'dental', 'vision', 'eye', 'optometrist', 'dentist', 'physician', 'clinic',
        'therapy', 'counseling', 'psychologist', 'psychiatrist', 'insurance',
    )),
    ('Education', (
        'school', 'college', 'university', 'tuition', 'fee', 'book', 'textbook',
        'course', 'class', 'training', 'workshop', 'seminar', 'conference',
        'student loan', 'scholarship', 'grant', 'library', 'museum',
    )),
    ('Housing', (
        'rent', 'mortgage', 'home', 'house', 'apartment', 'condo', 'property',
        'maintenance', 'repair', 'improvement', 'renovation', 'furniture', 'appliance',
        'hoa', 'association', 'property tax', 'insurance',
    )),
    ('Personal Care', (
        'haircut', 'salon', 'spa', 'massage', 'beauty', 'cosmetic', 'makeup',
        'skincare', 'gym', 'fitness', 'workout', 'exercise', 'yoga', 'pilates',
        'personal trainer', 'nutritionist', 'dietitian',
    )),
    ('Travel', (
        'hotel', 'lodging', 'accommodation', 'vacation', 'trip', 'journey', 'tour',
        'cruise', 'resort', 'airbnb', 'booking', 'expedia', 'hotels.com',
        'souvenir', 'tourist', 'attraction', 'museum', 'gallery',
    )),
)


def score_description(description: str, categories: CategoryTable = SPENDING_CATEGORIES) -> Tuple[str, int]:
    """Return the best (category, score) for a description.

    The score is the number of a category's keywords found in the
    lowercased description.
    """
    name = (description or '').lower()
    best_category, best_score = UNCATEGORIZED, 0
    for cat, keywords in categories:
        score = sum(1 for kw in keywords if kw in name)
        if score > best_score:
            best_category, best_score = cat, score
    return best_category, best_score


def confidence_for(score: int) -> float:
    if score <= 0:
        return 0.3
    return min(0.9, 0.5 + score * 0.1)


def categorize(tx: NormalizedTransaction, categories: CategoryTable = SPENDING_CATEGORIES) -> CategorizedTransaction:
    cat, score = score_description(tx.description, categories)
    if tx.amount > 0:
        cat = INCOME

    return CategorizedTransaction(
        date=tx.date,
        description=tx.description,
        amount=tx.amount,
        category=cat,
        confidence=confidence_for(score),
        original_category=tx.category or None,
    )


def categorize_transactions(
    transactions: Iterable[NormalizedTransaction],
    categories: CategoryTable = SPENDING_CATEGORIES,
) -> List[CategorizedTransaction]:
    categorized = [categorize(tx, categories) for tx in transactions]
    logger.debug(
        "Categorized %d transaction(s), %d uncategorized",
        len(categorized),
        sum(1 for t in categorized if t.category == UNCATEGORIZED),
    )
    return categorized


async def categorize_transactions_async(
    transactions: Iterable[NormalizedTransaction],
    categories: CategoryTable = SPENDING_CATEGORIES,
    delay: float = 0,
) -> List[CategorizedTransaction]:
    """Same as categorize_transactions, optionally pausing first so a UI can show progress."""
    if delay:
        await anyio.sleep(delay)
    return categorize_transactions(transactions, categories)


def categories_from_config(entries) -> CategoryTable:
    """Build an ordered category table from a YAML list of ``{name, keywords}``."""
    if entries is None:
        return SPENDING_CATEGORIES
    if not isinstance(entries, list):
        raise ValueError(
            "'categories' must be a list of {name, keywords} entries to keep their order"
        )
    table = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get('name'):
            raise ValueError(f"Invalid category entry: {entry}")
        keywords = tuple(str(kw).lower() for kw in entry.get('keywords') or [])
        table.append((str(entry['name']), keywords))
    return tuple(table)
