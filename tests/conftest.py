import pytest

from booksearch.catalog.schemas import ResultRecord, SearchResultSet


def make_result(*titles, total_found=None, page=1):
    records = [ResultRecord(title=t, key=f"/works/OL{i}W") for i, t in enumerate(titles, start=1)]
    return SearchResultSet(
        records=records,
        total_found=len(records) if total_found is None else total_found,
        current_page=page,
    )


@pytest.fixture
def sample_doc():
    return {
        "key": "/works/OL3702561W",
        "title": "Clean Code",
        "author_name": ["Robert C. Martin", "Dean Wampler"],
        "author_key": ["OL216228A"],
        "first_publish_year": 2007,
        "edition_count": 24,
        "language": ["eng", "spa"],
        "subject": ["Agile software development", "Computer software", "Quality control"],
        "cover_i": 8043015,
        "isbn": ["9780132350884", "0132350882"],
        "id_amazon": ["0132350882"],
    }
