"""
Generic HTML table -> list-of-dicts extractor.

Knows nothing about Office versions: it walks the <tr> rows of one table and
turns every data row into {column title: cell text}.

  - A row whose first cell is a <th> is a header row. Its texts become the
    column titles for every row after it (a later header row replaces them).
  - Rows seen before any header get placeholder titles P1..P(n+2), n being
    that row's cell count.
  - Cells past the end of the title list, or under an empty title, are dropped.
"""

from typing import Dict, Iterator, List, Union

from bs4 import BeautifulSoup, Tag

from office_errors import NotFoundError, ParseError

Record = Dict[str, str]


def _as_soup(document: Union[str, bytes, BeautifulSoup]) -> BeautifulSoup:
    if isinstance(document, BeautifulSoup):
        return document
    if not isinstance(document, (str, bytes)):
        raise ParseError(f"expected HTML text or BeautifulSoup, got {type(document).__name__}")
    return BeautifulSoup(document, "html.parser")


def _row_cells(row: Tag) -> List[Tag]:
    return row.find_all(["td", "th"], recursive=False)


def _placeholder_titles(cell_count: int) -> List[str]:
    # n + 2 titles for an n-cell row; only the first n are ever zipped
    return [f"P{i}" for i in range(1, cell_count + 3)]


def extract_table(document, table_index: int = 0) -> Iterator[Record]:
    """
    Return a lazy iterator of records for the table_index-th <table> (0-based,
    document order). The table lookup happens eagerly, so a missing table
    raises NotFoundError here and not halfway through iteration.
    """
    soup = _as_soup(document)
    if table_index < 0:
        raise NotFoundError(f"table index must be >= 0, got {table_index}")
    tables = soup.find_all("table")
    if table_index >= len(tables):
        raise NotFoundError(f"no <table> at index {table_index} (page has {len(tables)})")
    return _iter_records(tables[table_index])


def _iter_records(table: Tag) -> Iterator[Record]:
    titles: List[str] = []
    for row in table.find_all("tr"):
        # skip rows that belong to a table nested inside this one
        if row.find_parent("table") is not table:
            continue
        cells = _row_cells(row)
        if not cells:
            continue

        if cells[0].name == "th":
            titles = [c.get_text().strip() for c in cells]
            continue

        if not titles:
            titles = _placeholder_titles(len(cells))

        record: Record = {}
        for title, cell in zip(titles, cells):
            if not title or title in record:
                continue
            record[title] = cell.get_text().strip()
        yield record
