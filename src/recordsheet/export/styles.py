"""
recordsheet - Default Style Selection

Decides which style each data column receives when the caller did not supply
a uniform row style. Styles are described as plain dictionaries and minted
into reusable handles by the sink; this module only chooses descriptions.

Default styles by column type:
- time: combined date and time number format
- date: date-only number format
- string / none: wrapped text
- integer / float: no style (sink default)
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from recordsheet.models import ColumnType

TIME_FORMAT = 'dd-mm-yyyy hh:mm:ss'
DATE_FORMAT = 'dd-mm-yyyy'

TIME_STYLE: Dict[str, Any] = {'format_code': TIME_FORMAT}
DATE_STYLE: Dict[str, Any] = {'format_code': DATE_FORMAT}
WRAP_STYLE: Dict[str, Any] = {'alignment': {'wrap_text': True}}

_DEFAULT_STYLES = {
    ColumnType.TIME: TIME_STYLE,
    ColumnType.DATE: DATE_STYLE,
    ColumnType.STRING: WRAP_STYLE,
    ColumnType.NONE: WRAP_STYLE,
}


def default_style_for(column_type: ColumnType) -> Optional[Dict[str, Any]]:
    """Return the default style description for a column type, or None."""
    return _DEFAULT_STYLES.get(ColumnType.parse(column_type))


def select_styles(
    sink,
    types: Sequence[ColumnType],
    row_style: Optional[Dict[str, Any]] = None,
    header_style: Optional[Dict[str, Any]] = None,
) -> Tuple[Union[str, List[Optional[str]], None], Optional[str]]:
    """
    Choose the data-cell and header styles for an export.

    The header style defaults to the row style. An explicit row style is
    applied to every column; otherwise each column gets the default for its
    type, with each default minted only once per call.

    Args:
        sink: Workbook sink providing ``add_style(description) -> handle``
        types: Effective per-column types (booleans already rewritten)
        row_style: Uniform style description for data cells
        header_style: Style description for the header row

    Returns:
        Tuple of (row styles, header style handle). Row styles are a single
        handle when ``row_style`` was given, else a per-column list.
    """
    header_style = header_style if header_style is not None else row_style
    header_handle = sink.add_style(header_style) if header_style is not None else None

    if row_style is not None:
        return sink.add_style(row_style), header_handle

    minted: Dict[int, str] = {}
    row_styles: List[Optional[str]] = []
    for column_type in types:
        description = default_style_for(column_type)
        if description is None:
            row_styles.append(None)
            continue
        if id(description) not in minted:
            minted[id(description)] = sink.add_style(description)
        row_styles.append(minted[id(description)])

    return row_styles, header_handle
