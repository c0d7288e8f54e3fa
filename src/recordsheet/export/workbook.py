"""
recordsheet - Excel Workbook Sink

This module wraps an openpyxl workbook as the destination of an export. It
creates worksheets, mints reusable named styles from style descriptions and
appends rows with per-cell styles and type hints.

Key Features:
- Sheet names sanitized for Excel (invalid characters, 31 character limit)
- Style descriptions minted once into openpyxl NamedStyles and reused
- Per-column type hints (string, integer, float) applied to cell values
- Column width adjustment and saving with error reporting
"""

import json
import logging
import re
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, NamedStyle, PatternFill, Side
from openpyxl.utils import get_column_letter

from recordsheet.models import ColumnType

logger = logging.getLogger(__name__)

MAX_SHEET_NAME_LENGTH = 31
MAX_COLUMN_WIDTH = 50
DEFAULT_COLUMN_WIDTH = 15

_INVALID_SHEET_CHARS = re.compile(r'[\\/*?:\[\]]')


def sanitize_sheet_name(name: str) -> str:
    """
    Make a string usable as an Excel worksheet title.

    Replaces characters Excel rejects with underscores and truncates to the
    31 character limit.
    """
    safe_name = _INVALID_SHEET_CHARS.sub('_', str(name or '')).strip()
    return safe_name[:MAX_SHEET_NAME_LENGTH] or 'Sheet'


def _thin_border() -> Border:
    return Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )


def _solid_fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type='solid')


def build_named_style(name: str, description: Dict[str, Any]) -> NamedStyle:
    """
    Translate a style description into an openpyxl NamedStyle.

    Recognized keys:
        format_code / number_format: Excel number format string
        alignment: keyword arguments for ``openpyxl.styles.Alignment``
        font: keyword arguments for ``openpyxl.styles.Font``
        b: shorthand for a bold font
        fg_color: font color (hex, e.g. 'FFFFFF')
        bg_color: solid background fill color (hex)
        border: 'thin' for a thin border on all sides

    Args:
        name: Unique style name to register in the workbook
        description: Style description dictionary

    Returns:
        NamedStyle: The style, not yet registered
    """
    style = NamedStyle(name=name)

    number_format = description.get('format_code') or description.get('number_format')
    if number_format:
        style.number_format = number_format

    if description.get('alignment'):
        style.alignment = Alignment(**description['alignment'])

    font_args = dict(description.get('font') or {})
    if description.get('b'):
        font_args['bold'] = True
    if description.get('fg_color'):
        font_args['color'] = description['fg_color']
    if font_args:
        style.font = Font(**font_args)

    if description.get('bg_color'):
        style.fill = _solid_fill(description['bg_color'])

    if description.get('border') == 'thin':
        style.border = _thin_border()

    return style


class SheetWriter:
    """
    Appends rows to a single worksheet.

    Attributes:
        worksheet: The underlying openpyxl worksheet
        row_count (int): Number of rows written so far
    """

    def __init__(self, worksheet):
        self.worksheet = worksheet
        self.row_count = 0

    @property
    def title(self) -> str:
        return self.worksheet.title

    def add_row(
        self,
        values: Sequence[Any],
        style: Union[str, Sequence[Optional[str]], None] = None,
        types: Optional[Sequence[ColumnType]] = None,
    ) -> None:
        """
        Append one row of cell values.

        Args:
            values: Cell values in column order
            style: A single style handle for every cell, or one handle per column
            types: Optional per-column type hints used to coerce cell values
        """
        self.row_count += 1
        for idx, value in enumerate(values):
            if types is not None and idx < len(types):
                value = _apply_type_hint(value, types[idx])

            cell = self.worksheet.cell(row=self.row_count, column=idx + 1, value=value)

            cell_style = style
            if style is not None and not isinstance(style, str):
                cell_style = style[idx] if idx < len(style) else None
            if cell_style:
                _apply_style(cell, cell_style)


def _apply_type_hint(value: Any, column_type: Any) -> Any:
    if value is None:
        return None

    column_type = ColumnType.parse(column_type)
    try:
        if column_type is ColumnType.STRING:
            return str(value)
        if column_type is ColumnType.INTEGER and isinstance(value, str):
            return int(value)
        if column_type is ColumnType.FLOAT and isinstance(value, str):
            return float(value)
    except ValueError:
        # Non-numeric text stays text
        return value
    return value


def _apply_style(cell, style_name: str) -> None:
    cell.style = style_name
    # Keep temporal values readable under styles without a number format
    if cell.number_format == 'General' and isinstance(cell.value, (date, datetime, time)):
        if isinstance(cell.value, datetime):
            cell.number_format = 'yyyy-mm-dd h:mm:ss'
        elif isinstance(cell.value, date):
            cell.number_format = 'yyyy-mm-dd'
        else:
            cell.number_format = 'h:mm:ss'


class WorkbookSink:
    """
    Destination workbook for one or more exports.

    A sink created without a workbook starts with openpyxl's default empty
    sheet; that placeholder is removed when the first real sheet is added, so
    an export that short-circuits on an empty dataset leaves the workbook as
    it was.

    Attributes:
        workbook (openpyxl.Workbook): The wrapped workbook
        autofit (bool): Whether ``save`` adjusts column widths first
    """

    def __init__(self, workbook: Optional[Workbook] = None, autofit: bool = True):
        if workbook is None:
            workbook = Workbook()
            self._placeholder = workbook.active
        else:
            self._placeholder = None
        self.workbook = workbook
        self.autofit = autofit
        self._styles: Dict[str, str] = {}

    @property
    def sheetnames(self) -> List[str]:
        return self.workbook.sheetnames

    def add_sheet(self, name: str) -> SheetWriter:
        """
        Create a new worksheet.

        Args:
            name: Desired sheet name; sanitized for Excel. openpyxl appends a
                  number when the name is already taken.

        Returns:
            SheetWriter: Writer for the new sheet
        """
        self._drop_placeholder()
        worksheet = self.workbook.create_sheet(sanitize_sheet_name(name))
        logger.debug("Added sheet '%s'", worksheet.title)
        return SheetWriter(worksheet)

    def _drop_placeholder(self) -> None:
        placeholder, self._placeholder = self._placeholder, None
        if placeholder is None or placeholder.title not in self.workbook.sheetnames:
            return
        if placeholder.max_row == 1 and placeholder.max_column == 1 and placeholder.cell(1, 1).value is None:
            self.workbook.remove(placeholder)

    def add_style(self, description: Union[str, Dict[str, Any]]) -> str:
        """
        Mint a reusable style handle from a style description.

        The same description always yields the same handle. A string is taken
        as the name of a style already registered in the workbook.

        Args:
            description: Style description dictionary, or an existing style name

        Returns:
            str: Name of the registered NamedStyle
        """
        if isinstance(description, str):
            return description

        key = json.dumps(description, sort_keys=True, default=str)
        if key not in self._styles:
            name = f"recordsheet_{len(self._styles) + 1}"
            while name in self.workbook.named_styles:
                name += "_"
            self.workbook.add_named_style(build_named_style(name, description))
            self._styles[key] = name
        return self._styles[key]

    def autofit_columns(self) -> None:
        """Set each column's width from its longest value, capped at 50 characters."""
        for worksheet in self.workbook.worksheets:
            for col in worksheet.columns:
                max_length = 0
                col_letter = get_column_letter(col[0].column)

                for cell in col:
                    if cell.value is not None:
                        max_length = max(max_length, len(str(cell.value)))

                # Adjust width with a little padding
                adjusted_width = (max_length + 2) if max_length > 0 else DEFAULT_COLUMN_WIDTH
                worksheet.column_dimensions[col_letter].width = min(adjusted_width, MAX_COLUMN_WIDTH)

    def save(self, output_path: str) -> bool:
        """
        Save the workbook to disk.

        Args:
            output_path: Path to save the Excel file

        Returns:
            bool: True if the save was successful, False otherwise
        """
        try:
            if self.autofit:
                self.autofit_columns()
            self.workbook.save(output_path)
            logger.info("Saved workbook with %d sheet(s) to %s", len(self.workbook.sheetnames), output_path)
            return True
        except Exception:
            logger.exception("Error exporting to Excel: %s", output_path)
            return False


def as_sink(package: Any = None) -> Any:
    """
    Normalize the ``package``/``sink`` option into a sink.

    Args:
        package: None for a new workbook, an openpyxl Workbook, a WorkbookSink,
                 or any object providing ``add_sheet`` and ``add_style``

    Returns:
        A sink object
    """
    if package is None:
        return WorkbookSink()
    if isinstance(package, Workbook):
        return WorkbookSink(package)
    return package
