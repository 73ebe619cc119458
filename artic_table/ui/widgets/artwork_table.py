"""
Custom DataTable widget for displaying artworks
"""

from typing import Iterable, Optional, Sequence

from textual.widgets import DataTable
from textual.message import Message

from artic_table.models.artwork import Artwork, DISPLAY_COLUMNS

SELECTED_MARK = "✔"
MARK_COLUMN = "selected"


class ArtworkTable(DataTable):
    """
    DataTable for one page of artworks with a selection mark column
    """

    class RowToggled(Message):
        """The user asked to select/unselect a row"""
        def __init__(self, row_id: int) -> None:
            super().__init__()
            self.row_id = row_id

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        self.add_class("artworks-table")
        self.add_column(" ", width=3, key=MARK_COLUMN)
        for field_name, header in DISPLAY_COLUMNS.items():
            self.add_column(header, key=field_name)

    def show_rows(self, rows: Sequence[Artwork], selected_ids: Iterable[int] = ()) -> None:
        """Replace the table body with ``rows``."""
        selected = set(selected_ids)
        self.clear()
        for row in rows:
            mark = SELECTED_MARK if row.id in selected else ""
            self.add_row(mark, *row.display_values(), key=str(row.id))

    def refresh_marks(self, selected_ids: Iterable[int]) -> None:
        """Update only the mark column after the selection changed."""
        selected = set(selected_ids)
        for row_key in list(self.rows):
            mark = SELECTED_MARK if int(row_key.value) in selected else ""
            self.update_cell(row_key, MARK_COLUMN, mark)

    def cursor_row_id(self) -> Optional[int]:
        """Id of the artwork under the cursor, if any."""
        if self.row_count == 0:
            return None
        row_key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        return int(row_key.value)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        self.post_message(self.RowToggled(int(event.row_key.value)))
