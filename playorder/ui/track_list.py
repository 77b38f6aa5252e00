from typing import List
from PySide6.QtWidgets import QListWidget, QListWidgetItem, QAbstractItemView
from PySide6.QtCore import Qt, Signal

from ..core.track import Track

TRACK_ROLE = Qt.UserRole + 1


class TrackList(QListWidget):
    """
    Ordered list of tracks. Rows are rearranged by drag & drop; double-click
    or F2 edits a label, which renames that one file immediately.
    """
    rename_requested = Signal(object, str)  # Track, new label
    order_changed = Signal()

    def __init__(self):
        super().__init__()
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setDragDropMode(QAbstractItemView.InternalMove)
        self.setDefaultDropAction(Qt.MoveAction)
        self.setEditTriggers(QAbstractItemView.EditKeyPressed | QAbstractItemView.SelectedClicked)
        self.setAlternatingRowColors(True)

        self._loading = False
        self.itemChanged.connect(self._on_item_changed)
        self.model().rowsMoved.connect(lambda *args: self.order_changed.emit())

    def set_tracks(self, tracks: List[Track]):
        self._loading = True
        try:
            self.clear()
            for track in tracks:
                item = QListWidgetItem(track.name)
                item.setFlags(item.flags() | Qt.ItemIsEditable | Qt.ItemIsDragEnabled)
                item.setData(TRACK_ROLE, track)
                duration = track.metadata.get('duration')
                if duration:
                    minutes, seconds = divmod(int(duration), 60)
                    item.setToolTip(f"{track.metadata.get('title', track.name)}  {minutes}:{seconds:02d}")
                self.addItem(item)
        finally:
            self._loading = False

    def ordered_tracks(self) -> List[Track]:
        """Tracks in the order currently shown."""
        return [self.item(row).data(TRACK_ROLE) for row in range(self.count())]

    def selected_track(self):
        items = self.selectedItems()
        if len(items) != 1:
            return None
        return items[0].data(TRACK_ROLE)

    def _on_item_changed(self, item: QListWidgetItem):
        if self._loading:
            return
        track = item.data(TRACK_ROLE)
        new_label = item.text().strip()
        if not new_label:
            # Cancel an empty edit
            self._loading = True
            item.setText(track.name)
            self._loading = False
            return
        if new_label != track.name:
            self.rename_requested.emit(track, new_label)
